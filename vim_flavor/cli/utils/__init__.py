"""CLI utility functions"""

from .output import (
    console,
    progress_printer,
    format_install_result,
    format_flavor_list,
    print_flavor_error,
)

__all__ = [
    'console',
    'progress_printer',
    'format_install_result',
    'format_flavor_list',
    'print_flavor_error',
]
