"""CLI commands"""

from . import install
from . import upgrade
from . import list_cmd
from . import doctor

__all__ = [
    "install",
    "upgrade",
    "list_cmd",
    "doctor",
]
