# vim_flavor/models/__init__.py
"""Data models for vim-flavor"""

from .version import Version, VersionConstraint, ConstraintOperator
from .flavor import Flavor, derive_source_uri, merge_groups
from .config import FlavorConfig, default_vimfiles_path
from .result import FlavorResult, InstallResult

__all__ = [
    # Version models
    "Version",
    "VersionConstraint",
    "ConstraintOperator",

    # Flavor models
    "Flavor",
    "derive_source_uri",
    "merge_groups",

    # Config models
    "FlavorConfig",
    "default_vimfiles_path",

    # Result models
    "FlavorResult",
    "InstallResult",
]
