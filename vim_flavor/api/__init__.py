"""API layer for vim-flavor"""

from .exceptions import (
    FlavorError,
    InvalidVersionError,
    MalformedConstraintError,
    MalformedSourceError,
    RepositoryAccessError,
    UnresolvableConstraintError,
    DeploymentError,
    LockFileFormatError,
    ManifestError,
    PathCollisionError,
    ConfigError,
)
from .facade import Facade, install, upgrade

__all__ = [
    # Main classes
    "Facade",

    # Convenience functions
    "install",
    "upgrade",

    # Exceptions
    "FlavorError",
    "InvalidVersionError",
    "MalformedConstraintError",
    "MalformedSourceError",
    "RepositoryAccessError",
    "UnresolvableConstraintError",
    "DeploymentError",
    "LockFileFormatError",
    "ManifestError",
    "PathCollisionError",
    "ConfigError",
]
