"""vim-flavor - A tool to manage your favorite Vim plugins.

Plugins ("flavors") are declared in a VimFlavor file with version
constraints, locked to concrete versions in VimFlavor.lock and deployed
into the flavors directory of your vimfiles.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Core API
from .api.facade import Facade, install, upgrade

# Data models
from .models import Flavor, FlavorConfig, Version, VersionConstraint, InstallResult
from .constants import ReconcileMode

# Engine components
from .core import (
    ManifestModel,
    LockStore,
    ReconciliationEngine,
    DeploymentOrchestrator,
    load_manifest,
)

# Collaborators
from .vcs import VersionControlClient, HelpIndexer, GitClient, VimHelpIndexer

# Exceptions
from .api.exceptions import (
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

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main classes
    "Facade",

    # Core API functions
    "install",
    "upgrade",

    # Data models
    "Flavor",
    "FlavorConfig",
    "Version",
    "VersionConstraint",
    "InstallResult",
    "ReconcileMode",

    # Engine components
    "ManifestModel",
    "LockStore",
    "ReconciliationEngine",
    "DeploymentOrchestrator",
    "load_manifest",

    # Collaborators
    "VersionControlClient",
    "HelpIndexer",
    "GitClient",
    "VimHelpIndexer",

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
