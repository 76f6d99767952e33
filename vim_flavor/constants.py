"""Global constants for vim-flavor"""

import re
from enum import Enum

APP_NAME = "vim-flavor"
LOG_FORMAT = "%(message)s"


# File names
FLAVORFILE_NAME = "VimFlavor"
LOCKFILE_NAME = "VimFlavor.lock"
FLAVORS_DIR_NAME = "flavors"
REPOS_DIR_NAME = "repos"
BOOTSTRAP_FILE_NAME = "bootstrap.vim"

# Default locations
DEFAULT_DOT_PATH = "~/.vim-flavor"
DEFAULT_VIMFILES_PATH = "~/.vim"
DEFAULT_WINDOWS_VIMFILES_PATH = "~/vimfiles"

# Manifest defaults
DEFAULT_GROUP = "default"
DEFAULT_CONSTRAINT = ">= 0"
DEFAULT_PROTOCOL = "https"

# Hosting conventions for shorthand source names
VIM_SCRIPTS_URI_TEMPLATE = "{protocol}://github.com/vim-scripts/{name}.git"
GITHUB_URI_TEMPLATE = "{protocol}://github.com/{user}/{project}.git"

# External command timeouts (seconds)
DEFAULT_GIT_TIMEOUT = 300
DEFAULT_HELPTAGS_TIMEOUT = 60

# Environment variables
ENV_DOT_PATH = "VIM_FLAVOR_HOME"
ENV_VIMFILES_PATH = "VIM_FLAVOR_VIMFILES"
ENV_PROTOCOL = "VIM_FLAVOR_PROTOCOL"
ENV_GIT_TIMEOUT = "VIM_FLAVOR_GIT_TIMEOUT"
ENV_LOG_LEVEL = "VIM_FLAVOR_LOG_LEVEL"

# Validation patterns
CONSTRAINT_PATTERN = re.compile(r"^\s*(?P<operator>>=|~>)\s+(?P<version>\S+)$")
ZAP_PATTERN = re.compile(r"[^A-Za-z0-9._-]")
BARE_NAME_PATTERN = re.compile(r"^(?P<name>[^/]+)$")
GITHUB_NAME_PATTERN = re.compile(r"^(?P<user>[A-Za-z0-9_-]+)/(?P<project>.*)$")
URI_PATTERN = re.compile(r"^[a-z]+://.*$")


class ReconcileMode(Enum):
    """How reconciliation treats previously locked versions"""
    INSTALL = "install"
    UPGRADE_ALL = "upgrade_all"


class RepositoryStep(Enum):
    """Steps of a flavor's lifecycle that can fail"""
    CLONE = "clone"
    FETCH = "fetch"
    LIST_TAGS = "list-tags"
    CHECKOUT = "checkout"
    RESOLVE = "resolve"
    WIPE = "wipe"


# Error codes
class ErrorCode:
    MALFORMED_CONSTRAINT = "VF001"
    MALFORMED_SOURCE = "VF002"
    REPOSITORY_ACCESS_FAILED = "VF003"
    UNRESOLVABLE_CONSTRAINT = "VF004"
    DEPLOYMENT_FAILED = "VF005"
    LOCKFILE_FORMAT_ERROR = "VF006"
    MANIFEST_ERROR = "VF007"
    PATH_COLLISION = "VF008"
    INVALID_VERSION = "VF009"
    CONFIG_ERROR = "VF010"


# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_ARROW = "→"

# Messages templates
MSG_USING_FLAVOR = "Using {name} ({version})"
MSG_DEPLOYING_FLAVOR = "Deploying {name} ({version})"
