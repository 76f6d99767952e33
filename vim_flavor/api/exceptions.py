"""Exception definitions for vim-flavor"""

from typing import Iterable, Optional

from ..constants import ErrorCode, RepositoryStep


class FlavorError(Exception):
    """Base exception for vim-flavor

    Errors raised while working on a specific flavor carry the flavor's
    source name, the failing step and any diagnostic text captured from
    the external command.
    """

    def __init__(self, message: str, error_code: str = None,
                 source_name: Optional[str] = None,
                 step: Optional[str] = None,
                 output: str = ""):
        super().__init__(message)
        self.error_code = error_code
        self.source_name = source_name
        self.step = step
        self.output = output or ""


class InvalidVersionError(FlavorError):
    """Version string cannot be parsed"""

    def __init__(self, version: str):
        super().__init__(f"Invalid version: {version!r}", ErrorCode.INVALID_VERSION)
        self.version = version


class MalformedConstraintError(FlavorError):
    """Version constraint expression is malformed"""

    def __init__(self, text: str):
        super().__init__(
            f"Invalid version constraint: {text!r}",
            ErrorCode.MALFORMED_CONSTRAINT
        )
        self.text = text


class MalformedSourceError(FlavorError):
    """Source name cannot be turned into a repository URI"""

    def __init__(self, source_name: str):
        super().__init__(
            f"Source name is written in invalid format: {source_name!r}",
            ErrorCode.MALFORMED_SOURCE,
            source_name=source_name
        )


class RepositoryAccessError(FlavorError):
    """Clone, fetch, tag listing or checkout failed"""

    def __init__(self, message: str, output: str = "", step: Optional[str] = None,
                 source_name: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.REPOSITORY_ACCESS_FAILED,
            source_name=source_name,
            step=step,
            output=output
        )


class UnresolvableConstraintError(FlavorError):
    """No available version satisfies a declared constraint"""

    def __init__(self, source_name: str, constraint, available: Iterable = ()):
        self.constraint = constraint
        self.available = sorted(available)
        shown = ", ".join(str(v) for v in self.available) or "none"
        super().__init__(
            f"No version of {source_name} satisfies '{constraint}' "
            f"(available: {shown})",
            ErrorCode.UNRESOLVABLE_CONSTRAINT,
            source_name=source_name,
            step=RepositoryStep.RESOLVE.value
        )


class DeploymentError(FlavorError):
    """Deploying into the target tree failed"""

    def __init__(self, message: str, output: str = "", step: Optional[str] = None,
                 source_name: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.DEPLOYMENT_FAILED,
            source_name=source_name,
            step=step,
            output=output
        )


class LockFileFormatError(FlavorError):
    """Lock file is unreadable or structurally invalid"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.LOCKFILE_FORMAT_ERROR)


class ManifestError(FlavorError):
    """Manifest file is missing, unreadable or invalid"""

    def __init__(self, message: str, error_code: str = ErrorCode.MANIFEST_ERROR,
                 source_name: Optional[str] = None):
        super().__init__(message, error_code, source_name=source_name)


class PathCollisionError(ManifestError):
    """Two different sources map to the same cache and deploy directory"""

    def __init__(self, dir_name: str, first_uri: str, second_uri: str):
        message = (
            f"Flavors {first_uri} and {second_uri} would both use the "
            f"directory name {dir_name!r}"
        )
        super().__init__(message, ErrorCode.PATH_COLLISION)
        self.dir_name = dir_name
        self.first_uri = first_uri
        self.second_uri = second_uri


class ConfigError(FlavorError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)
