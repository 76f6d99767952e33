"""Configuration data models"""

import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..api.exceptions import ConfigError
from ..constants import (
    DEFAULT_DOT_PATH,
    DEFAULT_GIT_TIMEOUT,
    DEFAULT_HELPTAGS_TIMEOUT,
    DEFAULT_PROTOCOL,
    DEFAULT_VIMFILES_PATH,
    DEFAULT_WINDOWS_VIMFILES_PATH,
    ENV_DOT_PATH,
    ENV_GIT_TIMEOUT,
    ENV_PROTOCOL,
    ENV_VIMFILES_PATH,
    FLAVORFILE_NAME,
    LOCKFILE_NAME,
)


def default_vimfiles_path() -> Path:
    """Get the platform's usual vimfiles directory"""
    if sys.platform.startswith('win'):
        return Path(DEFAULT_WINDOWS_VIMFILES_PATH).expanduser()
    return Path(DEFAULT_VIMFILES_PATH).expanduser()


def _expand(path: str) -> Path:
    return Path(os.path.expanduser(os.path.expandvars(path)))


def _timeout(value: Any, name: str) -> int:
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer number of seconds, got {value!r}") from None
    if timeout <= 0:
        raise ConfigError(f"{name} must be positive, got {timeout}")
    return timeout


@dataclass
class FlavorConfig:
    """Settings threaded into every component

    There is no process-wide state: the cache root and every other path
    travel with this object.
    """

    dot_path: Path = field(default_factory=lambda: _expand(DEFAULT_DOT_PATH))
    flavorfile_path: Path = field(default_factory=lambda: Path.cwd() / FLAVORFILE_NAME)
    lockfile_path: Path = field(default_factory=lambda: Path.cwd() / LOCKFILE_NAME)
    vimfiles_path: Path = field(default_factory=default_vimfiles_path)
    protocol: str = DEFAULT_PROTOCOL
    git_timeout: int = DEFAULT_GIT_TIMEOUT
    helptags_timeout: int = DEFAULT_HELPTAGS_TIMEOUT

    def __post_init__(self):
        """Normalize paths and validate timeouts"""
        self.dot_path = Path(self.dot_path)
        self.flavorfile_path = Path(self.flavorfile_path)
        self.lockfile_path = Path(self.lockfile_path)
        self.vimfiles_path = Path(self.vimfiles_path)
        self.git_timeout = _timeout(self.git_timeout, "git_timeout")
        self.helptags_timeout = _timeout(self.helptags_timeout, "helptags_timeout")
        if not self.protocol:
            raise ConfigError("protocol must not be empty")

    @classmethod
    def from_env(cls,
                 environ: Optional[Mapping[str, str]] = None,
                 working_dir: Optional[Path] = None) -> 'FlavorConfig':
        """Build configuration from environment variables

        Args:
            environ: Environment mapping (defaults to os.environ)
            working_dir: Directory holding VimFlavor and VimFlavor.lock

        Returns:
            Configuration
        """
        environ = os.environ if environ is None else environ
        working_dir = Path(working_dir) if working_dir else Path.cwd()

        kwargs: Dict[str, Any] = {
            'flavorfile_path': working_dir / FLAVORFILE_NAME,
            'lockfile_path': working_dir / LOCKFILE_NAME,
        }

        if environ.get(ENV_DOT_PATH):
            kwargs['dot_path'] = _expand(environ[ENV_DOT_PATH])
        if environ.get(ENV_VIMFILES_PATH):
            kwargs['vimfiles_path'] = _expand(environ[ENV_VIMFILES_PATH])
        if environ.get(ENV_PROTOCOL):
            kwargs['protocol'] = environ[ENV_PROTOCOL]
        if environ.get(ENV_GIT_TIMEOUT):
            kwargs['git_timeout'] = environ[ENV_GIT_TIMEOUT]

        return cls(**kwargs)

    def with_overrides(self, **overrides) -> 'FlavorConfig':
        """Return a copy with the given non-None settings replaced"""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'dot_path': str(self.dot_path),
            'flavorfile_path': str(self.flavorfile_path),
            'lockfile_path': str(self.lockfile_path),
            'vimfiles_path': str(self.vimfiles_path),
            'protocol': self.protocol,
            'git_timeout': self.git_timeout,
            'helptags_timeout': self.helptags_timeout,
        }
