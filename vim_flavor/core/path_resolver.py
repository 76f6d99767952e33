"""Path resolution module for vim-flavor"""

import os
from pathlib import Path
from typing import Optional, Union

from ..models.config import FlavorConfig


class PathResolver:
    """Resolves user-supplied paths against a configuration"""

    def __init__(self, config: FlavorConfig):
        """Initialize path resolver

        Args:
            config: Configuration holding the default vimfiles path
        """
        self.config = config

    def resolve_vimfiles(self, vimfiles_path: Optional[Union[str, Path]] = None) -> Path:
        """Get the vimfiles directory to deploy into

        Args:
            vimfiles_path: Explicit directory (defaults to the configured one)

        Returns:
            Absolute vimfiles path
        """
        if vimfiles_path is None:
            return self.config.vimfiles_path
        return self.expand_path(str(vimfiles_path))

    def expand_path(self, path: str) -> Path:
        """Expand a path with environment variables and user home

        Args:
            path: Path string to expand

        Returns:
            Expanded absolute path
        """
        path = os.path.expandvars(path)
        path = os.path.expanduser(path)
        return Path(path).resolve()
