# vim_flavor/utils/file_utils.py
"""File operation utilities"""

import os
import shutil
import tempfile
from pathlib import Path

from ..constants import FLAVORS_DIR_NAME, REPOS_DIR_NAME, ZAP_PATTERN


def zap_name(name: str) -> str:
    """
    Make a source name safe to use as a single directory name

    Args:
        name: Source name such as "kana/vim-textobj-user"

    Returns:
        Name with every character outside [A-Za-z0-9._-] replaced by "_"
    """
    return ZAP_PATTERN.sub('_', name)


def flavors_path(vimfiles_path: Path) -> Path:
    """Directory holding deployed flavors under a vimfiles directory"""
    return Path(vimfiles_path) / FLAVORS_DIR_NAME


def repos_path(dot_path: Path) -> Path:
    """Directory holding cached repositories under the cache root"""
    return Path(dot_path) / REPOS_DIR_NAME


def remove_path(path: Path) -> bool:
    """
    Remove a file or directory tree

    Removing a path that does not exist is not an error.

    Args:
        path: Path to remove

    Returns:
        True if something was removed

    Raises:
        OSError: If removal fails
    """
    path = Path(path)

    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def ensure_parent_dir(file_path: Path) -> Path:
    """
    Ensure parent directory exists

    Args:
        file_path: File path

    Returns:
        Parent directory path
    """
    parent = Path(file_path).parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def atomic_write_text(file_path: Path, content: str, encoding: str = 'utf-8') -> Path:
    """
    Write a text file so readers never observe partial content

    The content goes to a temporary file in the same directory, which then
    atomically replaces the destination.

    Args:
        file_path: Destination path
        content: Text to write
        encoding: Text encoding

    Returns:
        Destination path
    """
    file_path = Path(file_path)
    parent = ensure_parent_dir(file_path)

    fd, temp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.",
        suffix='.tmp',
        dir=str(parent)
    )
    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline='\n') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_name, file_path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise

    return file_path
