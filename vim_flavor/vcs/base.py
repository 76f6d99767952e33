# vim_flavor/vcs/base.py
"""Collaborator interfaces for repository access and help indexing"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List


class VersionControlClient(ABC):
    """Abstract base class for version control backends

    Every operation either succeeds or raises RepositoryAccessError
    carrying the diagnostic text captured from the backend.
    """

    @abstractmethod
    def clone(self, uri: str, dest: Path) -> None:
        """
        Clone a remote repository

        Args:
            uri: Remote repository URI
            dest: Local path for the clone (must not exist)
        """
        pass

    @abstractmethod
    def fetch(self, dest: Path) -> None:
        """
        Update remote tags and refs of a local clone

        Args:
            dest: Local clone path
        """
        pass

    @abstractmethod
    def list_tags(self, dest: Path) -> List[str]:
        """
        List tag names of a local clone

        Args:
            dest: Local clone path

        Returns:
            Tag names
        """
        pass

    @abstractmethod
    def checkout(self, dest: Path, revision: str, output_dir: Path) -> None:
        """
        Export the files of a revision into a directory

        Args:
            dest: Local clone path
            revision: Tag or revision to export
            output_dir: Directory receiving the files
        """
        pass


class HelpIndexer(ABC):
    """Abstract base class for help index builders

    Rebuilding is best-effort: implementations log failures and never
    raise them.
    """

    @abstractmethod
    def rebuild(self, directory: Path) -> bool:
        """
        Rebuild help indices under a deployed flavor

        Args:
            directory: Deployed flavor directory

        Returns:
            True if the index was rebuilt
        """
        pass
