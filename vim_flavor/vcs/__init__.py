"""Repository access and help indexing backends for vim-flavor"""

from .base import VersionControlClient, HelpIndexer
from .git import GitClient
from .helptags import VimHelpIndexer

__all__ = [
    'VersionControlClient',
    'HelpIndexer',
    'GitClient',
    'VimHelpIndexer',
]
