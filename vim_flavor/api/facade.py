"""Top-level install and upgrade operations"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ..constants import ReconcileMode
from ..core import (
    DeploymentOrchestrator,
    LockStore,
    ManifestModel,
    PathResolver,
    ReconciliationEngine,
    load_manifest,
)
from ..models import FlavorConfig, InstallResult
from ..vcs import GitClient, HelpIndexer, VersionControlClient, VimHelpIndexer


class Facade:
    """Wire manifest, lock, reconciliation and deployment together

    The lock file is written once per successful operation, after every
    flavor has been reconciled and before deployment starts.
    """

    def __init__(self,
                 config: Optional[FlavorConfig] = None,
                 vcs: Optional[VersionControlClient] = None,
                 help_indexer: Optional[HelpIndexer] = None,
                 progress: Optional[Callable[[str], None]] = None):
        """
        Initialize facade

        Args:
            config: Settings (defaults to FlavorConfig.from_env())
            vcs: Repository backend (defaults to GitClient)
            help_indexer: Help index builder (defaults to VimHelpIndexer)
            progress: Optional callback receiving human-readable progress
        """
        self.config = config or FlavorConfig.from_env()
        self.vcs = vcs or GitClient(timeout=self.config.git_timeout)
        self.help_indexer = help_indexer or VimHelpIndexer(timeout=self.config.helptags_timeout)
        self.progress = progress
        self.path_resolver = PathResolver(self.config)
        self.manifest: Optional[ManifestModel] = None
        self.lockfile: Optional[LockStore] = None
        self.logger = logging.getLogger("Facade")

    def load(self) -> None:
        """Load the VimFlavor file and, if present, the lock file"""
        self.manifest = load_manifest(self.config.flavorfile_path, self.config.protocol)
        self.lockfile = LockStore.load(self.config.lockfile_path)
        self.logger.debug(
            f"Loaded {len(self.manifest)} declared and {len(self.lockfile)} locked flavors"
        )

    def install(self, vimfiles_path: Optional[Union[str, Path]] = None) -> InstallResult:
        """
        Install flavors, keeping versions already locked

        Args:
            vimfiles_path: Target vimfiles directory (defaults to config)

        Returns:
            InstallResult describing the locked flavors
        """
        return self._run(ReconcileMode.INSTALL, vimfiles_path)

    def upgrade(self, vimfiles_path: Optional[Union[str, Path]] = None) -> InstallResult:
        """
        Upgrade every flavor to its best available version

        Args:
            vimfiles_path: Target vimfiles directory (defaults to config)

        Returns:
            InstallResult describing the locked flavors
        """
        return self._run(ReconcileMode.UPGRADE_ALL, vimfiles_path)

    def _run(self, mode: ReconcileMode,
             vimfiles_path: Optional[Union[str, Path]]) -> InstallResult:
        vimfiles = self.path_resolver.resolve_vimfiles(vimfiles_path)
        result = InstallResult(
            mode=mode,
            vimfiles_path=vimfiles,
            lockfile_path=self.config.lockfile_path
        )

        self.load()

        engine = ReconciliationEngine(self.vcs, self.config.dot_path, self.progress)
        new_lock = engine.reconcile(self.manifest, self.lockfile, mode)
        new_lock.save(self.config.lockfile_path)
        self.lockfile = new_lock
        result.flavors = engine.results

        orchestrator = DeploymentOrchestrator(
            self.vcs,
            self.config.dot_path,
            self.help_indexer,
            self.progress
        )
        result.bootstrap_path = orchestrator.deploy(list(new_lock.flavors.values()), vimfiles)

        result.complete()
        self.logger.info(
            f"{mode.value} finished: {len(result.flavors)} flavors in {result.duration:.2f}s"
        )
        return result


def install(vimfiles_path: Optional[Union[str, Path]] = None,
            config: Optional[FlavorConfig] = None,
            **options) -> InstallResult:
    """
    Install flavors declared in the VimFlavor file

    This is a convenience function that creates a Facade instance
    and performs the installation.

    Args:
        vimfiles_path: Target vimfiles directory
        config: Settings (defaults to FlavorConfig.from_env())
        **options: Additional Facade arguments (vcs, help_indexer, progress)

    Returns:
        InstallResult
    """
    return Facade(config=config, **options).install(vimfiles_path)


def upgrade(vimfiles_path: Optional[Union[str, Path]] = None,
            config: Optional[FlavorConfig] = None,
            **options) -> InstallResult:
    """
    Upgrade flavors declared in the VimFlavor file

    This is a convenience function that creates a Facade instance
    and performs the upgrade.

    Args:
        vimfiles_path: Target vimfiles directory
        config: Settings (defaults to FlavorConfig.from_env())
        **options: Additional Facade arguments (vcs, help_indexer, progress)

    Returns:
        InstallResult
    """
    return Facade(config=config, **options).upgrade(vimfiles_path)
