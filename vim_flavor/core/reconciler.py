"""Reconciliation of the manifest against the existing lock"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .lock_store import LockStore
from .manifest import ManifestModel
from ..constants import MSG_USING_FLAVOR, ReconcileMode
from ..models.flavor import Flavor
from ..models.result import FlavorResult
from ..vcs.base import VersionControlClient


class ReconciliationEngine:
    """Decide the locked version of every declared flavor

    A previous lock is kept verbatim, without touching the repository,
    unless the mode forces an upgrade or the declared constraint changed.
    """

    def __init__(self,
                 vcs: VersionControlClient,
                 dot_path: Path,
                 progress: Optional[Callable[[str], None]] = None):
        """Initialize reconciliation engine

        Args:
            vcs: Repository access backend
            dot_path: Cache root holding cloned repositories
            progress: Optional callback receiving human-readable progress
        """
        self.vcs = vcs
        self.dot_path = Path(dot_path)
        self.progress = progress
        self.results: List[FlavorResult] = []
        self.logger = logging.getLogger("ReconciliationEngine")

    @staticmethod
    def needs_recompute(current: Flavor,
                        locked: Optional[Flavor],
                        mode: ReconcileMode) -> bool:
        """Whether a flavor's version must be resolved again"""
        if locked is None:
            return True
        if mode is ReconcileMode.UPGRADE_ALL:
            return True
        return current.constraint != locked.constraint

    def reconcile(self,
                  manifest: ManifestModel,
                  existing_lock: Optional[LockStore] = None,
                  mode: ReconcileMode = ReconcileMode.INSTALL) -> LockStore:
        """
        Compute the new lock for a manifest

        Args:
            manifest: Declared flavors
            existing_lock: Previous lock (None for a first install)
            mode: INSTALL keeps satisfied locks, UPGRADE_ALL recomputes all

        Returns:
            New lock holding exactly the manifest's flavors

        Raises:
            RepositoryAccessError: If a repository cannot be accessed
            UnresolvableConstraintError: If no version satisfies a constraint
        """
        existing_lock = existing_lock if existing_lock is not None else LockStore()
        self.results = []
        new_flavors = {}

        for source_uri, current in manifest.flavors.items():
            locked = existing_lock.get(source_uri)
            new_flavor = current.copy()
            recompute = self.needs_recompute(current, locked, mode)

            if recompute:
                self.logger.info(f"Resolving {new_flavor.source_name} '{new_flavor.constraint}'")
                new_flavor.ensure_cloned(self.vcs, self.dot_path)
                new_flavor.fetch_updates(self.vcs, self.dot_path)
                new_flavor.update_locked_version(self.vcs, self.dot_path)
            else:
                self.logger.debug(f"Keeping locked {new_flavor.source_name} {locked.locked_version}")
                new_flavor.lock(locked.locked_version)

            self._report(MSG_USING_FLAVOR.format(
                name=new_flavor.source_name,
                version=new_flavor.locked_version
            ))

            self.results.append(FlavorResult(
                source_name=new_flavor.source_name,
                source_uri=source_uri,
                version=str(new_flavor.locked_version),
                constraint=str(new_flavor.constraint),
                recomputed=recompute,
                previous_version=str(locked.locked_version) if locked else None
            ))
            new_flavors[source_uri] = new_flavor

        dropped = [uri for uri in existing_lock.flavors if uri not in new_flavors]
        for uri in dropped:
            self.logger.info(f"Dropping {uri} from lock (no longer declared)")

        return LockStore(existing_lock.path, new_flavors)

    def _report(self, message: str) -> None:
        if self.progress:
            self.progress(message)
