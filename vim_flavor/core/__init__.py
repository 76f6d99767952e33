"""Core functionality for vim-flavor"""

from .path_resolver import PathResolver
from .manifest import ManifestModel, load_manifest
from .lock_store import LockStore
from .reconciler import ReconciliationEngine
from .deployer import DeploymentOrchestrator

__all__ = [
    "PathResolver",
    "ManifestModel",
    "load_manifest",
    "LockStore",
    "ReconciliationEngine",
    "DeploymentOrchestrator",
]
