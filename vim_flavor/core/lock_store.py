"""Lock file persistence"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import yaml

from ..api.exceptions import FlavorError, LockFileFormatError
from ..models.flavor import Flavor
from ..utils.file_utils import atomic_write_text

logger = logging.getLogger(__name__)

LOCK_ENTRY_KEYS = ('groups', 'locked_version', 'source_name', 'constraint')


class LockStore:
    """Locked versions keyed by source URI

    Every entry's locked version satisfies the constraint stored next to
    it; an entry goes stale when the manifest's constraint changes.
    """

    def __init__(self, path: Optional[Path] = None,
                 flavors: Optional[Dict[str, Flavor]] = None):
        """Initialize lock store

        Args:
            path: Lock file location
            flavors: Locked flavors keyed by source URI
        """
        self.path = Path(path) if path is not None else None
        self.flavors: Dict[str, Flavor] = dict(flavors or {})

    @classmethod
    def load(cls, path: Path) -> 'LockStore':
        """Load a lock file; a missing file yields an empty store

        Raises:
            LockFileFormatError: If the file is unreadable or invalid
        """
        path = Path(path)

        if not path.exists():
            logger.debug(f"No lock file at {path}")
            return cls(path)

        try:
            content = path.read_text(encoding='utf-8')
        except OSError as e:
            raise LockFileFormatError(f"Failed to read lock file {path}: {e}") from e

        return cls.loads(content, path)

    @classmethod
    def loads(cls, content: str, path: Optional[Path] = None) -> 'LockStore':
        """Parse lock file content"""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise LockFileFormatError(f"Failed to parse lock file: {e}") from e

        return cls(path, cls.flavors_from_dict(data))

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the lock file atomically

        Args:
            path: Destination (defaults to the store's path)

        Returns:
            Path written

        Raises:
            LockFileFormatError: If an entry is unlocked or violates its constraint
        """
        path = Path(path) if path is not None else self.path
        if path is None:
            raise ValueError("No lock file path to save to")

        atomic_write_text(path, self.dumps())
        self.path = path
        logger.info(f"Saved lock file {path} ({len(self.flavors)} flavors)")
        return path

    def dumps(self) -> str:
        """Serialize to lock file content"""
        return yaml.safe_dump(
            self.to_dict(),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary

        Raises:
            LockFileFormatError: If an entry could not be loaded back
        """
        for uri, flavor in self.flavors.items():
            self.check_entry(uri, flavor)

        return {
            'flavors': {
                uri: flavor.to_dict() for uri, flavor in self.flavors.items()
            }
        }

    @staticmethod
    def check_entry(uri: str, flavor: Flavor) -> None:
        """Ensure an entry is locked to a version satisfying its constraint"""
        if not flavor.is_locked:
            raise LockFileFormatError(f"Lock entry for {uri} has no locked version")
        if not flavor.constraint.is_satisfied_by(flavor.locked_version):
            raise LockFileFormatError(
                f"Locked version {flavor.locked_version} of {uri} does not "
                f"satisfy its constraint '{flavor.constraint}'"
            )

    @staticmethod
    def flavors_from_dict(data: Any) -> Dict[str, Flavor]:
        """Rebuild locked flavors from parsed lock file content

        Raises:
            LockFileFormatError: If the structure or any entry is invalid
        """
        if data is None:
            return {}
        if not isinstance(data, dict) or 'flavors' not in data:
            raise LockFileFormatError("Lock file must be a mapping with a 'flavors' key")

        entries = data['flavors']
        if entries is None:
            return {}
        if not isinstance(entries, dict):
            raise LockFileFormatError("'flavors' in lock file must be a mapping")

        flavors = {}
        for uri, entry in entries.items():
            if not isinstance(uri, str) or not isinstance(entry, dict):
                raise LockFileFormatError(f"Invalid lock entry for {uri!r}")

            missing = [k for k in LOCK_ENTRY_KEYS if k not in entry]
            if missing or entry['locked_version'] is None:
                raise LockFileFormatError(
                    f"Lock entry for {uri} is missing: {', '.join(missing) or 'locked_version'}"
                )
            if not isinstance(entry['source_name'], str):
                raise LockFileFormatError(f"Lock entry for {uri} has invalid source_name")
            if (not isinstance(entry['groups'], list)
                    or not all(isinstance(g, str) for g in entry['groups'])):
                raise LockFileFormatError(f"Lock entry for {uri} has invalid groups")

            try:
                flavor = Flavor.from_dict(uri, entry)
            except (FlavorError, TypeError, ValueError) as e:
                raise LockFileFormatError(f"Invalid lock entry for {uri}: {e}") from e

            LockStore.check_entry(uri, flavor)
            flavors[uri] = flavor

        return flavors

    def get(self, source_uri: str) -> Optional[Flavor]:
        return self.flavors.get(source_uri)

    def __contains__(self, source_uri: str) -> bool:
        return source_uri in self.flavors

    def __iter__(self) -> Iterator[Flavor]:
        return iter(self.flavors.values())

    def __len__(self) -> int:
        return len(self.flavors)

    def __eq__(self, other) -> bool:
        if not isinstance(other, LockStore):
            return NotImplemented
        return self.flavors == other.flavors

    def __repr__(self) -> str:
        return f"LockStore(path={self.path!r}, flavors={list(self.flavors)!r})"
