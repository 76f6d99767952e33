"""Manifest model and VimFlavor file loading"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

import yaml

from ..api.exceptions import ManifestError, PathCollisionError
from ..constants import DEFAULT_GROUP, DEFAULT_PROTOCOL
from ..models.flavor import Flavor, merge_groups

logger = logging.getLogger(__name__)

FLAVOR_ENTRY_KEYS = {'repo', 'version', 'groups'}
GROUP_ENTRY_KEYS = {'group', 'flavors'}


def _names(value: Union[str, Iterable[str], None], what: str) -> List[str]:
    """Accept a single group name or a list of them"""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ManifestError(f"{what} must be a name or a list of names, got {value!r}")


class ManifestModel:
    """The set of declared flavors, keyed by source URI

    Declarations inherit the groups active on the default group stack;
    the stack is only changed through ``groups``/``with_groups``.
    """

    def __init__(self, protocol: str = DEFAULT_PROTOCOL):
        self.protocol = protocol
        self.flavors: Dict[str, Flavor] = {}
        self._default_groups: List[str] = [DEFAULT_GROUP]

    def declare(self, flavor: Flavor) -> Flavor:
        """
        Add a flavor, merging in the active default groups

        A flavor with an already declared URI replaces the earlier one.

        Raises:
            PathCollisionError: If another URI uses the same directory name
        """
        flavor.groups = merge_groups(self._default_groups, flavor.groups)

        for existing in self.flavors.values():
            if (existing.source_uri != flavor.source_uri
                    and existing.zapped_repo_dir_name == flavor.zapped_repo_dir_name):
                raise PathCollisionError(
                    flavor.zapped_repo_dir_name,
                    existing.source_uri,
                    flavor.source_uri
                )

        if flavor.source_uri in self.flavors:
            logger.debug(f"Redeclared {flavor.source_uri}, replacing earlier declaration")

        self.flavors[flavor.source_uri] = flavor
        return flavor

    def flavor(self,
               source_name: str,
               constraint: Optional[str] = None,
               groups: Optional[Iterable[str]] = None) -> Flavor:
        """Declare a flavor from its source name and optional constraint"""
        return self.declare(
            Flavor.declare(source_name, constraint, groups, self.protocol)
        )

    @contextmanager
    def groups(self, *group_names: str) -> Iterator['ManifestModel']:
        """Scope in which every declaration also joins group_names"""
        self._default_groups.extend(group_names)
        try:
            yield self
        finally:
            for _ in group_names:
                self._default_groups.pop()

    def with_groups(self, group_names: Iterable[str],
                    body: Callable[['ManifestModel'], Any]) -> Any:
        """Run body with group_names pushed on the default group stack"""
        with self.groups(*group_names):
            return body(self)

    def get(self, source_uri: str) -> Optional[Flavor]:
        return self.flavors.get(source_uri)

    def __contains__(self, source_uri: str) -> bool:
        return source_uri in self.flavors

    def __iter__(self) -> Iterator[Flavor]:
        return iter(self.flavors.values())

    def __len__(self) -> int:
        return len(self.flavors)

    # VimFlavor file

    @classmethod
    def from_dict(cls, data: Any, protocol: str = DEFAULT_PROTOCOL) -> 'ManifestModel':
        """Build a manifest from parsed VimFlavor content

        Args:
            data: Parsed YAML document (None for an empty file)
            protocol: Protocol used for shorthand source names

        Returns:
            Manifest model

        Raises:
            ManifestError: If the document has an unsupported shape
        """
        manifest = cls(protocol=protocol)

        if data is None:
            return manifest
        if not isinstance(data, dict):
            raise ManifestError("VimFlavor must be a mapping with a 'flavors' list")

        unknown = set(data) - {'flavors'}
        if unknown:
            raise ManifestError(f"Unknown VimFlavor keys: {', '.join(sorted(map(str, unknown)))}")

        manifest._declare_entries(data.get('flavors'))
        return manifest

    def _declare_entries(self, entries: Any) -> None:
        if entries is None:
            return
        if not isinstance(entries, list):
            raise ManifestError(f"'flavors' must be a list, got {entries!r}")

        for entry in entries:
            self._declare_entry(entry)

    def _declare_entry(self, entry: Any) -> None:
        if isinstance(entry, str):
            self.flavor(entry)
            return

        if not isinstance(entry, dict) or not entry:
            raise ManifestError(f"Invalid flavor entry: {entry!r}")

        if 'group' in entry:
            if set(entry) - GROUP_ENTRY_KEYS:
                raise ManifestError(f"Invalid group entry: {entry!r}")
            with self.groups(*_names(entry['group'], "group")):
                self._declare_entries(entry.get('flavors'))
            return

        if 'repo' in entry:
            if set(entry) - FLAVOR_ENTRY_KEYS or not isinstance(entry['repo'], str):
                raise ManifestError(f"Invalid flavor entry: {entry!r}")
            constraint = entry.get('version')
            if constraint is not None and not isinstance(constraint, str):
                raise ManifestError(
                    f"Version constraint of {entry['repo']} must be a string, got {constraint!r}",
                    source_name=entry['repo']
                )
            self.flavor(
                entry['repo'],
                constraint,
                _names(entry.get('groups'), "groups")
            )
            return

        if len(entry) == 1:
            (source_name, constraint), = entry.items()
            if isinstance(source_name, str) and (constraint is None or isinstance(constraint, str)):
                self.flavor(source_name, constraint)
                return

        raise ManifestError(f"Invalid flavor entry: {entry!r}")


def load_manifest(flavorfile_path: Path, protocol: str = DEFAULT_PROTOCOL) -> ManifestModel:
    """
    Load a VimFlavor file

    Args:
        flavorfile_path: Path to the VimFlavor file
        protocol: Protocol used for shorthand source names

    Returns:
        Manifest model

    Raises:
        ManifestError: If the file is missing or invalid
    """
    flavorfile_path = Path(flavorfile_path)

    try:
        with open(flavorfile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ManifestError(f"VimFlavor file not found: {flavorfile_path}") from None
    except yaml.YAMLError as e:
        raise ManifestError(f"Failed to parse {flavorfile_path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read {flavorfile_path}: {e}") from e

    return ManifestModel.from_dict(data, protocol=protocol)
