# vim_flavor/models/flavor.py
"""Flavor model: one declared plugin dependency and its resolved state"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

from .version import Version, VersionConstraint
from ..api.exceptions import (
    DeploymentError,
    FlavorError,
    MalformedSourceError,
    RepositoryAccessError,
    UnresolvableConstraintError,
)
from ..constants import (
    BARE_NAME_PATTERN,
    DEFAULT_CONSTRAINT,
    DEFAULT_PROTOCOL,
    GITHUB_NAME_PATTERN,
    GITHUB_URI_TEMPLATE,
    URI_PATTERN,
    VIM_SCRIPTS_URI_TEMPLATE,
    RepositoryStep,
)
from ..utils.file_utils import flavors_path, remove_path, repos_path, zap_name
from ..utils.version_utils import parse_version

logger = logging.getLogger(__name__)


def derive_source_uri(source_name: str, protocol: str = DEFAULT_PROTOCOL) -> str:
    """
    Derive the canonical repository URI for a source name

    Args:
        source_name: "name", "user/project" or a full "scheme://..." URI
        protocol: Protocol used for shorthand names

    Returns:
        Repository URI

    Raises:
        MalformedSourceError: If source_name has none of the supported shapes
    """
    match = BARE_NAME_PATTERN.match(source_name)
    if match:
        return VIM_SCRIPTS_URI_TEMPLATE.format(
            protocol=protocol,
            name=match.group('name')
        )

    match = GITHUB_NAME_PATTERN.match(source_name)
    if match:
        return GITHUB_URI_TEMPLATE.format(
            protocol=protocol,
            user=match.group('user'),
            project=match.group('project')
        )

    if URI_PATTERN.match(source_name):
        return source_name

    raise MalformedSourceError(source_name)


def merge_groups(*group_lists: Iterable[str]) -> List[str]:
    """Concatenate group lists, dropping repeats but keeping order"""
    merged = []
    for groups in group_lists:
        for group in groups:
            if group not in merged:
                merged.append(group)
    return merged


@dataclass
class Flavor:
    """A declared plugin dependency

    ``source_uri`` is the identity of a flavor. ``locked_version`` stays
    None until reconciliation (or a lock file) decides it.
    """
    source_name: str
    source_uri: str
    constraint: VersionConstraint = field(
        default_factory=lambda: VersionConstraint.parse(DEFAULT_CONSTRAINT)
    )
    groups: List[str] = field(default_factory=list)
    locked_version: Optional[Version] = None

    @classmethod
    def declare(cls,
                source_name: str,
                constraint: Optional[str] = None,
                groups: Optional[Iterable[str]] = None,
                protocol: str = DEFAULT_PROTOCOL) -> 'Flavor':
        """Create an unlocked flavor from manifest-style arguments"""
        return cls(
            source_name=source_name,
            source_uri=derive_source_uri(source_name, protocol),
            constraint=VersionConstraint.parse(constraint or DEFAULT_CONSTRAINT),
            groups=merge_groups(groups or [])
        )

    @property
    def zapped_repo_dir_name(self) -> str:
        """Directory name used for both the cache and the deployment"""
        return zap_name(self.source_name)

    @property
    def is_locked(self) -> bool:
        return self.locked_version is not None

    def cached_repo_path(self, dot_path: Path) -> Path:
        """Local clone location under the cache root"""
        return repos_path(dot_path) / self.zapped_repo_dir_name

    def make_deploy_path(self, vimfiles_path: Path) -> Path:
        """Deployment location under a vimfiles directory"""
        return flavors_path(vimfiles_path) / self.zapped_repo_dir_name

    def copy(self) -> 'Flavor':
        return replace(self, groups=list(self.groups))

    def lock(self, version: Version) -> None:
        """Assign the locked version, enforcing the constraint"""
        if not self.constraint.is_satisfied_by(version):
            raise UnresolvableConstraintError(
                self.source_name, self.constraint, [version]
            )
        self.locked_version = version

    # Repository operations

    @contextmanager
    def _repository_step(self, step: RepositoryStep):
        """Attach this flavor and the failing step to raised errors"""
        try:
            yield
        except FlavorError as e:
            if e.source_name is None:
                e.source_name = self.source_name
            if e.step is None:
                e.step = step.value
            raise

    def ensure_cloned(self, vcs, dot_path: Path) -> bool:
        """
        Clone the repository into the cache unless it is already there

        Returns:
            True if a clone was made
        """
        cache_path = self.cached_repo_path(dot_path)
        if cache_path.exists():
            return False

        logger.info(f"Cloning {self.source_uri} into {cache_path}")
        with self._repository_step(RepositoryStep.CLONE):
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            vcs.clone(self.source_uri, cache_path)
        return True

    def fetch_updates(self, vcs, dot_path: Path) -> None:
        """Refresh remote tags and refs in the cache"""
        logger.info(f"Fetching updates for {self.source_name}")
        with self._repository_step(RepositoryStep.FETCH):
            vcs.fetch(self.cached_repo_path(dot_path))

    def list_available_versions(self, vcs, dot_path: Path) -> Set[Version]:
        """
        List the versions tagged in the cached repository

        Tags that do not parse as versions are skipped.
        """
        with self._repository_step(RepositoryStep.LIST_TAGS):
            tags = vcs.list_tags(self.cached_repo_path(dot_path))

        versions = set()
        for tag in tags:
            version = parse_version(tag)
            if version is None:
                logger.debug(f"Skipping non-version tag {tag!r} of {self.source_name}")
                continue
            versions.add(version)
        return versions

    def update_locked_version(self, vcs, dot_path: Path) -> Version:
        """Lock the best available version satisfying the constraint"""
        available = self.list_available_versions(vcs, dot_path)
        best = self.constraint.best_match(available)
        if best is None:
            raise UnresolvableConstraintError(
                self.source_name, self.constraint, available
            )

        self.lock(best)
        return best

    def checkout_into(self, output_path: Path, vcs, dot_path: Path,
                      help_indexer=None) -> None:
        """
        Deploy the locked version into output_path

        Any previous content of output_path is replaced. Help index
        rebuilding afterwards is best-effort.

        Raises:
            DeploymentError: If the flavor is unlocked or checkout fails
        """
        output_path = Path(output_path)

        if not self.is_locked:
            raise DeploymentError(
                f"{self.source_name} has no locked version",
                step=RepositoryStep.CHECKOUT.value,
                source_name=self.source_name
            )

        self.ensure_cloned(vcs, dot_path)
        self.remove_from(output_path)

        try:
            vcs.checkout(
                self.cached_repo_path(dot_path),
                self.locked_version.text,
                output_path
            )
        except RepositoryAccessError as e:
            raise DeploymentError(
                f"Failed to check out {self.source_name} "
                f"({self.locked_version}): {e}",
                output=e.output,
                step=RepositoryStep.CHECKOUT.value,
                source_name=self.source_name
            ) from e

        if help_indexer is not None:
            try:
                help_indexer.rebuild(output_path)
            except Exception as e:
                logger.warning(f"Failed to rebuild help tags for {self.source_name}: {e}")

    def remove_from(self, output_path: Path) -> None:
        """Remove a deployed copy; a missing path is not an error"""
        try:
            remove_path(output_path)
        except OSError as e:
            raise DeploymentError(
                f"Failed to remove {output_path}: {e}",
                step=RepositoryStep.WIPE.value,
                source_name=self.source_name
            ) from e

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a lock file entry"""
        return {
            'groups': list(self.groups),
            'locked_version': str(self.locked_version) if self.locked_version else None,
            'source_name': self.source_name,
            'constraint': str(self.constraint),
        }

    @classmethod
    def from_dict(cls, source_uri: str, data: Dict[str, Any]) -> 'Flavor':
        """Create from a lock file entry"""
        locked_version = data.get('locked_version')
        return cls(
            source_name=data['source_name'],
            source_uri=source_uri,
            constraint=VersionConstraint.parse(data['constraint']),
            groups=list(data.get('groups') or []),
            locked_version=Version(str(locked_version)) if locked_version is not None else None
        )
