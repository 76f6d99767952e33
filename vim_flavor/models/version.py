"""Version and version constraint models"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Iterable, Optional, Tuple, Union

from packaging.version import InvalidVersion
from packaging.version import Version as _PackagingVersion

from ..api.exceptions import InvalidVersionError, MalformedConstraintError
from ..constants import CONSTRAINT_PATTERN


@total_ordering
class Version:
    """A version parsed from a repository tag

    Ordering and equality follow PEP 440 through ``packaging``, while the
    original text is kept so the exact tag can be checked out later.
    """

    __slots__ = ('text', '_parsed')

    def __init__(self, text: str):
        text = str(text).strip()
        try:
            parsed = _PackagingVersion(text)
        except InvalidVersion:
            raise InvalidVersionError(text) from None

        self.text = text
        self._parsed = parsed

    @classmethod
    def create(cls, value: Union['Version', str]) -> 'Version':
        """Return value as a Version, parsing strings"""
        if isinstance(value, Version):
            return value
        return cls(value)

    @property
    def release(self) -> Tuple[int, ...]:
        """Numeric release components"""
        return self._parsed.release

    def bump(self) -> 'Version':
        """Smallest version above every version sharing this one's prefix

        The last explicit release component is incremented and any
        pre-release or local suffix is dropped: 1.2 -> 1.3, 1.2.3 -> 1.2.4.
        """
        release = list(self.release)
        release[-1] += 1
        text = ".".join(str(part) for part in release)
        if self._parsed.epoch:
            text = f"{self._parsed.epoch}!{text}"
        return Version(text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Version({self.text!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._parsed == other._parsed

    def __lt__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._parsed < other._parsed

    def __hash__(self) -> int:
        return hash(self._parsed)


class ConstraintOperator(Enum):
    """Supported constraint operators"""
    AT_LEAST = ">="
    COMPATIBLE = "~>"


@dataclass(frozen=True, eq=False)
class VersionConstraint:
    """A single version constraint such as ``>= 1.0`` or ``~> 1.2``

    Constraints compare by the written base version, so ``~> 1.2`` and
    ``~> 1.2.0`` are different constraints even though 1.2 == 1.2.0.
    """
    operator: ConstraintOperator
    base_version: Version

    def __eq__(self, other) -> bool:
        if not isinstance(other, VersionConstraint):
            return NotImplemented
        return (self.operator, self.base_version.text) == (other.operator, other.base_version.text)

    def __hash__(self) -> int:
        return hash((self.operator, self.base_version.text))

    @classmethod
    def parse(cls, text: str) -> 'VersionConstraint':
        """Parse a constraint expression

        Args:
            text: Expression of the form "<op> <version>"

        Returns:
            Parsed constraint

        Raises:
            MalformedConstraintError: If text has any other shape
        """
        if not isinstance(text, str):
            raise MalformedConstraintError(repr(text))

        match = CONSTRAINT_PATTERN.match(text)
        if not match:
            raise MalformedConstraintError(text)

        try:
            base_version = Version(match.group('version'))
        except InvalidVersionError:
            raise MalformedConstraintError(text) from None

        return cls(
            operator=ConstraintOperator(match.group('operator')),
            base_version=base_version
        )

    def is_satisfied_by(self, version: Union[Version, str]) -> bool:
        """Check whether a version falls inside this constraint"""
        version = Version.create(version)

        if self.operator is ConstraintOperator.COMPATIBLE:
            return self.base_version <= version < self.base_version.bump()
        return version >= self.base_version

    def best_match(self, candidates: Iterable[Version]) -> Optional[Version]:
        """Pick the highest candidate satisfying this constraint

        Returns:
            Best version, or None when no candidate satisfies
        """
        from ..utils.version_utils import get_latest_version

        return get_latest_version(
            [v for v in candidates if self.is_satisfied_by(v)]
        )

    def __str__(self) -> str:
        return f"{self.operator.value} {self.base_version}"
