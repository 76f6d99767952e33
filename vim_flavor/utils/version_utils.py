"""Version management utilities"""

from typing import Iterable, List, Optional

from ..api.exceptions import InvalidVersionError


def parse_version(version_str: str):
    """
    Parse version string

    Args:
        version_str: Version string

    Returns:
        Version object or None if invalid
    """
    from ..models.version import Version

    try:
        return Version(version_str)
    except InvalidVersionError:
        return None


def sort_versions(versions: Iterable, reverse: bool = True) -> List:
    """
    Sort versions

    Args:
        versions: Version objects
        reverse: Sort in descending order

    Returns:
        Sorted list
    """
    return sorted(versions, reverse=reverse)


def get_latest_version(versions: Iterable) -> Optional[object]:
    """
    Get latest version from a collection

    Args:
        versions: Version objects

    Returns:
        Latest version or None
    """
    sorted_versions = sort_versions(versions, reverse=True)
    return sorted_versions[0] if sorted_versions else None
