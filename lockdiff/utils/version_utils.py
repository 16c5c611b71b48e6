"""
Version change classification for lockdiff.

Labels the move from one locked version to another using
:func:`lockdiff.core.comparator.compare_versions`.
"""

from __future__ import annotations

from typing import Optional, Tuple

from lockdiff.models.version import Version
from lockdiff.exceptions import VersionParseError
from lockdiff.core.comparator import Ordering, compare_versions
from lockdiff.core.version_parser import parse_version


def get_update_type(
    current_version: Optional[str],
    target_version: Optional[str],
    *,
    strict: bool = False,
) -> str:
    """Determine the kind of change between two version strings.

    Args:
        current_version: Previously locked version, or ``None`` if the
            package was not locked before.
        target_version: Newly locked version, or ``None`` if the package
            was removed.
        strict: Re-raise parse errors instead of returning ``"unknown"``.

    Returns:
        One of:
            - ``"new"``       : No current version exists
            - ``"removed"``   : No target version exists
            - ``"same"``      : Versions compare equal
            - ``"downgrade"`` : Target version is lower than current
            - ``"major"``     : Major version change
            - ``"minor"``     : Minor version change
            - ``"patch"``     : Patch-level change
            - ``"update"``    : Upgrade that cannot be classified further
            - ``"unknown"``   : A version could not be parsed

    Raises:
        VersionParseError: ``strict`` is set and a version is invalid.

    Examples:
        >>> get_update_type("1.0.0", "2.0.0")
        'major'
        >>> get_update_type(None, "1.0.0")
        'new'
        >>> get_update_type("1.0.0a1", "1.0.0")
        'update'
    """
    if current_version is None and target_version is None:
        return "unknown"

    if current_version is None:
        return "new"

    if target_version is None:
        return "removed"

    try:
        current = parse_version(current_version)
        target = parse_version(target_version)
    except VersionParseError:
        if strict:
            raise
        return "unknown"

    ordering = compare_versions(current, target)
    if ordering is Ordering.EQUAL:
        return "same"
    if ordering is Ordering.GREATER:
        return "downgrade"

    return _classify_upgrade(current, target)


def _classify_upgrade(current: Version, target: Version) -> str:
    """Classify an upgrade between two parsed versions."""
    if current.epoch != target.epoch:
        return "major"

    current_major, current_minor, current_patch = _normalize_release(current)
    target_major, target_minor, target_patch = _normalize_release(target)

    if current_major != target_major:
        return "major"

    if current_minor != target_minor:
        return "minor"

    if current_patch != target_patch:
        return "patch"

    # pre/post/dev changes, or extra segments past the patch level
    return "update"


def _normalize_release(version: Version) -> Tuple[int, int, int]:
    """Pad or cut a version's segments to ``(major, minor, patch)``."""
    segments = version.segments
    major = segments[0]
    minor = segments[1] if len(segments) > 1 else 0
    patch = segments[2] if len(segments) > 2 else 0
    return major, minor, patch
