"""
Version ordering for lockdiff.

:func:`compare_versions` applies five tie-breaks in order; the first one
that is not ``EQUAL`` decides:

1. epoch         - missing < present, then numeric
2. segments      - element-wise; a strict prefix is smaller (``1 < 1.0``)
3. post-release  - missing < present, then numeric
4. pre-release   - missing > present, then ``(cycle, number)``
5. dev-release   - missing > present, then numeric

Pre-releases are checked before dev builds, so ``1.0a1 < 1.0.dev1 < 1.0``:
a dev build ranks below the final release only when neither version has a
pre-release.
No zero-padding is applied to segments and an explicit ``0!`` epoch ranks
above a version without one.
"""

from __future__ import annotations

from enum import IntEnum
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar, Union

from lockdiff.models.version import Version
from lockdiff.core.version_parser import parse_version

T = TypeVar("T")

VersionLike = Union[str, Version]


class Ordering(IntEnum):
    """Result of comparing two versions; usable as a classic cmp integer."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    @property
    def symbol(self) -> str:
        return {Ordering.LESS: "<", Ordering.EQUAL: "==", Ordering.GREATER: ">"}[self]

    def reverse(self) -> "Ordering":
        return Ordering(-self.value)


def _cmp(left: Any, right: Any) -> Ordering:
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    return Ordering.EQUAL


def _missing_first(left: Optional[T], right: Optional[T]) -> Ordering:
    """Absence ranks below any present value."""
    if left is None or right is None:
        return _cmp(left is not None, right is not None)
    return _cmp(left, right)


def _missing_last(left: Optional[T], right: Optional[T]) -> Ordering:
    """Absence ranks above any present value."""
    if left is None or right is None:
        return _cmp(left is None, right is None)
    return _cmp(left, right)


# ---------------------------------------------------------------------------
# Tie-break steps
# ---------------------------------------------------------------------------


def compare_epoch(a: Version, b: Version) -> Ordering:
    return _missing_first(a.epoch, b.epoch)


def compare_segments(a: Version, b: Version) -> Ordering:
    # Tuple comparison ranks a strict prefix first, without padding
    return _cmp(a.segments, b.segments)


def compare_post_release(a: Version, b: Version) -> Ordering:
    return _missing_first(a.post_release, b.post_release)


def compare_pre_release(a: Version, b: Version) -> Ordering:
    return _missing_last(a.pre_release, b.pre_release)


def compare_dev_release(a: Version, b: Version) -> Ordering:
    return _missing_last(a.dev_release, b.dev_release)


TIE_BREAKS: Tuple[Tuple[str, Callable[[Version, Version], Ordering]], ...] = (
    ("epoch", compare_epoch),
    ("segments", compare_segments),
    ("post_release", compare_post_release),
    ("pre_release", compare_pre_release),
    ("dev_release", compare_dev_release),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _coerce(version: VersionLike) -> Version:
    return parse_version(version) if isinstance(version, str) else version


def compare_versions(version1: VersionLike, version2: VersionLike) -> Ordering:
    """Compare two versions.

    Args:
        version1: First version (string or :class:`Version`).
        version2: Second version (string or :class:`Version`).

    Returns:
        ``Ordering.LESS``, ``Ordering.EQUAL`` or ``Ordering.GREATER``
        describing ``version1`` relative to ``version2``.

    Raises:
        VersionParseError: A string argument cannot be parsed.

    Examples:
        >>> compare_versions("1!1.0", "2.0")
        <Ordering.GREATER: 1>
        >>> compare_versions("1.0.0.dev1", "1.0.0a1.dev1")
        <Ordering.GREATER: 1>
    """
    a = _coerce(version1)
    b = _coerce(version2)

    for _name, step in TIE_BREAKS:
        result = step(a, b)
        if result is not Ordering.EQUAL:
            return result
    return Ordering.EQUAL


#: ``key=`` adapter for ``sorted``/``max``/``min`` over Version objects.
version_cmp_key = cmp_to_key(compare_versions)


def sort_versions(
    versions: Iterable[VersionLike],
    *,
    reverse: bool = False,
) -> List[Version]:
    """Parse (where needed) and sort versions, oldest first.

    The sort is stable, so versions comparing ``EQUAL`` keep their input
    order.
    """
    return sorted((_coerce(v) for v in versions), key=version_cmp_key, reverse=reverse)
