"""
Version data model for lockdiff.

A :class:`Version` is the structured form of a PEP 440-style version string
as produced by :func:`lockdiff.core.version_parser.parse_version`. It holds
only the parsed numbers; ordering lives in :mod:`lockdiff.core.comparator`.
"""

from __future__ import annotations

from enum import IntEnum
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from lockdiff.exceptions import InvalidPreReleaseError


class PreReleaseCycle(IntEnum):
    """Pre-release maturity stage, ordered ``ALPHA < BETA < RELEASE_CANDIDATE``."""

    ALPHA = 0
    BETA = 1
    RELEASE_CANDIDATE = 2

    @classmethod
    def from_label(cls, label: str) -> "PreReleaseCycle":
        """Map a cycle label such as ``"a"``, ``"beta"`` or ``"rc"`` to a cycle.

        Raises:
            InvalidPreReleaseError: ``label`` is not a known synonym.
        """
        try:
            return _CYCLE_SYNONYMS[label]
        except KeyError:
            raise InvalidPreReleaseError(label) from None


_CYCLE_SYNONYMS: Mapping[str, PreReleaseCycle] = {
    "a": PreReleaseCycle.ALPHA,
    "alpha": PreReleaseCycle.ALPHA,
    "b": PreReleaseCycle.BETA,
    "beta": PreReleaseCycle.BETA,
    "rc": PreReleaseCycle.RELEASE_CANDIDATE,
    "c": PreReleaseCycle.RELEASE_CANDIDATE,
    "pre": PreReleaseCycle.RELEASE_CANDIDATE,
    "preview": PreReleaseCycle.RELEASE_CANDIDATE,
}

PreRelease = Tuple[PreReleaseCycle, int]


@dataclass(frozen=True)
class Version:
    """
    An immutable parsed version.

    Absent optional fields are ``None``; an explicit ``0`` is kept distinct
    from absence. Equality is structural. The ordering operators delegate
    to :func:`lockdiff.core.comparator.compare_versions`.

    Attributes:
        epoch: Epoch number from an ``N!`` prefix.
        segments: Release segments, major first. Never empty.
        pre_release: ``(cycle, number)`` pair.
        post_release: Post-release number.
        dev_release: Dev-release number.
    """

    epoch: Optional[int]
    segments: Tuple[int, ...]
    pre_release: Optional[PreRelease] = None
    post_release: Optional[int] = None
    dev_release: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("Version requires at least one segment")

    @property
    def major(self) -> int:
        """First release segment."""
        return self.segments[0]

    @property
    def is_prerelease(self) -> bool:
        return self.pre_release is not None

    @property
    def is_postrelease(self) -> bool:
        return self.post_release is not None

    @property
    def is_devrelease(self) -> bool:
        return self.dev_release is not None

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def _compare(self, other: object) -> int:
        from lockdiff.core.comparator import compare_versions

        return compare_versions(self, other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) >= 0
