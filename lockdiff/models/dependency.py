"""
Locked dependency data model for lockdiff.

Each ``Pipfile.lock`` entry is pinned either to a PyPI release, a git
reference, or a local path. Entries compare by exact value: two pip pins
are equal only if their raw version strings are identical.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from lockdiff.exceptions import LockfileError

if TYPE_CHECKING:
    from lockdiff.models.version import Version


class Dependency:
    """Base class for a single locked dependency."""

    __slots__ = ()

    #: Short source label used in reports.
    kind: str = "unknown"

    @property
    def is_release(self) -> bool:
        """True when the value is a version string the parser can rank."""
        return self.kind == "pip"

    def to_json(self) -> dict:
        return {"kind": self.kind, "value": str(self)}

    @classmethod
    def from_lock_entry(
        cls,
        name: str,
        entry: Mapping[str, Any],
    ) -> "Dependency":
        """Build a dependency from one ``Pipfile.lock`` package object.

        A ``ref`` key wins over ``version``, so VCS entries that also
        record a version are treated as git dependencies.

        Raises:
            LockfileError: The entry has none of ``ref``, ``version``,
                ``path`` or ``file``.
        """
        if not isinstance(entry, Mapping):
            raise LockfileError(
                "Lockfile entry must be an object", package_name=name
            )

        if isinstance(entry.get("ref"), str):
            return GitDependency(ref=entry["ref"])
        if isinstance(entry.get("version"), str):
            return PipDependency(version=entry["version"])
        for key in ("path", "file"):
            if isinstance(entry.get(key), str):
                return PathDependency(path=entry[key])

        raise LockfileError(
            "Lockfile entry has no version, ref or path", package_name=name
        )


@dataclass(frozen=True)
class PipDependency(Dependency):
    """A release pinned from a package index, e.g. ``version = "==1.2.3"``."""

    version: str
    kind = "pip"

    def __str__(self) -> str:
        version = self.version
        while version.startswith("=="):
            version = version[2:]
        return version

    def parsed_version(self) -> "Version":
        """Parse the pinned version with the lockdiff version parser.

        Raises:
            VersionParseError: The pin is not a recognizable version.
        """
        from lockdiff.core.version_parser import parse_version

        return parse_version(str(self))


@dataclass(frozen=True)
class GitDependency(Dependency):
    """A dependency pinned to a VCS reference."""

    ref: str
    kind = "git"

    def __str__(self) -> str:
        return self.ref


@dataclass(frozen=True)
class PathDependency(Dependency):
    """A dependency installed from a local path or file."""

    path: str
    kind = "path"

    def __str__(self) -> str:
        return self.path
