"""
Dependency-set diffing for lockdiff.

Two ``name -> Dependency`` mappings are compared by key presence and exact
value equality. Version ordering is not used to decide *whether* something
changed, only to label *how* it changed (see :func:`classify_change`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from lockdiff.utils.logger import get_logger
from lockdiff.models.dependency import Dependency
from lockdiff.utils.version_utils import get_update_type

logger = get_logger("core.diff")


@dataclass
class DependencyDiff:
    """
    Result of comparing a new dependency mapping against an old one.

    Attributes:
        changed: ``name -> (new, old)`` for entries present in both with
            different values.
        added: Entries only in the new mapping.
        deleted: Entries only in the old mapping.
    """

    changed: Dict[str, Tuple[Dependency, Dependency]] = field(default_factory=dict)
    added: Dict[str, Dependency] = field(default_factory=dict)
    deleted: Dict[str, Dependency] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.changed or self.added or self.deleted)

    @property
    def total(self) -> int:
        return len(self.changed) + len(self.added) + len(self.deleted)

    def entries(self, *, strict: bool = False) -> List["DiffEntry"]:
        """Flatten the diff into sorted rows: changed, then new, then deleted."""
        rows: List[DiffEntry] = []
        for name in sorted(self.changed):
            new, old = self.changed[name]
            rows.append(DiffEntry.build(name, "changed", old, new, strict=strict))
        for name in sorted(self.added):
            rows.append(DiffEntry.build(name, "new", None, self.added[name], strict=strict))
        for name in sorted(self.deleted):
            rows.append(
                DiffEntry.build(name, "deleted", self.deleted[name], None, strict=strict)
            )
        return rows


@dataclass(frozen=True)
class DiffEntry:
    """One reported line of a diff."""

    name: str
    status: str
    old: Optional[Dependency]
    new: Optional[Dependency]
    update_type: str

    @classmethod
    def build(
        cls,
        name: str,
        status: str,
        old: Optional[Dependency],
        new: Optional[Dependency],
        *,
        strict: bool = False,
    ) -> "DiffEntry":
        return cls(
            name=name,
            status=status,
            old=old,
            new=new,
            update_type=classify_change(old, new, strict=strict),
        )

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "status": self.status,
            "old": self.old.to_json() if self.old else None,
            "new": self.new.to_json() if self.new else None,
            "update_type": self.update_type,
        }


def compare_dependencies(
    new: Mapping[str, Dependency],
    old: Mapping[str, Dependency],
) -> DependencyDiff:
    """Compare two dependency mappings.

    Args:
        new: Dependencies after the change.
        old: Dependencies before the change.

    Returns:
        A :class:`DependencyDiff`; unchanged entries are not included.
    """
    diff = DependencyDiff()

    for name, new_dep in new.items():
        old_dep = old.get(name)
        if old_dep is None:
            diff.added[name] = new_dep
        elif new_dep != old_dep:
            diff.changed[name] = (new_dep, old_dep)

    for name, old_dep in old.items():
        if name not in new:
            diff.deleted[name] = old_dep

    logger.debug(
        "Diff: %d changed, %d new, %d deleted",
        len(diff.changed),
        len(diff.added),
        len(diff.deleted),
    )
    return diff


def classify_change(
    old: Optional[Dependency],
    new: Optional[Dependency],
    *,
    strict: bool = False,
) -> str:
    """Label a dependency change using version ordering where possible.

    Only pip-to-pip changes are ranked; any git or path source on either
    side yields ``"unknown"`` unless the entry was added or removed.

    Raises:
        VersionParseError: ``strict`` is set and a pip version is invalid.
    """
    if old is None or new is None:
        return get_update_type(
            str(old) if old is not None else None,
            str(new) if new is not None else None,
        )

    if not (old.is_release and new.is_release):
        return "unknown"

    return get_update_type(str(old), str(new), strict=strict)
