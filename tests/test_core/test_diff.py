from __future__ import annotations

from typing import Dict

import pytest

from lockdiff.core.diff import (
    DependencyDiff,
    DiffEntry,
    classify_change,
    compare_dependencies,
)
from lockdiff.exceptions import VersionParseError
from lockdiff.models import Dependency, GitDependency, PathDependency, PipDependency


def pip(version: str) -> PipDependency:
    return PipDependency(version=f"=={version}")


@pytest.fixture
def old() -> Dict[str, Dependency]:
    return {
        "requests": pip("2.31.0"),
        "urllib3": pip("2.0.7"),
        "six": pip("1.16.0"),
        "mylib": GitDependency(ref="aaa111"),
    }


@pytest.fixture
def new() -> Dict[str, Dependency]:
    return {
        "requests": pip("2.32.3"),
        "urllib3": pip("2.0.7"),
        "idna": pip("3.7"),
        "mylib": GitDependency(ref="bbb222"),
    }


@pytest.mark.unit
class TestCompareDependencies:
    """Tests for compare_dependencies."""

    def test_changed_added_deleted(self, new, old) -> None:
        diff = compare_dependencies(new, old)

        assert diff.changed == {
            "requests": (pip("2.32.3"), pip("2.31.0")),
            "mylib": (GitDependency(ref="bbb222"), GitDependency(ref="aaa111")),
        }
        assert diff.added == {"idna": pip("3.7")}
        assert diff.deleted == {"six": pip("1.16.0")}
        assert diff.total == 4
        assert diff.is_empty is False

    def test_identical_mappings(self, old) -> None:
        diff = compare_dependencies(dict(old), old)

        assert diff.is_empty is True
        assert diff.total == 0
        assert diff.entries() == []

    def test_equal_versions_with_different_text_are_changes(self) -> None:
        """Test diffing uses exact values, not version ordering."""
        diff = compare_dependencies({"a": pip("1.0")}, {"a": pip("1.0.0")})

        assert "a" in diff.changed

    def test_source_kind_change(self) -> None:
        diff = compare_dependencies({"a": GitDependency(ref="abc")}, {"a": pip("1.0")})

        assert diff.changed["a"] == (GitDependency(ref="abc"), pip("1.0"))


@pytest.mark.unit
class TestEntries:
    """Tests for DependencyDiff.entries and DiffEntry."""

    def test_entries_order_and_labels(self, new, old) -> None:
        rows = compare_dependencies(new, old).entries()

        assert [(r.name, r.status, r.update_type) for r in rows] == [
            ("mylib", "changed", "unknown"),
            ("requests", "changed", "minor"),
            ("idna", "new", "new"),
            ("six", "deleted", "removed"),
        ]

    def test_entry_sides(self, new, old) -> None:
        rows = {r.name: r for r in compare_dependencies(new, old).entries()}

        assert rows["requests"].old == pip("2.31.0")
        assert rows["requests"].new == pip("2.32.3")
        assert rows["idna"].old is None
        assert rows["six"].new is None

    def test_to_json(self) -> None:
        entry = DiffEntry.build("requests", "changed", pip("2.31.0"), pip("3.0.0"))

        assert entry.to_json() == {
            "name": "requests",
            "status": "changed",
            "old": {"kind": "pip", "value": "2.31.0"},
            "new": {"kind": "pip", "value": "3.0.0"},
            "update_type": "major",
        }

    def test_to_json_missing_side(self) -> None:
        entry = DiffEntry.build("idna", "new", None, pip("3.7"))

        assert entry.to_json()["old"] is None

    def test_empty_diff_dataclass(self) -> None:
        assert DependencyDiff().is_empty is True


@pytest.mark.unit
class TestClassifyChange:
    """Tests for classify_change."""

    @pytest.mark.parametrize(
        "old_version,new_version,expected",
        [
            ("1.0.0", "2.0.0", "major"),
            ("1.0.0", "1.1.0", "minor"),
            ("1.0.0", "1.0.1", "patch"),
            ("1.0.0rc1", "1.0.0", "update"),
            ("2.0.0", "1.9.0", "downgrade"),
            ("1.0", "1!1.0", "major"),
        ],
    )
    def test_pip_to_pip(self, old_version: str, new_version: str, expected: str) -> None:
        assert classify_change(pip(old_version), pip(new_version)) == expected

    def test_added_and_removed(self) -> None:
        assert classify_change(None, pip("1.0")) == "new"
        assert classify_change(pip("1.0"), None) == "removed"
        assert classify_change(None, GitDependency(ref="abc")) == "new"

    def test_non_release_sources(self) -> None:
        assert classify_change(GitDependency(ref="a"), GitDependency(ref="b")) == "unknown"
        assert classify_change(pip("1.0"), PathDependency(path="./x")) == "unknown"

    def test_unparseable_version(self) -> None:
        old = PipDependency(version="==1.0d1")

        assert classify_change(old, pip("2.0")) == "unknown"
        with pytest.raises(VersionParseError):
            classify_change(old, pip("2.0"), strict=True)

    def test_strict_entries_propagate(self) -> None:
        diff = compare_dependencies({"a": pip("2.0")}, {"a": PipDependency(version="==x")})

        with pytest.raises(VersionParseError):
            diff.entries(strict=True)
