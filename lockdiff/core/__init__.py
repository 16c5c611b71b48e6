"""
Core functionality exports for lockdiff.

The version parser and comparator are the heart of lockdiff; the lockfile
reader, diff, git and Pipfile modules feed them and consume their results:

    from lockdiff.core import parse_version, compare_versions
"""

from __future__ import annotations

from lockdiff.core.version_parser import is_valid_version, parse_version
from lockdiff.core.comparator import (
    Ordering,
    compare_versions,
    sort_versions,
    version_cmp_key,
)
from lockdiff.core.lockfile import PipfileLock
from lockdiff.core.diff import (
    DependencyDiff,
    DiffEntry,
    classify_change,
    compare_dependencies,
)
from lockdiff.core.pipfile import EditablePipfile, PipfileEntry
from lockdiff.core.git import find_repo_root, read_committed_file, read_file_at_ref

__all__ = [
    "parse_version",
    "is_valid_version",
    "Ordering",
    "compare_versions",
    "sort_versions",
    "version_cmp_key",
    "PipfileLock",
    "DependencyDiff",
    "DiffEntry",
    "classify_change",
    "compare_dependencies",
    "EditablePipfile",
    "PipfileEntry",
    "find_repo_root",
    "read_file_at_ref",
    "read_committed_file",
]
