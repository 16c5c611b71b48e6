"""
lockdiff: see what changed in your Pipfile.lock

lockdiff compares the working-tree ``Pipfile.lock`` with the copy committed
at a git revision and reports which dependencies were added, removed, or
changed, ranking each change with a PEP 440-style version comparator.

The version parser and comparator are usable on their own:

    >>> from lockdiff import parse_version, compare_versions
    >>> compare_versions("1.0.0", "1.0.0rc1")
    <Ordering.GREATER: 1>
"""

from __future__ import annotations

from lockdiff.__version__ import __version__
from lockdiff.models import PreReleaseCycle, Version
from lockdiff.core import Ordering, compare_versions, parse_version, sort_versions
from lockdiff.exceptions import (
    InvalidFormatError,
    InvalidPreReleaseError,
    LockDiffError,
    NumberConversionError,
    VersionParseError,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "lockdiff Contributors"
__license__ = "Apache-2.0"
__description__ = "Diff Pipfile.lock dependencies against git history."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "Version",
    "PreReleaseCycle",
    "Ordering",
    "parse_version",
    "compare_versions",
    "sort_versions",
    "LockDiffError",
    "VersionParseError",
    "InvalidFormatError",
    "InvalidPreReleaseError",
    "NumberConversionError",
]
