"""
Unified data model exports for lockdiff.

Example:
    >>> from lockdiff.models import Version, PreReleaseCycle, PipDependency
"""

from __future__ import annotations

from lockdiff.models.version import PreReleaseCycle, Version
from lockdiff.models.dependency import (
    Dependency,
    GitDependency,
    PathDependency,
    PipDependency,
)

__all__ = [
    "Version",
    "PreReleaseCycle",
    "Dependency",
    "PipDependency",
    "GitDependency",
    "PathDependency",
]
