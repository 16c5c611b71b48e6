"""
lockdiff version information.

This module provides a single source of truth for the package version.
The version string is parsed with lockdiff's own parser, so it must be
something :func:`lockdiff.core.version_parser.parse_version` accepts.

Examples:
    0.1.0
    0.1.0.dev0
    1.0.0rc1
"""

from __future__ import annotations

from lockdiff.core.version_parser import parse_version

# ---------------------------------------------------------------------------
# Main version (single source of truth)
# ---------------------------------------------------------------------------

__version__ = "0.1.0.dev0"


# ---------------------------------------------------------------------------
# Structured version metadata
# ---------------------------------------------------------------------------

VERSION_INFO = parse_version(__version__)


# ---------------------------------------------------------------------------
# Human-readable version (for CLI)
# ---------------------------------------------------------------------------

VERSION_STRING = f"lockdiff {__version__}"
