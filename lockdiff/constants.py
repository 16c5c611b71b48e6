"""
Centralized constants for lockdiff.

This module defines immutable configuration values used across lockdiff,
including version grammar tokens, lockfile defaults, and logging formats.
All values are intended to be treated as read-only.
"""

from typing import Final, Mapping, Sequence

# ---------------------------------------------------------------------------
# Version grammar
# ---------------------------------------------------------------------------

#: Largest value accepted for any numeric version component (unsigned 32-bit).
MAX_VERSION_NUMBER: Final[int] = 2**32 - 1

#: Characters accepted as pre-release cycle labels by the version scanner.
VERSION_LABEL_CHARS: Final[str] = "abcdefghijklmnopqrstuvwxyz"

#: Optional separators allowed before post- and dev-release markers.
RELEASE_SEPARATORS: Final[str] = ".-_"

#: Post-release markers, tried in order.
POST_RELEASE_MARKERS: Final[Sequence[str]] = ("post", "r", "rev")

#: Dev-release markers, tried in order.
DEV_RELEASE_MARKERS: Final[Sequence[str]] = ("dev",)

# ---------------------------------------------------------------------------
# Pipenv files
# ---------------------------------------------------------------------------

#: Default lockfile name looked up by ``lockdiff diff``.
DEFAULT_LOCKFILE: Final[str] = "Pipfile.lock"

#: Default Pipfile name looked up by ``lockdiff pin``.
DEFAULT_PIPFILE: Final[str] = "Pipfile"

#: The only ``_meta.pipfile-spec`` revision lockdiff understands.
SUPPORTED_PIPFILE_SPEC: Final[int] = 6

#: Lockfile section name -> Pipfile table name.
PIPFILE_SECTIONS: Final[Mapping[str, str]] = {
    "default": "packages",
    "develop": "dev-packages",
}

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Git revision holding the "old" lockfile.
DEFAULT_REF: Final[str] = "HEAD"

#: Whether ``[develop]`` dependencies are diffed by default.
DEFAULT_INCLUDE_DEVELOP: Final[bool] = False

#: Whether an unparseable version aborts the diff.
DEFAULT_STRICT_VERSIONS: Final[bool] = False

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading lockfiles or Pipfiles.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
