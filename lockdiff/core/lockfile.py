"""
``Pipfile.lock`` reader for lockdiff.

Loads the JSON lockfile written by Pipenv into :class:`PipfileLock`, keeping
only what the diff needs: the ``default`` and ``develop`` sections as
``name -> Dependency`` mappings.

Typical usage::

    lock = PipfileLock.from_file("Pipfile.lock")
    lock.default["requests"]  # PipDependency(version='==2.31.0')
"""

from __future__ import annotations

import json
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from lockdiff.exceptions import LockfileError
from lockdiff.utils.logger import get_logger
from lockdiff.models.dependency import Dependency
from lockdiff.constants import SUPPORTED_PIPFILE_SPEC
from lockdiff.utils.filesystem import safe_read_file

logger = get_logger("core.lockfile")

Dependencies = Dict[str, Dependency]


@dataclass
class PipfileLock:
    """
    Parsed contents of a ``Pipfile.lock``.

    Attributes:
        pipfile_spec: Value of ``_meta.pipfile-spec``.
        default: Runtime dependencies.
        develop: Development dependencies.
        source: Where the lockfile was read from (path or ``ref:path``).
    """

    pipfile_spec: int
    default: Dependencies = field(default_factory=dict)
    develop: Dependencies = field(default_factory=dict)
    source: Optional[str] = None

    def section(self, name: str) -> Dependencies:
        """Return the ``default`` or ``develop`` mapping by name."""
        if name == "default":
            return self.default
        if name == "develop":
            return self.develop
        raise KeyError(name)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str, *, source: Optional[str] = None) -> "PipfileLock":
        """Parse lockfile JSON text.

        Raises:
            LockfileError: Invalid JSON, unsupported spec revision, or an
                entry that is not a pip, git or path dependency.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LockfileError(
                f"Deserialize error: {exc}", file_path=source
            ) from exc

        return cls._from_raw(raw, source=source)

    @classmethod
    def from_bytes(cls, data: bytes, *, source: Optional[str] = None) -> "PipfileLock":
        """Parse lockfile JSON from raw bytes, e.g. a git blob."""
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LockfileError(
                f"Lockfile is not valid UTF-8: {exc}", file_path=source
            ) from exc
        return cls.from_text(text, source=source)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PipfileLock":
        """Read and parse a lockfile from disk."""
        logger.debug("Reading lockfile %s", path)
        return cls.from_text(safe_read_file(path), source=str(path))

    @classmethod
    def _from_raw(cls, raw: Any, *, source: Optional[str]) -> "PipfileLock":
        if not isinstance(raw, Mapping):
            raise LockfileError("Lockfile must be a JSON object", file_path=source)

        meta = raw.get("_meta")
        if not isinstance(meta, Mapping) or "pipfile-spec" not in meta:
            raise LockfileError(
                "Lockfile is missing _meta.pipfile-spec", file_path=source
            )

        spec = meta["pipfile-spec"]
        if spec != SUPPORTED_PIPFILE_SPEC:
            raise LockfileError(
                f"Incompatible Pipfile.lock spec: {spec}", file_path=source
            )

        lock = cls(
            pipfile_spec=spec,
            default=_parse_section(raw, "default", source=source),
            develop=_parse_section(raw, "develop", source=source),
            source=source,
        )
        logger.debug(
            "Loaded %d default and %d develop dependencies from %s",
            len(lock.default),
            len(lock.develop),
            source or "<text>",
        )
        return lock


def _parse_section(
    raw: Mapping[str, Any],
    name: str,
    *,
    source: Optional[str],
) -> Dependencies:
    """Convert one lockfile section into ``name -> Dependency``."""
    section = raw.get(name, {})
    if not isinstance(section, Mapping):
        raise LockfileError(
            f"Lockfile section '{name}' must be an object", file_path=source
        )

    dependencies: Dependencies = {}
    for package, entry in section.items():
        try:
            dependencies[package] = Dependency.from_lock_entry(package, entry)
        except LockfileError as exc:
            exc.file_path = source
            if source is not None:
                exc.details["file"] = source
            raise
    return dependencies
