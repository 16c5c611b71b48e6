"""
Format-preserving Pipfile editor for lockdiff.

The Pipfile is loaded with ``tomlkit``, so comments, ordering and quoting
survive an edit. Entry shapes that carry a version can be rewritten::

    [packages]
    requests = "*"                              # plain string
    flask = {version = ">=2.0", extras = ["async"]}  # inline table
    attrs.version = ">=23"                      # dotted key

    [packages.django]                           # sub-table
    version = "~=4.2"

Git, path and editable entries have no version and are left alone.
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Union

import tomlkit
from tomlkit.items import Item
from tomlkit.exceptions import ParseError, TOMLKitError
from tomlkit.toml_document import TOMLDocument
from packaging.utils import canonicalize_name

from lockdiff.exceptions import PipfileError
from lockdiff.utils.logger import get_logger
from lockdiff.utils.filesystem import safe_read_file

logger = get_logger("core.pipfile")


@dataclass(frozen=True)
class PipfileEntry:
    """
    One dependency declared in a Pipfile.

    Attributes:
        name: Package name as written.
        section: ``packages`` or ``dev-packages``.
        value: Parsed TOML value (a string or a table).
    """

    name: str
    section: str
    value: Any

    @property
    def version(self) -> Optional[str]:
        """Version specifier, or ``None`` for git/path/editable entries."""
        if isinstance(self.value, str):
            return self.value
        if isinstance(self.value, dict):
            version = self.value.get("version")
            return version if isinstance(version, str) else None
        return None

    @property
    def is_pinnable(self) -> bool:
        return self.version is not None


class EditablePipfile:
    """A Pipfile that can have dependency versions rewritten in place."""

    def __init__(self, text: str, document: TOMLDocument) -> None:
        self._text = text
        self._document = document

    @classmethod
    def from_text(cls, text: str) -> "EditablePipfile":
        """Parse Pipfile text.

        Raises:
            PipfileError: ``text`` is not valid TOML.
        """
        return cls(text, _load(text))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "EditablePipfile":
        logger.debug("Reading Pipfile %s", path)
        return cls.from_text(safe_read_file(path))

    @property
    def document(self) -> Dict[str, Any]:
        """The parsed TOML document as plain Python values."""
        return self._document.unwrap()

    def to_text(self) -> str:
        return self._text

    def iter_dependencies(self, section: str = "packages") -> Iterator[PipfileEntry]:
        """Yield the entries of ``[packages]`` or ``[dev-packages]``."""
        table = self.document.get(section, {})
        if not isinstance(table, dict):
            raise PipfileError(f"Section '{section}' must be a table")
        for name, value in table.items():
            yield PipfileEntry(name=name, section=section, value=value)

    def find(self, name: str, section: str = "packages") -> Optional[PipfileEntry]:
        """Look up an entry by PEP 503 normalized name."""
        wanted = canonicalize_name(name)
        for entry in self.iter_dependencies(section):
            if canonicalize_name(entry.name) == wanted:
                return entry
        return None

    def set_version(self, name: str, version: str, section: str = "packages") -> str:
        """Replace the version specifier of ``name`` and return the old one.

        The edit is made on a fresh copy of the document and only kept
        once the rewritten text parses again.

        Raises:
            PipfileError: The entry does not exist, has no version, or the
                rewritten file is no longer valid TOML.
        """
        document = _load(self._text)
        table = document.get(section)
        key = _find_key(table, name)
        if key is None:
            raise PipfileError(
                f"No versioned entry in section '{section}'", package_name=name
            )

        value = table[key]
        if isinstance(value, str):
            old = str(value)
            table[key] = _string_like(value, version)
        elif isinstance(value, Mapping) and isinstance(value.get("version"), str):
            old = str(value["version"])
            value["version"] = _string_like(value["version"], version)
        else:
            raise PipfileError("Entry has no version to rewrite", package_name=name)

        text = tomlkit.dumps(document)
        self._document = _load(text)
        self._text = text
        logger.debug("[%s] %s: %s -> %s", section, key, old, version)
        return old


def _load(text: str) -> TOMLDocument:
    try:
        return tomlkit.parse(text)
    except ParseError as exc:
        raise PipfileError(
            f"Invalid TOML in Pipfile: {exc}", line_number=exc.line
        ) from exc
    except TOMLKitError as exc:
        raise PipfileError(f"Invalid TOML in Pipfile: {exc}") from exc


def _find_key(table: Any, name: str) -> Optional[str]:
    if not isinstance(table, MutableMapping):
        return None
    wanted = canonicalize_name(name)
    for key in table:
        if canonicalize_name(key) == wanted:
            return key
    return None


def _string_like(old: Any, version: str) -> Item:
    """Build a TOML string for ``version`` in the quoting style of ``old``."""
    literal = (
        isinstance(old, Item)
        and old.as_string().startswith("'")
        and not any(char in version for char in "'\n\r")
    )
    return tomlkit.string(version, literal=literal)
