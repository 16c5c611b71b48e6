"""Configuration file loader for lockdiff.

Supports two formats:

- ``lockdiff.toml``: settings under ``[lockdiff]`` table
- ``pyproject.toml``: settings under ``[tool.lockdiff]`` table

Discovery order:

1. Explicit path from ``--config`` or ``LOCKDIFF_CONFIG``
2. ``lockdiff.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.lockdiff]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``lockdiff.toml``)::

    [lockdiff]
    ref = "origin/main"
    include_develop = true
    strict_versions = false
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import tomli

from lockdiff.exceptions import ConfigError
from lockdiff.utils.logger import get_logger
from lockdiff.constants import (
    DEFAULT_INCLUDE_DEVELOP,
    DEFAULT_REF,
    DEFAULT_STRICT_VERSIONS,
)

logger = get_logger("config")

#: Option name -> expected Python type.
_OPTION_TYPES: Dict[str, type] = {
    "ref": str,
    "include_develop": bool,
    "strict_versions": bool,
}


@dataclass
class LockDiffConfig:
    """Parsed and validated lockdiff configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        ref: Git revision holding the "old" lockfile.
        include_develop: Also diff the ``develop`` section.
        strict_versions: Abort on the first unparseable version instead of
            reporting it as ``unknown``.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    ref: str = DEFAULT_REF
    include_develop: bool = DEFAULT_INCLUDE_DEVELOP
    strict_versions: bool = DEFAULT_STRICT_VERSIONS

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return the user-facing options for debug logging."""
        return {name: getattr(self, name) for name in _OPTION_TYPES}


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    lockdiff_toml = cwd / "lockdiff.toml"
    if lockdiff_toml.is_file():
        logger.debug("Found lockdiff.toml: %s", lockdiff_toml)
        return lockdiff_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_lockdiff_section(pyproject_toml):
        logger.debug("Found [tool.lockdiff] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_lockdiff_section(path: Path) -> bool:
    """Return True if ``pyproject.toml`` has a ``[tool.lockdiff]`` table.

    An unreadable or invalid pyproject is treated as having no section.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    tool = raw.get("tool", {})
    return isinstance(tool, dict) and "lockdiff" in tool


def load_config(config_path: Optional[Path] = None) -> LockDiffConfig:
    """Load and validate lockdiff configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`LockDiffConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return LockDiffConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("lockdiff", {})
    else:
        section = raw.get("lockdiff", {})

    if not section:
        logger.debug("Config file found but no lockdiff section, using defaults")
        return LockDiffConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is invalid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomli.load(fh)
    except tomli.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> LockDiffConfig:
    """Validate a ``[lockdiff]`` or ``[tool.lockdiff]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types, or an empty ``ref``.
    """
    if not isinstance(section, dict):
        raise ConfigError("lockdiff configuration must be a table", config_path=config_path)

    unknown = set(section) - set(_OPTION_TYPES)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = LockDiffConfig()
    for option, expected in _OPTION_TYPES.items():
        if option not in section:
            continue
        value = section[option]
        if not isinstance(value, expected):
            raise ConfigError(
                f"{option} must be a {'boolean' if expected is bool else 'string'}, "
                f"got {type(value).__name__}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, value)

    if not config.ref.strip():
        raise ConfigError("ref must not be empty", config_path=config_path, option="ref")

    return config
