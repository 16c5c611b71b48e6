"""
Custom exception hierarchy for lockdiff.

This module defines structured exception types used across lockdiff.
All exceptions inherit from :class:`LockDiffError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class LockDiffError(Exception):
    """Base exception for all lockdiff errors.

    All lockdiff-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


# ---------------------------------------------------------------------------
# Version parsing
# ---------------------------------------------------------------------------


class VersionParseError(LockDiffError):
    """Base class for version strings the parser rejects.

    Args:
        message: Error description.
        version: The offending version text.
    """

    __slots__ = ("version",)

    def __init__(self, message: str, *, version: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        if version is not None:
            details["version"] = _truncate(version)

        super().__init__(message, details)

        self.version = version


class InvalidFormatError(VersionParseError):
    """Raised when no major version segment can be found."""

    __slots__ = ()

    def __init__(self, version: Optional[str] = None) -> None:
        super().__init__("Not a recognizable version", version=version)


class InvalidPreReleaseError(VersionParseError):
    """Raised when a pre-release cycle label is not a known synonym.

    Args:
        label: The unrecognized cycle label (e.g. ``"d"``).
        version: The offending version text.
    """

    __slots__ = ("label",)

    def __init__(self, label: str, *, version: Optional[str] = None) -> None:
        super().__init__("Invalid pre-release identifier", version=version)

        self.label = label
        self.details["label"] = label


class NumberConversionError(VersionParseError):
    """Raised when a digit group does not fit a version number.

    Args:
        digits: The digit text that failed to convert.
        version: The offending version text.
    """

    __slots__ = ("digits",)

    def __init__(self, digits: str, *, version: Optional[str] = None) -> None:
        super().__init__(
            f"Can't parse number: {_truncate(digits, 40)}", version=version
        )

        self.digits = digits
        self.details["digits"] = _truncate(digits, 40)


# ---------------------------------------------------------------------------
# Input files
# ---------------------------------------------------------------------------


class LockfileError(LockDiffError):
    """Raised when a ``Pipfile.lock`` cannot be loaded.

    Args:
        message: Error description.
        file_path: Path or revision the lockfile was read from.
        package_name: Entry that could not be interpreted, if any.
    """

    __slots__ = ("file_path", "package_name")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        package_name: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", file_path)
        _add_if(details, "package", package_name)

        super().__init__(message, details)

        self.file_path = file_path
        self.package_name = package_name


class PipfileError(LockDiffError):
    """Raised when a ``Pipfile`` cannot be parsed or rewritten.

    Args:
        message: Error description.
        package_name: Entry being rewritten, if any.
        line_number: Line where the problem was found.
    """

    __slots__ = ("package_name", "line_number")

    def __init__(
        self,
        message: str,
        *,
        package_name: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "package", package_name)
        _add_if(details, "line", line_number)

        super().__init__(message, details)

        self.package_name = package_name
        self.line_number = line_number


class GitError(LockDiffError):
    """Raised when a git lookup fails.

    Args:
        message: Error description.
        command: The git command line that failed.
        stderr: Captured error output, truncated for safety.
    """

    __slots__ = ("command", "stderr")

    def __init__(
        self,
        message: str,
        *,
        command: Optional[str] = None,
        stderr: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "command", command)

        if stderr:
            details["stderr"] = _truncate(stderr.strip())

        super().__init__(message, details)

        self.command = command
        self.stderr = stderr


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class ConfigError(LockDiffError):
    """Raised when a configuration file is missing or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Offending option name, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class FileOperationError(LockDiffError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/backup).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
