"""
Version string parser for lockdiff.

Turns free-form version text such as ``"1!2.3.4rc1.post5.dev6"`` or the
``"==1.2.3"`` pins found in ``Pipfile.lock`` into :class:`Version` values.

Grammar, scanned once from the first digit of the trimmed text::

    [v] [EPOCH "!"] MAJOR ("." N)* [LABEL [N]] [[sep] ("post"|"r"|"rev") N] [[sep] "dev" N]

``LABEL`` is the longest run of lowercase letters directly after the release
segments and must be one of the pre-release synonyms known to
:class:`PreReleaseCycle`. ``sep`` is one of ``.``, ``-`` or ``_``. Anything
before the first digit and anything after the last matched token is ignored.
A digit is any character for which :meth:`str.isdigit` holds, but only ASCII
digits convert to numbers; any other digit raises
:class:`NumberConversionError`.

Example::

    >>> parse_version("1.0a").pre_release
    (<PreReleaseCycle.ALPHA: 0>, 0)
    >>> parse_version("v2.1").segments
    (2, 1)
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from lockdiff.models.version import PreReleaseCycle, Version
from lockdiff.exceptions import (
    InvalidFormatError,
    InvalidPreReleaseError,
    NumberConversionError,
)
from lockdiff.constants import (
    DEV_RELEASE_MARKERS,
    MAX_VERSION_NUMBER,
    POST_RELEASE_MARKERS,
    RELEASE_SEPARATORS,
    VERSION_LABEL_CHARS,
)


def _is_label_char(char: str) -> bool:
    return char in VERSION_LABEL_CHARS


class _VersionScanner:
    """Single-pass cursor over the text of one version string.

    Every ``read_*`` method either consumes a token and returns it, or
    leaves the cursor untouched and returns ``None``/an empty string.
    """

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def _run(self, start: int, accept: Callable[[str], bool]) -> int:
        """Return the index just past the run of accepted characters at ``start``."""
        end = start
        while end < len(self.text) and accept(self.text[end]):
            end += 1
        return end

    def read_digits(self) -> str:
        end = self._run(self.pos, str.isdigit)
        digits = self.text[self.pos : end]
        self.pos = end
        return digits

    def read_label(self) -> str:
        end = self._run(self.pos, _is_label_char)
        label = self.text[self.pos : end]
        self.pos = end
        return label

    def read_epoch(self) -> Optional[str]:
        """Consume ``DIGITS "!"`` when a major segment follows the ``!``."""
        bang = self._run(self.pos, str.isdigit)
        if (
            bang > self.pos
            and self.text.startswith("!", bang)
            and self._run(bang + 1, str.isdigit) > bang + 1
        ):
            epoch = self.text[self.pos : bang]
            self.pos = bang + 1
            return epoch
        return None

    def read_segment(self) -> Optional[str]:
        """Consume ``"." DIGITS``."""
        if not self.text.startswith(".", self.pos):
            return None
        end = self._run(self.pos + 1, str.isdigit)
        if end == self.pos + 1:
            return None
        segment = self.text[self.pos + 1 : end]
        self.pos = end
        return segment

    def read_marked_number(self, markers: Sequence[str]) -> Optional[str]:
        """Consume ``[sep] MARKER DIGITS`` for the first marker that fits."""
        start = self.pos
        if start < len(self.text) and self.text[start] in RELEASE_SEPARATORS:
            start += 1

        for marker in markers:
            if not self.text.startswith(marker, start):
                continue
            digits_start = start + len(marker)
            end = self._run(digits_start, str.isdigit)
            if end > digits_start:
                self.pos = end
                return self.text[digits_start:end]
        return None


def _to_number(digits: str, version: str) -> int:
    """Convert a digit group, enforcing the unsigned 32-bit range.

    Only ASCII digits convert. Other Unicode digits are still part of the
    run so that they fail here instead of being skipped.
    """
    significant = digits.lstrip("0") or "0"
    try:
        if not digits.isascii():
            raise ValueError(f"{digits!r} contains non-ASCII digits")
        if len(significant) > len(str(MAX_VERSION_NUMBER)):
            raise OverflowError(f"{digits} exceeds {MAX_VERSION_NUMBER}")
        value = int(significant)
        if value > MAX_VERSION_NUMBER:
            raise OverflowError(f"{digits} exceeds {MAX_VERSION_NUMBER}")
    except (ValueError, OverflowError) as exc:
        raise NumberConversionError(digits, version=version) from exc
    return value


def _optional_number(digits: Optional[str], version: str) -> Optional[int]:
    return None if digits is None else _to_number(digits, version)


def parse_version(text: str) -> Version:
    """Parse a version string into a :class:`Version`.

    Args:
        text: Raw version text. Surrounding whitespace is ignored.

    Returns:
        The parsed version.

    Raises:
        InvalidFormatError: No major version segment was found.
        InvalidPreReleaseError: A pre-release label is not a known synonym.
        NumberConversionError: A number does not fit in 32 bits.

    Examples:
        >>> parse_version("1.0.0")
        Version(epoch=None, segments=(1, 0, 0), pre_release=None, post_release=None, dev_release=None)
        >>> parse_version("1!2.0rc1").epoch
        1
    """
    if not isinstance(text, str):
        raise InvalidFormatError(repr(text))

    stripped = text.strip()
    start = next(
        (i for i, char in enumerate(stripped) if char.isdigit()),
        None,
    )
    if start is None:
        raise InvalidFormatError(stripped)

    scanner = _VersionScanner(stripped, start)

    epoch = _optional_number(scanner.read_epoch(), stripped)

    segments: List[int] = [_to_number(scanner.read_digits(), stripped)]
    while (segment := scanner.read_segment()) is not None:
        segments.append(_to_number(segment, stripped))

    pre_release = None
    label = scanner.read_label()
    if label:
        try:
            cycle = PreReleaseCycle.from_label(label)
        except InvalidPreReleaseError:
            raise InvalidPreReleaseError(label, version=stripped) from None
        pre_digits = scanner.read_digits()
        pre_release = (cycle, _to_number(pre_digits, stripped) if pre_digits else 0)

    post_release = _optional_number(
        scanner.read_marked_number(POST_RELEASE_MARKERS), stripped
    )
    dev_release = _optional_number(
        scanner.read_marked_number(DEV_RELEASE_MARKERS), stripped
    )

    return Version(
        epoch=epoch,
        segments=tuple(segments),
        pre_release=pre_release,
        post_release=post_release,
        dev_release=dev_release,
    )


def is_valid_version(text: str) -> bool:
    """Return True if :func:`parse_version` accepts ``text``."""
    try:
        parse_version(text)
    except (InvalidFormatError, InvalidPreReleaseError, NumberConversionError):
        return False
    return True
