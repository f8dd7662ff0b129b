"""Exceptions raised by the decoding and rendering core.

Bad input bytes never raise: they become invalid units. Only problems with the
encoding itself surface here.
"""

from __future__ import annotations


class StringInspectorError(Exception):
    """Base class for string-inspector failures."""


class UnknownEncodingError(StringInspectorError, LookupError):
    """An encoding label did not resolve to a supported codec."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Unknown or unsupported encoding: {label!r}")
        self.label = label


class SourceBytesError(StringInspectorError):
    """A decoded character could not be re-encoded in its own encoding."""

    def __init__(self, char: str, encoding: str) -> None:
        super().__init__(
            f"Character U+{ord(char):04X} is not representable in {encoding}; "
            "cannot recover its source bytes"
        )
        self.char = char
        self.encoding = encoding
