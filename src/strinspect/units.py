"""Decoded units: one character with its bytes, or one byte that did not decode.

Every unit knows how many display columns it needs so the byte row and the
character row can be printed one above the other:
- a valid unit takes three columns per source byte ("c3 " per byte)
- an invalid unit takes two columns (the replacement glyph plus a space)
"""

from __future__ import annotations

from dataclasses import dataclass

BYTE_DISPLAY_WIDTH = 3
INVALID_DISPLAY_WIDTH = 2
REPLACEMENT_CHAR = "\ufffd"

ESCAPES = {"\t": "\\t", "\r": "\\r", "\n": "\\n"}


def _hex_bytes(data: bytes) -> str:
    return "".join(f"{byte:02x} " for byte in data)


@dataclass(frozen=True)
class ValidUnit:
    char: str
    source_bytes: bytes

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"ValidUnit holds exactly one code point, got {self.char!r}")
        if not self.source_bytes:
            raise ValueError("ValidUnit source_bytes must not be empty")

    def width(self) -> int:
        """Columns needed to show this unit in the byte and character rows."""
        return BYTE_DISPLAY_WIDTH * len(self.source_bytes)

    def format_bytes(self) -> str:
        return _hex_bytes(self.source_bytes)

    def format_glyph(self) -> str:
        """Render the character for the character row.

        Tabs, carriage returns and newlines become escape sequences, printable
        ASCII is shown as is, and everything else as its hex codepoint. A
        codepoint whose hex form is longer than the byte row (e.g. U+20AC in
        cp1252) overflows the column.
        """
        char = self.char
        if char in ESCAPES:
            glyph = f"{ESCAPES[char]} "
        elif " " <= char <= "~":
            glyph = char
        else:
            glyph = f"{ord(char):02x} "
        return glyph.ljust(self.width())

    def to_codepoint(self) -> str:
        return self.char

    def to_bytes(self) -> bytes:
        return self.source_bytes


@dataclass(frozen=True)
class InvalidUnit:
    source_byte: int

    def __post_init__(self) -> None:
        if not 0 <= self.source_byte <= 0xFF:
            raise ValueError(f"InvalidUnit holds a single byte, got {self.source_byte!r}")

    def width(self) -> int:
        return INVALID_DISPLAY_WIDTH

    def format_bytes(self) -> str:
        return f"{self.source_byte:02x} "

    def format_glyph(self) -> str:
        return f"{REPLACEMENT_CHAR} "

    def to_codepoint(self) -> str:
        return REPLACEMENT_CHAR

    def to_bytes(self) -> bytes:
        return bytes([self.source_byte])


Unit = ValidUnit | InvalidUnit
