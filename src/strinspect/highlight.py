"""Colour hints for the aligned view.

The label and the byte/character rows are built as rich Text; they only ever
hold hex, escapes and printable ASCII. The plain-text row can hold any control
character, and rich Text strips some of them (CR, FF, BEL...), so it is
rendered to a string with ANSI codes from `Style.render` instead. Colour never
changes the characters: `rows_text(...).plain`, a blank line and the plain row
give back `render_block(...)`.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import groupby

from rich.console import COLOR_SYSTEMS
from rich.style import Style
from rich.text import Text

from strinspect.decoding import DecodedSequence
from strinspect.render import BYTES_LABEL, CHARS_LABEL, wrap_lines

UNIT_STYLES = ("green", "blue")
ASCII_STYLE = Style(color="green")
NON_ASCII_STYLE = Style(color="red")


def alternate_units(pieces: Iterable[str], color: bool = True) -> Text:
    """Join per-unit strings, alternating styles so neighbouring units stand apart."""
    text = Text()
    for index, piece in enumerate(pieces):
        text.append(piece, style=UNIT_STYLES[index % 2] if color else None)
    return text


def highlight_non_ascii(value: str, color_system: str | None = None) -> str:
    """Mark ASCII runs green and non-ASCII runs red using ANSI codes.

    `color_system` is a rich colour system name ("standard", "256",
    "truecolor"); None returns `value` untouched.
    """
    if color_system is None:
        return value
    system = COLOR_SYSTEMS[color_system]
    return "".join(
        (ASCII_STYLE if is_ascii else NON_ASCII_STYLE).render("".join(run), color_system=system)
        for is_ascii, run in groupby(value, key=str.isascii)
    )


def rows_text(sequence: DecodedSequence, available_columns: int, color: bool = True) -> Text:
    """Encoding label plus the wrapped byte and character rows."""
    block = Text(f"[{sequence.encoding}]", style="bold" if color else "")
    for index, line in enumerate(wrap_lines(sequence, available_columns)):
        if index:
            block.append("\n")
        block.append("\n" + BYTES_LABEL)
        block.append_text(alternate_units((unit.format_bytes() for unit in line.units), color))
        block.append("\n" + CHARS_LABEL)
        block.append_text(alternate_units((unit.format_glyph() for unit in line.units), color))
    return block
