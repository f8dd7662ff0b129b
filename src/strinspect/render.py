"""Wrap decoded units into display lines and format the aligned rows.

Each block looks like:

    [utf-8]
    bytes: 68 c3 a9
    chars: h  e9

    hé

Lines are filled greedily so the byte row and the character row of a chunk
never exceed the available columns, unless a single unit is wider than that
on its own.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from strinspect.decoding import DecodedSequence
from strinspect.units import Unit

LABEL_WIDTH = 7  # "bytes: " / "chars: "
BYTES_LABEL = "bytes: "
CHARS_LABEL = "chars: "


@dataclass(frozen=True)
class Line:
    """A slice of a decoded sequence that fits on one display line."""

    sequence: DecodedSequence
    start: int
    stop: int

    @property
    def units(self) -> tuple[Unit, ...]:
        return self.sequence.units[self.start : self.stop]

    @property
    def width(self) -> int:
        return sum(unit.width() for unit in self.units)

    def __len__(self) -> int:
        return self.stop - self.start


def columns_for_width(total_width: int) -> int:
    """Columns left for the rows once the row labels are printed."""
    return max(total_width - LABEL_WIDTH, 1)


def wrap_lines(sequence: DecodedSequence, available_columns: int) -> list[Line]:
    lines: list[Line] = []
    start = 0
    line_width = 0
    for index, unit in enumerate(sequence.units):
        unit_width = unit.width()
        if line_width + unit_width > available_columns and index > start:
            lines.append(Line(sequence, start, index))
            start = index
            line_width = 0
        line_width += unit_width

    if start < len(sequence.units):
        lines.append(Line(sequence, start, len(sequence.units)))
    return lines


def format_bytes(line: Line | DecodedSequence) -> str:
    return "".join(unit.format_bytes() for unit in line.units)


def format_glyphs(line: Line | DecodedSequence) -> str:
    return "".join(unit.format_glyph() for unit in line.units)


def format_plain_text(line: Line | DecodedSequence) -> str:
    return "".join(unit.to_codepoint() for unit in line.units)


def render_block(sequence: DecodedSequence, available_columns: int) -> str:
    """Plain text view of one decoding: label, wrapped rows, then the text."""
    out = [f"[{sequence.encoding}]"]
    for index, line in enumerate(wrap_lines(sequence, available_columns)):
        if index:
            out.append("")
        out.append(BYTES_LABEL + format_bytes(line))
        out.append(CHARS_LABEL + format_glyphs(line))
    out.append("")
    out.append(format_plain_text(sequence))
    return "\n".join(out)


def render_blocks(sequences: Iterable[DecodedSequence], available_columns: int) -> str:
    return "\n\n".join(render_block(sequence, available_columns) for sequence in sequences)
