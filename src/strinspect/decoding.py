"""Decode bytes into units while keeping track of where every unit came from.

The loop feeds the undecoded remainder to the encoding. Characters produced by
each step become valid units; when the step stops on a bad byte, that single
byte becomes an invalid unit and decoding resumes on the byte after it. Joining
the bytes of all units therefore gives back the input exactly.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from strinspect.encodings import Encoding, lookup_encoding
from strinspect.errors import SourceBytesError
from strinspect.logging_config import get_logger
from strinspect.units import InvalidUnit, Unit, ValidUnit

logger = get_logger(__name__)


@dataclass(frozen=True)
class DecodedSequence:
    """Units decoded from one input under one encoding."""

    units: tuple[Unit, ...]
    encoding: str

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[Unit]:
        return iter(self.units)

    @property
    def invalid_count(self) -> int:
        return sum(1 for unit in self.units if isinstance(unit, InvalidUnit))

    def to_string(self) -> str:
        """The decoded text, with U+FFFD standing in for invalid bytes."""
        return "".join(unit.to_codepoint() for unit in self.units)

    def to_bytes(self) -> bytes:
        return b"".join(unit.to_bytes() for unit in self.units)


def recover_source_bytes(char: str, encoding: Encoding) -> bytes:
    """Find the bytes a decoded character came from by encoding it again.

    Decoders do not report which bytes produced which character, so this
    relies on encoding being the left inverse of decoding for valid
    characters. Encodings where decode->encode is not stable will attribute
    the wrong byte spans.
    """
    try:
        data = encoding.encode_char(char)
    except UnicodeEncodeError as exc:
        raise SourceBytesError(char, encoding.name) from exc
    if not data:
        raise SourceBytesError(char, encoding.name)
    return data


def decode(data: bytes, encoding: Encoding | str) -> DecodedSequence:
    """Decode `data`, turning every undecodable byte into an `InvalidUnit`."""
    if isinstance(encoding, str):
        encoding = lookup_encoding(encoding)

    units: list[Unit] = []
    view = memoryview(data)
    offset = 0
    while True:
        output: list[str] = []
        _consumed, error_offset = encoding.decode_step(view[offset:], output)
        units.extend(
            ValidUnit(char, recover_source_bytes(char, encoding)) for char in "".join(output)
        )
        if error_offset is None:
            break
        units.append(InvalidUnit(view[offset + error_offset]))
        offset += error_offset + 1

    sequence = DecodedSequence(units=tuple(units), encoding=encoding.name)
    logger.debug(
        "decoded",
        encoding=encoding.name,
        bytes=len(data),
        units=len(sequence),
        invalid=sequence.invalid_count,
    )
    return sequence


def decode_all(data: bytes, labels: Iterable[str]) -> list[DecodedSequence]:
    """Decode the same input once per encoding label, in order."""
    return [decode(data, lookup_encoding(label)) for label in labels]
