"""Encoding capability consumed by the decoder, backed by Python codecs.

The decoder only needs three things from an encoding: its name, a decode step
that reports where the first undecodable byte sits, and a way to encode one
character. Any object with that shape works; `CodecEncoding` covers the
codecs shipped with Python.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Protocol

from strinspect.errors import UnknownEncodingError
from strinspect.logging_config import get_logger

logger = get_logger(__name__)

FIRST_WINDOW = 64
MAX_WINDOW = 1 << 16

# label -> Python codec name. Codecs that emit a BOM on every encode call
# (utf-16, utf-32) are left out: encoding one character would prepend it.
ENCODING_LABELS: dict[str, str] = {
    "utf8": "utf-8",
    "utf-8": "utf-8",
    "latin1": "latin-1",
    "latin-1": "latin-1",
    "iso-8859-1": "latin-1",
    "l1": "latin-1",
    "ascii": "ascii",
    "us-ascii": "ascii",
    "cp1252": "cp1252",
    "windows-1252": "cp1252",
    "latin2": "iso8859-2",
    "iso-8859-2": "iso8859-2",
    "cp437": "cp437",
    "cp037": "cp037",
    "ebcdic": "cp037",
    "koi8-r": "koi8-r",
    "utf-16le": "utf-16-le",
    "utf-16be": "utf-16-be",
    "shift_jis": "shift_jis",
    "sjis": "shift_jis",
}


class Encoding(Protocol):
    name: str

    def decode_step(self, data: bytes | memoryview, output: list[str]) -> tuple[int, int | None]:
        """Decode as much of `data` as possible into `output`.

        Returns the number of bytes consumed and, when decoding stopped on a
        bad byte, the offset of that byte within `data`.
        """
        ...

    def encode_char(self, char: str) -> bytes:
        ...


@dataclass(frozen=True)
class CodecEncoding:
    """An `Encoding` over a Python codec's incremental decoder."""

    name: str

    @classmethod
    def from_codec(cls, codec: str) -> CodecEncoding:
        try:
            info = codecs.lookup(codec)
        except LookupError as exc:
            raise UnknownEncodingError(codec) from exc
        return cls(name=info.name)

    def decode_step(self, data: bytes | memoryview, output: list[str]) -> tuple[int, int | None]:
        """Feed `data` through the decoder in growing windows.

        A strict decode error copies the whole buffer it was given, so the
        window starts small and doubles while the input keeps decoding.
        """
        view = memoryview(data)
        decoder = codecs.getincrementaldecoder(self.name)(errors="strict")
        position = 0
        window = FIRST_WINDOW
        while True:
            piece = view[position : position + window]
            final = position + len(piece) >= len(view)
            pending = decoder.getstate()[0]
            try:
                output.append(decoder.decode(piece, final=final))
            except UnicodeDecodeError as exc:
                # exc.start counts from the first byte still pending in the decoder;
                # everything before it is a run of whole characters.
                start = position - len(pending)
                fresh = codecs.getincrementaldecoder(self.name)(errors="strict")
                output.append(fresh.decode(view[start : start + exc.start], final=True))
                return start + exc.start, start + exc.start
            position += len(piece)
            if final:
                return len(view), None
            window = min(window * 2, MAX_WINDOW)

    def encode_char(self, char: str) -> bytes:
        return char.encode(self.name, errors="strict")


def _supported_codecs() -> set[str]:
    return {codecs.lookup(codec).name for codec in ENCODING_LABELS.values()}


def lookup_encoding(label: str) -> CodecEncoding:
    """Resolve a user supplied label (e.g. "utf8", "latin1") to an encoding."""
    key = label.strip().lower()
    codec = ENCODING_LABELS.get(key)
    if codec is None:
        # Also accept Python's own spellings of the supported codecs.
        try:
            canonical = codecs.lookup(key).name
        except LookupError:
            canonical = None
        if canonical not in _supported_codecs():
            raise UnknownEncodingError(label)
        codec = canonical
    encoding = CodecEncoding.from_codec(codec)
    logger.debug("encoding_resolved", label=label, codec=encoding.name)
    return encoding


def supported_labels() -> dict[str, str]:
    """Map each accepted label to the canonical codec name it resolves to."""
    return {label: codecs.lookup(codec).name for label, codec in ENCODING_LABELS.items()}
