"""JSON-ready summaries of decoded sequences for `inspect --json`."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import orjson

from strinspect.decoding import DecodedSequence
from strinspect.units import InvalidUnit, Unit


def unit_to_dict(unit: Unit) -> dict[str, Any]:
    if isinstance(unit, InvalidUnit):
        return {
            "kind": "invalid",
            "char": unit.to_codepoint(),
            "codepoint": None,
            "bytes": unit.to_bytes().hex(),
            "width": unit.width(),
        }
    return {
        "kind": "valid",
        "char": unit.char,
        "codepoint": f"U+{ord(unit.char):04X}",
        "bytes": unit.source_bytes.hex(),
        "width": unit.width(),
    }


def sequence_to_dict(sequence: DecodedSequence) -> dict[str, Any]:
    return {
        "encoding": sequence.encoding,
        "text": sequence.to_string(),
        "byte_length": len(sequence.to_bytes()),
        "units": len(sequence),
        "invalid_units": sequence.invalid_count,
        "decoded": [unit_to_dict(unit) for unit in sequence],
    }


def report_payload(sequences: Iterable[DecodedSequence]) -> dict[str, Any]:
    sequences = list(sequences)
    return {
        "input_hex": sequences[0].to_bytes().hex() if sequences else "",
        "decodings": [sequence_to_dict(sequence) for sequence in sequences],
    }


def dumps_report(sequences: Iterable[DecodedSequence]) -> str:
    return orjson.dumps(report_payload(sequences), option=orjson.OPT_INDENT_2).decode()
