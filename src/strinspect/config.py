"""Settings for the command line tool, loadable from YAML or JSON.

Example `strinspect.yaml`:

    encodings: [utf8, latin1]
    width: 100
    color: false
    log_level: DEBUG
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_WIDTH = 80
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass
class InspectConfig:
    encodings: list[str] = field(default_factory=lambda: ["utf8"])
    width: int | None = None
    color: bool | None = None
    default_width: int = DEFAULT_WIDTH
    log_level: str = "WARNING"
    log_json: bool = False

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> InspectConfig:
        encodings = payload.get("encodings", ["utf8"])
        if isinstance(encodings, str):
            encodings = [encodings]
        if not isinstance(encodings, list) or not encodings:
            raise ValueError("encodings must be a non-empty list of labels")
        width = payload.get("width")
        if width is not None and int(width) < 1:
            raise ValueError(f"width must be positive, got {width}")
        color = payload.get("color")
        log_level = str(payload.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {log_level}")
        return InspectConfig(
            encodings=[str(label) for label in encodings],
            width=int(width) if width is not None else None,
            color=bool(color) if color is not None else None,
            default_width=int(payload.get("default_width", DEFAULT_WIDTH)),
            log_level=log_level,
            log_json=bool(payload.get("log_json", False)),
        )

    def resolve_width(self, detected: int | None) -> int:
        """Pick the total line width: explicit setting, then terminal, then default."""
        return self.width or detected or self.default_width


def load_config(path: Path) -> InspectConfig:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text())
    else:
        payload = json.loads(path.read_text())
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError(f"Config {path} must contain a mapping")
    return InspectConfig.from_mapping(payload)
