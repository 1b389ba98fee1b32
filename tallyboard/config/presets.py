from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_BOARD_TEMPLATES: dict[str, list[str]] = {
    "agenda": [],
    "retro": ["Start", "Stop", "Continue"],
}

DEFAULT_READINESS = {
    "prompt": "How ready do you feel?",
    "left_label": "Not ready",
    "right_label": "Ready",
    "scale_min": 0,
    "scale_max": 100,
    "step": 5,
}


@dataclass(frozen=True)
class BoardTemplate:
    name: str
    columns: tuple[str, ...]


@dataclass(frozen=True)
class Presets:
    board_templates: dict[str, BoardTemplate] = field(default_factory=dict)
    readiness: dict[str, Any] = field(default_factory=dict)

    def template(self, name: str) -> BoardTemplate:
        if name not in self.board_templates:
            raise KeyError(
                f"Unknown board template: {name}. Available: {sorted(self.board_templates)}"
            )
        return self.board_templates[name]


def _coerce_templates(raw: Any) -> dict[str, BoardTemplate]:
    if not isinstance(raw, dict):
        return {}
    templates: dict[str, BoardTemplate] = {}
    for name, columns in raw.items():
        cleaned_name = str(name).strip()
        if not cleaned_name:
            continue
        column_names = [str(col).strip() for col in (columns or []) if str(col).strip()]
        templates[cleaned_name] = BoardTemplate(name=cleaned_name, columns=tuple(column_names))
    return templates


def load_presets(config_path: str) -> Presets:
    path = Path(config_path)
    payload: dict[str, Any] = {}
    if path.exists():
        loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        payload = loaded if isinstance(loaded, dict) else {}
    else:
        logger.debug("Presets file %s not found, using built-in defaults", config_path)

    templates = _coerce_templates(payload.get("board_templates", DEFAULT_BOARD_TEMPLATES))
    if not templates:
        templates = _coerce_templates(DEFAULT_BOARD_TEMPLATES)
    readiness = dict(DEFAULT_READINESS)
    raw_readiness = payload.get("readiness")
    if isinstance(raw_readiness, dict):
        readiness.update({k: v for k, v in raw_readiness.items() if k in DEFAULT_READINESS})
    return Presets(board_templates=templates, readiness=readiness)
