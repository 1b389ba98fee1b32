from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from tallyboard.config.presets import Presets, load_presets
from tallyboard.config.settings import (
    Settings,
    configure_logging,
    load_settings,
    validate_settings,
)
from tallyboard.engine.aggregator import (
    Viewer,
    compute_public_view,
    configure_from_settings,
    list_tool_types,
)
from tallyboard.engine.validation import validate_slot_grid_settings
from tallyboard.utils.deadlines import is_closed

logger = logging.getLogger(__name__)

READINESS_KEYS = {
    "prompt": "prompt",
    "left_label": "leftLabel",
    "right_label": "rightLabel",
    "scale_min": "scaleMin",
    "scale_max": "scaleMax",
    "step": "step",
}


def load_snapshot(path: str) -> dict[str, Any]:
    """Read a YAML or JSON snapshot file (JSON is valid YAML)."""
    payload = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot {path} must contain a mapping at the top level")
    return payload


def apply_presets(
    tool_type: str, settings: dict[str, Any], snapshot: dict[str, Any], presets: Presets
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Fill settings and columns the snapshot leaves out from the configured presets."""
    if tool_type == "readiness":
        defaults = {READINESS_KEYS[k]: v for k, v in presets.readiness.items()}
        settings = {**defaults, **settings}
    elif tool_type == "board" and not snapshot.get("columns"):
        template = presets.template(str(settings.get("template", "agenda")))
        columns = [
            {"id": f"col-{order}", "name": name, "order": order}
            for order, name in enumerate(template.columns)
        ]
        snapshot = {**snapshot, "columns": columns}
    return settings, snapshot


def validate_board(tool_type: str, board_settings: dict[str, Any], settings: Settings) -> None:
    """Reject board settings the creation limits would not have allowed."""
    if tool_type != "availability":
        return
    errors = validate_slot_grid_settings(board_settings, max_total_slots=settings.max_total_slots)
    if errors:
        raise ValueError("; ".join(errors))


def run_summary(
    snapshot: dict[str, Any],
    settings: Settings,
    tool_type: str | None = None,
    participant_token: str | None = None,
    voter_key_hash: str | None = None,
) -> dict[str, Any]:
    resolved_type = tool_type or str(snapshot.get("toolType", ""))
    if resolved_type not in list_tool_types():
        raise KeyError(f"Unknown tool type: {resolved_type!r}. Available: {list_tool_types()}")
    board_settings = dict(snapshot.get("settings") or {})
    presets = load_presets(settings.presets_config_path)
    board_settings, snapshot = apply_presets(resolved_type, board_settings, snapshot, presets)
    validate_board(resolved_type, board_settings, settings)
    viewer = Viewer(
        participant_token=participant_token,
        voter_key_hash=voter_key_hash,
        closed=is_closed(snapshot.get("closedAt"), board_settings.get("closeAt")),
    )
    computed = compute_public_view(resolved_type, board_settings, snapshot, viewer)
    logger.info("Computed %s view from snapshot", resolved_type)
    return {"toolType": resolved_type, "settings": board_settings, "computed": computed}


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute a board's public view from a snapshot.")
    parser.add_argument("snapshot", help="YAML or JSON snapshot file")
    parser.add_argument("--tool", dest="tool_type", default=None)
    parser.add_argument("--participant-token", default=None)
    parser.add_argument("--voter-key-hash", default=None)
    args = parser.parse_args()

    settings = load_settings()
    errors = validate_settings(settings)
    if errors:
        for error in errors:
            print(f"[CONFIG] {error}", file=sys.stderr)
        sys.exit(2)
    configure_logging(settings)
    configure_from_settings(settings)

    try:
        snapshot = load_snapshot(args.snapshot)
        result = run_summary(
            snapshot,
            settings,
            tool_type=args.tool_type,
            participant_token=args.participant_token,
            voter_key_hash=args.voter_key_hash,
        )
    except FileNotFoundError:
        print(f"Snapshot not found: {args.snapshot}", file=sys.stderr)
        sys.exit(1)
    except (KeyError, ValueError) as exc:
        print(f"Invalid snapshot: {exc}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
