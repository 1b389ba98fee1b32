from __future__ import annotations

from pathlib import Path

import pytest

from tallyboard.config.presets import load_presets

REPO_PRESETS = Path(__file__).resolve().parents[2] / "config" / "presets.yaml"


def test_missing_file_uses_builtin_defaults(tmp_path):
    presets = load_presets(str(tmp_path / "missing.yaml"))
    assert presets.template("retro").columns == ("Start", "Stop", "Continue")
    assert presets.template("agenda").columns == ()
    assert presets.readiness["scale_max"] == 100


def test_yaml_overrides_templates_and_readiness(tmp_path):
    path = tmp_path / "presets.yaml"
    path.write_text(
        "board_templates:\n"
        "  retro: [Glad, Sad, Mad]\n"
        "  standup: [Yesterday, Today, ' ']\n"
        "readiness:\n"
        "  scale_max: 10\n"
        "  unknown_key: 3\n",
        encoding="utf-8",
    )
    presets = load_presets(str(path))
    assert presets.template("retro").columns == ("Glad", "Sad", "Mad")
    assert presets.template("standup").columns == ("Yesterday", "Today")
    assert presets.readiness["scale_max"] == 10
    assert presets.readiness["scale_min"] == 0
    assert "unknown_key" not in presets.readiness


def test_unknown_template_raises(tmp_path):
    presets = load_presets(str(tmp_path / "missing.yaml"))
    with pytest.raises(KeyError, match="Unknown board template"):
        presets.template("kanban")


def test_repository_presets_file_loads():
    presets = load_presets(str(REPO_PRESETS))
    assert "retro" in presets.board_templates
