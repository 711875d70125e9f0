"""
Tests for environment-driven defaults.
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from doubles_rotation import config
from doubles_rotation.engine.schemas import ScheduleOptions


def test_default_options_without_env(monkeypatch):
    for name in (
        "ROTATION_WEIGHT_TEAM", "ROTATION_WEIGHT_OPPONENT", "ROTATION_WEIGHT_PLAY",
        "ROTATION_BEAM_WIDTH", "ROTATION_PARTNER_K",
        "ROTATION_SQUARE_REPEATS", "ROTATION_AVOID_BACK_TO_BACK",
    ):
        monkeypatch.delenv(name, raising=False)
    assert config.default_options() == ScheduleOptions()


def test_default_options_env_overrides(monkeypatch):
    monkeypatch.setenv("ROTATION_WEIGHT_TEAM", "8.5")
    monkeypatch.setenv("ROTATION_BEAM_WIDTH", "25")
    monkeypatch.setenv("ROTATION_SQUARE_REPEATS", "false")
    monkeypatch.setenv("ROTATION_AVOID_BACK_TO_BACK", "")
    opts = config.default_options()
    assert opts.weight_team == 8.5
    assert opts.beam_width == 25
    assert opts.square_repeats is False
    assert opts.avoid_back_to_back is True  # blank falls back to default
