"""
Runtime configuration read from the environment.
Defaults mirror the scheduler's built-in option values.
"""
from __future__ import annotations

import os

from doubles_rotation.engine.schemas import ScheduleOptions


def _env_float(name: str, default: float) -> float:
    return float(os.environ.get(name, default))


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


LOG_LEVEL = os.environ.get("ROTATION_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "ROTATION_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if o.strip()
]

# Request guards for the HTTP API (the engine itself has no upper bounds)
MAX_PLAYERS = _env_int("ROTATION_MAX_PLAYERS", 200)
MAX_ROUNDS = _env_int("ROTATION_MAX_ROUNDS", 100)


def default_options() -> ScheduleOptions:
    """ScheduleOptions with ROTATION_* environment overrides applied."""
    base = ScheduleOptions()
    return ScheduleOptions(
        weight_team=_env_float("ROTATION_WEIGHT_TEAM", base.weight_team),
        weight_opponent=_env_float("ROTATION_WEIGHT_OPPONENT", base.weight_opponent),
        weight_play=_env_float("ROTATION_WEIGHT_PLAY", base.weight_play),
        beam_width=_env_int("ROTATION_BEAM_WIDTH", base.beam_width),
        partner_k=_env_int("ROTATION_PARTNER_K", base.partner_k),
        square_repeats=_env_bool("ROTATION_SQUARE_REPEATS", base.square_repeats),
        avoid_back_to_back=_env_bool("ROTATION_AVOID_BACK_TO_BACK", base.avoid_back_to_back),
    )
