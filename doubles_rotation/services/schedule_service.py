"""
Pure schedule service: raw request values in, JSON-ready result out.
No persistence, no UI. Callable by the API and the command line.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from doubles_rotation.adapters.export import build_copy_text, summarize_diagnostics
from doubles_rotation.adapters.parsing import generate_seed, parse_players
from doubles_rotation.adapters.sharing import ShareConfig
from doubles_rotation.engine.orchestrator import build_schedule
from doubles_rotation.engine.persistence import schedule_to_dict
from doubles_rotation.engine.schemas import Schedule, ScheduleOptions

logger = logging.getLogger(__name__)


def resolve_players(players: Iterable[str] | None = None, players_text: str | None = None) -> list[str]:
    """Explicit list wins; otherwise parse the free-form text."""
    if players is not None:
        return [p for p in players]
    return parse_players(players_text)


def schedule_result(schedule: Schedule) -> dict[str, Any]:
    """Schedule plus its diagnostics summary and plain-text export."""
    return {
        "schedule": schedule_to_dict(schedule),
        "diagnostics": summarize_diagnostics(schedule).to_dict(),
        "text": build_copy_text(schedule),
        "warnings": list(schedule.warnings),
    }


def run_schedule(
    players: Iterable[str] | None = None,
    players_text: str | None = None,
    courts: int = 1,
    rounds: int = 1,
    seed: str | None = None,
    options: ScheduleOptions | None = None,
    fresh_seed: bool = False,
) -> dict[str, Any]:
    """
    Build a schedule. With fresh_seed and no seed text, a new seed is generated
    so the result can be reproduced later; without it, an empty seed means a
    non-reproducible run. Input errors propagate as ValueError subclasses.
    """
    roster = resolve_players(players, players_text)
    seed_text = (seed or "").strip()
    if not seed_text and fresh_seed:
        seed_text = generate_seed()
        logger.debug("Generated seed %s", seed_text)
    schedule = build_schedule(roster, courts, rounds, seed_text, options)
    return schedule_result(schedule)


def run_shared(config: ShareConfig) -> dict[str, Any]:
    return run_schedule(
        players=config.players,
        courts=config.courts,
        rounds=config.rounds,
        seed=config.seed,
        options=config.options,
    )
