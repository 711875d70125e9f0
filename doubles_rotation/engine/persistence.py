"""
Persistence & diagnostics: a Schedule as a JSON-ready dict, and save/load of
that dict together with everything needed to rebuild it (roster, seed, options).
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .schemas import (
    Match,
    PairKey,
    Round,
    Schedule,
    ScheduleOptions,
    ScheduleStats,
    Team,
)


@dataclass
class ScheduleMetadata:
    """Enough to rebuild a schedule exactly (when the seed is non-empty)."""
    schedule_id: str
    seed: str
    players: list[str]
    num_courts: int
    num_rounds: int
    options: dict[str, Any]
    round_count: int


def match_to_dict(m: Match) -> dict[str, list[str]]:
    return {"team1": list(m.team1.players), "team2": list(m.team2.players)}


def match_from_dict(d: dict[str, list[str]]) -> Match:
    return Match(Team.of(*d["team1"]), Team.of(*d["team2"]))


def round_to_dict(r: Round) -> dict[str, Any]:
    return {
        "index": r.index,
        "matches": [match_to_dict(m) for m in r.matches],
        "benched": list(r.benched),
        "target_matches": r.target_matches,
    }


def _pair_counts(counts: dict[PairKey, int]) -> list[list[Any]]:
    # [first, second, count] rows; names may contain any character
    return [[k.first, k.second, v] for k, v in counts.items()]


def _pair_counts_from(rows: list[list[Any]]) -> dict[PairKey, int]:
    return {PairKey.of(a, b): int(n) for a, b, n in rows}


def stats_to_dict(s: ScheduleStats) -> dict[str, Any]:
    return {
        "teammate_count": _pair_counts(s.teammate_count),
        "opponent_count": _pair_counts(s.opponent_count),
        "plays_count": dict(s.plays_count),
        "bench_count": dict(s.bench_count),
        "last_benched_round": dict(s.last_benched_round),
    }


def stats_from_dict(d: dict[str, Any]) -> ScheduleStats:
    return ScheduleStats(
        teammate_count=_pair_counts_from(d.get("teammate_count", [])),
        opponent_count=_pair_counts_from(d.get("opponent_count", [])),
        plays_count=dict(d.get("plays_count", {})),
        bench_count=dict(d.get("bench_count", {})),
        last_benched_round=dict(d.get("last_benched_round", {})),
    )


def schedule_to_dict(s: Schedule) -> dict[str, Any]:
    """Schedule to JSON-serializable dict."""
    return {
        "players": list(s.players),
        "num_courts": s.num_courts,
        "num_rounds": s.num_rounds,
        "seed": s.seed,
        "options": s.options.to_dict(),
        "max_concurrent_matches": s.max_concurrent_matches,
        "warnings": list(s.warnings),
        "rounds": [round_to_dict(r) for r in s.rounds],
        "stats": stats_to_dict(s.stats),
    }


def schedule_from_dict(d: dict[str, Any]) -> Schedule:
    return Schedule(
        players=list(d["players"]),
        num_courts=d["num_courts"],
        num_rounds=d["num_rounds"],
        seed=d.get("seed", ""),
        options=ScheduleOptions(**d.get("options", {})),
        rounds=[
            Round(
                index=r["index"],
                matches=[match_from_dict(m) for m in r["matches"]],
                benched=list(r["benched"]),
                target_matches=r["target_matches"],
            )
            for r in d["rounds"]
        ],
        stats=stats_from_dict(d.get("stats", {})),
        max_concurrent_matches=d["max_concurrent_matches"],
        warnings=list(d.get("warnings", [])),
    )


def save_schedule(schedule: Schedule, schedule_id: str, directory: str | Path) -> Path:
    """Save the schedule plus replay metadata."""
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    meta = ScheduleMetadata(
        schedule_id=schedule_id,
        seed=schedule.seed,
        players=list(schedule.players),
        num_courts=schedule.num_courts,
        num_rounds=schedule.num_rounds,
        options=schedule.options.to_dict(),
        round_count=len(schedule.rounds),
    )
    (path / f"{schedule_id}_meta.json").write_text(json.dumps(asdict(meta), indent=2))
    (path / f"{schedule_id}_schedule.json").write_text(json.dumps(schedule_to_dict(schedule), indent=2))
    return path


def load_schedule(schedule_id: str, directory: str | Path) -> tuple[ScheduleMetadata, Schedule]:
    path = Path(directory)
    meta = ScheduleMetadata(**json.loads((path / f"{schedule_id}_meta.json").read_text()))
    schedule = schedule_from_dict(json.loads((path / f"{schedule_id}_schedule.json").read_text()))
    return meta, schedule
