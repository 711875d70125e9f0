"""
Presentation adapter: plain-text export of a schedule and a diagnostics summary.
Read-only over the Schedule.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..engine.schemas import Match, PairKey, Schedule

TOP_PAIRS_LIMIT = 15


def format_match(match: Match) -> str:
    """Render as 'A & B vs C & D'."""
    return str(match)


def build_copy_text(schedule: Schedule) -> str:
    lines: list[str] = []
    for i, rnd in enumerate(schedule.rounds):
        lines.append(f"Round {i + 1}")
        if not rnd.matches:
            lines.append("  (No full matches possible)")
        else:
            for m in rnd.matches:
                lines.append(f"  {format_match(m)}")
        if rnd.benched:
            lines.append(f"  Benched: {', '.join(rnd.benched)}")
        lines.append("")
    return "\n".join(lines).strip()


def top_pairs(counts: dict[PairKey, int], limit: int = TOP_PAIRS_LIMIT) -> list[tuple[PairKey, int]]:
    """Positive counts, most repeated first, then by key."""
    entries = [(k, v) for k, v in counts.items() if v > 0]
    entries.sort(key=lambda kv: (-kv[1], kv[0]))
    return entries[:limit]


@dataclass
class DiagnosticsSummary:
    """Fairness and repeat figures for display."""
    min_plays: int
    max_plays: int
    min_benches: int
    max_benches: int
    plays: dict[str, int] = field(default_factory=dict)  # sorted by name
    benches: dict[str, int] = field(default_factory=dict)
    top_teammates: list[str] = field(default_factory=list)  # "a&b:n"
    top_opponents: list[str] = field(default_factory=list)  # "a vs b:n"
    fairness: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_plays": self.min_plays,
            "max_plays": self.max_plays,
            "min_benches": self.min_benches,
            "max_benches": self.max_benches,
            "plays": dict(self.plays),
            "benches": dict(self.benches),
            "top_teammates": list(self.top_teammates),
            "top_opponents": list(self.top_opponents),
            "fairness": list(self.fairness),
        }


def summarize_diagnostics(schedule: Schedule, limit: int = TOP_PAIRS_LIMIT) -> DiagnosticsSummary:
    stats = schedule.stats
    names = sorted(schedule.players)
    plays = {p: stats.plays_count.get(p, 0) for p in names}
    benches = {p: stats.bench_count.get(p, 0) for p in names}
    return DiagnosticsSummary(
        min_plays=min(plays.values()),
        max_plays=max(plays.values()),
        min_benches=min(benches.values()),
        max_benches=max(benches.values()),
        plays=plays,
        benches=benches,
        top_teammates=[f"{k.first}&{k.second}:{v}" for k, v in top_pairs(stats.teammate_count, limit)],
        top_opponents=[f"{k.first} vs {k.second}:{v}" for k, v in top_pairs(stats.opponent_count, limit)],
        fairness=[
            f"{p}: plays={plays[p]}, benches={benches[p]}, total={plays[p] + benches[p]}"
            for p in names
        ],
    )


def format_diagnostics(summary: DiagnosticsSummary) -> str:
    return "\n".join(
        [
            f"Plays: min={summary.min_plays}, max={summary.max_plays}",
            f"Benches: min={summary.min_benches}, max={summary.max_benches}",
            "Plays per player: " + ", ".join(f"{p}:{v}" for p, v in summary.plays.items()),
            "Benches per player: " + ", ".join(f"{p}:{v}" for p, v in summary.benches.items()),
            "Top teammate repeats: " + (", ".join(summary.top_teammates) or "none"),
            "Top opponent repeats: " + (", ".join(summary.top_opponents) or "none"),
            "Fairness check: " + " · ".join(summary.fairness),
        ]
    )
