"""
Pairing history ledger: how often players have partnered, faced each other,
played and sat out. Owned by a single schedule run.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .schemas import Match, PairKey, Player, ScheduleStats, pair_key


@dataclass
class PairingLedger:
    teammate_count: dict[PairKey, int] = field(default_factory=dict)
    opponent_count: dict[PairKey, int] = field(default_factory=dict)
    plays_count: dict[Player, int] = field(default_factory=dict)
    bench_count: dict[Player, int] = field(default_factory=dict)
    last_benched_round: dict[Player, int] = field(default_factory=dict)

    # ---- accessors (missing keys read as 0) ----

    def teammates(self, a: Player, b: Player) -> int:
        return self.teammate_count.get(pair_key(a, b), 0)

    def opponents(self, a: Player, b: Player) -> int:
        return self.opponent_count.get(pair_key(a, b), 0)

    def plays(self, p: Player) -> int:
        return self.plays_count.get(p, 0)

    def benches(self, p: Player) -> int:
        return self.bench_count.get(p, 0)

    # ---- increments ----

    def add_teammates(self, a: Player, b: Player, amount: int = 1) -> None:
        key = pair_key(a, b)
        self.teammate_count[key] = self.teammate_count.get(key, 0) + amount

    def add_opponents(self, a: Player, b: Player, amount: int = 1) -> None:
        key = pair_key(a, b)
        self.opponent_count[key] = self.opponent_count.get(key, 0) + amount

    def add_plays(self, p: Player, amount: int = 1) -> None:
        self.plays_count[p] = self.plays_count.get(p, 0) + amount

    def add_bench(self, p: Player, round_index: int, amount: int = 1) -> None:
        self.bench_count[p] = self.bench_count.get(p, 0) + amount
        self.last_benched_round[p] = round_index

    def record_match(self, match: Match) -> None:
        """Count both partnerships, the four cross pairs and one play per participant."""
        self.add_teammates(*match.team1.players)
        self.add_teammates(*match.team2.players)
        for p in match.players:
            self.add_plays(p)
        for key in match.opponent_pairs():
            self.opponent_count[key] = self.opponent_count.get(key, 0) + 1

    def snapshot(self) -> ScheduleStats:
        return ScheduleStats(
            teammate_count=dict(self.teammate_count),
            opponent_count=dict(self.opponent_count),
            plays_count=dict(self.plays_count),
            bench_count=dict(self.bench_count),
            last_benched_round=dict(self.last_benched_round),
        )
