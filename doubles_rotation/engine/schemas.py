"""
Shared types for the doubles rotation engine: pair keys, teams, matches,
rounds and the final schedule, plus the options that steer the search.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from .errors import InvalidOptionsError

# A player is an opaque, non-empty name; unique within one schedule run.
Player = str


@dataclass(frozen=True, order=True)
class PairKey:
    """Unordered pair of two distinct players; always stored smaller name first."""
    first: Player
    second: Player

    @classmethod
    def of(cls, a: Player, b: Player) -> PairKey:
        if a == b:
            raise ValueError(f"A pair needs two distinct players, got {a!r} twice")
        return cls(a, b) if a < b else cls(b, a)

    def __str__(self) -> str:
        return f"{self.first}||{self.second}"


def pair_key(a: Player, b: Player) -> PairKey:
    return PairKey.of(a, b)


@dataclass(frozen=True)
class Team:
    """Two distinct players in canonical (sorted) order."""
    first: Player
    second: Player

    @classmethod
    def of(cls, a: Player, b: Player) -> Team:
        if a == b:
            raise ValueError(f"A team needs two distinct players, got {a!r} twice")
        x, y = sorted((a, b))
        return cls(x, y)

    @property
    def players(self) -> tuple[Player, Player]:
        return (self.first, self.second)

    @property
    def key(self) -> PairKey:
        return PairKey(self.first, self.second)

    def joined(self) -> str:
        # Display-ordering key only
        return f"{self.first},{self.second}"

    def __str__(self) -> str:
        return f"{self.first} & {self.second}"


@dataclass(frozen=True)
class Match:
    """Two disjoint teams on one court."""
    team1: Team
    team2: Team

    def __post_init__(self) -> None:
        if len(set(self.players)) != 4:
            raise ValueError(f"A match needs four distinct players, got {self.players}")

    @property
    def players(self) -> tuple[Player, Player, Player, Player]:
        return (self.team1.first, self.team1.second, self.team2.first, self.team2.second)

    def opponent_pairs(self) -> list[PairKey]:
        return [PairKey.of(x, y) for x in self.team1.players for y in self.team2.players]

    def __str__(self) -> str:
        return f"{self.team1} vs {self.team2}"


@dataclass
class Round:
    """
    One round of play. Every player of the run appears exactly once,
    either in a match or on the bench.
    """
    index: int  # 0-based
    matches: list[Match]
    benched: list[Player]
    target_matches: int

    @property
    def degraded(self) -> bool:
        # Assembler could not fill every court it was asked to
        return len(self.matches) < self.target_matches

    def participants(self) -> list[Player]:
        return [p for m in self.matches for p in m.players]


@dataclass
class ScheduleOptions:
    """Scoring weights and search parameters for one run."""
    weight_team: float = 5.0      # repeat-teammate penalty
    weight_opponent: float = 2.0  # repeat-opponent penalty
    weight_play: float = 1.0      # load balancing on games played
    beam_width: int = 80
    partner_k: int = 10
    square_repeats: bool = True
    avoid_back_to_back: bool = True

    def validate(self) -> None:
        for name in ("weight_team", "weight_opponent", "weight_play"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidOptionsError(f"{name} must be a finite number >= 0, got {value}")
        if self.beam_width < 1:
            raise InvalidOptionsError(f"beam_width must be >= 1, got {self.beam_width}")
        if self.partner_k < 2:
            raise InvalidOptionsError(f"partner_k must be >= 2, got {self.partner_k}")

    def to_dict(self) -> dict[str, float | int | bool]:
        return {
            "weight_team": self.weight_team,
            "weight_opponent": self.weight_opponent,
            "weight_play": self.weight_play,
            "beam_width": self.beam_width,
            "partner_k": self.partner_k,
            "square_repeats": self.square_repeats,
            "avoid_back_to_back": self.avoid_back_to_back,
        }


@dataclass
class ScheduleStats:
    """Snapshot of the pairing ledger at the end of a run."""
    teammate_count: dict[PairKey, int] = field(default_factory=dict)
    opponent_count: dict[PairKey, int] = field(default_factory=dict)
    plays_count: dict[Player, int] = field(default_factory=dict)
    bench_count: dict[Player, int] = field(default_factory=dict)
    last_benched_round: dict[Player, int] = field(default_factory=dict)


@dataclass
class Schedule:
    """Final output of one run. Not mutated after build_schedule returns."""
    players: list[Player]
    num_courts: int
    num_rounds: int
    seed: str
    options: ScheduleOptions
    rounds: list[Round]
    stats: ScheduleStats
    max_concurrent_matches: int
    warnings: list[str] = field(default_factory=list)
