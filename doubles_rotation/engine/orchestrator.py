"""
Schedule Orchestrator: runs rounds in sequence. Each round picks the bench,
assembles matches for everyone else, then commits the round to the ledger so
the next round adapts.
"""
from __future__ import annotations

import logging
from typing import Iterable

from .beam_search import BeamSearchAssembler
from .bench import BenchRotation
from .errors import InsufficientPlayersError, InvalidOptionsError
from .ledger import PairingLedger
from .rng import SeededRNG, normalize_seed
from .schemas import Player, Round, Schedule, ScheduleOptions
from .scorer import MatchScorer

logger = logging.getLogger(__name__)

PLAYERS_PER_MATCH = 4


def normalize_players(players: Iterable[str]) -> list[Player]:
    """Trim names, drop empties and duplicates (first occurrence wins)."""
    seen: dict[Player, None] = {}
    for raw in players:
        name = raw.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


def max_matches(player_count: int, num_courts: int) -> int:
    return min(num_courts, player_count // PLAYERS_PER_MATCH)


def validate_inputs(
    players: Iterable[str],
    num_courts: int,
    num_rounds: int,
    options: ScheduleOptions,
) -> list[Player]:
    """Reject bad options, counts and short rosters; return the normalized roster."""
    options.validate()
    if num_courts < 1:
        raise InvalidOptionsError(f"num_courts must be >= 1, got {num_courts}")
    if num_rounds < 1:
        raise InvalidOptionsError(f"num_rounds must be >= 1, got {num_rounds}")
    roster = normalize_players(players)
    if len(roster) < PLAYERS_PER_MATCH:
        raise InsufficientPlayersError(
            f"Need at least {PLAYERS_PER_MATCH} players, got {len(roster)}"
        )
    return roster


class ScheduleOrchestrator:
    """
    Owns the RNG, ledger and bench queue of a single run.
    Call run() once; the instance is not reusable.
    """

    def __init__(
        self,
        players: Iterable[str],
        num_courts: int,
        num_rounds: int,
        seed_text: str | None = "",
        options: ScheduleOptions | None = None,
    ) -> None:
        self.options = options or ScheduleOptions()
        self.roster = validate_inputs(players, num_courts, num_rounds, self.options)
        self.num_courts = num_courts
        self.num_rounds = num_rounds
        self.seed = normalize_seed(seed_text)

        self.rng = SeededRNG(self.seed)
        self.ledger = PairingLedger()
        self.scorer = MatchScorer(self.ledger, self.options)
        self.assembler = BeamSearchAssembler(self.ledger, self.scorer, self.options, self.rng)

        # Shuffled once; rotation order for the bench queue and round iteration order
        self.order = list(self.roster)
        self.rng.shuffle(self.order)
        self.bench = BenchRotation(self.order, avoid_back_to_back=self.options.avoid_back_to_back)
        self._ran = False

    def play_round(self, index: int, last_benched: set[Player]) -> Round:
        players = self.order
        target = max_matches(len(players), self.num_courts)
        benches_needed = len(players) - PLAYERS_PER_MATCH * target

        benched = self.bench.pick(players, benches_needed, last_benched)
        sitting = set(benched)
        playing = [p for p in players if p not in sitting]

        matches = self.assembler.assemble(playing, target)

        active: set[Player] = set()
        for match in matches:
            self.ledger.record_match(match)
            active.update(match.players)

        # Anyone the assembler could not place sits out too
        for p in playing:
            if p not in active:
                benched.append(p)
        benched = list(dict.fromkeys(benched))

        for p in benched:
            self.ledger.add_bench(p, index)

        rnd = Round(index=index, matches=matches, benched=benched, target_matches=target)
        if rnd.degraded:
            logger.debug(
                "Round %d: only %d of %d matches assembled", index + 1, len(matches), target
            )
        logger.debug(
            "Round %d: %d match(es), benched=%s", index + 1, len(matches), ", ".join(benched) or "none"
        )
        return rnd

    def run(self) -> Schedule:
        if self._ran:
            raise RuntimeError("ScheduleOrchestrator.run() may only be called once")
        self._ran = True

        capacity = max_matches(len(self.roster), self.num_courts)
        warnings: list[str] = []
        if capacity < self.num_courts:
            warnings.append(
                f"You have {len(self.roster)} players; at most {capacity} match(es) can run "
                f"simultaneously. Scheduling up to that many courts per round."
            )

        rounds: list[Round] = []
        last_benched: set[Player] = set()
        for r in range(self.num_rounds):
            rnd = self.play_round(r, last_benched)
            rounds.append(rnd)
            last_benched = set(rnd.benched)

        short = sum(1 for rnd in rounds if rnd.degraded)
        if short:
            warnings.append(f"{short} round(s) could not fill every court; unplaced players were benched.")

        logger.info(
            "Built %d round(s) for %d players on %d court(s) (seed=%r)",
            len(rounds), len(self.roster), capacity, self.seed or None,
        )
        return Schedule(
            players=list(self.roster),
            num_courts=self.num_courts,
            num_rounds=self.num_rounds,
            seed=self.seed,
            options=self.options,
            rounds=rounds,
            stats=self.ledger.snapshot(),
            max_concurrent_matches=capacity,
            warnings=warnings,
        )


def build_schedule(
    players: Iterable[str],
    num_courts: int,
    num_rounds: int,
    seed_text: str | None = "",
    options: ScheduleOptions | None = None,
) -> Schedule:
    """Build a full schedule. Same seed, roster order and options give the same result."""
    return ScheduleOrchestrator(players, num_courts, num_rounds, seed_text, options).run()
