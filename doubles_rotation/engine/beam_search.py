"""
Beam Search Assembler: picks the full set of matches for one round.

Each step anchors a match on a pivot (the most-played remaining player), tries the
pivot's shortlisted partners against a shortlist of opponent pairs, and keeps the
best `beam_width` partial rounds. Ties are broken by shuffling with the run's RNG
and then stable-sorting, never by insertion or alphabetical order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from .ledger import PairingLedger
from .rng import SeededRNG
from .schemas import Match, Player, ScheduleOptions
from .scorer import MatchScorer

logger = logging.getLogger(__name__)

OPPONENT_SHORTLIST = 12
# Per-play nudge so one search does not keep loading the busiest players
FUTURE_PLAY_PENALTY = 0.05


@dataclass
class BeamState:
    """A partial round: matches chosen so far and who is still unplaced."""
    score: float
    matches: list[Match] = field(default_factory=list)
    remaining: tuple[Player, ...] = ()


class OpponentRank(NamedTuple):
    """Sort key for opponent candidates, ascending in field order."""
    times_faced: int  # against pivot + against partner
    plays: int


def _without(players: tuple[Player, ...], *drop: Player) -> tuple[Player, ...]:
    return tuple(p for p in players if p not in drop)


class BeamSearchAssembler:
    def __init__(
        self,
        ledger: PairingLedger,
        scorer: MatchScorer,
        options: ScheduleOptions,
        rng: SeededRNG,
    ) -> None:
        self.ledger = ledger
        self.scorer = scorer
        self.beam_width = options.beam_width
        self.partner_k = options.partner_k
        self.rng = rng

    # ---- setup ----

    @staticmethod
    def prepare_pool(playing: list[Player], target_matches: int) -> list[Player]:
        """De-duplicate and keep the first 4 * target_matches players."""
        seen: dict[Player, None] = {}
        for p in playing:
            seen.setdefault(p, None)
        return list(seen)[: 4 * target_matches]

    def partner_shortlists(self, pool: list[Player]) -> dict[Player, list[Player]]:
        shortlists: dict[Player, list[Player]] = {}
        keep = max(2, self.partner_k)
        for p in pool:
            others = self.rng.shuffled([q for q in pool if q != p])
            others.sort(key=lambda q: self.scorer.team_score(p, q))
            shortlists[p] = others[:keep]
        return shortlists

    # ---- per-step choices ----

    def pick_pivot(self, remaining: tuple[Player, ...]) -> Player:
        """Most-played remaining player; the first maximum in shuffled order wins."""
        order = self.rng.shuffled(remaining)
        best = order[0]
        best_plays = self.ledger.plays(best)
        for p in order[1:]:
            pl = self.ledger.plays(p)
            if pl > best_plays:
                best, best_plays = p, pl
        return best

    def opponent_rank(self, pivot: Player, partner: Player, x: Player) -> OpponentRank:
        return OpponentRank(
            times_faced=self.ledger.opponents(pivot, x) + self.ledger.opponents(partner, x),
            plays=self.ledger.plays(x),
        )

    def opponent_shortlist(self, pivot: Player, partner: Player, rest: tuple[Player, ...]) -> list[Player]:
        ordered = self.rng.shuffled(rest)
        ordered.sort(key=lambda x: self.opponent_rank(pivot, partner, x))
        return ordered[:OPPONENT_SHORTLIST]

    def expand(self, state: BeamState, shortlists: dict[Player, list[Player]]) -> list[BeamState]:
        remaining = state.remaining
        pivot = self.pick_pivot(remaining)

        partners = [q for q in shortlists.get(pivot, []) if q in remaining]
        if not partners:
            partners = [q for q in remaining if q != pivot]
        partners = self.rng.shuffled(partners)

        out: list[BeamState] = []
        for partner in partners:
            if partner == pivot:
                continue
            rest = _without(remaining, pivot, partner)
            if len(rest) < 2:
                continue
            shortlist = self.opponent_shortlist(pivot, partner, rest)

            idx_pairs = [
                (i, j)
                for i in range(len(shortlist))
                for j in range(i + 1, len(shortlist))
            ]
            self.rng.shuffle(idx_pairs)

            for i, j in idx_pairs:
                r, s = shortlist[i], shortlist[j]
                split = self.scorer.best_split((pivot, partner, r, s))
                future_pen = FUTURE_PLAY_PENALTY * (
                    self.ledger.plays(pivot)
                    + self.ledger.plays(partner)
                    + self.ledger.plays(r)
                    + self.ledger.plays(s)
                )
                out.append(
                    BeamState(
                        score=state.score + split.score + future_pen,
                        matches=[*state.matches, split.match],
                        remaining=_without(remaining, pivot, partner, r, s),
                    )
                )
        return out

    # ---- search ----

    def assemble(self, playing: list[Player], target_matches: int) -> list[Match]:
        """
        Best-found ordered list of matches for the round. May hold fewer than
        target_matches when the pool cannot be fully partitioned.
        """
        if target_matches <= 0 or len(playing) < 4:
            return []
        pool = self.prepare_pool(playing, target_matches)
        shortlists = self.partner_shortlists(pool)

        beam = [BeamState(score=0.0, matches=[], remaining=tuple(pool))]
        for step in range(target_matches):
            candidates: list[BeamState] = []
            for state in beam:
                if len(state.remaining) < 4:
                    continue
                candidates.extend(self.expand(state, shortlists))
            if not candidates:
                logger.debug("Beam search stopped at step %d of %d: no candidates", step, target_matches)
                break
            candidates.sort(key=lambda st: st.score)
            beam = candidates[: self.beam_width]

        if not beam:
            return []
        best = min(beam, key=lambda st: (-len(st.matches), st.score))
        return best.matches
