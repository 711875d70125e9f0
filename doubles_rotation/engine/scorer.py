"""
Match Scorer: undesirability of a candidate team and of a candidate four-player
match, read from the pairing ledger. Lower is better.
"""
from __future__ import annotations

from dataclasses import dataclass

from .ledger import PairingLedger
from .schemas import Match, Player, ScheduleOptions, Team


@dataclass
class SplitResult:
    """Best way to split four players into two teams, and its score."""
    match: Match
    score: float


class MatchScorer:
    """
    teamScore = weight_team * penalty(times teamed) + weight_play * (plays a + plays b)
    opponentScore = weight_opponent * sum of penalty(times faced) over the four cross pairs
    penalty(x) is x*x in square-repeats mode, else x.
    """

    def __init__(self, ledger: PairingLedger, options: ScheduleOptions) -> None:
        self.ledger = ledger
        self.weight_team = options.weight_team
        self.weight_opponent = options.weight_opponent
        self.weight_play = options.weight_play
        self.square_repeats = options.square_repeats

    def penalty(self, repeats: int) -> int:
        return repeats * repeats if self.square_repeats else repeats

    def team_score(self, a: Player, b: Player) -> float:
        t_pen = self.penalty(self.ledger.teammates(a, b))
        p_pen = self.ledger.plays(a) + self.ledger.plays(b)
        return self.weight_team * t_pen + self.weight_play * p_pen

    def opponent_score(self, a: Player, b: Player, c: Player, d: Player) -> float:
        total = 0
        for x, y in ((a, c), (a, d), (b, c), (b, d)):
            total += self.penalty(self.ledger.opponents(x, y))
        return self.weight_opponent * total

    def best_split(self, four: tuple[Player, Player, Player, Player] | list[Player]) -> SplitResult:
        """
        Score the three partitions (ab|cd), (ac|bd), (ad|bc) and keep the strictly
        lowest; on an exact tie the earlier partition wins.
        """
        a, b, c, d = four
        best: Match | None = None
        best_score = float("inf")
        for x1, x2, y1, y2 in ((a, b, c, d), (a, c, b, d), (a, d, b, c)):
            s = (
                self.team_score(x1, x2)
                + self.team_score(y1, y2)
                + self.opponent_score(x1, x2, y1, y2)
            )
            if s < best_score:
                best_score = s
                t1 = Team.of(x1, x2)
                t2 = Team.of(y1, y2)
                # smaller joined name listed first, display only
                best = Match(t2, t1) if t2.joined() < t1.joined() else Match(t1, t2)
        assert best is not None
        return SplitResult(match=best, score=best_score)
