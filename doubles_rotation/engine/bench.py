"""
Bench rotation: a queue of all players in rotation order. Each round the front of
the queue sits out and goes to the back, so bench duty cycles through everyone.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Collection, Iterable

from .schemas import Player

logger = logging.getLogger(__name__)

# Retry bound per queue entry before a back-to-back bench is accepted
GUARD_FACTOR = 3


class BenchRotation:
    """Owns the rotation queue across all rounds of one run."""

    def __init__(self, order: Iterable[Player], avoid_back_to_back: bool = True) -> None:
        self.queue: deque[Player] = deque(order)
        self.avoid_back_to_back = avoid_back_to_back
        self.guard_exhausted = False  # last pick hit the retry bound

    def pick(
        self,
        players: list[Player],
        benches_needed: int,
        last_benched: Collection[Player],
    ) -> list[Player]:
        """
        Return players sitting out this round and leave the queue rotated for the next.
        A player benched last round is skipped only when exactly one slot is needed.
        """
        self.guard_exhausted = False
        if benches_needed <= 0:
            return []

        queued = set(self.queue)
        for p in players:
            if p not in queued:
                self.queue.append(p)
                queued.add(p)

        benched: list[Player] = []
        guard = 0
        while len(benched) < benches_needed:
            if guard >= len(self.queue) * GUARD_FACTOR:
                self.guard_exhausted = True
                break
            guard += 1
            p = self.queue.popleft()
            if (
                self.avoid_back_to_back
                and benches_needed == 1
                and p in last_benched
                and self.queue
            ):
                self.queue.append(p)
                continue
            benched.append(p)
            self.queue.append(p)

        if self.guard_exhausted:
            logger.warning(
                "Bench retry bound hit after %d pops; accepting back-to-back benches for %d slot(s)",
                guard, benches_needed - len(benched),
            )
            # Fallback: take the queue front as-is, repeats allowed
            while len(benched) < benches_needed:
                p = self.queue.popleft()
                self.queue.append(p)
                if p not in benched:
                    benched.append(p)
        return benched
