"""
Input errors raised by the scheduling engine before any round is built.
Degraded outcomes (capped courts, short rounds) are reported in the Schedule instead.
"""
from __future__ import annotations


class ScheduleInputError(ValueError):
    """Base class for inputs the engine refuses to schedule."""


class InsufficientPlayersError(ScheduleInputError):
    """Fewer than 4 usable players after trimming and de-duplication."""


class InvalidOptionsError(ScheduleInputError):
    """Courts, rounds or search options outside their allowed range."""
