"""
Service layer: request values to engine calls to JSON-ready results.
No persistence and no presentation state.
"""
from .schedule_service import resolve_players, run_schedule, run_shared, schedule_result

__all__ = [
    "resolve_players",
    "run_schedule",
    "run_shared",
    "schedule_result",
]
