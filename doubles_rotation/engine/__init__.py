"""
Doubles rotation engine: deterministic, seed-replayable assignment of players
to 2v2 matches across courts and rounds, spreading partners, opponents and
bench time as evenly as a bounded beam search allows.
"""
from .errors import ScheduleInputError, InsufficientPlayersError, InvalidOptionsError
from .schemas import (
    Player,
    PairKey,
    pair_key,
    Team,
    Match,
    Round,
    Schedule,
    ScheduleOptions,
    ScheduleStats,
)
from .rng import SeededRNG, xmur3, sfc32, normalize_seed
from .ledger import PairingLedger
from .scorer import MatchScorer, SplitResult
from .bench import BenchRotation
from .beam_search import BeamSearchAssembler, BeamState, OpponentRank
from .orchestrator import ScheduleOrchestrator, build_schedule, normalize_players, max_matches, validate_inputs
from .persistence import (
    schedule_to_dict,
    schedule_from_dict,
    save_schedule,
    load_schedule,
    ScheduleMetadata,
)

__all__ = [
    "ScheduleInputError",
    "InsufficientPlayersError",
    "InvalidOptionsError",
    "Player",
    "PairKey",
    "pair_key",
    "Team",
    "Match",
    "Round",
    "Schedule",
    "ScheduleOptions",
    "ScheduleStats",
    "SeededRNG",
    "xmur3",
    "sfc32",
    "normalize_seed",
    "PairingLedger",
    "MatchScorer",
    "SplitResult",
    "BenchRotation",
    "BeamSearchAssembler",
    "BeamState",
    "OpponentRank",
    "ScheduleOrchestrator",
    "build_schedule",
    "normalize_players",
    "max_matches",
    "validate_inputs",
    "schedule_to_dict",
    "schedule_from_dict",
    "save_schedule",
    "load_schedule",
    "ScheduleMetadata",
]
