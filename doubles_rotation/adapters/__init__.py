"""
Adapters around the engine: text parsing, plain-text export and diagnostics,
and share-token encoding. None of them mutate engine state.
"""
from .parsing import parse_players, generate_seed
from .export import (
    format_match,
    build_copy_text,
    top_pairs,
    summarize_diagnostics,
    format_diagnostics,
    DiagnosticsSummary,
)
from .sharing import ShareConfig, ShareTokenError, encode_share_token, decode_share_token

__all__ = [
    "parse_players",
    "generate_seed",
    "format_match",
    "build_copy_text",
    "top_pairs",
    "summarize_diagnostics",
    "format_diagnostics",
    "DiagnosticsSummary",
    "ShareConfig",
    "ShareTokenError",
    "encode_share_token",
    "decode_share_token",
]
