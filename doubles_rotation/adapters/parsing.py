"""
Input adapters: free-form player text to a player list, and fresh seed texts.
"""
from __future__ import annotations

import random
import re
import string

SEED_LENGTH = 8
_SEED_ALPHABET = string.digits + string.ascii_lowercase  # base 36, URL-safe
_SPLIT = re.compile(r"[\n,]")


def parse_players(text: str | None) -> list[str]:
    """Split on newlines and commas, trim, drop empty entries. Order is kept."""
    if not text:
        return []
    return [s.strip() for s in _SPLIT.split(text) if s.strip()]


def generate_seed(length: int = SEED_LENGTH) -> str:
    """Short, readable, URL-safe seed text from an OS entropy source."""
    rng = random.SystemRandom()
    return "".join(rng.choice(_SEED_ALPHABET) for _ in range(length))
