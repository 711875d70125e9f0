"""
Seeded RNG for deterministic, replayable schedules.

A seed text is hashed (xmur3) into four 32-bit words which become the state of a
small fast counting generator (sfc32). Both are pure 32-bit integer arithmetic,
so a given seed text yields the same draw sequence on every platform.
An empty or whitespace-only seed text selects a non-reproducible OS source.
"""
from __future__ import annotations

import random
from typing import Callable, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_TWO_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def _rotl(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _MASK32


def _utf16_units(text: str) -> list[int]:
    raw = text.encode("utf-16-le")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def xmur3(text: str) -> Callable[[], int]:
    """
    Order-sensitive string hash. Returns a generator function; each call yields
    the next 32-bit word derived from the text.
    """
    units = _utf16_units(text)
    h = (1779033703 ^ len(units)) & _MASK32
    for u in units:
        h = _imul(h ^ u, 3432918353)
        h = _rotl(h, 13)

    def next_word() -> int:
        nonlocal h
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        return h

    return next_word


def sfc32(a: int, b: int, c: int, d: int) -> Callable[[], float]:
    """Small fast counting generator; each call returns a uniform float in [0, 1)."""
    state = [a & _MASK32, b & _MASK32, c & _MASK32, d & _MASK32]

    def next_float() -> float:
        a, b, c, d = state
        t = (a + b) & _MASK32
        a = b ^ (b >> 9)
        b = (c + (c << 3)) & _MASK32
        c = _rotl(c, 21)
        d = (d + 1) & _MASK32
        t = (t + d) & _MASK32
        c = (c + t) & _MASK32
        state[0], state[1], state[2], state[3] = a, b, c, d
        return t / _TWO_32

    return next_float


def normalize_seed(seed_text: str | None) -> str:
    return (seed_text or "").strip()


class SeededRNG:
    """Uniform stream built from a seed text, plus the shuffles the scheduler needs."""

    def __init__(self, seed_text: str | None = None) -> None:
        self._seed = normalize_seed(seed_text)
        if self._seed:
            words = xmur3(self._seed)
            self._next = sfc32(words(), words(), words(), words())
        else:
            self._next = random.SystemRandom().random

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def reproducible(self) -> bool:
        return bool(self._seed)

    def random(self) -> float:
        return self._next()

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates in place: last index down to 1, swap with a draw in [0, i]."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self._next() * (i + 1))
            items[i], items[j] = items[j], items[i]

    def shuffled(self, items: Sequence[T]) -> list[T]:
        copy = list(items)
        self.shuffle(copy)
        return copy
