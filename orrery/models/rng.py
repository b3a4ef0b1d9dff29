"""Deterministic random streams for procedural generation.

Every generated system is a pure function of a 32-bit seed.  The stream is an
xorshift32 generator with all arithmetic masked to 32 bits, so the same seed
produces the same sequence on every interpreter.  A stream belongs to exactly
one generation run; nothing here is process-global.
"""

from __future__ import annotations

import math
import time
from typing import Generic, Protocol, Sequence, TypeVar

from ..constants import DEFAULT_STREAM_STATE, FNV_OFFSET_BASIS, FNV_PRIME, SEED_MASK

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that yields floats in [0, 1)."""

    def next(self) -> float: ...


def seed_from_string(text: str) -> int:
    """FNV-1a fold of the UTF-8 bytes of ``text`` into a 32-bit seed."""
    h = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & SEED_MASK
    return h


def resolve_seed(seed_input: int | str | None = None) -> int:
    """Turn a user-supplied seed into the 32-bit seed value.

    Numbers are masked to 32 bits, strings are hashed, and ``None`` hashes the
    current wall-clock time in milliseconds (the "randomize" path).
    """
    if seed_input is None:
        return seed_from_string(str(int(time.time() * 1000)))
    if isinstance(seed_input, str):
        return seed_from_string(seed_input)
    return int(seed_input) & SEED_MASK


class SeededStream:
    """xorshift32 stream producing floats in [0, 1)."""

    def __init__(self, seed: int) -> None:
        self.state = (seed & SEED_MASK) or DEFAULT_STREAM_STATE

    def next_u32(self) -> int:
        x = self.state
        x ^= (x << 13) & SEED_MASK
        x ^= x >> 17
        x ^= (x << 5) & SEED_MASK
        self.state = x
        return x

    def next(self) -> float:
        return self.next_u32() / 2**32


class RandUtils:
    """Range helpers layered over a single stream."""

    def __init__(self, stream: RandomSource) -> None:
        self.stream = stream

    def rand(self, low: float, high: float) -> float:
        return self.stream.next() * (high - low) + low

    def rand_int(self, low: int, high: int) -> int:
        # inclusive low..high
        return math.floor(self.rand(low, high + 1))

    def choice(self, items: Sequence[T]) -> T:
        return items[self.rand_int(0, len(items) - 1)]

    def chance(self, probability: float) -> bool:
        """Bernoulli trial from one draw."""
        return self.stream.next() < probability


class WeightedCategorySampler(Generic[T]):
    """Pick one value from ordered ``(value, weight)`` pairs with one draw.

    The first category whose cumulative weight reaches the draw wins.  Weights
    need not sum to 1; a draw past the final cumulative weight falls back to
    the last category so a value is always returned.
    """

    def __init__(self, categories: Sequence[tuple[T, float]]) -> None:
        if not categories:
            raise ValueError("WeightedCategorySampler needs at least one category")
        self.categories = tuple(categories)

    def pick(self, draw: float) -> T:
        cumulative = 0.0
        for value, weight in self.categories:
            cumulative += weight
            if draw <= cumulative:
                return value
        return self.categories[-1][0]

    def sample(self, stream: RandomSource) -> T:
        return self.pick(stream.next())
