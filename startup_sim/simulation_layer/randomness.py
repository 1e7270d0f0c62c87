"""
Injected random source for event, decision and advice selection.
Every rule draws through a RandomSource so a seed makes a quarter reproducible.
"""

import math
import random
from typing import List, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def next(self) -> float:
        """Return a float in [0, 1)."""
        ...


class SeededRandom:
    """RandomSource backed by random.Random."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()


def pick_index(source: RandomSource, length: int) -> int:
    """Uniform index in [0, length)."""
    return min(length - 1, int(math.floor(source.next() * length)))


def pick(source: RandomSource, items: Sequence[T]) -> T:
    return items[pick_index(source, len(items))]


def shuffled(source: RandomSource, items: Sequence[T]) -> List[T]:
    """Fisher-Yates shuffle into a new list."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = pick_index(source, i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def uniform(source: RandomSource, low: float, high: float) -> float:
    return low + source.next() * (high - low)
