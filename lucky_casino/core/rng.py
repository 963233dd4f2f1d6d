"""Uniform random draws shared by every game."""
from __future__ import annotations

import random
from typing import List, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Thin wrapper around :class:`random.Random` with inclusive integer draws."""

    def __init__(self, rng: random.Random | None = None, *, seed: Optional[int] = None) -> None:
        self._rng = rng or random.Random(seed)

    def random_int(self, low: int, high: int) -> int:
        """Return an integer uniformly distributed over ``[low, high]``."""

        if low > high:
            raise ValueError(f"empty range [{low}, {high}]")
        return self._rng.randint(low, high)

    def random_float(self, low: float, high: float) -> float:
        """Return a float uniformly distributed over ``[low, high)``."""

        if low > high:
            raise ValueError(f"empty range [{low}, {high})")
        return low + (high - low) * self._rng.random()

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[self.random_int(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy using Fisher-Yates."""

        shuffled: MutableSequence[T] = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.random_int(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return list(shuffled)


DEFAULT_SOURCE = RandomSource()


__all__ = ["RandomSource", "DEFAULT_SOURCE"]
