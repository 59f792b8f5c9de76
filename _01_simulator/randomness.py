"""Seedable randomness source shared by agents and drivers."""

from __future__ import annotations

import random
import threading
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class Randomness:
    """Pseudo-random generator with serialized access.

    A single instance may be shared by several agents and by evaluations
    running on different threads; every draw takes the instance lock.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def random(self, low: float = 0.0, high: float = 1.0) -> float:
        """Return a uniformly sampled float in [low, high)."""
        with self._lock:
            value = self._rng.random()
        return low + value * (high - low)

    def randint(self, low: int, high: int) -> int:
        """Return a uniformly sampled integer in [low, high)."""
        with self._lock:
            return self._rng.randrange(low, high)

    def choice(self, values: Sequence[T]) -> T:
        """Return one element of `values` with uniform probability.

        Raises IndexError for an empty sequence.
        """
        with self._lock:
            return self._rng.choice(values)

    def __repr__(self) -> str:
        return f"Randomness(seed={self.seed!r})"


DEFAULT = Randomness()


def resolve_rng(rng: Randomness | None = None, seed: int | None = None) -> Randomness:
    """Pick the randomness source for a component.

    An explicit `rng` wins, then a private source built from `seed`, then the
    shared DEFAULT.
    """
    if rng is not None:
        return rng
    if seed is not None:
        return Randomness(seed)
    return DEFAULT


__all__ = ["DEFAULT", "Randomness", "resolve_rng"]
