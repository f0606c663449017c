"""
random_source.py - Injectable source of random integers

Board seeding draws its randomness from an object passed in by the caller
instead of a process-wide generator, so each game can be reproduced from
its own seed.
"""

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Anything that can produce a uniform integer in ``[low, high)``."""

    def integers(self, low: int, high: int) -> int:
        ...


class NumpyRandomSource:
    """RandomSource backed by a ``numpy.random.Generator``."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def integers(self, low: int, high: int) -> int:
        return int(self._rng.integers(low, high))

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed!r})"


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """Create a fresh random source, seeded when ``seed`` is given."""
    return NumpyRandomSource(seed)
