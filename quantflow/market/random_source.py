"""Random draw sources for the market simulation.

The generator never calls the ``random`` module directly; it takes a
``RandomSource`` so tests can feed scripted draws.
"""

import math
import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Capability providing the two draws the simulation needs."""

    def uniform(self) -> float:
        """Draw from uniform(0, 1)."""
        ...

    def normal(self) -> float:
        """Draw from the standard normal distribution."""
        ...


class SystemRandomSource:
    """RandomSource backed by ``random.Random``.

    Normal draws use the Box-Muller transform over two uniform draws,
    rejecting zeros so ``log`` stays in its domain.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def uniform(self) -> float:
        return self._rng.random()

    def _nonzero_uniform(self) -> float:
        u = 0.0
        while u == 0.0:
            u = self._rng.random()
        return u

    def normal(self) -> float:
        u = self._nonzero_uniform()
        v = self._nonzero_uniform()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
