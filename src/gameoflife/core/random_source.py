"""Random draws used to seed a universe."""

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Anything that yields one probability draw in [0, 1) per call."""

    def next(self) -> float:
        ...


class NumpyRandomSource:
    """Random source backed by a numpy Generator.

    Passing the same seed yields the same sequence of draws, which makes
    seeded universes reproducible.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """Initialize the random source.

        Args:
            seed: Optional seed for the underlying generator
        """
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next(self) -> float:
        """Draw a float uniformly from [0, 1)."""
        return float(self._rng.random())
