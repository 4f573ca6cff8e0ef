"""Configuration for Game of Life runs."""

from dataclasses import dataclass
from typing import List, Optional

from .core.random_source import NumpyRandomSource
from .core.universe import DEFAULT_LIVE_PROBABILITY, Universe


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    width: int = 50
    height: int = 50
    live_probability: float = DEFAULT_LIVE_PROBABILITY
    max_generations: int = 100
    interval: float = 0.1
    seed: Optional[int] = None

    def validate(self) -> List[str]:
        """Check the configuration.

        Returns:
            List of error messages, empty if the configuration is valid
        """
        errors = []

        if self.width < 0:
            errors.append("Width must be non-negative")

        if self.height < 0:
            errors.append("Height must be non-negative")

        if not 0.0 <= self.live_probability <= 1.0:
            errors.append("Live probability must be between 0.0 and 1.0")

        if self.max_generations < 0:
            errors.append("Max generations must be non-negative")

        if self.interval < 0:
            errors.append("Interval must be non-negative")

        return errors

    def create_random_source(self) -> NumpyRandomSource:
        return NumpyRandomSource(self.seed)

    def create_universe(self) -> Universe:
        """Seed a universe from this configuration."""
        return Universe.seed(
            self.width,
            self.height,
            self.live_probability,
            self.create_random_source(),
        )
