"""Simulation driver for Conway's Game of Life."""

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Tuple

import numpy as np

from .universe import Universe

logger = logging.getLogger(__name__)

GenerationListener = Callable[[Universe], None]


class Simulation:
    """Drives a universe through successive generations.

    The simulation owns the current universe and replaces it on every
    step. Listeners registered with :meth:`add_listener` receive each new
    generation, which is how renderers are kept up to date.
    """

    def __init__(self, universe: Universe, history_size: int = 100, max_tracked_states: int = 1000) -> None:
        """Initialize the simulation with a starting universe.

        Args:
            universe: Generation zero
            history_size: Number of population counts to keep
            max_tracked_states: Number of recent generations checked for cycles
        """
        self._universe = universe
        self._generation = 0
        self._listeners: List[GenerationListener] = []
        self._population_history: Deque[int] = deque(maxlen=history_size)
        self._seen_states: Dict[Universe, int] = {}
        self._state_history: Deque[Universe] = deque()
        self._max_tracked_states = max_tracked_states
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._record(universe)

    @property
    def universe(self) -> Universe:
        """The current generation."""
        return self._universe

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._universe.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether the universe has returned to an earlier state."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def add_listener(self, listener: GenerationListener) -> None:
        """Register a callback invoked with every new generation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: GenerationListener) -> None:
        self._listeners.remove(listener)

    def step(self) -> Universe:
        """Advance the simulation by one generation.

        Returns:
            The new current universe
        """
        self._universe = self._universe.step()
        self._generation += 1
        self._record(self._universe)

        logger.debug("Generation %d: population %d", self._generation, self._universe.population)

        for listener in list(self._listeners):
            listener(self._universe)

        return self._universe

    def run(self, generations: int) -> Universe:
        """Advance the simulation by a fixed number of generations."""
        for _ in range(generations):
            self.step()
        return self._universe

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it cycles, dies out or hits the limit.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self.population == 0:
                logger.info("Extinction at generation %d", self._generation)
                return self._generation, "extinction"

            if self._cycle_detected:
                logger.info(
                    "Cycle of length %d detected at generation %d",
                    self._cycle_length,
                    self._generation,
                )
                return self._generation, "cycle"

        return self._generation, "max_generations"

    def reset(self, universe: Universe) -> None:
        """Restart the simulation from a new universe."""
        self._universe = universe
        self._generation = 0
        self._population_history.clear()
        self._seen_states.clear()
        self._state_history.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._record(universe)

        for listener in list(self._listeners):
            listener(self._universe)

    def _record(self, universe: Universe) -> None:
        """Track population and check whether this state was seen before."""
        self._population_history.append(universe.population)

        if self._cycle_detected:
            return

        if universe in self._seen_states:
            first_occurrence = self._seen_states[universe]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            return

        self._seen_states[universe] = self._generation
        self._state_history.append(universe)

        if len(self._state_history) > self._max_tracked_states:
            del self._seen_states[self._state_history.popleft()]

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        universe = self._universe
        area = universe.width * universe.height

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": universe.shape,
            "population_density": self.population / area if area else 0.0,
        }

        bbox = universe.get_bounding_box()
        if bbox:
            stats["bounding_box"] = bbox
            stats["bounding_box_size"] = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)

        return stats
