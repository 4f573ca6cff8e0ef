#!/usr/bin/env python3
"""
Example usage of the gameoflife package.
"""

from gameoflife import Simulation, Universe
from gameoflife.core import NumpyRandomSource


def main():
    """Demonstrate programmatic usage of the gameoflife package."""
    universe = Universe.seed(10, 10, live_probability=0.3, random_source=NumpyRandomSource(2024))
    simulation = Simulation(universe)

    print("Initial state:")
    print(universe)
    print(f"Population: {simulation.population}")
    print()

    def show(generation):
        print(f"Generation {simulation.generation}:")
        print(generation)
        print(f"Population: {generation.population}")
        print()

    simulation.add_listener(show)

    generation, reason = simulation.run_until_stable(max_generations=10)
    print(f"Stopped at generation {generation}: {reason}")

    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
