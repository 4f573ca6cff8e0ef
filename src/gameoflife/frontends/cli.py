"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from typing import Optional, Tuple

from ..config import SimulationConfig
from ..core.simulation import Simulation
from ..core.universe import Universe

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


class CLIGameOfLife:
    """Command-line driver that runs a simulation and prints generations."""

    def __init__(self, config: SimulationConfig) -> None:
        """Initialize CLI interface.

        Args:
            config: Run configuration
        """
        self.config = config
        self.simulation: Optional[Simulation] = None

    def run_simulation(
        self,
        until_stable: bool = False,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[int, str, dict]:
        """Run a Game of Life simulation.

        Args:
            until_stable: Stop early on a cycle or extinction
            verbose: Print progress updates
            show_grid: Print every generation

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        config = self.config
        logger.debug("Run configuration: %s", config)

        if verbose:
            print(
                f"Seeding {config.width}x{config.height} universe "
                f"(probability: {config.live_probability:.2%}, seed: {config.seed})"
            )

        universe = config.create_universe()
        simulation = Simulation(universe)
        self.simulation = simulation
        initial_population = simulation.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            simulation.add_listener(self._print_generation)
            print("Generation 0:")
            print(self._format_grid(universe))

        start_time = time.time()

        if until_stable:
            final_generation, reason = simulation.run_until_stable(config.max_generations)
        else:
            for _ in range(config.max_generations):
                simulation.step()
            final_generation, reason = simulation.generation, "max_generations"

        duration = time.time() - start_time

        stats = simulation.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        return final_generation, reason, stats

    def _print_generation(self, universe: Universe) -> None:
        if self.config.interval > 0:
            time.sleep(self.config.interval)
        print(f"\nGeneration {self.simulation.generation}:")
        print(self._format_grid(universe))

    def _format_grid(self, universe: Universe, max_size: int = 50) -> str:
        """Format universe for display, truncating if too large.

        Args:
            universe: Universe to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        if universe.width > max_size or universe.height > max_size:
            return (
                f"Grid too large to display ({universe.width}x{universe.height}), "
                f"population {universe.population}"
            )

        return str(universe)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life simulations from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a random 10x10 universe for 50 generations, drawing each one
  gameoflife-cli -W 10 -H 10 -m 50 --show-grid --interval 0.1

  # Reproducible run with a fixed seed
  gameoflife-cli --seed 42 --probability 0.25

  # Stop as soon as the universe cycles or dies out
  gameoflife-cli --until-stable -m 10000 --verbose
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=50, help="Grid width (default: 50)")

    parser.add_argument("-H", "--height", type=int, default=50, help="Grid height (default: 50)")

    parser.add_argument(
        "-p",
        "--probability",
        type=float,
        default=0.3,
        help="Chance each cell starts alive, 0.0-1.0 (default: 0.3)",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=100,
        help="Generations to simulate (default: 100)",
    )

    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=0.0,
        help="Seconds to wait between printed generations (default: 0)",
    )

    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Random seed for a reproducible initial universe",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Print every generation (small grids only)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Stop early when the universe cycles or dies out",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a run configuration from parsed arguments."""
    return SimulationConfig(
        width=args.width,
        height=args.height,
        live_probability=args.probability,
        max_generations=args.max_generations,
        interval=args.interval,
        seed=args.seed,
    )


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason
        stats: Statistics dictionary

    Returns:
        Human-readable finish reason
    """
    if reason == "cycle":
        cycle_length = stats.get("cycle_length", 0)
        if cycle_length == 1:
            return "Still life (period 1)"
        return f"Oscillator (period {cycle_length})"
    elif reason == "extinction":
        return "Extinction (all cells died)"
    elif reason == "max_generations":
        return "Reached generation limit"
    return reason


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
        if stats["bounding_box"]:
            width, height = stats["bounding_box_size"]
            print(f"  Bounding box: {width}x{height} at {stats['bounding_box'][:2]}")
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s".format(
                stats["initial_population"], stats["population"], stats["duration_seconds"]
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    return report_config_errors(config_from_args(args))


def report_config_errors(config: SimulationConfig) -> bool:
    """Print any configuration errors.

    Returns:
        True if the configuration is valid
    """
    errors = config.validate()

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if not validate_args(args):
        return 1

    cli = CLIGameOfLife(config_from_args(args))

    try:
        final_generation, reason, stats = cli.run_simulation(
            until_stable=args.until_stable,
            verbose=args.verbose,
            show_grid=args.show_grid,
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1

    print_results(final_generation, reason, stats, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
