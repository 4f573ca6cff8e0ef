"""Tkinter GUI frontend for Conway's Game of Life."""

import argparse
import sys
import tkinter as tk
from typing import Dict, Optional

from ..config import SimulationConfig
from ..core.cell import CellState, Position
from ..core.simulation import Simulation
from ..core.universe import Universe
from .cli import report_config_errors

ALIVE_COLOR = "black"
DEAD_COLOR = "light gray"


def color_for_state(state: CellState) -> str:
    return ALIVE_COLOR if state is CellState.ALIVE else DEAD_COLOR


class TkinterGameOfLifeGUI:
    """Tkinter-based renderer and driver for a Game of Life simulation.

    Every cell is drawn as one canvas rectangle. The GUI keeps the mapping
    from cell position to canvas item and recolors items when a new
    generation arrives; the simulation itself knows nothing about the
    canvas.
    """

    def __init__(self, master: tk.Tk, config: Optional[SimulationConfig] = None) -> None:
        """Initialize the GUI.

        Args:
            master: Root Tkinter window
            config: Run configuration; a 10x10 universe stepping every 0.1s if omitted
        """
        self.master = master
        self.config = config or SimulationConfig(width=10, height=10, interval=0.1)
        self.master.title("Conway's Game of Life")

        # Display parameters
        self.cell_size = 30
        self.canvas_width = self.config.width * self.cell_size
        self.canvas_height = self.config.height * self.cell_size
        self.update_interval = max(1, int(self.config.interval * 1000))

        self.random_source = self.config.create_random_source()
        self.simulation = Simulation(self._seed_universe())
        self.simulation.add_listener(self.on_generation)

        # Renderer-owned mapping from cell position to canvas rectangle
        self.cell_items: Dict[Position, int] = {}
        self._drawn: Optional[Universe] = None

        self.running = False
        self._after_id: Optional[str] = None

        self.setup_ui()
        self.redraw_all_cells()
        self.update_loop()

    def _seed_universe(self) -> Universe:
        return Universe.seed(
            self.config.width,
            self.config.height,
            self.config.live_probability,
            self.random_source,
        )

    def setup_ui(self) -> None:
        """Set up the user interface."""
        control_frame = tk.Frame(self.master)
        control_frame.pack(pady=5)

        self.start_btn = tk.Button(control_frame, text="Start", width=8, command=self.toggle_running)
        self.start_btn.pack(side=tk.LEFT, padx=3)

        self.step_btn = tk.Button(control_frame, text="Step", width=8, command=self.step_once)
        self.step_btn.pack(side=tk.LEFT, padx=3)

        self.reseed_btn = tk.Button(control_frame, text="Reseed", width=8, command=self.reseed)
        self.reseed_btn.pack(side=tk.LEFT, padx=3)

        self.canvas = tk.Canvas(
            self.master,
            width=self.canvas_width,
            height=self.canvas_height,
            bg="red",
            highlightthickness=0,
        )
        self.canvas.pack()

        self.status_label = tk.Label(self.master, anchor="w")
        self.status_label.pack(fill=tk.X, padx=5, pady=3)

    def toggle_running(self) -> None:
        """Toggle the simulation running state."""
        self.running = not self.running
        self.start_btn.config(text="Pause" if self.running else "Start")

    def step_once(self) -> None:
        """Advance exactly one generation."""
        self.simulation.step()

    def reseed(self) -> None:
        """Replace the universe with a freshly seeded one."""
        self.simulation.reset(self._seed_universe())

    def on_generation(self, universe: Universe) -> None:
        """Recolor the cells that changed since the last drawn generation."""
        if self._drawn is None or self._drawn.shape != universe.shape:
            self._drawn = universe
            self.redraw_all_cells()
            return

        for position in universe.changed_positions(self._drawn):
            self.draw_cell(universe, position)
        self._drawn = universe
        self.update_status()

    def draw_cell(self, universe: Universe, position: Position) -> None:
        """Draw or update a single cell on the canvas."""
        state = universe.cell(position.x, position.y).state
        color = color_for_state(state)

        if position in self.cell_items:
            self.canvas.itemconfig(self.cell_items[position], fill=color)
            return

        x1 = position.x * self.cell_size
        y1 = position.y * self.cell_size
        item = self.canvas.create_rectangle(
            x1, y1, x1 + self.cell_size, y1 + self.cell_size, fill=color, outline=""
        )
        self.cell_items[position] = item

    def redraw_all_cells(self) -> None:
        """Redraw every cell of the current universe."""
        universe = self.simulation.universe
        self.canvas.delete("all")
        self.cell_items.clear()

        for cell in universe.cells():
            self.draw_cell(universe, cell.position)

        self._drawn = universe
        self.update_status()

    def update_status(self) -> None:
        """Update the generation and population display."""
        self.status_label.config(
            text=f"Generation: {self.simulation.generation}  Population: {self.simulation.population}"
        )

    def update_loop(self) -> None:
        """Step the simulation on a fixed interval while running."""
        if self.running:
            self.simulation.step()
        self._after_id = self.master.after(self.update_interval, self.update_loop)

    def stop(self) -> None:
        """Cancel the pending update."""
        self.running = False
        if self._after_id is not None:
            self.master.after_cancel(self._after_id)
            self._after_id = None


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser for the GUI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Watch Conway's Game of Life in a Tkinter window",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default 10x10 universe
  gameoflife-gui

  # Larger, sparser universe with a fixed seed
  gameoflife-gui -W 30 -H 20 -p 0.2 --seed 7
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=10, help="Grid width (default: 10)")

    parser.add_argument("-H", "--height", type=int, default=10, help="Grid height (default: 10)")

    parser.add_argument(
        "-p",
        "--probability",
        type=float,
        default=0.3,
        help="Chance each cell starts alive, 0.0-1.0 (default: 0.3)",
    )

    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=0.1,
        help="Seconds between generations (default: 0.1)",
    )

    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Random seed for a reproducible initial universe",
    )

    parser.add_argument(
        "--test",
        action="store_true",
        help="Run for three seconds and exit",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a run configuration from parsed GUI arguments."""
    return SimulationConfig(
        width=args.width,
        height=args.height,
        live_probability=args.probability,
        interval=args.interval,
        seed=args.seed,
    )


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the Tkinter GUI.

    Returns:
        Exit code (0 for success, 1 for invalid arguments)
    """
    args = create_parser().parse_args(argv)
    config = config_from_args(args)

    if not report_config_errors(config):
        return 1

    root = tk.Tk()
    root.resizable(False, False)

    app = TkinterGameOfLifeGUI(root, config)

    if args.test:
        print("Running in test mode...")
        app.toggle_running()

        def auto_exit() -> None:
            print(f"Test completed. Ran {app.simulation.generation} generations.")
            app.stop()
            root.quit()
            root.destroy()

        root.after(3000, auto_exit)

    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
