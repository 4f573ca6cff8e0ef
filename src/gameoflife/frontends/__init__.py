"""Frontend interfaces for the Game of Life.

The Tkinter frontend lives in :mod:`gameoflife.frontends.tkinter_gui` and is
imported on demand so the CLI works without a Tk installation.
"""

from .cli import CLIGameOfLife

__all__ = ["CLIGameOfLife"]
