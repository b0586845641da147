"""Single-loop edge puzzle (Slitherlink) solver and generator.

This package exposes the public API surface via:

- ``loopy.engine.solver.Solver``: propagation plus search over one puzzle.
- ``loopy.engine.generator.PuzzleGenerator``: builds minimal unique puzzles.
- ``loopy.io.puzzle_text`` helpers: the dotted text form of a puzzle.
"""

from .core.constants import Status
from .core.models import Puzzle
from .engine.generator import GeneratorConfig, PuzzleGenerator
from .engine.solver import Solver, solve
from .io.puzzle_text import format_puzzle, parse_puzzle

__all__ = [
    "Puzzle",
    "Status",
    "Solver",
    "solve",
    "PuzzleGenerator",
    "GeneratorConfig",
    "parse_puzzle",
    "format_puzzle",
]

__version__ = "0.1.0"
