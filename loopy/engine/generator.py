"""Puzzle generator orchestration.

Two-phase approach:
  1. Grow: add random hints on random cells until the puzzle has exactly
     one solution.
  2. Trim: visit the hinted cells in random order and drop every hint the
     puzzle can do without while staying uniquely solvable.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core.constants import Status
from ..core.exceptions import GenerationError, LoopyError, ValidationError
from ..core.models import Coordinate, HintGrid, Puzzle
from ..utils.logger import get_logger
from .cpsat import CpSatConfig, count_solutions
from .solver import Solver
from .validator import BoardValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    size: int
    seed: Optional[int] = None
    max_restarts: int = 10
    hint_values: Tuple[int, ...] = (0, 1, 2, 3)
    verify_with_cpsat: bool = False
    cpsat_timeout: float = 10.0

    def to_cpsat_config(self) -> CpSatConfig:
        return CpSatConfig(timeout=self.cpsat_timeout)


@dataclass
class GeneratedPuzzle:
    puzzle: Puzzle
    solver: Solver
    attempts: int
    validation_messages: List[str] = field(default_factory=list)
    seed: Optional[int] = None

    @property
    def difficulty(self) -> int:
        return self.puzzle.difficulty


class PuzzleGenerator:
    """Builds minimal, uniquely solvable puzzles of a given size."""

    def __init__(self, config: GeneratorConfig) -> None:
        if config.size < 2:
            # Only a blank 1x1 board is solvable without a 4.
            raise GenerationError(f"Board size must be at least 2, got {config.size}")
        if not config.hint_values:
            raise GenerationError("At least one hint value is required")
        self.config = config
        self.rng = random.Random(config.seed)
        self.validator = BoardValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> GeneratedPuzzle:
        for attempt in range(1, self.config.max_restarts + 1):
            LOGGER.info("Generation attempt %s/%s", attempt, self.config.max_restarts)
            try:
                grid, hinted, solver = self._grow_hints()
                puzzle, solver = self._trim_hints(grid, hinted, solver)
                validation = self.validator.validate(solver.board, puzzle)
                if not validation.ok:
                    raise ValidationError(f"Generated board failed validation: {validation.messages}")
                if self.config.verify_with_cpsat:
                    self._verify(puzzle)
                LOGGER.info(
                    "Generated %dx%d puzzle with %d hints at difficulty %d",
                    puzzle.size, puzzle.size, puzzle.number_of_hints(), puzzle.difficulty,
                )
                return GeneratedPuzzle(
                    puzzle=puzzle,
                    solver=solver,
                    attempts=attempt,
                    validation_messages=validation.messages,
                    seed=self.config.seed,
                )
            except LoopyError as exc:
                LOGGER.warning("Generation attempt failed: %s", exc)
                continue
        raise GenerationError("Unable to generate a uniquely solvable puzzle after retries")

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _grow_hints(self) -> Tuple[HintGrid, List[Coordinate], Solver]:
        n = self.config.size
        grid: HintGrid = [[None] * n for _ in range(n)]
        empty_cells = [(r, c) for r in range(n) for c in range(n)]
        self.rng.shuffle(empty_cells)
        hinted: List[Coordinate] = []

        while empty_cells:
            row, col = empty_cells.pop()
            values = list(self.config.hint_values)
            self.rng.shuffle(values)
            status = Status.UNSOLVABLE
            solver: Optional[Solver] = None
            while values and status == Status.UNSOLVABLE:
                grid[row][col] = values.pop()
                solver = Solver(Puzzle([list(r) for r in grid]))
                solver.full_solve()
                status = solver.status
            if status == Status.UNSOLVABLE:
                raise GenerationError(f"No hint value at {(row, col)} keeps the puzzle solvable")
            hinted.append((row, col))
            LOGGER.debug("Hint %s at %s leaves the puzzle %s", grid[row][col], (row, col), status.value)
            if status == Status.UNIQUE_SOLUTION:
                return grid, hinted, solver
        raise GenerationError("Ran out of cells before the puzzle became unique")

    def _trim_hints(
        self, grid: HintGrid, hinted: List[Coordinate], solver: Solver
    ) -> Tuple[Puzzle, Solver]:
        order = list(hinted)
        self.rng.shuffle(order)
        for row, col in order:
            hint = grid[row][col]
            grid[row][col] = None
            candidate = Solver(Puzzle([list(r) for r in grid]))
            candidate.full_solve()
            if candidate.status == Status.UNIQUE_SOLUTION:
                solver = candidate
            else:
                grid[row][col] = hint
        puzzle = Puzzle([list(r) for r in grid], difficulty=solver.depth_needed)
        return puzzle, solver

    def _verify(self, puzzle: Puzzle) -> None:
        result = count_solutions(puzzle, self.config.to_cpsat_config())
        if not result.exhausted:
            LOGGER.warning("CP-SAT could not confirm uniqueness within %.1fs", self.config.cpsat_timeout)
            return
        if result.status != Status.UNIQUE_SOLUTION:
            raise ValidationError(f"CP-SAT disagrees: puzzle is {result.status.value}")


def generate_puzzle(size: int, seed: Optional[int] = None) -> Puzzle:
    return PuzzleGenerator(GeneratorConfig(size=size, seed=seed)).generate().puzzle
