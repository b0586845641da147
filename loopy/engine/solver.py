"""Propagation plus depth-first search over undecided edges."""

from __future__ import annotations

from typing import List, Optional

from ..core.constants import EdgeState, Status
from ..core.models import Edge, Puzzle
from ..utils.logger import get_logger
from ..utils.pretty import render_board
from .board import EdgeBoard
from .rules import ConstraintEngine
from .seeder import InitialSeeder


LOGGER = get_logger(__name__)


class Solver:
    """Owns one board and decides how many loops satisfy its puzzle.

    ``full_solve`` first propagates, then guesses one edge at a time. Each
    guess runs on a clone, so branches never share mutable state.
    ``depth_needed`` records the deepest guess explored and doubles as the
    difficulty rating of a puzzle.
    """

    def __init__(self, puzzle: Puzzle, board: Optional[EdgeBoard] = None) -> None:
        self.puzzle = puzzle
        self.board = board if board is not None else EdgeBoard(puzzle)
        self.depth_needed = 0
        self._seeded = False
        self._bind()

    def _bind(self) -> None:
        self.engine = ConstraintEngine(self.board)
        self.seeder = InitialSeeder(self.board, self.engine.corners)

    def clone(self) -> "Solver":
        other = Solver(self.puzzle, self.board.clone())
        other.depth_needed = self.depth_needed
        other._seeded = self._seeded
        return other

    def _adopt(self, other: "Solver") -> None:
        self.board = other.board
        self._bind()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def status(self) -> Status:
        return self.board.status

    def edge_state(self, edge: Edge) -> EdgeState:
        return self.board.state(edge)

    def set(self, edge: Edge, on: bool) -> bool:
        return self.board.set(edge, on)

    def to_string(self) -> str:
        return render_board(self.board)

    def __str__(self) -> str:
        return self.to_string()

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------
    def non_recursive_solve(self) -> Status:
        """Seed once, then propagate to a fixpoint without guessing."""

        if not self._seeded:
            self._seeded = True
            self.seeder.seed()
        return self.engine.propagate()

    def full_solve(self, depth: int = 0, log_enabled: bool = False) -> List["Solver"]:
        """Solve completely and return the solved boards found.

        The list holds one solver for a unique solution, at least two for
        multiple solutions and none when the puzzle is unsolvable.
        """

        self.depth_needed = max(self.depth_needed, depth)
        self.non_recursive_solve()
        indent = "  " * depth

        while self.status == Status.IN_PROGRESS:
            edge = self._choose_edge()
            if edge is None:
                self.board.mark_unsolvable("no undecided edge left to guess")
                break
            if log_enabled:
                LOGGER.info("%sdepth %d: guessing %s", indent, depth, edge)

            off_branch = self.clone()
            off_branch.set(edge, False)
            off_solutions = off_branch.full_solve(depth + 1, log_enabled)
            self.depth_needed = max(self.depth_needed, off_branch.depth_needed)

            if off_branch.status == Status.UNSOLVABLE:
                if log_enabled:
                    LOGGER.info("%sdepth %d: %s must be on", indent, depth, edge)
                self.set(edge, True)
                self.engine.propagate()
                continue

            if off_branch.status == Status.MULTIPLE_SOLUTIONS:
                self.board.status = Status.MULTIPLE_SOLUTIONS
                return off_solutions

            on_branch = self.clone()
            on_branch.set(edge, True)
            on_solutions = on_branch.full_solve(depth + 1, log_enabled)
            self.depth_needed = max(self.depth_needed, on_branch.depth_needed)

            if on_branch.status == Status.UNSOLVABLE:
                self._adopt(off_branch)
            else:
                self.board.status = Status.MULTIPLE_SOLUTIONS
                return off_solutions + on_solutions

        if log_enabled:
            LOGGER.info("%sdepth %d: %s", indent, depth, self.status.value)
        if self.status == Status.UNIQUE_SOLUTION:
            return [self]
        return []

    def _choose_edge(self) -> Optional[Edge]:
        """First undecided edge beside a hint, else the first undecided edge."""

        fallback: Optional[Edge] = None
        for edge in self.board.edges():
            if not self.board.is_unknown(edge):
                continue
            if any(
                cell is not None and self.board.hint(cell) is not None
                for cell in self.board.geometry.cells_from_edge(edge)
            ):
                return edge
            if fallback is None:
                fallback = edge
        return fallback


def solve(puzzle: Puzzle, log_enabled: bool = False) -> Solver:
    """Run a full solve and return the solver holding the outcome."""

    solver = Solver(puzzle)
    solver.full_solve(log_enabled=log_enabled)
    return solver
