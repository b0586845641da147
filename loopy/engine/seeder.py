"""One-shot deductions applied before the first propagation pass."""

from __future__ import annotations

from typing import Optional

from ..core.constants import Direction, HDirection, VDirection
from ..core.models import Coordinate, h_edge, v_edge
from ..utils.logger import get_logger
from .board import EdgeBoard
from .corners import CornerInference


LOGGER = get_logger(__name__)


class InitialSeeder:
    """Reads hint patterns that settle edges without any search.

    The patterns are the usual opening moves of a human solver: zeros and
    fours, hints in board corners, pairs of adjacent or diagonal threes,
    and a three beside a one along the border.
    """

    def __init__(self, board: EdgeBoard, corners: CornerInference) -> None:
        self.board = board
        self.corners = corners
        self.geometry = board.geometry
        self.size = board.size

    def seed(self) -> None:
        self.hint_analysis()
        self.board_corner_analysis()
        self.corner_hint_analysis()
        self.adjacent_threes()
        self.diagonal_threes()
        self.boundary_three_beside_one()
        LOGGER.debug(
            "Seeded %dx%d board: %d on, %d off", self.size, self.size, self.board.num_on, self.board.num_off
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _hint(self, row: int, col: int) -> Optional[int]:
        if 0 <= row < self.size and 0 <= col < self.size:
            return self.board.puzzle.hint(row, col)
        return None

    def _set_cell_edge(self, cell: Optional[Coordinate], direction: Direction, on: bool) -> None:
        if cell is not None:
            self.board.set(self.geometry.edge_from_cell(cell, direction), on)

    def _pair_loop_fits(self, first: Coordinate, second: Coordinate) -> bool:
        """Whether the loop around two neighbouring cells satisfies every hint."""

        around = set(self.geometry.edges_from_cell(first)) ^ set(self.geometry.edges_from_cell(second))
        for cell in self.board.puzzle.hinted_cells():
            used = sum(1 for e in self.geometry.edges_from_cell(cell) if e in around)
            if used != self.board.hint(cell):
                return False
        return True

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------
    def hint_analysis(self) -> None:
        board = self.board
        has_four = False
        has_two_or_three = False
        for cell in self.geometry.all_cells():
            hint = board.hint(cell)
            if hint == 0:
                for edge in self.geometry.edges_from_cell(cell):
                    board.set(edge, False)
            elif hint == 4:
                has_four = True
                for edge in self.geometry.edges_from_cell(cell):
                    board.set(edge, True)
            elif hint in (2, 3):
                # A loop around one cell leaves every other cell with at most one On edge.
                has_two_or_three = True
                board.can_be_single_cell = False
        if has_four and has_two_or_three:
            board.mark_unsolvable("a 4 hint cannot share the board with a 2 or a 3")

    def board_corner_analysis(self) -> None:
        """A board corner node has two edges, so it is never an entry corner."""

        n = self.size
        self.corners.remove_entry_at_node((0, 0), HDirection.RIGHT, VDirection.DOWN)
        self.corners.remove_entry_at_node((0, n), HDirection.LEFT, VDirection.DOWN)
        self.corners.remove_entry_at_node((n, n), HDirection.LEFT, VDirection.UP)
        self.corners.remove_entry_at_node((n, 0), HDirection.RIGHT, VDirection.UP)

    def corner_hint_analysis(self) -> None:
        n = self.size
        for hd in (HDirection.LEFT, HDirection.RIGHT):
            col = 0 if hd == HDirection.LEFT else n - 1
            for vd in (VDirection.UP, VDirection.DOWN):
                row = 0 if vd == VDirection.UP else n - 1
                cell = (row, col)
                hint = self.board.hint(cell)
                if hint == 1:
                    self._set_cell_edge(cell, hd.to_direction(), False)
                    self._set_cell_edge(cell, vd.to_direction(), False)
                elif hint == 3:
                    self._set_cell_edge(cell, hd.to_direction(), True)
                    self._set_cell_edge(cell, vd.to_direction(), True)
                elif hint == 2 and n > 1:
                    h_cell = self.geometry.cell_from_cell(cell, hd.opposite().to_direction())
                    v_cell = self.geometry.cell_from_cell(cell, vd.opposite().to_direction())
                    self._set_cell_edge(h_cell, vd.to_direction(), True)
                    self._set_cell_edge(v_cell, hd.to_direction(), True)
                    # A 3 beside the corner 2 has its far side On.
                    if h_cell is not None and self.board.hint(h_cell) == 3:
                        self._set_cell_edge(h_cell, hd.opposite().to_direction(), True)
                    if v_cell is not None and self.board.hint(v_cell) == 3:
                        self._set_cell_edge(v_cell, vd.opposite().to_direction(), True)

    def adjacent_threes(self) -> None:
        """Two neighbouring 3s own the three parallel lines around them.

        The one exception is a loop running around the pair itself, which
        leaves the shared side Off. Pairs whose surrounding rectangle meets
        every hint on the board are left to propagation and search.
        """

        for row, col in self.geometry.all_cells():
            if self._hint(row, col) != 3:
                continue
            if self._hint(row + 1, col) == 3 and not self._pair_loop_fits((row, col), (row + 1, col)):
                for line in range(row, row + 3):
                    self.board.set(h_edge(line, col), True)
                self.board.set(self.geometry.edge_from_node((row + 1, col), Direction.LEFT), False)
                self.board.set(self.geometry.edge_from_node((row + 1, col + 1), Direction.RIGHT), False)
            if self._hint(row, col + 1) == 3 and not self._pair_loop_fits((row, col), (row, col + 1)):
                for line in range(col, col + 3):
                    self.board.set(v_edge(row, line), True)
                self.board.set(self.geometry.edge_from_node((row, col + 1), Direction.UP), False)
                self.board.set(self.geometry.edge_from_node((row + 1, col + 1), Direction.DOWN), False)

    def diagonal_threes(self) -> None:
        """Two 3s on a diagonal, joined by nothing but 2s, have their far corners On."""

        for row, col in self.geometry.all_cells():
            if self._hint(row, col) != 3:
                continue
            for hd in (HDirection.LEFT, HDirection.RIGHT):
                dc = -1 if hd == HDirection.LEFT else 1
                step = 1
                while self._hint(row + step, col + dc * step) == 2:
                    step += 1
                if self._hint(row + step, col + dc * step) != 3:
                    continue
                near = (row, col)
                far = (row + step, col + dc * step)
                # Near cell: the sides facing away from the diagonal.
                self._set_cell_edge(near, Direction.UP, True)
                self._set_cell_edge(near, hd.opposite().to_direction(), True)
                self._set_cell_edge(far, Direction.DOWN, True)
                self._set_cell_edge(far, hd.to_direction(), True)

    def boundary_three_beside_one(self) -> None:
        """A 3 next to a 1 along the border has its border side On."""

        n = self.size
        for index in range(n):
            for outward, cell in (
                (Direction.UP, (0, index)),
                (Direction.DOWN, (n - 1, index)),
                (Direction.LEFT, (index, 0)),
                (Direction.RIGHT, (index, n - 1)),
            ):
                if self.board.hint(cell) != 3:
                    continue
                for along in (outward.clockwise(), outward.counter_clockwise()):
                    neighbour = self.geometry.cell_from_cell(cell, along)
                    if neighbour is not None and self.board.hint(neighbour) == 1:
                        self._set_cell_edge(cell, outward, True)
