"""Data models supporting the loop puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .constants import HINT_VALUES, EdgeKind
from .exceptions import PuzzleFormatError

Coordinate = Tuple[int, int]
HintGrid = List[List[Optional[int]]]


@dataclass(frozen=True, order=True)
class Edge:
    """A unit segment of the lattice, addressed by kind and top-left node."""

    kind: EdgeKind
    row: int
    col: int

    @property
    def is_horizontal(self) -> bool:
        return self.kind == EdgeKind.HORIZONTAL

    def nodes(self) -> Tuple[Coordinate, Coordinate]:
        if self.is_horizontal:
            return (self.row, self.col), (self.row, self.col + 1)
        return (self.row, self.col), (self.row + 1, self.col)

    def touches_node(self, node: Coordinate) -> bool:
        return node in self.nodes()

    def common_node(self, other: "Edge") -> Optional[Coordinate]:
        for node in self.nodes():
            if other.touches_node(node):
                return node
        return None


def h_edge(row: int, col: int) -> Edge:
    return Edge(EdgeKind.HORIZONTAL, row, col)


def v_edge(row: int, col: int) -> Edge:
    return Edge(EdgeKind.VERTICAL, row, col)


@dataclass
class Puzzle:
    """An n x n grid of optional hints plus the difficulty it was rated at."""

    grid: HintGrid
    difficulty: int = 0
    size: int = field(init=False)

    def __post_init__(self) -> None:
        self.size = len(self.grid)
        if self.size == 0:
            raise PuzzleFormatError("Puzzle grid must contain at least one row")
        for index, row in enumerate(self.grid):
            if len(row) != self.size:
                raise PuzzleFormatError(
                    f"Row {index} has {len(row)} cells, expected {self.size}"
                )
            for hint in row:
                if hint is not None and hint not in HINT_VALUES:
                    raise PuzzleFormatError(f"Invalid hint {hint!r} in row {index}")

    @classmethod
    def empty(cls, size: int) -> "Puzzle":
        return cls([[None] * size for _ in range(size)])

    def hint(self, row: int, col: int) -> Optional[int]:
        return self.grid[row][col]

    def is_value(self, value: int, row: int, col: int) -> bool:
        if not (0 <= row < self.size and 0 <= col < self.size):
            return False
        return self.grid[row][col] == value

    def number_of_hints(self) -> int:
        return sum(1 for row in self.grid for hint in row if hint is not None)

    def hinted_cells(self) -> List[Coordinate]:
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.grid[r][c] is not None
        ]

    def with_hint(self, row: int, col: int, hint: Optional[int]) -> "Puzzle":
        grid = [list(r) for r in self.grid]
        grid[row][col] = hint
        return Puzzle(grid, self.difficulty)

    def with_hints_removed(self, hints_to_remove: Sequence[bool], difficulty: int = 0) -> "Puzzle":
        """Drop hints selected by a mask indexed over hinted cells in row-major order."""

        grid = [list(r) for r in self.grid]
        for index, (r, c) in enumerate(self.hinted_cells()):
            if index < len(hints_to_remove) and hints_to_remove[index]:
                grid[r][c] = None
        return Puzzle(grid, difficulty)

    def rotated(self) -> "Puzzle":
        """Return the puzzle rotated 90 degrees clockwise."""

        n = self.size
        grid = [[self.grid[n - 1 - c][r] for c in range(n)] for r in range(n)]
        return Puzzle(grid, self.difficulty)
