"""Coordinate mapping between cells, edges and lattice nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ..core.constants import CLOCKWISE, Direction, HDirection, VDirection
from ..core.exceptions import GeometryError
from ..core.models import Coordinate, Edge, h_edge, v_edge


@dataclass(frozen=True)
class Geometry:
    """Stateless lookups for an n x n board.

    Cells live in ``[0, n)^2`` and nodes in ``[0, n]^2``. Lookups that may
    step past the border return ``None``; lookups that require a cell to
    exist raise :class:`GeometryError` when handed one outside the board.
    """

    size: int

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    def contains_cell(self, cell: Coordinate) -> bool:
        return 0 <= cell[0] < self.size and 0 <= cell[1] < self.size

    def contains_node(self, node: Coordinate) -> bool:
        return 0 <= node[0] <= self.size and 0 <= node[1] <= self.size

    def contains_edge(self, edge: Edge) -> bool:
        if edge.is_horizontal:
            return 0 <= edge.row <= self.size and 0 <= edge.col < self.size
        return 0 <= edge.row < self.size and 0 <= edge.col <= self.size

    def _require_cell(self, cell: Coordinate) -> None:
        if not self.contains_cell(cell):
            raise GeometryError(f"Cell {cell} is outside a {self.size}x{self.size} board")

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------
    def edge_count(self) -> int:
        return 2 * self.size * (self.size + 1)

    def all_edges(self) -> Iterator[Edge]:
        n = self.size
        for row in range(n + 1):
            for col in range(n):
                yield h_edge(row, col)
            if row < n:
                for col in range(n + 1):
                    yield v_edge(row, col)

    def all_nodes(self) -> Iterator[Coordinate]:
        for row in range(self.size + 1):
            for col in range(self.size + 1):
                yield (row, col)

    def all_cells(self) -> Iterator[Coordinate]:
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def corner_nodes(self) -> List[Coordinate]:
        n = self.size
        return [(0, 0), (0, n), (n, n), (n, 0)]

    # ------------------------------------------------------------------
    # Cell lookups
    # ------------------------------------------------------------------
    def edge_from_cell(self, cell: Coordinate, direction: Direction) -> Edge:
        self._require_cell(cell)
        row, col = cell
        if direction == Direction.UP:
            return h_edge(row, col)
        if direction == Direction.DOWN:
            return h_edge(row + 1, col)
        if direction == Direction.LEFT:
            return v_edge(row, col)
        return v_edge(row, col + 1)

    def edges_from_cell(self, cell: Coordinate) -> Tuple[Edge, Edge, Edge, Edge]:
        up, right, down, left = (self.edge_from_cell(cell, d) for d in CLOCKWISE)
        return up, right, down, left

    def nodes_from_cell(self, cell: Coordinate) -> Tuple[Coordinate, ...]:
        row, col = cell
        return ((row, col), (row + 1, col), (row, col + 1), (row + 1, col + 1))

    def node_from_cell(self, cell: Coordinate, hd: HDirection, vd: VDirection) -> Coordinate:
        row = cell[0] if vd == VDirection.UP else cell[0] + 1
        col = cell[1] if hd == HDirection.LEFT else cell[1] + 1
        return (row, col)

    def cell_from_cell(self, cell: Coordinate, direction: Direction) -> Optional[Coordinate]:
        dr, dc = direction.delta
        neighbour = (cell[0] + dr, cell[1] + dc)
        return neighbour if self.contains_cell(neighbour) else None

    # ------------------------------------------------------------------
    # Node lookups
    # ------------------------------------------------------------------
    def step(self, node: Coordinate, direction: Direction) -> Optional[Coordinate]:
        dr, dc = direction.delta
        neighbour = (node[0] + dr, node[1] + dc)
        return neighbour if self.contains_node(neighbour) else None

    def edge_from_node(self, node: Coordinate, direction: Direction) -> Optional[Edge]:
        row, col = node
        if direction == Direction.UP:
            return v_edge(row - 1, col) if row > 0 else None
        if direction == Direction.DOWN:
            return v_edge(row, col) if row < self.size else None
        if direction == Direction.LEFT:
            return h_edge(row, col - 1) if col > 0 else None
        return h_edge(row, col) if col < self.size else None

    def edges_from_node(self, node: Coordinate) -> Tuple[Optional[Edge], ...]:
        return tuple(self.edge_from_node(node, d) for d in CLOCKWISE)

    def cell_from_node(self, node: Coordinate, hd: HDirection, vd: VDirection) -> Optional[Coordinate]:
        row = node[0] - 1 if vd == VDirection.UP else node[0]
        col = node[1] - 1 if hd == HDirection.LEFT else node[1]
        cell = (row, col)
        return cell if self.contains_cell(cell) else None

    def cells_from_node(self, node: Coordinate) -> Tuple[Optional[Coordinate], ...]:
        return (
            self.cell_from_node(node, HDirection.RIGHT, VDirection.UP),
            self.cell_from_node(node, HDirection.RIGHT, VDirection.DOWN),
            self.cell_from_node(node, HDirection.LEFT, VDirection.DOWN),
            self.cell_from_node(node, HDirection.LEFT, VDirection.UP),
        )

    def node_from_node(self, node: Coordinate, hd: HDirection, vd: VDirection) -> Optional[Coordinate]:
        dr = -1 if vd == VDirection.UP else 1
        dc = -1 if hd == HDirection.LEFT else 1
        other = (node[0] + dr, node[1] + dc)
        return other if self.contains_node(other) else None

    # ------------------------------------------------------------------
    # Edge lookups
    # ------------------------------------------------------------------
    def nodes_from_edge(self, edge: Edge) -> Tuple[Coordinate, Coordinate]:
        return edge.nodes()

    def cells_from_edge(self, edge: Edge) -> Tuple[Optional[Coordinate], Optional[Coordinate]]:
        if edge.is_horizontal:
            before = (edge.row - 1, edge.col)
            after = (edge.row, edge.col)
        else:
            before = (edge.row, edge.col - 1)
            after = (edge.row, edge.col)
        return (
            before if self.contains_cell(before) else None,
            after if self.contains_cell(after) else None,
        )

    def edge_between(self, a: Coordinate, b: Coordinate) -> Optional[Edge]:
        """Return the edge joining two nodes, or ``None`` if they are not adjacent."""

        for direction in CLOCKWISE:
            if self.step(a, direction) == b:
                return self.edge_from_node(a, direction)
        return None

    def direction_between(self, a: Coordinate, b: Coordinate) -> Direction:
        for direction in CLOCKWISE:
            dr, dc = direction.delta
            if (a[0] + dr, a[1] + dc) == b:
                return direction
        raise GeometryError(f"Nodes {a} and {b} are not adjacent")
