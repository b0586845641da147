"""Mutable tri-state edge store with the single mutation entry point."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterable, Iterator, List, Optional, Set, TypeVar

from ..core.constants import EdgeState, Status
from ..core.models import Coordinate, Edge, Puzzle
from ..utils.logger import get_logger
from .geometry import Geometry
from .paths import EndpointPair, PathTracker


LOGGER = get_logger(__name__)

T = TypeVar("T")


class WorkQueue(Generic[T]):
    """FIFO queue that ignores items already waiting in it."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._order: Deque[T] = deque()
        self._waiting: Set[T] = set()
        for item in items:
            self.push(item)

    def push(self, item: T) -> None:
        if item not in self._waiting:
            self._waiting.add(item)
            self._order.append(item)

    def pop(self) -> T:
        item = self._order.popleft()
        self._waiting.discard(item)
        return item

    def clear(self) -> None:
        self._order.clear()
        self._waiting.clear()

    def copy(self) -> "WorkQueue[T]":
        other: WorkQueue[T] = WorkQueue()
        other._order = deque(self._order)
        other._waiting = set(self._waiting)
        return other

    def __contains__(self, item: object) -> bool:
        return item in self._waiting

    def __len__(self) -> int:
        return len(self._order)

    def __bool__(self) -> bool:
        return bool(self._order)


class EdgeBoard:
    """Edge flags, path bookkeeping and the queues of work derived from changes.

    Every edge keeps an On flag and an Off flag. Setting both is a logical
    contradiction: it is recorded (so renderers can show where it happened)
    and turns the status to ``UNSOLVABLE``.
    """

    def __init__(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        self.geometry = Geometry(puzzle.size)
        self.size = puzzle.size
        self._vertical_offset = (self.size + 1) * self.size
        count = self.geometry.edge_count()
        self._on: List[bool] = [False] * count
        self._off: List[bool] = [False] * count
        self.paths = PathTracker()
        self.cell_queue: WorkQueue[Coordinate] = WorkQueue(self.geometry.all_cells())
        self.node_queue: WorkQueue[Coordinate] = WorkQueue(self.geometry.all_nodes())
        self.corner_queue: WorkQueue[Coordinate] = WorkQueue(self.geometry.all_nodes())
        self.path_queue: WorkQueue[EndpointPair] = WorkQueue()
        self.status = Status.IN_PROGRESS
        self.num_on = 0
        self.num_off = 0
        self.changed = False
        self.can_be_single_cell = True

    def clone(self) -> "EdgeBoard":
        other = EdgeBoard.__new__(EdgeBoard)
        other.puzzle = self.puzzle
        other.geometry = self.geometry
        other.size = self.size
        other._vertical_offset = self._vertical_offset
        other._on = list(self._on)
        other._off = list(self._off)
        other.paths = PathTracker()
        other.paths.endpoints = dict(self.paths.endpoints)
        other.paths.num_loops = self.paths.num_loops
        other.cell_queue = self.cell_queue.copy()
        other.node_queue = self.node_queue.copy()
        other.corner_queue = self.corner_queue.copy()
        other.path_queue = self.path_queue.copy()
        other.status = self.status
        other.num_on = self.num_on
        other.num_off = self.num_off
        other.changed = self.changed
        other.can_be_single_cell = self.can_be_single_cell
        return other

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def index(self, edge: Edge) -> int:
        if edge.is_horizontal:
            return edge.row * self.size + edge.col
        return self._vertical_offset + edge.row * (self.size + 1) + edge.col

    def state(self, edge: Edge) -> EdgeState:
        idx = self.index(edge)
        if self._on[idx]:
            return EdgeState.ON
        if self._off[idx]:
            return EdgeState.OFF
        return EdgeState.UNKNOWN

    def is_on(self, edge: Optional[Edge]) -> bool:
        return edge is not None and self._on[self.index(edge)]

    def is_off(self, edge: Optional[Edge]) -> bool:
        """Off, or missing because it would lie past the border."""

        return edge is None or self._off[self.index(edge)]

    def is_unknown(self, edge: Optional[Edge]) -> bool:
        if edge is None:
            return False
        idx = self.index(edge)
        return not self._on[idx] and not self._off[idx]

    def is_contradictory(self, edge: Edge) -> bool:
        idx = self.index(edge)
        return self._on[idx] and self._off[idx]

    def hint(self, cell: Coordinate) -> Optional[int]:
        return self.puzzle.grid[cell[0]][cell[1]]

    def potential_degree(self, node: Coordinate) -> int:
        return sum(1 for e in self.geometry.edges_from_node(node) if e is not None and not self.is_off(e))

    def on_degree(self, node: Coordinate) -> int:
        return sum(1 for e in self.geometry.edges_from_node(node) if self.is_on(e))

    def has_dead_end(self) -> bool:
        return any(self.potential_degree(node) == 1 for node in self.geometry.all_nodes())

    def edges(self) -> Iterator[Edge]:
        return self.geometry.all_edges()

    def unknown_edges(self) -> List[Edge]:
        return [e for e in self.geometry.all_edges() if self.is_unknown(e)]

    def on_edges(self) -> List[Edge]:
        return [e for e in self.geometry.all_edges() if self.is_on(e)]

    def is_in_progress(self) -> bool:
        return self.status == Status.IN_PROGRESS

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def mark_unsolvable(self, reason: str) -> None:
        if self.status != Status.UNSOLVABLE:
            LOGGER.debug("Contradiction: %s", reason)
        self.status = Status.UNSOLVABLE

    def set(self, edge: Optional[Edge], on: bool) -> bool:
        """Fix an edge On or Off and enqueue the work the change implies.

        ``None`` stands for an edge past the border, which is always Off:
        asking for it to be On is a contradiction. Returns whether anything
        changed.
        """

        if edge is None:
            if on:
                self.mark_unsolvable("an edge past the border would have to be on")
            return False

        idx = self.index(edge)
        if on:
            if self._on[idx]:
                return False
            self._on[idx] = True
            self.num_on += 1
            if self._off[idx]:
                self.mark_unsolvable(f"{edge} forced both on and off")
            a, b = edge.nodes()
            paths_before = len(self.paths.endpoints)
            pair = self.paths.add_edge(a, b)
            if pair is not None:
                self.path_queue.push(pair)
                if len(self.paths.endpoints) > paths_before:
                    for other in self.paths.open_paths():
                        self.path_queue.push(other)
        else:
            if self._off[idx]:
                return False
            self._off[idx] = True
            self.num_off += 1
            if self._on[idx]:
                self.mark_unsolvable(f"{edge} forced both on and off")
            if self.num_off >= len(self._off) and not self.paths.has_loop():
                self.mark_unsolvable("every edge is off")

        self.changed = True
        for node in edge.nodes():
            self.node_queue.push(node)
            self.corner_queue.push(node)
        for cell in self.geometry.cells_from_edge(edge):
            if cell is None:
                continue
            self.cell_queue.push(cell)
            for corner in self.geometry.nodes_from_cell(cell):
                self.node_queue.push(corner)
                self.corner_queue.push(corner)
        return True

    def consume_change(self) -> bool:
        changed = self.changed
        self.changed = False
        return changed
