"""Topological deductions over the graph of edges that are not yet Off.

Once every node has potential degree 0 or at least 2, the non-Off edges
form a plane graph whose faces can be traced. The final loop is a simple
cycle of that graph, so it separates the faces into an inside and an
outside group, and an edge lies on the loop exactly when the faces on its
two sides fall into different groups. Three consequences are used here:

- all On edges must live in one connected component, and components
  without On edges can be switched Off;
- an edge with the outer face on both of its sides (a bridge) is never on
  the loop;
- the edges an inner face shares with the outer face are either all On or
  all Off, so they are all On as soon as one of them is, or as soon as
  removing them would split the On edges apart.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

from ..core.constants import CLOCKWISE, Direction
from ..core.exceptions import GeometryError
from ..core.models import Coordinate, Edge
from ..utils.logger import get_logger
from .board import EdgeBoard


LOGGER = get_logger(__name__)

Step = Tuple[Coordinate, Direction]


class BorderArgument:
    """Applies the component, bridge and shared-border rules to a board."""

    def __init__(self, board: EdgeBoard) -> None:
        self.board = board
        self.geometry = board.geometry

    def apply(self) -> bool:
        """Run one round of the rule; return whether any edge was fixed."""

        board = self.board
        if not board.is_in_progress() or board.has_dead_end():
            return False

        components = self._components(excluded=frozenset())
        with_on = [c for c in components if self._has_on_edge(c)]
        if len(with_on) > 1:
            board.mark_unsolvable("On edges lie in separate components")
            return False

        if not with_on:
            return False

        changed = False
        for component in components:
            if component in with_on:
                continue
            for edge in self._edges_of(component):
                changed |= board.set(edge, False)
        if changed:
            return True

        border = self._walk(self._top_left(with_on[0]), Direction.DOWN, clockwise_first=True)
        directions: Dict[Edge, Set[Direction]] = {}
        for node, direction in border:
            edge = self._edge(node, direction)
            directions.setdefault(edge, set()).add(direction)

        bridges = [edge for edge, seen in directions.items() if len(seen) > 1]
        for edge in bridges:
            if board.is_on(edge):
                board.mark_unsolvable(f"{edge} is a bridge but is on")
                return False
            changed |= board.set(edge, False)
        if changed:
            return True

        border_edges = frozenset(directions)
        traced: Set[FrozenSet[Edge]] = set()
        for node, direction in border:
            face = frozenset(
                self._edge(n, d) for n, d in self._walk(node, direction, clockwise_first=False)
            )
            if face in traced:
                continue
            traced.add(face)
            shared = face & border_edges
            if len(shared) < 2 or all(board.is_on(e) for e in shared):
                continue
            if any(board.is_on(e) for e in shared) or self._splits_on_edges(shared):
                LOGGER.debug("Shared border %s forced on", sorted(shared))
                for edge in sorted(shared):
                    changed |= board.set(edge, True)
                return changed
        return False

    # ------------------------------------------------------------------
    # Graph helpers
    # ------------------------------------------------------------------
    def _neighbours(self, node: Coordinate, excluded: FrozenSet[Edge]) -> Iterable[Coordinate]:
        for direction in CLOCKWISE:
            edge = self.geometry.edge_from_node(node, direction)
            if edge is None or self.board.is_off(edge) or edge in excluded:
                continue
            yield self.geometry.step(node, direction)

    def _components(self, excluded: FrozenSet[Edge]) -> List[FrozenSet[Coordinate]]:
        seen: Set[Coordinate] = set()
        components: List[FrozenSet[Coordinate]] = []
        for start in self.geometry.all_nodes():
            if start in seen or not any(True for _ in self._neighbours(start, excluded)):
                continue
            members = {start}
            queue = deque([start])
            while queue:
                node = queue.popleft()
                for other in self._neighbours(node, excluded):
                    if other not in members:
                        members.add(other)
                        queue.append(other)
            seen |= members
            components.append(frozenset(members))
        return components

    def _edges_of(self, component: FrozenSet[Coordinate]) -> List[Edge]:
        return [
            e for e in self.geometry.all_edges()
            if not self.board.is_off(e) and e.nodes()[0] in component
        ]

    def _has_on_edge(self, component: FrozenSet[Coordinate]) -> bool:
        return any(self.board.is_on(e) for e in self._edges_of(component))

    def _splits_on_edges(self, shared: FrozenSet[Edge]) -> bool:
        on_nodes = {node for e in self.board.on_edges() if e not in shared for node in e.nodes()}
        if not on_nodes:
            return False
        holding = [c for c in self._components(excluded=shared) if c & on_nodes]
        return len(holding) > 1

    def _top_left(self, component: FrozenSet[Coordinate]) -> Coordinate:
        return min(component)

    def _edge(self, node: Coordinate, direction: Direction) -> Edge:
        edge = self.geometry.edge_from_node(node, direction)
        if edge is None:
            raise GeometryError(f"No edge leaves {node} towards {direction.value}")
        return edge

    def _open(self, node: Coordinate, direction: Direction) -> bool:
        edge = self.geometry.edge_from_node(node, direction)
        return edge is not None and not self.board.is_off(edge)

    def _walk(self, start: Coordinate, heading: Direction, clockwise_first: bool) -> List[Step]:
        """Trace one face, returning the directed steps taken.

        Turning clockwise first keeps the traced face on the right of each
        step (the outer face, when starting down from the top-left node);
        turning counter-clockwise first keeps it on the left.
        """

        if not self._open(start, heading):
            raise GeometryError(f"Cannot start a walk from {start} towards {heading.value}")
        steps: List[Step] = []
        node, direction = start, heading
        limit = 2 * self.geometry.edge_count() + 1
        while True:
            steps.append((node, direction))
            if len(steps) > limit:
                raise GeometryError(f"Face walk from {start} did not close")
            node = self.geometry.step(node, direction)
            direction = self._turn(node, direction, clockwise_first)
            if (node, direction) == (start, heading):
                return steps

    def _turn(self, node: Coordinate, direction: Direction, clockwise_first: bool) -> Direction:
        if clockwise_first:
            choices = (direction.clockwise(), direction, direction.counter_clockwise())
        else:
            choices = (direction.counter_clockwise(), direction, direction.clockwise())
        for choice in choices:
            if self._open(node, choice):
                return choice
        raise GeometryError(f"Walk reached {node} with no way forward")
