"""Entry/exit corner deductions.

Every node ends with degree 0 or 2. Looking at a node from one of the (up
to four) cells around it, the loop either misses the node, passes along
two of the cell's edges, passes along two outside edges, or uses exactly
one edge of each kind. In the last case the node is an *entry corner* of
the cell: the loop crosses into or out of the cell diagonally there.

A few facts make the concept useful:

- a corner is entered exactly when the cell's two edges there differ, and
  equivalently when the two outside edges differ;
- the cell diagonally across the node sees the same node as an entry
  exactly when this cell does;
- entry corners of a cell come in pairs, since the On edges of its border
  form arcs and every arc has two ends;
- hints 1 and 3 therefore have two adjacent entry corners, opposite
  corners of a 2 agree, and 0 and 4 have none.

Assertions are addressed by *quadrant*: a node plus the horizontal and
vertical direction pointing from the node into the cell. The cell may lie
past the border, in which case its missing edges count as Off.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Set, Tuple

from ..core.constants import CLOCKWISE, QUADRANTS, Direction, EntryStatus, HDirection, VDirection
from ..core.models import Coordinate, Edge
from .board import EdgeBoard


Quadrant = Tuple[Coordinate, HDirection, VDirection]
CELL_CORNERS: Tuple[Tuple[HDirection, VDirection], ...] = QUADRANTS


class CornerInference:
    """Applies entry and non-entry assertions until nothing new follows."""

    def __init__(self, board: EdgeBoard) -> None:
        self.board = board
        self.geometry = board.geometry
        self._entries_seen: Set[Quadrant] = set()
        self._removals_seen: Set[Quadrant] = set()
        self._agenda: Deque[Tuple[bool, Quadrant]] = deque()
        self._draining = False

    def reset(self) -> None:
        """Forget which quadrants were asserted; called once per propagation pass."""

        self._entries_seen.clear()
        self._removals_seen.clear()

    # ------------------------------------------------------------------
    # Public assertions
    # ------------------------------------------------------------------
    def enter_node(self, node: Coordinate, hd: HDirection, vd: VDirection) -> None:
        """Assert that the cell in quadrant (hd, vd) of ``node`` is entered there."""

        self._assert((node, hd, vd), True)

    def remove_entry_at_node(self, node: Coordinate, hd: HDirection, vd: VDirection) -> None:
        """Assert that the cell in quadrant (hd, vd) of ``node`` is not entered there."""

        self._assert((node, hd, vd), False)

    def enter_corner(self, cell: Coordinate, hd: HDirection, vd: VDirection) -> None:
        """Cell-relative form of :meth:`enter_node` for the (hd, vd) corner of ``cell``."""

        node = self.geometry.node_from_cell(cell, hd, vd)
        self.enter_node(node, hd.opposite(), vd.opposite())

    def remove_entry_at_corner(self, cell: Coordinate, hd: HDirection, vd: VDirection) -> None:
        node = self.geometry.node_from_cell(cell, hd, vd)
        self.remove_entry_at_node(node, hd.opposite(), vd.opposite())

    def entry_status(self, cell: Coordinate, hd: HDirection, vd: VDirection) -> EntryStatus:
        board = self.board
        node = self.geometry.node_from_cell(cell, hd, vd)
        h_edge = self.geometry.edge_from_cell(cell, vd.to_direction())
        v_edge = self.geometry.edge_from_cell(cell, hd.to_direction())
        h_out = self.geometry.edge_from_node(node, hd.to_direction())
        v_out = self.geometry.edge_from_node(node, vd.to_direction())

        if board.is_on(h_edge) and board.is_on(v_edge):
            return EntryStatus.NOT_ENTRY_FOR_SURE
        if board.is_off(h_edge) and board.is_off(v_edge):
            return EntryStatus.NOT_ENTRY_FOR_SURE
        if board.is_on(h_out) and board.is_on(v_out):
            return EntryStatus.NOT_ENTRY_FOR_SURE
        if board.is_off(h_out) and board.is_off(v_out):
            return EntryStatus.NOT_ENTRY_FOR_SURE

        if board.is_on(h_edge) and board.is_off(v_edge):
            return EntryStatus.ENTRY_FOR_SURE
        if board.is_off(h_edge) and board.is_on(v_edge):
            return EntryStatus.ENTRY_FOR_SURE
        if board.is_on(h_out) and board.is_off(v_out):
            return EntryStatus.ENTRY_FOR_SURE
        if board.is_off(h_out) and board.is_on(v_out):
            return EntryStatus.ENTRY_FOR_SURE

        return EntryStatus.POTENTIAL_ENTRY

    # ------------------------------------------------------------------
    # Queue driven pass
    # ------------------------------------------------------------------
    def apply_corner_arguments(self) -> None:
        """Re-examine every queued node and assert what its edges imply."""

        board = self.board
        while board.corner_queue and board.is_in_progress():
            node = board.corner_queue.pop()
            for hd, vd in QUADRANTS:
                a = self.geometry.edge_from_node(node, hd.to_direction())
                b = self.geometry.edge_from_node(node, vd.to_direction())
                if board.is_unknown(a) or board.is_unknown(b):
                    continue
                if board.is_on(a) != board.is_on(b):
                    self.enter_node(node, hd, vd)
                else:
                    self.remove_entry_at_node(node, hd, vd)
            self._apply_unknown_pair(node)

    def _apply_unknown_pair(self, node: Coordinate) -> None:
        # Exactly two unknown edges meeting at a right angle: the node's
        # degree decides whether they match.
        board = self.board
        edges = self.geometry.edges_from_node(node)
        unknown = [d for d, e in zip(CLOCKWISE, edges) if board.is_unknown(e)]
        if len(unknown) != 2:
            return
        on_count = sum(1 for e in edges if board.is_on(e))
        if on_count > 1:
            return
        quadrant = _quadrant_of(unknown[0], unknown[1])
        if quadrant is None:
            return
        hd, vd = quadrant
        if on_count == 0:
            self.remove_entry_at_node(node, hd, vd)
        else:
            self.enter_node(node, hd, vd)

    # ------------------------------------------------------------------
    # Agenda
    # ------------------------------------------------------------------
    def _assert(self, quadrant: Quadrant, entered: bool) -> None:
        seen = self._entries_seen if entered else self._removals_seen
        if quadrant in seen:
            return
        opposite = self._removals_seen if entered else self._entries_seen
        if quadrant in opposite:
            self.board.mark_unsolvable(f"quadrant {quadrant} both entered and not entered")
            return
        seen.add(quadrant)
        self._agenda.append((entered, quadrant))
        if not self._draining:
            self._drain()

    def _drain(self) -> None:
        self._draining = True
        try:
            while self._agenda and self.board.is_in_progress():
                entered, (node, hd, vd) = self._agenda.popleft()
                if entered:
                    self._apply_entry(node, hd, vd)
                else:
                    self._apply_non_entry(node, hd, vd)
        finally:
            self._draining = False
            if not self.board.is_in_progress():
                self._agenda.clear()

    # ------------------------------------------------------------------
    # Consequences
    # ------------------------------------------------------------------
    def _apply_entry(self, node: Coordinate, qhd: HDirection, qvd: VDirection) -> None:
        board = self.board
        a = self.geometry.edge_from_node(node, qhd.to_direction())
        b = self.geometry.edge_from_node(node, qvd.to_direction())
        if a is None and b is None:
            board.mark_unsolvable(f"corner {node} of a cell past the border cannot be entered")
            return
        self._force_differ(a, b)
        self.enter_node(node, qhd.opposite(), qvd.opposite())

        cell = self.geometry.cell_from_node(node, qhd, qvd)
        if cell is None:
            return
        hd, vd = qhd.opposite(), qvd.opposite()
        other_h = self.geometry.edge_from_cell(cell, vd.opposite().to_direction())
        other_v = self.geometry.edge_from_cell(cell, hd.opposite().to_direction())

        hint = board.hint(cell)
        if hint in (0, 4):
            board.mark_unsolvable(f"cell {cell} with hint {hint} entered at {node}")
            return
        if hint == 1:
            board.set(other_h, False)
            board.set(other_v, False)
        elif hint == 3:
            board.set(other_h, True)
            board.set(other_v, True)
        elif hint == 2:
            self.enter_corner(cell, hd.opposite(), vd.opposite())

        self._balance_corners(cell)

    def _apply_non_entry(self, node: Coordinate, qhd: HDirection, qvd: VDirection) -> None:
        board = self.board
        a = self.geometry.edge_from_node(node, qhd.to_direction())
        b = self.geometry.edge_from_node(node, qvd.to_direction())
        self._force_match(a, b)
        self.remove_entry_at_node(node, qhd.opposite(), qvd.opposite())

        cell = self.geometry.cell_from_node(node, qhd, qvd)
        if cell is None:
            return
        hd, vd = qhd.opposite(), qvd.opposite()

        hint = board.hint(cell)
        if hint == 1:
            board.set(a, False)
            board.set(b, False)
            self.enter_corner(cell, hd.opposite(), vd.opposite())
        elif hint == 3:
            board.set(a, True)
            board.set(b, True)
            self.enter_corner(cell, hd.opposite(), vd.opposite())
        elif hint == 2:
            self.remove_entry_at_corner(cell, hd.opposite(), vd.opposite())
            self.enter_corner(cell, hd.opposite(), vd)
            self.enter_corner(cell, hd, vd.opposite())

        self._balance_corners(cell)

    def _balance_corners(self, cell: Coordinate) -> None:
        board = self.board
        if not board.is_in_progress():
            return
        statuses = {corner: self.entry_status(cell, *corner) for corner in CELL_CORNERS}
        sure = [c for c, s in statuses.items() if s == EntryStatus.ENTRY_FOR_SURE]
        undecided = [c for c, s in statuses.items() if s == EntryStatus.POTENTIAL_ENTRY]
        possible = sure + undecided

        odd = len(sure) % 2 == 1
        if odd and not undecided:
            board.mark_unsolvable(f"cell {cell} has an unmatched entry corner")
            return
        if len(undecided) == 1:
            if odd:
                self.enter_corner(cell, *undecided[0])
            else:
                self.remove_entry_at_corner(cell, *undecided[0])
            return

        edges = self.geometry.edges_from_cell(cell)
        on_inside = sum(1 for e in edges if board.is_on(e))
        loop_elsewhere = board.num_on > on_inside or not board.can_be_single_cell

        if len(possible) <= 1:
            # No entry at all: the cell border is entirely On or entirely Off.
            if on_inside:
                fill = True
            elif loop_elsewhere or any(board.is_off(e) for e in edges):
                fill = False
            else:
                return
            for e in edges:
                board.set(e, fill)
        elif len(possible) == 2 and on_inside and loop_elsewhere and not sure:
            for corner in undecided:
                self.enter_corner(cell, *corner)

    # ------------------------------------------------------------------
    # Edge pair helpers
    # ------------------------------------------------------------------
    def _force_differ(self, a: Optional[Edge], b: Optional[Edge]) -> None:
        board = self.board
        if board.is_on(a):
            board.set(b, False)
        elif board.is_off(a):
            board.set(b, True)
        if board.is_on(b):
            board.set(a, False)
        elif board.is_off(b):
            board.set(a, True)

    def _force_match(self, a: Optional[Edge], b: Optional[Edge]) -> None:
        board = self.board
        if board.is_on(a):
            board.set(b, True)
        elif board.is_off(a):
            board.set(b, False)
        if board.is_on(b):
            board.set(a, True)
        elif board.is_off(b):
            board.set(a, False)


def _quadrant_of(first: Direction, second: Direction) -> Optional[Tuple[HDirection, VDirection]]:
    horizontal = {Direction.LEFT: HDirection.LEFT, Direction.RIGHT: HDirection.RIGHT}
    vertical = {Direction.UP: VDirection.UP, Direction.DOWN: VDirection.DOWN}
    if first in horizontal and second in vertical:
        return horizontal[first], vertical[second]
    if first in vertical and second in horizontal:
        return horizontal[second], vertical[first]
    return None
