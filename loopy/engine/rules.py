"""Propagation rules applied to an :class:`EdgeBoard` until a fixpoint."""

from __future__ import annotations

from typing import Callable, List

from ..core.constants import HDirection, Status, VDirection
from ..utils.logger import get_logger
from .board import EdgeBoard
from .border import BorderArgument
from .corners import CornerInference
from .validator import BoardValidator


LOGGER = get_logger(__name__)

# Pairs of cell sides, in UP/RIGHT/DOWN/LEFT index form, mapped to the corner they share.
_CORNER_OF_SIDES = {
    (0, 1): (HDirection.RIGHT, VDirection.UP),
    (1, 2): (HDirection.RIGHT, VDirection.DOWN),
    (2, 3): (HDirection.LEFT, VDirection.DOWN),
    (0, 3): (HDirection.LEFT, VDirection.UP),
}


class ConstraintEngine:
    """Drives the node, cell, corner, closure and border rules to a fixpoint."""

    def __init__(self, board: EdgeBoard) -> None:
        self.board = board
        self.geometry = board.geometry
        self.corners = CornerInference(board)
        self.border = BorderArgument(board)
        self.validator = BoardValidator()
        self.rule_order: List[Callable[[], None]] = [
            self.apply_node_rules,
            self.apply_cell_rules,
            self.corners.apply_corner_arguments,
            self.apply_premature_closure,
        ]

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------
    def apply_node_rules(self) -> None:
        board = self.board
        while board.node_queue and board.is_in_progress():
            node = board.node_queue.pop()
            edges = self.geometry.edges_from_node(node)
            on = sum(1 for e in edges if board.is_on(e))
            unknown = [e for e in edges if board.is_unknown(e)]
            if on > 2:
                board.mark_unsolvable(f"node {node} has {on} On edges")
            elif on == 2:
                for edge in unknown:
                    board.set(edge, False)
            elif on == 1:
                if not unknown:
                    board.mark_unsolvable(f"path ends at node {node}")
                elif len(unknown) == 1:
                    board.set(unknown[0], True)
            elif len(unknown) == 1:
                board.set(unknown[0], False)

    def apply_cell_rules(self) -> None:
        board = self.board
        while board.cell_queue and board.is_in_progress():
            cell = board.cell_queue.pop()
            hint = board.hint(cell)
            if hint is None:
                continue
            edges = self.geometry.edges_from_cell(cell)
            on = sum(1 for e in edges if board.is_on(e))
            unknown = [i for i, e in enumerate(edges) if board.is_unknown(e)]
            if on > hint or on + len(unknown) < hint:
                board.mark_unsolvable(f"cell {cell} cannot reach hint {hint}")
            elif on == hint:
                for i in unknown:
                    board.set(edges[i], False)
            elif on + len(unknown) == hint:
                for i in unknown:
                    board.set(edges[i], True)
            elif len(unknown) == 2 and on + 1 == hint:
                corner = _CORNER_OF_SIDES.get((unknown[0], unknown[1]))
                if corner is not None:
                    self.corners.enter_corner(cell, *corner)

    def apply_premature_closure(self) -> None:
        """Switch off edges that would close a loop while other paths remain."""

        board = self.board
        while board.path_queue and board.is_in_progress():
            a, b = board.path_queue.pop()
            if not board.paths.would_create_loop(a, b):
                continue
            edge = self.geometry.edge_between(a, b)
            if edge is not None and board.is_unknown(edge) and board.paths.num_paths() > 1:
                board.set(edge, False)

    # ------------------------------------------------------------------
    # Fixpoint
    # ------------------------------------------------------------------
    def propagate(self) -> Status:
        board = self.board
        swept = False
        while board.is_in_progress():
            self.corners.reset()
            board.consume_change()
            for rule in self.rule_order:
                rule()
            if board.is_in_progress() and board.paths.has_loop():
                self._resolve_loop()
                break
            if board.consume_change():
                swept = False
                continue
            if not swept:
                # Corner balance reads the global On count, so every node is
                # revisited once before the rules are considered settled.
                swept = True
                for node in self.geometry.all_nodes():
                    board.corner_queue.push(node)
                continue
            if not self.border.apply():
                break
            swept = False
        LOGGER.debug(
            "Propagation settled at %s with %d on and %d off", board.status.value, board.num_on, board.num_off
        )
        return board.status

    def _resolve_loop(self) -> None:
        board = self.board
        for edge in board.unknown_edges():
            board.set(edge, False)
        if not board.is_in_progress():
            return
        result = self.validator.validate(board)
        if result.ok:
            board.status = Status.UNIQUE_SOLUTION
        else:
            board.mark_unsolvable("; ".join(result.messages))
