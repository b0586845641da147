"""Deterministic rule validation for finished boards."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Set

from ..core.exceptions import ValidationError
from ..core.models import Coordinate, Puzzle
from ..utils.logger import get_logger
from .board import EdgeBoard


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class BoardValidator:
    """Checks that the On edges of a board form one loop meeting every hint.

    Unknown edges are read as Off, so the validator can be run on a board
    the search has not finished.
    """

    def validate(self, board: EdgeBoard, puzzle: Optional[Puzzle] = None) -> ValidationResult:
        puzzle = puzzle or board.puzzle
        messages: List[str] = []
        try:
            self._check_consistent(board)
            self._check_node_degrees(board)
            self._check_hints(board, puzzle)
            self._check_single_loop(board)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.debug("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_consistent(self, board: EdgeBoard) -> None:
        for edge in board.edges():
            if board.is_contradictory(edge):
                raise ValidationError(f"{edge} is both on and off")

    def _check_node_degrees(self, board: EdgeBoard) -> None:
        for node in board.geometry.all_nodes():
            degree = board.on_degree(node)
            if degree not in (0, 2):
                raise ValidationError(f"Node {node} has {degree} On edges")

    def _check_hints(self, board: EdgeBoard, puzzle: Puzzle) -> None:
        if puzzle.size != board.size:
            raise ValidationError(f"Puzzle of size {puzzle.size} checked against a board of size {board.size}")
        for row, col in puzzle.hinted_cells():
            hint = puzzle.hint(row, col)
            on = sum(1 for e in board.geometry.edges_from_cell((row, col)) if board.is_on(e))
            if on != hint:
                raise ValidationError(f"Cell {(row, col)} has {on} On edges, hint is {hint}")

    def _check_single_loop(self, board: EdgeBoard) -> None:
        on_nodes: Set[Coordinate] = {node for e in board.on_edges() for node in e.nodes()}
        if not on_nodes:
            raise ValidationError("Board has no On edges")
        start = min(on_nodes)
        reached = {start}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            for edge in board.geometry.edges_from_node(node):
                if not board.is_on(edge):
                    continue
                for other in edge.nodes():
                    if other not in reached:
                        reached.add(other)
                        queue.append(other)
        if reached != on_nodes:
            raise ValidationError(f"On edges form more than one loop ({len(on_nodes) - len(reached)} nodes unreached)")
