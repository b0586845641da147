"""Pretty-print helpers for solver boards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional

from ..core.models import Edge, h_edge, v_edge

if TYPE_CHECKING:
    from ..engine.board import EdgeBoard


HORIZONTAL_SYMBOLS = {"on": "─", "off": " ", "unknown": "┄", "both": "═"}
VERTICAL_SYMBOLS = {"on": "│", "off": " ", "unknown": "┆", "both": "║"}
NO_HINT = "·"


def edge_symbol(board: EdgeBoard, edge: Edge) -> str:
    symbols = HORIZONTAL_SYMBOLS if edge.is_horizontal else VERTICAL_SYMBOLS
    if board.is_contradictory(edge):
        return symbols["both"]
    if board.is_on(edge):
        return symbols["on"]
    if board.is_off(edge):
        return symbols["off"]
    return symbols["unknown"]


def hint_symbol(hint: Optional[int]) -> str:
    return NO_HINT if hint is None else str(hint)


def render_board(board: EdgeBoard) -> str:
    """Draw edges between nodes and hints inside cells, one text row per lattice row."""

    n = board.size
    lines = []
    for row in range(n + 1):
        lines.append("".join(" " + edge_symbol(board, h_edge(row, col)) for col in range(n)))
        if row == n:
            break
        cells = []
        for col in range(n):
            cells.append(edge_symbol(board, v_edge(row, col)))
            cells.append(hint_symbol(board.hint((row, col))))
        cells.append(edge_symbol(board, v_edge(row, n)))
        lines.append("".join(cells))
    return "\n".join(lines)


def pretty_print_board(board: EdgeBoard, *, label: Optional[str] = None, stream=None) -> None:
    """Print the board in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(render_board(board), file=stream)
