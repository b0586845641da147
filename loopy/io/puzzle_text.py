"""Reading and writing the dotted text form of a puzzle.

One line per row, one character per cell: a digit for a hint and ``.``
(or ``·``) for an empty cell. Blank lines and surrounding whitespace are
ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from ..core.constants import EMPTY_HINT_SYMBOLS, HINT_VALUES
from ..core.exceptions import PuzzleFormatError
from ..core.models import Puzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def _parse_symbol(symbol: str, row: int, col: int) -> Optional[int]:
    if symbol in EMPTY_HINT_SYMBOLS:
        return None
    if symbol.isdigit() and int(symbol) in HINT_VALUES:
        return int(symbol)
    raise PuzzleFormatError(f"Unexpected symbol {symbol!r} at row {row}, column {col}")


def parse_puzzle(text: str, difficulty: int = 0) -> Puzzle:
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if not rows:
        raise PuzzleFormatError("Puzzle text is empty")
    grid: List[List[Optional[int]]] = [
        [_parse_symbol(symbol, r, c) for c, symbol in enumerate(line)]
        for r, line in enumerate(rows)
    ]
    puzzle = Puzzle(grid, difficulty)
    LOGGER.debug("Parsed %dx%d puzzle with %d hints", puzzle.size, puzzle.size, puzzle.number_of_hints())
    return puzzle


def format_puzzle(puzzle: Puzzle) -> str:
    return "\n".join(
        "".join("." if hint is None else str(hint) for hint in row) for row in puzzle.grid
    )


def load_puzzle(path: Union[str, Path]) -> Puzzle:
    """Read a puzzle from a text file."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PuzzleFormatError(f"Cannot read puzzle file {path}: {exc}") from exc
    return parse_puzzle(text)
