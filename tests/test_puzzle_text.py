import io
import tempfile
import unittest
from pathlib import Path

from loopy.core.exceptions import PuzzleFormatError
from loopy.core.models import Puzzle, h_edge, v_edge
from loopy.engine.board import EdgeBoard
from loopy.io.puzzle_text import format_puzzle, load_puzzle, parse_puzzle
from loopy.utils.pretty import pretty_print_board, render_board


class ParseTests(unittest.TestCase):
    def test_parse_reads_digits_and_dots(self) -> None:
        puzzle = parse_puzzle("\n 3.1\n·2.\n..0\n")
        self.assertEqual(puzzle.size, 3)
        self.assertEqual(puzzle.grid[0], [3, None, 1])
        self.assertEqual(puzzle.grid[1], [None, 2, None])
        self.assertEqual(puzzle.number_of_hints(), 4)

    def test_format_round_trips_the_text_form(self) -> None:
        text = "3.1\n.2.\n..0"
        self.assertEqual(format_puzzle(parse_puzzle(text)), text)

    def test_rejects_unknown_symbols(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            parse_puzzle("3x\n..")

    def test_rejects_hint_above_four(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            parse_puzzle("5.\n..")

    def test_rejects_ragged_rows(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            parse_puzzle("...\n..")

    def test_rejects_empty_text(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            parse_puzzle("  \n\n")

    def test_load_puzzle_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "puzzle.txt"
            path.write_text("2.\n.2\n", encoding="utf-8")
            puzzle = load_puzzle(path)
        self.assertEqual(puzzle.hinted_cells(), [(0, 0), (1, 1)])

    def test_missing_file_is_a_format_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(PuzzleFormatError):
                load_puzzle(Path(tmp) / "missing.txt")


class PuzzleModelTests(unittest.TestCase):
    def test_rotation_moves_hints_clockwise(self) -> None:
        puzzle = parse_puzzle("1.\n.3")
        self.assertEqual(puzzle.rotated().grid, [[None, 1], [3, None]])
        self.assertEqual(puzzle.rotated().rotated().rotated().rotated().grid, puzzle.grid)

    def test_with_hints_removed_uses_a_row_major_mask(self) -> None:
        puzzle = parse_puzzle("12\n3.")
        trimmed = puzzle.with_hints_removed([False, True, False], difficulty=2)
        self.assertEqual(trimmed.grid, [[1, None], [3, None]])
        self.assertEqual(trimmed.difficulty, 2)
        self.assertEqual(puzzle.number_of_hints(), 3)

    def test_is_value_outside_the_grid(self) -> None:
        puzzle = parse_puzzle("1.\n..")
        self.assertTrue(puzzle.is_value(1, 0, 0))
        self.assertFalse(puzzle.is_value(1, -1, 0))
        self.assertFalse(puzzle.is_value(1, 0, 2))

    def test_invalid_grids(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            Puzzle([])
        with self.assertRaises(PuzzleFormatError):
            Puzzle([[7]])


class PrettyTests(unittest.TestCase):
    def test_unknown_single_cell(self) -> None:
        board = EdgeBoard(Puzzle.empty(1))
        self.assertEqual(render_board(board), " ┄\n┆·┆\n ┄")

    def test_solved_single_cell(self) -> None:
        board = EdgeBoard(Puzzle.empty(1))
        for edge in (h_edge(0, 0), h_edge(1, 0), v_edge(0, 0), v_edge(0, 1)):
            board.set(edge, True)
        self.assertEqual(render_board(board).splitlines(), [" ─", "│·│", " ─"])

    def test_off_and_contradictory_edges(self) -> None:
        board = EdgeBoard(Puzzle([[2]]))
        board.set(h_edge(0, 0), True)
        board.set(h_edge(0, 0), False)
        board.set(v_edge(0, 0), False)
        lines = render_board(board).splitlines()
        self.assertEqual(lines[0], " ═")
        self.assertEqual(lines[1], " 2┆")

    def test_pretty_print_with_label(self) -> None:
        stream = io.StringIO()
        pretty_print_board(EdgeBoard(Puzzle.empty(1)), label="start", stream=stream)
        self.assertEqual(stream.getvalue().splitlines()[0], "start")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
