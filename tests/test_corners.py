import unittest

from loopy.core.constants import EntryStatus, HDirection, Status, VDirection
from loopy.core.models import Puzzle, h_edge, v_edge
from loopy.engine.board import EdgeBoard
from loopy.engine.corners import CornerInference

LEFT, RIGHT = HDirection.LEFT, HDirection.RIGHT
UP, DOWN = VDirection.UP, VDirection.DOWN


def make(size: int, hint=None, cell=(1, 1)):
    puzzle = Puzzle.empty(size)
    if hint is not None:
        puzzle = puzzle.with_hint(cell[0], cell[1], hint)
    board = EdgeBoard(puzzle)
    return board, CornerInference(board)


class EntryStatusTests(unittest.TestCase):
    def test_status_from_cell_edges(self) -> None:
        board, corners = make(3)
        self.assertEqual(corners.entry_status((1, 1), LEFT, UP), EntryStatus.POTENTIAL_ENTRY)
        board.set(h_edge(1, 1), True)
        board.set(v_edge(1, 1), False)
        self.assertEqual(corners.entry_status((1, 1), LEFT, UP), EntryStatus.ENTRY_FOR_SURE)
        board.set(v_edge(1, 2), True)
        self.assertEqual(corners.entry_status((1, 1), RIGHT, UP), EntryStatus.NOT_ENTRY_FOR_SURE)

    def test_status_from_outside_edges(self) -> None:
        board, corners = make(3)
        board.set(h_edge(2, 2), True)
        board.set(v_edge(2, 2), False)
        self.assertEqual(corners.entry_status((1, 1), RIGHT, DOWN), EntryStatus.ENTRY_FOR_SURE)

    def test_board_corner_is_never_an_entry(self) -> None:
        _, corners = make(3)
        self.assertEqual(corners.entry_status((0, 0), LEFT, UP), EntryStatus.NOT_ENTRY_FOR_SURE)


class EntryTests(unittest.TestCase):
    def test_entered_one_switches_far_sides_off(self) -> None:
        board, corners = make(3, hint=1)
        corners.enter_corner((1, 1), LEFT, UP)
        self.assertTrue(board.is_off(h_edge(2, 1)))
        self.assertTrue(board.is_off(v_edge(1, 2)))
        self.assertTrue(board.is_in_progress())

    def test_entered_three_switches_far_sides_on(self) -> None:
        board, corners = make(3, hint=3)
        corners.enter_corner((1, 1), LEFT, UP)
        self.assertTrue(board.is_on(h_edge(2, 1)))
        self.assertTrue(board.is_on(v_edge(1, 2)))

    def test_entered_two_enters_the_opposite_corner(self) -> None:
        board, corners = make(3, hint=2)
        board.set(h_edge(1, 1), True)
        corners.enter_corner((1, 1), LEFT, UP)
        self.assertTrue(board.is_off(v_edge(1, 1)))
        self.assertIn(((2, 2), LEFT, UP), corners._entries_seen)

    def test_entered_zero_is_unsolvable(self) -> None:
        board, corners = make(3, hint=0)
        corners.enter_corner((1, 1), RIGHT, DOWN)
        self.assertEqual(board.status, Status.UNSOLVABLE)

    def test_entry_is_shared_with_the_diagonal_cell(self) -> None:
        _, corners = make(3)
        corners.enter_node((1, 1), RIGHT, DOWN)
        self.assertIn(((1, 1), LEFT, UP), corners._entries_seen)

    def test_entry_forces_the_pair_to_differ(self) -> None:
        board, corners = make(3)
        board.set(v_edge(1, 1), True)
        corners.enter_node((1, 1), RIGHT, DOWN)
        self.assertTrue(board.is_off(h_edge(1, 1)))

    def test_entry_outside_the_board_is_unsolvable(self) -> None:
        board, corners = make(3)
        corners.enter_node((0, 0), LEFT, UP)
        self.assertEqual(board.status, Status.UNSOLVABLE)

    def test_contradicting_assertions_are_unsolvable(self) -> None:
        board, corners = make(3)
        corners.enter_node((1, 1), RIGHT, DOWN)
        self.assertTrue(board.is_in_progress())
        corners.remove_entry_at_node((1, 1), RIGHT, DOWN)
        self.assertEqual(board.status, Status.UNSOLVABLE)

    def test_reset_forgets_assertions(self) -> None:
        _, corners = make(3)
        corners.enter_node((1, 1), RIGHT, DOWN)
        corners.reset()
        self.assertEqual(corners._entries_seen, set())


class NonEntryTests(unittest.TestCase):
    def test_board_corner_pair_matches(self) -> None:
        board, corners = make(3)
        board.set(h_edge(0, 0), True)
        corners.remove_entry_at_node((0, 0), RIGHT, DOWN)
        self.assertTrue(board.is_on(v_edge(0, 0)))

    def test_non_entry_three_switches_pair_on(self) -> None:
        board, corners = make(3, hint=3)
        corners.remove_entry_at_corner((1, 1), LEFT, UP)
        self.assertTrue(board.is_on(h_edge(1, 1)))
        self.assertTrue(board.is_on(v_edge(1, 1)))
        self.assertIn(((2, 2), LEFT, UP), corners._entries_seen)

    def test_non_entry_one_switches_pair_off(self) -> None:
        board, corners = make(3, hint=1)
        corners.remove_entry_at_corner((1, 1), RIGHT, DOWN)
        self.assertTrue(board.is_off(h_edge(2, 1)))
        self.assertTrue(board.is_off(v_edge(1, 2)))

    def test_non_entry_two_enters_adjacent_corners(self) -> None:
        _, corners = make(3, hint=2)
        corners.remove_entry_at_corner((1, 1), LEFT, UP)
        self.assertIn(((2, 2), LEFT, UP), corners._removals_seen)
        self.assertIn(((1, 2), LEFT, DOWN), corners._entries_seen)
        self.assertIn(((2, 1), RIGHT, UP), corners._entries_seen)


class BalanceTests(unittest.TestCase):
    def test_single_sure_entry_pairs_with_last_possible_corner(self) -> None:
        board, corners = make(3)
        board.set(h_edge(1, 1), True)
        board.set(v_edge(1, 1), False)
        board.set(v_edge(1, 2), True)
        board.set(h_edge(2, 0), False)
        board.set(v_edge(2, 1), False)
        corners._balance_corners((1, 1))
        self.assertTrue(board.is_off(h_edge(2, 1)))

    def test_unmatched_entry_is_unsolvable(self) -> None:
        board, corners = make(3)
        board.set(h_edge(1, 1), True)
        board.set(v_edge(1, 1), False)
        board.set(v_edge(1, 2), True)
        for edge in (h_edge(2, 2), v_edge(2, 2), h_edge(2, 0), v_edge(2, 1)):
            board.set(edge, False)
        corners._balance_corners((1, 1))
        self.assertEqual(board.status, Status.UNSOLVABLE)

    def test_cell_without_entries_is_off_when_the_loop_is_elsewhere(self) -> None:
        board, corners = make(3)
        board.set(h_edge(3, 0), True)
        for node, hd, vd in (((1, 1), RIGHT, DOWN), ((1, 2), LEFT, DOWN), ((2, 2), LEFT, UP), ((2, 1), RIGHT, UP)):
            board.set(corners.geometry.edge_from_node(node, hd.opposite().to_direction()), False)
            board.set(corners.geometry.edge_from_node(node, vd.opposite().to_direction()), False)
        corners._balance_corners((1, 1))
        for edge in board.geometry.edges_from_cell((1, 1)):
            self.assertTrue(board.is_off(edge))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
