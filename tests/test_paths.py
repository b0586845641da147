import unittest

from loopy.engine.paths import PathTracker


class PathTrackerTests(unittest.TestCase):
    def test_new_path_and_extension(self) -> None:
        paths = PathTracker()
        pair = paths.add_edge((0, 0), (0, 1))
        self.assertEqual(set(pair), {(0, 0), (0, 1)})
        pair = paths.add_edge((0, 1), (1, 1))
        self.assertEqual(set(pair), {(0, 0), (1, 1)})
        self.assertFalse(paths.is_endpoint((0, 1)))
        self.assertEqual(paths.num_paths(), 1)

    def test_merge_two_paths(self) -> None:
        paths = PathTracker()
        paths.add_edge((0, 0), (0, 1))
        paths.add_edge((0, 2), (0, 3))
        self.assertEqual(paths.num_paths(), 2)
        pair = paths.add_edge((0, 1), (0, 2))
        self.assertEqual(set(pair), {(0, 0), (0, 3)})
        self.assertEqual(paths.num_paths(), 1)
        self.assertEqual(paths.open_paths(), [pair])

    def test_closing_a_loop(self) -> None:
        paths = PathTracker()
        paths.add_edge((0, 0), (0, 1))
        paths.add_edge((0, 1), (1, 1))
        paths.add_edge((1, 1), (1, 0))
        self.assertTrue(paths.would_create_loop((1, 0), (0, 0)))
        self.assertTrue(paths.would_create_loop((0, 0), (1, 0)))
        self.assertFalse(paths.would_create_loop((0, 0), (1, 1)))
        self.assertIsNone(paths.add_edge((1, 0), (0, 0)))
        self.assertTrue(paths.has_loop())
        self.assertEqual(paths.num_loops, 1)
        self.assertEqual(paths.endpoints, {})
        self.assertEqual(paths.num_paths(), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
