import contextlib
import io
import json
import logging
import tempfile
import unittest
from pathlib import Path

from loopy.utils.logger import SEARCH_LOGGER, configure_logging, get_logger, parse_level, set_search_level
from main import main


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_main(self, *argv: str):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["--log-level", "WARNING", *argv])
        return code, out.getvalue()

    def test_solve_prints_board_and_status(self) -> None:
        path = self.tmp / "square.txt"
        path.write_text("22\n22\n", encoding="utf-8")
        code, output = self.run_main("solve", str(path))
        self.assertEqual(code, 0)
        self.assertIn("status: UNIQUE_SOLUTION", output)

    def test_solve_json_with_verification(self) -> None:
        path = self.tmp / "square.txt"
        path.write_text("22\n22\n", encoding="utf-8")
        code, output = self.run_main("solve", str(path), "--json", "--verify")
        self.assertEqual(code, 0)
        payload = json.loads(output)
        self.assertEqual(payload["status"], "UNIQUE_SOLUTION")
        self.assertTrue(payload["cpsat_agrees"])

    def test_missing_puzzle_file_fails(self) -> None:
        code, _ = self.run_main("solve", str(self.tmp / "missing.txt"))
        self.assertEqual(code, 1)

    def test_generate_writes_output_file(self) -> None:
        target = self.tmp / "generated.txt"
        code, _ = self.run_main("generate", "--size", "3", "--seed", "5", "--output", str(target))
        self.assertEqual(code, 0)
        lines = target.read_text(encoding="utf-8").split()
        self.assertEqual(len(lines), 3)
        self.assertTrue(all(len(line) == 3 for line in lines))

    def test_generate_rejects_tiny_boards(self) -> None:
        self.assertEqual(self.run_main("generate", "--size", "1")[0], 1)


class LogLevelTests(unittest.TestCase):
    def tearDown(self) -> None:
        set_search_level(None)

    def test_names_and_numbers(self) -> None:
        self.assertEqual(parse_level("debug"), logging.DEBUG)
        self.assertEqual(parse_level(" Warning "), logging.WARNING)
        self.assertEqual(parse_level(logging.ERROR), logging.ERROR)
        self.assertEqual(parse_level("chatty"), logging.INFO)

    def test_configure_twice_keeps_one_console_handler(self) -> None:
        configure_logging("WARNING")
        configure_logging("WARNING")
        owned = [h for h in logging.getLogger().handlers if type(h).__name__ == "_ConsoleHandler"]
        self.assertEqual(len(owned), 1)

    def test_search_trace_has_its_own_level(self) -> None:
        configure_logging("WARNING", search_level="info")
        self.assertEqual(logging.getLogger(SEARCH_LOGGER).level, logging.INFO)
        self.assertEqual(logging.getLogger().level, logging.WARNING)
        self.assertTrue(get_logger(SEARCH_LOGGER).isEnabledFor(logging.INFO))
        self.assertFalse(get_logger("loopy.engine.rules").isEnabledFor(logging.INFO))

    def test_cli_trace_turns_on_the_search_logger(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blank.txt"
            path.write_text("..\n..\n", encoding="utf-8")
            with contextlib.redirect_stdout(io.StringIO()):
                self.assertEqual(main(["--log-level", "WARNING", "solve", str(path), "--trace"]), 0)
        self.assertEqual(logging.getLogger(SEARCH_LOGGER).level, logging.INFO)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
