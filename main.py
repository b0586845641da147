"""CLI entrypoint for the single-loop puzzle solver and generator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from loopy.core.exceptions import LoopyError
from loopy.engine.cpsat import CpSatConfig, count_solutions
from loopy.engine.generator import GeneratorConfig, PuzzleGenerator
from loopy.engine.solver import Solver
from loopy.io.puzzle_text import format_puzzle, load_puzzle, parse_puzzle
from loopy.utils.logger import configure_logging, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve and generate single-loop (Slitherlink) puzzles",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve = subparsers.add_parser("solve", help="Solve a puzzle given in dotted text form")
    solve.add_argument("puzzle", type=str, help="Puzzle file, or - to read standard input")
    solve.add_argument("--trace", action="store_true", help="Log every guess made by the search")
    solve.add_argument(
        "--verify",
        action="store_true",
        help="Cross-check the verdict with the CP-SAT solution counter",
    )
    solve.add_argument("--json", action="store_true", help="Print a JSON payload instead of a drawing")

    generate = subparsers.add_parser("generate", help="Generate a minimal uniquely solvable puzzle")
    generate.add_argument("--size", type=int, required=True, help="Board size in cells")
    generate.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    generate.add_argument("--max-restarts", type=int, default=10, help="Attempts before giving up")
    generate.add_argument(
        "--verify",
        action="store_true",
        help="Confirm uniqueness with the CP-SAT solution counter",
    )
    generate.add_argument("--cpsat-timeout", type=float, default=10.0, help="CP-SAT time limit in seconds")
    generate.add_argument("--output", type=Path, help="Optional path for the puzzle text")
    return parser


def run_solve(args: argparse.Namespace) -> int:
    if args.puzzle == "-":
        puzzle = parse_puzzle(sys.stdin.read())
    else:
        puzzle = load_puzzle(args.puzzle)

    solver = Solver(puzzle)
    solver.full_solve(log_enabled=args.trace)

    payload: Dict[str, Any] = {
        "size": puzzle.size,
        "status": solver.status.value,
        "difficulty": solver.depth_needed,
        "board": solver.to_string(),
    }
    if args.verify:
        result = count_solutions(puzzle, CpSatConfig())
        payload["cpsat_status"] = result.status.value
        payload["cpsat_agrees"] = result.status == solver.status or not result.exhausted

    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(payload["board"])
        print(f"status: {payload['status']}  difficulty: {payload['difficulty']}")
        if args.verify:
            print(f"cpsat: {payload['cpsat_status']}")
    return 0


def run_generate(args: argparse.Namespace) -> int:
    config = GeneratorConfig(
        size=args.size,
        seed=args.seed,
        max_restarts=args.max_restarts,
        verify_with_cpsat=args.verify,
        cpsat_timeout=args.cpsat_timeout,
    )
    result = PuzzleGenerator(config).generate()
    text = format_puzzle(result.puzzle)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    print(
        f"hints: {result.puzzle.number_of_hints()}  difficulty: {result.difficulty}",
        file=sys.stderr,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, search_level="INFO" if getattr(args, "trace", False) else None)

    try:
        if args.command == "solve":
            return run_solve(args)
        return run_generate(args)
    except LoopyError as exc:
        get_logger("loopy").error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
