from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from grid import render_compact, render_verbose
from model import PuzzleModel, load_puzzle, save_puzzle
from solver import SudokuSolver

SAMPLE_PUZZLE = (
    "009470000"
    "806200700"
    "000001000"
    "903000040"
    "710000056"
    "020000803"
    "000600000"
    "007004908"
    "000037400"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a 9x9 Sudoku by constraint propagation and backtracking."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "puzzle",
        nargs="?",
        help="81 characters, row by row; 0 . _ or - for blanks (default: sample)",
    )
    source.add_argument("--file", help="load the puzzle from a JSON file")
    parser.add_argument("--save", help="write the puzzle to a JSON file")
    parser.add_argument(
        "--unique", action="store_true", help="check that the solution is unique"
    )
    parser.add_argument(
        "--candidates",
        action="store_true",
        help="print every cell's candidates after the initial cascade",
    )
    parser.add_argument(
        "--trace", action="store_true", help="print every guess and backtrack"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _load(args: argparse.Namespace) -> PuzzleModel:
    if args.file:
        return load_puzzle(args.file)
    return PuzzleModel.from_string(args.puzzle or SAMPLE_PUZZLE)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(name)s] %(message)s",
    )
    try:
        model = _load(args)
        if args.save:
            save_puzzle(model, args.save)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    solver = SudokuSolver(model.copy_grid(), logger=print if args.trace else None)
    if args.candidates:
        print(render_verbose(solver.initial_candidates()))
    result = solver.solve(require_uniqueness=args.unique)
    if result.grid is None:
        print("no solutions")
        return 1
    print(render_compact(result.grid))
    if result.status == "multiple":
        print(result.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
