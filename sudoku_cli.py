# sudoku_cli.py
"""
Command line generator: builds puzzles with a unique solution and prints them.

Usage examples:
  sudoku-engine
  sudoku-engine --difficulty hard
  sudoku-engine --holes 40 --seed 123
  sudoku-engine --count 3 --no-print-solution
"""

from __future__ import annotations
import argparse
import logging
import random
from typing import List, Optional

from sudoku_core import EMPTY, SudokuGrid
from sudoku_difficulty import (
    PROFILES,
    DifficultyProfile,
    generate_puzzles_for_profile,
)


def format_board(grid: SudokuGrid) -> str:
    """Boxed board, '.' for blanks."""
    n, b = grid.size, grid.box
    width = max(len(str(n)), 1)
    lines: List[str] = []
    for r, row in enumerate(grid.values()):
        parts = []
        for c, v in enumerate(row):
            parts.append("." * width if v == EMPTY else str(v).rjust(width))
            if (c + 1) % b == 0 and c != n - 1:
                parts.append("|")
        lines.append(" ".join(parts))
        if (r + 1) % b == 0 and r != n - 1:
            seg = "-" * (b * (width + 1) - 1)
            lines.append("-+-".join([seg] * b))
    return "\n".join(lines)


def as_lines(grid: SudokuGrid) -> str:
    sep = "" if grid.size <= 9 else " "
    return "\n".join(
        sep.join(str(v) if v != EMPTY else "." for v in row) for row in grid.values()
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate Sudoku puzzles with a unique solution.")
    g = ap.add_mutually_exclusive_group()
    g.add_argument("--difficulty", choices=sorted(PROFILES), default="easy",
                   help="Difficulty preset (cells removed: easy 35, medium 45, hard 55).")
    g.add_argument("--holes", type=int, help="Number of cells to remove.")
    ap.add_argument("--count", type=int, default=1, help="Number of distinct puzzles to generate.")
    ap.add_argument("--seed", type=int, help="Random seed for reproducibility.")
    ap.add_argument("--no-print-solution", action="store_true", help="Do not print the solution grid.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log generation progress.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.holes is not None:
        profile = DifficultyProfile(f"{args.holes} holes", args.holes)
    else:
        profile = PROFILES[args.difficulty]
    if args.count < 1:
        ap.error("--count must be >= 1")

    rng = random.Random(args.seed)
    try:
        pairs = generate_puzzles_for_profile(profile, args.count, rng)
    except (ValueError, RuntimeError) as e:
        ap.error(str(e))

    for i, (puzzle, solution) in enumerate(pairs, start=1):
        header = f"#{i} " if args.count > 1 else ""
        print(f"\n{header}Puzzle ({profile.name}, {puzzle.empty_count()} blanks):")
        print(format_board(puzzle))
        if not args.no_print_solution:
            print(f"\n{header}Solution:")
            print(format_board(solution))

        print(f"\n{header}Puzzle (one line per row):")
        print(as_lines(puzzle))
        if not args.no_print_solution:
            print(f"\n{header}Solution (one line per row):")
            print(as_lines(solution))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
