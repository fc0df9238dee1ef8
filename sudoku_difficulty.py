# sudoku_difficulty.py
"""
Puzzle carving and difficulty profiles.

Difficulty is only the number of cells removed from a complete grid; every
removal is kept only if the puzzle still has exactly one solution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple
import logging
import random

from sudoku_core import (
    EMPTY,
    SIZE,
    CellKind,
    SudokuGrid,
    generate_full_grid,
    has_unique_solution,
)

logger = logging.getLogger(__name__)

EASY_CELLS_REMOVED = 35
MEDIUM_CELLS_REMOVED = 45
HARD_CELLS_REMOVED = 55


# ====================================================
#   CARVING
# ====================================================

def carve_puzzle(grid: SudokuGrid, count: int, rng: Optional[random.Random] = None) -> None:
    """
    Empty `count` cells of a complete grid, in place, keeping a unique solution.

    Cells are probed uniformly at random. A removal that leaves zero or
    several solutions is reverted. There is no cap on the number of probes:
    counts close to N*N may never terminate.
    """
    rng = rng or random.Random()
    n = grid.size
    if count < 0:
        raise ValueError(f"Cannot remove a negative number of cells ({count})")
    if count > grid.filled_count():
        raise ValueError(f"Cannot remove {count} cells: only {grid.filled_count()} are filled")

    removed = 0
    probes = 0
    while removed < count:
        probes += 1
        row = rng.randrange(n)
        col = rng.randrange(n)
        cell = grid.cell(row, col)
        if cell.value == EMPTY:
            continue

        keep = cell.value
        cell.value = EMPTY
        cell.kind = CellKind.EDITABLE

        # uniqueness is checked on a copy: the counter writes into the grid it searches
        if not has_unique_solution(grid):
            cell.value = keep
            cell.kind = CellKind.FIXED
            logger.debug("probe %d: (%d, %d) must stay, %d/%d removed", probes, row, col, removed, count)
            continue

        removed += 1

    grid.classify()
    logger.debug("carved %d cells in %d probes", count, probes)


def generate_puzzle(
    cells_to_remove: int,
    rng: Optional[random.Random] = None,
    size: int = SIZE,
) -> Tuple[SudokuGrid, SudokuGrid]:
    """
    Return (puzzle, solution). The two grids share no storage, so filling the
    puzzle never touches the solution.
    """
    rng = rng or random.Random()
    full = generate_full_grid(size, rng)
    solution = full.copy()
    puzzle = full.copy()
    carve_puzzle(puzzle, cells_to_remove, rng)
    return puzzle, solution


# ====================================================
#   PROFILES & MULTI-PUZZLE GENERATION
# ====================================================

@dataclass
class DifficultyProfile:
    name: str
    cells_removed: int

    def generate(
        self, rng: Optional[random.Random] = None, size: int = SIZE
    ) -> Tuple[SudokuGrid, SudokuGrid]:
        return generate_puzzle(self.cells_removed, rng, size)


EASY_PROFILE = DifficultyProfile("easy", EASY_CELLS_REMOVED)
MEDIUM_PROFILE = DifficultyProfile("medium", MEDIUM_CELLS_REMOVED)
HARD_PROFILE = DifficultyProfile("hard", HARD_CELLS_REMOVED)

PROFILES: Dict[str, DifficultyProfile] = {
    EASY_PROFILE.name: EASY_PROFILE,
    MEDIUM_PROFILE.name: MEDIUM_PROFILE,
    HARD_PROFILE.name: HARD_PROFILE,
}


def get_profile(name: str) -> DifficultyProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty {name!r}, expected one of: {', '.join(PROFILES)}"
        ) from None


def canon_str(grid: SudokuGrid) -> str:
    """Canonical row-by-row string, '0' for blanks. One character per cell up to 9x9."""
    return "".join("".join(str(v) for v in row) for row in grid.values())


def generate_puzzles_for_profile(
    profile: DifficultyProfile,
    count: int,
    rng: Optional[random.Random] = None,
    max_tries: Optional[int] = None,
    size: int = SIZE,
) -> List[Tuple[SudokuGrid, SudokuGrid]]:
    """Generate `count` distinct (puzzle, solution) pairs for a profile."""
    rng = rng or random.Random()
    if max_tries is None:
        max_tries = count * 100

    puzzles: List[Tuple[SudokuGrid, SudokuGrid]] = []
    seen: Set[str] = set()
    tries = 0

    while len(puzzles) < count and tries < max_tries:
        if tries and tries % 50 == 0:
            logger.info("[%s] tries=%d, ok=%d/%d", profile.name, tries, len(puzzles), count)
        tries += 1

        puzzle, solution = profile.generate(rng, size)
        sig = canon_str(puzzle)
        if sig in seen:
            continue
        seen.add(sig)
        puzzles.append((puzzle, solution))

    if len(puzzles) < count:
        raise RuntimeError(f"Only {len(puzzles)} puzzles generated for profile {profile.name}")
    return puzzles
