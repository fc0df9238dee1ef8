# sudoku_core.py
"""
Common Sudoku engine:
- N x N grid of cells (value + fixed/editable kind), 9x9 by default
- constraint check against UNITS / PEERS
- randomized backtracking to build a complete grid
- solution counting / uniqueness
"""

from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

Pos = Tuple[int, int]
Values = List[List[int]]

SIZE = 9
EMPTY = 0


class CellKind(Enum):
    FIXED = "fixed"  # clue of the puzzle, never touched by the player
    EDITABLE = "editable"  # blank slot the player fills


@dataclass
class Cell:
    value: int = EMPTY
    kind: CellKind = CellKind.EDITABLE


def box_side(size: int) -> int:
    """Side of a box for an N x N grid (3 for 9x9). N must be a perfect square."""
    side = math.isqrt(size) if size > 0 else 0
    if side < 1 or side * side != size:
        raise ValueError(f"Invalid grid size {size}: must be a perfect square (4, 9, 16...)")
    return side


# ---------- UNITS & PEERS ----------

@lru_cache(maxsize=None)
def units_for(size: int) -> Tuple[Tuple[Pos, ...], ...]:
    """Rows, then columns, then boxes."""
    b = box_side(size)
    units: List[Tuple[Pos, ...]] = []
    # Rows
    for r in range(size):
        units.append(tuple((r, c) for c in range(size)))
    # Columns
    for c in range(size):
        units.append(tuple((r, c) for r in range(size)))
    # Boxes
    for br in range(0, size, b):
        for bc in range(0, size, b):
            units.append(tuple((br + dr, bc + dc) for dr in range(b) for dc in range(b)))
    return tuple(units)


@lru_cache(maxsize=None)
def peers_for(size: int) -> Dict[Pos, Tuple[Pos, ...]]:
    """Cells sharing a row, column or box with each cell, the cell itself excluded."""
    b = box_side(size)
    peers: Dict[Pos, Tuple[Pos, ...]] = {}
    for r in range(size):
        for c in range(size):
            seen = set()
            seen |= {(r, cc) for cc in range(size) if cc != c}
            seen |= {(rr, c) for rr in range(size) if rr != r}
            br, bc = b * (r // b), b * (c // b)
            seen |= {
                (br + dr, bc + dc)
                for dr in range(b)
                for dc in range(b)
                if (br + dr, bc + dc) != (r, c)
            }
            peers[(r, c)] = tuple(sorted(seen))
    return peers


UNITS = units_for(SIZE)
PEERS = peers_for(SIZE)


# ---------- Grid ----------

class SudokuGrid:
    """
    Row-major N x N matrix of cells.

    Cells live in one flat list; (row, col) maps to row * size + col.
    """

    def __init__(self, size: int = SIZE):
        self.box = box_side(size)
        self.size = size
        self.cells: List[Cell] = [Cell() for _ in range(size * size)]

    @classmethod
    def from_values(cls, values: Values) -> SudokuGrid:
        """Build a grid from nested rows; nonzero values become FIXED, zeros EDITABLE."""
        size = len(values)
        grid = cls(size)
        for r, row in enumerate(values):
            if len(row) != size:
                raise ValueError(f"Row {r} has {len(row)} values, expected {size}")
            for c, v in enumerate(row):
                grid.put(r, c, v)
        grid.classify()
        return grid

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise ValueError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} grid")
        return row * self.size + col

    def _check_value(self, value: int) -> None:
        if not (EMPTY <= value <= self.size):
            raise ValueError(f"Value {value} is outside 0..{self.size}")

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[self._index(row, col)]

    def value(self, row: int, col: int) -> int:
        return self.cells[self._index(row, col)].value

    def kind(self, row: int, col: int) -> CellKind:
        return self.cells[self._index(row, col)].kind

    def is_editable(self, row: int, col: int) -> bool:
        return self.kind(row, col) is CellKind.EDITABLE

    def put(self, row: int, col: int, value: int, kind: Optional[CellKind] = None) -> None:
        """Engine-side write: ignores the classification of the cell."""
        self._check_value(value)
        cell = self.cells[self._index(row, col)]
        cell.value = value
        if kind is not None:
            cell.kind = kind

    def set_value(self, row: int, col: int, value: int) -> None:
        """Player-side write: only EDITABLE cells accept a value."""
        if not self.is_editable(row, col):
            raise ValueError(f"Cell ({row}, {col}) is fixed")
        self.put(row, col, value)

    def clear_value(self, row: int, col: int) -> None:
        self.set_value(row, col, EMPTY)

    def classify(self) -> None:
        """Empty cells -> EDITABLE, filled cells -> FIXED."""
        for cell in self.cells:
            cell.kind = CellKind.EDITABLE if cell.value == EMPTY else CellKind.FIXED

    def copy(self) -> SudokuGrid:
        other = SudokuGrid(self.size)
        other.cells = [Cell(c.value, c.kind) for c in self.cells]
        return other

    def values(self) -> Values:
        n = self.size
        return [[self.cells[r * n + c].value for c in range(n)] for r in range(n)]

    def empty_count(self) -> int:
        return sum(1 for c in self.cells if c.value == EMPTY)

    def filled_count(self) -> int:
        return len(self.cells) - self.empty_count()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuGrid):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __repr__(self) -> str:
        return f"SudokuGrid(size={self.size}, filled={self.filled_count()})"


# ---------- Constraint check ----------

def is_valid(grid: SudokuGrid, row: int, col: int, value: int) -> bool:
    """
    True if `value` does not already appear in the row, column or box of
    (row, col). The cell itself is never compared, so it may already hold `value`.
    """
    grid._index(row, col)
    grid._check_value(value)
    n = grid.size
    cells = grid.cells
    for (r, c) in peers_for(n)[(row, col)]:
        if cells[r * n + c].value == value:
            return False
    return True


def is_solved_grid(grid: SudokuGrid) -> bool:
    """Every cell filled and every row/column/box is a permutation of 1..N."""
    n = grid.size
    digits = set(range(1, n + 1))
    for unit in units_for(n):
        if {grid.cells[r * n + c].value for (r, c) in unit} != digits:
            return False
    return True


# ---------- Backtracking / uniqueness ----------

def _find_empty(grid: SudokuGrid) -> Optional[int]:
    for i, cell in enumerate(grid.cells):
        if cell.value == EMPTY:
            return i
    return None


def fill_grid(grid: SudokuGrid, rng: random.Random, index: int = 0) -> bool:
    """
    Fill every empty cell from `index` on, in row-major order, trying the
    candidates of each cell in shuffled order. Filled cells are kept as they are.
    """
    n = grid.size
    if index == n * n:
        return True
    cell = grid.cells[index]
    if cell.value != EMPTY:
        return fill_grid(grid, rng, index + 1)
    row, col = divmod(index, n)
    vals = list(range(1, n + 1))
    rng.shuffle(vals)
    for v in vals:
        if is_valid(grid, row, col, v):
            cell.value = v
            if fill_grid(grid, rng, index + 1):
                return True
            cell.value = EMPTY
    return False


def generate_full_grid(size: int = SIZE, rng: Optional[random.Random] = None) -> SudokuGrid:
    """Generate a complete valid grid; every cell ends up FIXED."""
    rng = rng or random.Random()
    grid = SudokuGrid(size)
    if not fill_grid(grid, rng):
        raise RuntimeError(f"Backtracking failed to complete an empty {size}x{size} grid")
    grid.classify()
    logger.debug("generated full %dx%d grid", size, size)
    return grid


def count_solutions(grid: SudokuGrid, limit: int = 2) -> int:
    """
    Count the completions of the grid (backtracking), stopping as soon as
    `limit` is reached.

    Cells are written while searching and emptied again on the way back, so
    callers that cannot tolerate that should pass a copy.
    """
    index = _find_empty(grid)
    if index is None:
        return 1
    n = grid.size
    row, col = divmod(index, n)
    cell = grid.cells[index]
    sols = 0
    for v in range(1, n + 1):
        if not is_valid(grid, row, col, v):
            continue
        cell.value = v
        try:
            sols += count_solutions(grid, limit)
        finally:
            cell.value = EMPTY
        if sols >= limit:
            break
    return sols


def has_unique_solution(grid: SudokuGrid) -> bool:
    return count_solutions(grid.copy(), limit=2) == 1
