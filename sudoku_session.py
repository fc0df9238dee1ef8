# sudoku_session.py
"""
One play session: owns the current (puzzle, solution) pair and the rules
around it (guesses, mistakes, win/lose, score). Drawing and input polling
belong to whatever front end drives this object.
"""

from __future__ import annotations
import logging
import random
import time
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from sudoku_core import EMPTY, SIZE, CellKind, SudokuGrid
from sudoku_difficulty import generate_puzzle, get_profile

logger = logging.getLogger(__name__)

MAX_MISTAKES = 3
BASE_SCORE = 1000
MISTAKE_PENALTY = 100


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class GameSession:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        size: int = SIZE,
    ):
        self.rng = rng or random.Random()
        self.clock = clock
        self.size = size
        self.puzzle: Optional[SudokuGrid] = None
        self.solution: Optional[SudokuGrid] = None
        self.state = GameState.MENU
        self.cells_removed = 0
        self.mistakes = 0
        self.score = 0
        self._started_at = 0.0
        self._finished_at: Optional[float] = None

    # ---------- New game ----------

    def new_game(self, difficulty: Union[int, str]) -> Tuple[SudokuGrid, SudokuGrid]:
        """
        Generate a fresh pair and make it current. `difficulty` is either a
        number of cells to remove or a profile name ("easy", "medium", "hard").
        Blocks until the puzzle is carved.
        """
        if isinstance(difficulty, str):
            cells = get_profile(difficulty).cells_removed
        elif isinstance(difficulty, int) and not isinstance(difficulty, bool):
            cells = difficulty
        else:
            raise ValueError(
                f"Difficulty must be a profile name or a number of cells, got {difficulty!r}"
            )

        puzzle, solution = generate_puzzle(cells, self.rng, self.size)

        # the previous pair is dropped as a whole
        self.puzzle, self.solution = puzzle, solution
        self.cells_removed = cells
        self.mistakes = 0
        self.score = 0
        self._started_at = self.clock()
        self._finished_at = None
        self.state = GameState.PLAYING
        logger.info("new game: %d cells removed", cells)
        return puzzle, solution

    def to_menu(self) -> None:
        """Leave the current game; the pair is dropped until the next new_game()."""
        self.puzzle = None
        self.solution = None
        self.cells_removed = 0
        self.mistakes = 0
        self.score = 0
        self._finished_at = None
        self.state = GameState.MENU
        logger.info("back to menu")

    # ---------- Queries ----------

    def _current(self) -> Tuple[SudokuGrid, SudokuGrid]:
        if self.puzzle is None or self.solution is None:
            raise ValueError("No game in progress, call new_game() first")
        return self.puzzle, self.solution

    def cell_value(self, row: int, col: int) -> int:
        return self._current()[0].value(row, col)

    def cell_kind(self, row: int, col: int) -> CellKind:
        return self._current()[0].kind(row, col)

    def is_editable(self, row: int, col: int) -> bool:
        return self._current()[0].is_editable(row, col)

    def solution_value(self, row: int, col: int) -> int:
        return self._current()[1].value(row, col)

    def check_guess(self, row: int, col: int, value: int) -> bool:
        """True if `value` is what the solution holds at (row, col)."""
        return self.solution_value(row, col) == value

    def is_complete(self) -> bool:
        puzzle, _ = self._current()
        return all(
            c.value != EMPTY for c in puzzle.cells if c.kind is CellKind.EDITABLE
        )

    @property
    def elapsed(self) -> float:
        if self.state is GameState.MENU:
            return 0.0
        end = self._finished_at if self._finished_at is not None else self.clock()
        return end - self._started_at

    # ---------- Moves ----------

    def _require_playing(self, row: int, col: int) -> SudokuGrid:
        puzzle, _ = self._current()
        if self.state is not GameState.PLAYING:
            raise ValueError(f"Game is {self.state.value}, moves are not accepted")
        if not puzzle.is_editable(row, col):
            raise ValueError(f"Cell ({row}, {col}) is fixed")
        return puzzle

    def guess(self, row: int, col: int, value: int) -> bool:
        """
        Play `value` at (row, col). A correct guess is written into the
        puzzle; a wrong one only counts as a mistake. Returns whether the
        guess was correct.
        """
        puzzle = self._require_playing(row, col)
        if not (1 <= value <= self.size):
            raise ValueError(f"Guess {value} is outside 1..{self.size}")

        if self.check_guess(row, col, value):
            puzzle.set_value(row, col, value)
            if self.is_complete():
                self._finish(GameState.WON)
            return True

        self.mistakes += 1
        logger.debug("wrong guess %d at (%d, %d), mistakes=%d", value, row, col, self.mistakes)
        if self.mistakes >= MAX_MISTAKES:
            self._finish(GameState.LOST)
        return False

    def clear(self, row: int, col: int) -> None:
        puzzle = self._require_playing(row, col)
        puzzle.clear_value(row, col)

    def _finish(self, state: GameState) -> None:
        self._finished_at = self.clock()
        self.state = state
        if state is GameState.WON:
            self.score = max(0, BASE_SCORE - int(self.elapsed) - self.mistakes * MISTAKE_PENALTY)
        logger.info("game %s after %.0f s, mistakes=%d, score=%d",
                    state.value, self.elapsed, self.mistakes, self.score)
