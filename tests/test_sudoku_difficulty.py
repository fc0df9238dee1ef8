"""Tests for carving and difficulty profiles."""

import random

import pytest

from sudoku_core import (
    CellKind,
    count_solutions,
    generate_full_grid,
    is_valid,
)
from sudoku_difficulty import (
    EASY_CELLS_REMOVED,
    PROFILES,
    DifficultyProfile,
    canon_str,
    carve_puzzle,
    generate_puzzle,
    generate_puzzles_for_profile,
    get_profile,
)


def assert_consistent_pair(puzzle, solution, removed):
    n = puzzle.size
    assert puzzle.empty_count() == removed
    assert count_solutions(puzzle.copy(), 2) == 1
    for r in range(n):
        for c in range(n):
            v = puzzle.value(r, c)
            if v == 0:
                assert puzzle.kind(r, c) is CellKind.EDITABLE
            else:
                assert puzzle.kind(r, c) is CellKind.FIXED
                assert v == solution.value(r, c)
                assert is_valid(puzzle, r, c, v)


class TestCarvePuzzle:
    def test_small_grid(self):
        rng = random.Random(11)
        full = generate_full_grid(4, rng)
        puzzle = full.copy()
        carve_puzzle(puzzle, 6, rng)
        assert_consistent_pair(puzzle, full, 6)

    def test_nothing_to_remove(self):
        full = generate_full_grid(rng=random.Random(0))
        puzzle = full.copy()
        carve_puzzle(puzzle, 0, random.Random(0))
        assert puzzle == full

    @pytest.mark.parametrize("count", [-1, 82])
    def test_invalid_counts(self, count):
        puzzle = generate_full_grid(rng=random.Random(0))
        with pytest.raises(ValueError):
            carve_puzzle(puzzle, count, random.Random(0))

    def test_reclassifies_every_cell(self):
        rng = random.Random(4)
        puzzle = generate_full_grid(4, rng)
        for cell in puzzle.cells:
            cell.kind = CellKind.EDITABLE
        carve_puzzle(puzzle, 4, rng)
        for cell in puzzle.cells:
            expected = CellKind.EDITABLE if cell.value == 0 else CellKind.FIXED
            assert cell.kind is expected


class TestGeneratePuzzle:
    @pytest.mark.parametrize("seed", [1, 2])
    def test_easy_scenario(self, seed):
        puzzle, solution = generate_puzzle(35, random.Random(seed))
        assert puzzle.filled_count() == 46
        assert_consistent_pair(puzzle, solution, 35)
        assert solution.empty_count() == 0

    def test_pair_shares_no_storage(self):
        puzzle, solution = generate_puzzle(10, random.Random(3))
        before = solution.copy()
        for r in range(9):
            for c in range(9):
                if puzzle.is_editable(r, c):
                    puzzle.set_value(r, c, 1 if solution.value(r, c) != 1 else 2)
        assert solution == before

    def test_two_games_are_independent(self):
        rng = random.Random(9)
        first = generate_puzzle(35, rng)
        second = generate_puzzle(35, rng)
        assert_consistent_pair(*first, 35)
        assert_consistent_pair(*second, 35)
        assert first[1].values() != second[1].values()

    def test_other_locally_valid_values_are_wrong(self):
        puzzle, solution = generate_puzzle(35, random.Random(5))
        for r in range(9):
            for c in range(9):
                if not puzzle.is_editable(r, c):
                    continue
                answer = solution.value(r, c)
                puzzle.set_value(r, c, answer)
                puzzle.clear_value(r, c)
                for v in range(1, 10):
                    if v != answer and is_valid(puzzle, r, c, v):
                        trial = puzzle.copy()
                        trial.put(r, c, v)
                        assert count_solutions(trial, 2) == 0


class TestProfiles:
    def test_presets(self):
        assert EASY_CELLS_REMOVED == 35
        assert {name: p.cells_removed for name, p in PROFILES.items()} == {
            "easy": 35,
            "medium": 45,
            "hard": 55,
        }
        assert get_profile("medium") is PROFILES["medium"]

    def test_unknown_profile(self):
        with pytest.raises(ValueError):
            get_profile("expert")

    def test_distinct_batch(self):
        profile = DifficultyProfile("tiny", 5)
        pairs = generate_puzzles_for_profile(profile, 3, random.Random(8))
        assert len(pairs) == 3
        assert len({canon_str(p) for p, _ in pairs}) == 3
        for puzzle, solution in pairs:
            assert_consistent_pair(puzzle, solution, 5)

    def test_profile_honours_grid_size(self):
        profile = DifficultyProfile("small", 6)
        puzzle, solution = profile.generate(random.Random(12), size=4)
        assert puzzle.size == 4
        assert solution.size == 4
        assert_consistent_pair(puzzle, solution, 6)

    def test_batch_honours_grid_size(self):
        profile = DifficultyProfile("small", 4)
        pairs = generate_puzzles_for_profile(profile, 2, random.Random(13), size=4)
        assert [p.size for p, _ in pairs] == [4, 4]

    def test_batch_gives_up_after_max_tries(self):
        # five tries cannot yield a thousand puzzles
        profile = DifficultyProfile("none", 0)
        with pytest.raises(RuntimeError):
            generate_puzzles_for_profile(profile, 1000, random.Random(14), max_tries=5, size=4)

    def test_canon_str(self):
        puzzle, _ = generate_puzzle(20, random.Random(6))
        s = canon_str(puzzle)
        assert len(s) == 81
        assert s.count("0") == 20
