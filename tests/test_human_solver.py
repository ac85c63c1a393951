"""Tests for the deduction-only solver and difficulty rating."""

from src.queens.human_solver import (
    _CandidateGrid,
    _forced_elimination,
    _hidden_single,
    _intersection,
    _region_row_col_lock,
    rate_puzzle_difficulty,
    solve_with_techniques,
)
from src.queens.model import Position, Technique
from src.queens.validator import check_win_condition

from conftest import (
    BANK_SOLUTION,
    HARD_REGIONS,
    HARD_SOLUTION,
    MEDIUM_REGIONS,
    MEDIUM_SOLUTION,
)

# Region 0 lies entirely in row 0; region 1 fills the rest of rows 0-1.
ROW_LOCKED_REGIONS = [
    [0, 0, 1, 1],
    [1, 1, 1, 1],
    [2, 2, 3, 3],
    [2, 2, 3, 3],
]


def _counts(result):
    return [result.technique_counts[t] for t in Technique]


def test_bank_puzzle_solves_with_naked_singles(bank_regions):
    result = solve_with_techniques(bank_regions)
    assert result.solved
    assert not result.requires_guessing
    assert result.max_technique == Technique.NAKED_SINGLE
    assert len(result.steps) == 9
    assert all(step.technique == Technique.NAKED_SINGLE for step in result.steps)
    assert result.technique_counts[Technique.NAKED_SINGLE] == 9


def test_solver_steps_reproduce_the_solution(bank_regions):
    result = solve_with_techniques(bank_regions)
    placed = sorted(Position(s.row, s.col) for s in result.steps)
    assert placed == sorted(Position(r, c) for r, c in BANK_SOLUTION)
    assert check_win_condition(placed, bank_regions)


def test_first_step_is_the_single_cell_region(bank_regions):
    result = solve_with_techniques(bank_regions)
    first = result.steps[0]
    # Row 0 still has several candidates; region 0 has exactly one cell.
    assert (first.row, first.col) == (0, 3)
    assert first.reasoning


def test_row_lock_clears_rest_of_row():
    grid = _CandidateGrid(ROW_LOCKED_REGIONS)
    assert _region_row_col_lock(grid)
    assert grid.candidates[0] == [True, True, False, False]
    assert grid.counts[Technique.REGION_ROW_COL_LOCK] == 1
    assert grid.max_technique == Technique.REGION_ROW_COL_LOCK
    assert grid.placed == []

    # Nothing left to eliminate in that row.
    assert not _region_row_col_lock(grid)


def test_column_lock_clears_rest_of_column():
    transposed = [list(col) for col in zip(*ROW_LOCKED_REGIONS)]
    grid = _CandidateGrid(transposed)
    assert _region_row_col_lock(grid)
    assert [grid.candidates[r][0] for r in range(4)] == [True, True, False, False]
    assert grid.counts[Technique.REGION_ROW_COL_LOCK] == 1


def test_hidden_single_places_lone_cell_of_region_in_row():
    regions = [
        [0, 1, 1, 1],
        [0, 0, 2, 2],
        [3, 3, 2, 2],
        [3, 3, 3, 3],
    ]
    grid = _CandidateGrid(regions)
    assert _hidden_single(grid)
    assert grid.placed == [Position(0, 0)]
    assert grid.steps[0].technique == Technique.HIDDEN_SINGLE
    assert "row 1" in grid.steps[0].reasoning
    assert grid.region_has_queen[0]
    assert not any(grid.candidates[0])
    assert grid.counts[Technique.HIDDEN_SINGLE] == 1


def test_intersection_claims_row_for_confined_region():
    grid = _CandidateGrid(ROW_LOCKED_REGIONS)
    assert _intersection(grid)
    assert grid.candidates[0] == [True, True, False, False]
    assert grid.counts[Technique.INTERSECTION] == 1
    assert grid.max_technique == Technique.INTERSECTION


def test_intersection_leaves_region_cells_outside_a_full_row():
    # Row 0 belongs to region 0 alone, but region 0 also owns (1, 0).
    regions = [
        [0, 0, 0, 0],
        [0, 1, 1, 2],
        [3, 1, 2, 2],
        [3, 3, 3, 2],
    ]
    grid = _CandidateGrid(regions)
    assert not _intersection(grid)
    assert grid.candidates[1][0]
    assert grid.counts[Technique.INTERSECTION] == 0


def test_forced_elimination_removes_cell_that_empties_a_region():
    grid = _CandidateGrid(ROW_LOCKED_REGIONS)
    # A queen at (0, 2) would take row 0, which holds all of region 0.
    assert _forced_elimination(grid)
    assert not grid.candidates[0][2]
    assert grid.candidates[0][3]
    assert grid.placed == []
    assert grid.counts[Technique.FORCED_ELIMINATION] == 1
    assert grid.max_technique == Technique.FORCED_ELIMINATION


def test_medium_layout_needs_hidden_singles():
    result = solve_with_techniques(MEDIUM_REGIONS)
    assert result.solved
    assert _counts(result) == [6, 2, 3, 0, 0]
    assert result.max_technique == Technique.HIDDEN_SINGLE
    assert {Position(s.row, s.col) for s in result.steps} == {Position(r, c) for r, c in MEDIUM_SOLUTION}

    rating = rate_puzzle_difficulty(MEDIUM_REGIONS)
    assert rating.difficulty == "medium"
    assert rating.step_count == 9


def test_hard_layout_leans_on_hidden_singles():
    result = solve_with_techniques(HARD_REGIONS)
    assert result.solved
    assert _counts(result) == [3, 4, 6, 0, 0]
    assert {Position(s.row, s.col) for s in result.steps} == {Position(r, c) for r, c in HARD_SOLUTION}
    assert rate_puzzle_difficulty(HARD_REGIONS).difficulty == "hard"


def test_lock_runs_before_intersection():
    # Confined regions are claimed by the lock, so intersection never fires in a full solve.
    result = solve_with_techniques(MEDIUM_REGIONS)
    assert result.technique_counts[Technique.REGION_ROW_COL_LOCK] > 0
    assert result.technique_counts[Technique.INTERSECTION] == 0


def test_symmetric_block_grid_requires_guessing(block_regions):
    result = solve_with_techniques(block_regions)
    assert not result.solved
    assert result.requires_guessing
    assert result.steps == []


def test_contradiction_stops_without_guessing():
    # (0, 0) by hidden single, (1, 2) by naked single, then the last row is empty.
    result = solve_with_techniques([[0, 0, 0], [1, 1, 1], [2, 2, 2]])
    assert not result.solved
    assert not result.requires_guessing
    assert [(s.row, s.col) for s in result.steps] == [(0, 0), (1, 2)]
    assert [s.technique for s in result.steps] == [Technique.HIDDEN_SINGLE, Technique.NAKED_SINGLE]
    assert result.max_technique == Technique.HIDDEN_SINGLE


def test_rating_of_bank_puzzle(bank_regions):
    rating = rate_puzzle_difficulty(bank_regions)
    assert rating.difficulty == "easy"
    assert rating.solvable
    assert not rating.requires_guessing
    assert rating.step_count == 9
    assert rating.max_technique == Technique.NAKED_SINGLE


def test_single_cell_puzzle():
    result = solve_with_techniques([[0]])
    assert result.solved
    assert len(result.steps) == 1
