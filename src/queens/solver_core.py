"""Exhaustive row-by-row backtracking solver for a region layout."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .model import Position, check_region_grid

Solution = List[Position]


@dataclass
class SolverResult:
    solved: bool
    solutions: List[Solution] = field(default_factory=list)
    count: int = 0


def is_valid_placement(
    queens: Iterable[Position], regions: Sequence[Sequence[int]], row: int, col: int
) -> bool:
    """True when a queen at (row, col) conflicts with none of `queens`."""
    region = regions[row][col]
    for queen in queens:
        if queen.row == row or queen.col == col:
            return False
        if regions[queen.row][queen.col] == region:
            return False
        if abs(queen.row - row) <= 1 and abs(queen.col - col) <= 1:
            return False
    return True


def solve(
    regions: Sequence[Sequence[int]],
    partial_solution: Optional[Sequence[Position]] = None,
    max_solutions: int = 2,
) -> SolverResult:
    """
    Enumerate up to `max_solutions` full solutions.
    Search resumes on the row after the last queen of `partial_solution`
    and stops as soon as the cap is reached, so the count is exact only
    up to the cap.
    """
    size = check_region_grid(regions)
    queens = [Position.from_any(p) for p in (partial_solution or [])]
    start_row = queens[-1].row + 1 if queens else 0
    solutions: List[Solution] = []

    _backtrack(regions, size, queens, start_row, solutions, max_solutions)
    return SolverResult(solved=bool(solutions), solutions=solutions, count=len(solutions))


def _backtrack(
    regions: Sequence[Sequence[int]],
    size: int,
    queens: List[Position],
    row: int,
    solutions: List[Solution],
    max_solutions: int,
) -> None:
    if len(solutions) >= max_solutions:
        return
    if len(queens) == size:
        solutions.append(list(queens))
        return
    if row >= size:
        return

    for col in range(size):
        if not is_valid_placement(queens, regions, row, col):
            continue
        queens.append(Position(row, col))
        _backtrack(regions, size, queens, row + 1, solutions, max_solutions)
        queens.pop()
        if len(solutions) >= max_solutions:
            return


def count_solutions(regions: Sequence[Sequence[int]], max_count: int = 2) -> int:
    return solve(regions, [], max_count).count


def find_solution(regions: Sequence[Sequence[int]]) -> Optional[Solution]:
    result = solve(regions, [], 1)
    return result.solutions[0] if result.solved else None


def has_unique_solution(regions: Sequence[Sequence[int]]) -> bool:
    return count_solutions(regions, 2) == 1
