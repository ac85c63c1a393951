"""Top-level Queens interface.

Exposes the surface a game-state collaborator consumes: puzzle generation,
hints, move validation, the win check and single-placement legality. All of
it takes plain data (region grids, position lists) and holds no state.
"""

from typing import Any, Iterable, List, Optional

from src.queens import generator, hints, solver_core, validator
from src.queens.human_solver import rate_puzzle_difficulty
from src.queens.model import Hint, Position, Puzzle, Queen, ValidationResult


def _require_grid(regions: Any) -> None:
    if not isinstance(regions, (list, tuple)) or not all(isinstance(row, (list, tuple)) for row in regions):
        raise TypeError("regions must be a list of lists of region ids")


def _require_queens(queens: Any) -> List[Queen]:
    queens = list(queens)
    if not all(isinstance(q, Queen) for q in queens):
        raise TypeError("queens must be Queen instances")
    return queens


def generate_puzzle(seed: Optional[int] = None, difficulty: str = "medium", **kwargs: Any) -> Puzzle:
    if seed is not None and not isinstance(seed, int):
        raise TypeError("seed must be an int or None")
    return generator.generate_puzzle(seed, difficulty, **kwargs)


def generate_daily_puzzle(difficulty: str = "medium", **kwargs: Any) -> Puzzle:
    return generator.generate_daily_puzzle(difficulty, **kwargs)


def generate_random_puzzle(difficulty: str = "medium", **kwargs: Any) -> Puzzle:
    return generator.generate_random_puzzle(difficulty, **kwargs)


def analyze_for_hint(
    queens: Iterable[Queen],
    manual_xs: Iterable[Position],
    auto_xs: Iterable[Any],
    regions: Any,
) -> Hint:
    _require_grid(regions)
    return hints.analyze_for_hint(_require_queens(queens), manual_xs, auto_xs, regions)


def validate_placement(queens: Iterable[Any], regions: Any) -> ValidationResult:
    _require_grid(regions)
    return validator.validate_placement(queens, regions)


def check_win_condition(queens: Iterable[Any], regions: Any) -> bool:
    _require_grid(regions)
    return validator.check_win_condition(queens, regions)


def is_valid_placement(queens: Iterable[Any], regions: Any, row: int, col: int) -> bool:
    """
    Accepts Queen objects, Positions, {"row", "col"} dicts or (row, col) pairs.
    """
    _require_grid(regions)
    positions = validator.queen_positions(queens)
    return solver_core.is_valid_placement(positions, regions, row, col)


__all__ = [
    "generate_puzzle",
    "generate_daily_puzzle",
    "generate_random_puzzle",
    "analyze_for_hint",
    "validate_placement",
    "check_win_condition",
    "is_valid_placement",
    "rate_puzzle_difficulty",
]
