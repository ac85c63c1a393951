"""Queens puzzle engine: generation, uniqueness, rating, hints and validation."""

from .model import Position, Queen, AutoPlacedX, Puzzle, RatedPuzzle, Hint, ValidationResult, Technique
from .solver_core import solve, is_valid_placement, count_solutions, find_solution, has_unique_solution
from .human_solver import solve_with_techniques, rate_puzzle_difficulty
from .generator import GenerationError, generate_puzzle, generate_daily_puzzle, generate_random_puzzle
from .validator import validate_placement, check_win_condition
from .hints import analyze_for_hint

__all__ = [
    "Position",
    "Queen",
    "AutoPlacedX",
    "Puzzle",
    "RatedPuzzle",
    "Hint",
    "ValidationResult",
    "Technique",
    "solve",
    "is_valid_placement",
    "count_solutions",
    "find_solution",
    "has_unique_solution",
    "solve_with_techniques",
    "rate_puzzle_difficulty",
    "GenerationError",
    "generate_puzzle",
    "generate_daily_puzzle",
    "generate_random_puzzle",
    "validate_placement",
    "check_win_condition",
    "analyze_for_hint",
]
