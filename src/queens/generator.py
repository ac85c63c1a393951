"""
Puzzle orchestration: placement -> regions -> checks, with bank fallback.

Every call builds its own SeededRandom, so a seed always yields the same
puzzle and concurrent calls never share state.
"""

import logging
import random as _system_random
import time
from datetime import date
from typing import Dict, Optional, Tuple

from src.utils.trace import Tracer

from .bank import PuzzleBank, load_bank
from .config import GeneratorConfig
from .model import DIFFICULTIES, Puzzle
from .placement import generate_placement
from .prng import SeededRandom, daily_seed
from .regions import (
    all_region_ids_present,
    are_all_regions_connected,
    generate_regions,
    has_min_region_size,
)
from .solver_core import has_unique_solution

logger = logging.getLogger(__name__)

# Failure categories tallied per attempt.
PLACEMENT_FAILED = "placement_failed"
REGIONS_FAILED = "regions_failed"
DISCONNECTED = "disconnected"
REGION_TOO_SMALL = "region_too_small"
NON_UNIQUE = "non_unique"


class GenerationError(RuntimeError):
    """Raised when the attempt budget runs out and bank fallback is off."""

    def __init__(self, message: str, failures: Dict[str, int]):
        super().__init__(message)
        self.failures = failures


def attempt_once(
    random: SeededRandom, grid_size: int, regularity: float, min_region_size: int
) -> Tuple[Optional[Puzzle], Optional[str]]:
    """One pass of the pipeline. Returns (puzzle, None) or (None, failure reason)."""
    solution = generate_placement(random, grid_size)
    if solution is None:
        return None, PLACEMENT_FAILED

    regions = generate_regions(solution, random, regularity)
    if regions is None:
        return None, REGIONS_FAILED
    if not (all_region_ids_present(regions) and are_all_regions_connected(regions)):
        return None, DISCONNECTED
    if not has_min_region_size(regions, min_region_size):
        return None, REGION_TOO_SMALL
    if not has_unique_solution(regions):
        return None, NON_UNIQUE

    return Puzzle(regions=regions, solution=solution), None


def generate_candidate(
    seed: int,
    regularity: float,
    grid_size: int,
    attempt_budget: int = 50,
    min_region_size: int = 3,
    tracer: Optional[Tracer] = None,
) -> Optional[Puzzle]:
    """Fresh generation only; None when the budget runs out."""
    tracer = tracer or Tracer(enabled=False)
    random = SeededRandom(seed)

    for _ in range(attempt_budget):
        puzzle, reason = attempt_once(random, grid_size, regularity, min_region_size)
        if puzzle is not None:
            tracer.log_attempt(seed, grid_size, "accepted")
            return puzzle
        tracer.log_attempt(seed, grid_size, "rejected", reason)
    return None


def generate_puzzle(
    seed: Optional[int] = None,
    difficulty: str = "medium",
    config: Optional[GeneratorConfig] = None,
    bank: Optional[PuzzleBank] = None,
    tracer: Optional[Tracer] = None,
) -> Puzzle:
    """
    Generate a uniquely solvable puzzle for `seed`.

    Falls back to a bank draw of the requested difficulty when the attempt
    budget runs out. The fallback draw uses the same seeded stream, so it
    is deterministic too.
    """
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"Unknown difficulty: {difficulty}")
    config = config or GeneratorConfig()
    tracer = tracer or Tracer(enabled=False)
    actual_seed = seed if seed is not None else _system_random.randrange(1000000)
    random = SeededRandom(actual_seed)

    logger.debug(f"Generating {config.grid_size}x{config.grid_size} puzzle with seed {actual_seed}")
    failures: Dict[str, int] = {}
    for attempt in range(config.attempt_budget):
        puzzle, reason = attempt_once(random, config.grid_size, config.regularity, config.min_region_size)
        if puzzle is not None:
            tracer.log_attempt(actual_seed, config.grid_size, "accepted")
            logger.debug(f"Seed {actual_seed} accepted after {attempt + 1} attempts")
            return puzzle
        tracer.log_attempt(actual_seed, config.grid_size, "rejected", reason)
        failures[reason] = failures.get(reason, 0) + 1

    logger.warning(
        f"Generation exhausted {config.attempt_budget} attempts for seed {actual_seed}: {failures}"
    )
    if not config.fallback_to_bank:
        raise GenerationError(f"No puzzle for seed {actual_seed}", failures)

    tracer.log_fallback(actual_seed, difficulty, "attempt_budget_exhausted")
    bank = bank or load_bank()
    return bank.draw(difficulty, random, grid_size=config.grid_size)


def generate_daily_puzzle(
    difficulty: str = "medium",
    today: Optional[date] = None,
    bank: Optional[PuzzleBank] = None,
) -> Puzzle:
    """Same puzzle for every caller on the same calendar day."""
    seed = daily_seed(today)
    logger.debug(f"Daily puzzle for seed {seed}, difficulty: {difficulty}")
    bank = bank or load_bank()
    return bank.daily(difficulty, seed)


def generate_random_puzzle(
    difficulty: str = "medium",
    config: Optional[GeneratorConfig] = None,
    bank: Optional[PuzzleBank] = None,
) -> Puzzle:
    """Different every call: the seed mixes wall clock and system randomness."""
    seed = int(time.time() * 1000) + _system_random.randrange(10000)
    logger.debug(f"Generating random puzzle with seed {seed}")
    return generate_puzzle(seed, difficulty, config=config, bank=bank)
