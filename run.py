"""
CLI entrypoint: build a pre-rated puzzle bank.

Example:
    python run.py
    python run.py --output bank.jsonl --per-difficulty 10 --max-duration 60
    python run.py --config bank.json --trace trace.csv --verbose
"""

import argparse
import copy
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional

from src.queens.bank import DEFAULT_BANK_PATH
from src.queens.config import BankBuildConfig, DifficultyThresholds, load_config
from src.queens.generator import generate_candidate
from src.queens.human_solver import rate_puzzle_difficulty
from src.queens.loader import write_bank_records
from src.queens.model import DIFFICULTIES, RatedPuzzle
from src.queens.regions import has_entire_row_single_region
from src.utils.trace import Tracer

logger = logging.getLogger(__name__)

Bank = Dict[str, List[RatedPuzzle]]


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Generate a pre-rated Queens puzzle bank")
    parser.add_argument("--config", type=Path, default=None, help="JSON file overriding bank build settings")
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_BANK_PATH,
        help="Where to write the bank (.json, .jsonl or .parquet)",
    )
    parser.add_argument("--per-difficulty", type=int, default=None, help="Target puzzles per difficulty")
    parser.add_argument("--max-attempts", type=int, default=None, help="Stop after this many seeds")
    parser.add_argument("--max-duration", type=float, default=None, help="Stop after this many seconds")
    parser.add_argument("--grid-sizes", type=int, nargs="+", default=None, help="Grid sizes to cycle through")
    parser.add_argument("--start-seed", type=int, default=None, help="First seed to try")
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the trace CSV")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _totals(bank: Bank) -> str:
    return " ".join(f"{d}:{len(bank[d])}" for d in DIFFICULTIES)


def _backfill(bank: Bank, target: int) -> None:
    """Fill an empty hard/expert tier from the tier below it, relabelled."""
    for harder, easier in (("hard", "medium"), ("expert", "hard")):
        if bank[harder] or not bank[easier]:
            continue
        for record in bank[easier][:target]:
            filled = copy.deepcopy(record)
            filled.difficulty = harder
            bank[harder].append(filled)
        logger.info(f"Filled {harder} from {easier}: {len(bank[harder])} puzzles")


def build_bank(
    config: BankBuildConfig,
    tracer: Optional[Tracer] = None,
    thresholds: Optional[DifficultyThresholds] = None,
) -> Bank:
    """
    Generate, filter and rate puzzles until every tier holds
    `target_per_difficulty` records or a cap (attempts, wall clock) is hit.
    """
    tracer = tracer or Tracer(enabled=False)
    bank: Bank = {d: [] for d in DIFFICULTIES}
    target = config.target_per_difficulty

    def all_full() -> bool:
        return all(len(bank[d]) >= target for d in DIFFICULTIES)

    seed = config.start_seed
    attempts = 0
    start = time.monotonic()
    logger.info(
        f"Building bank: {target} per difficulty, grid sizes {config.grid_sizes}, "
        f"max {config.max_attempts} attempts / {config.max_duration_sec}s"
    )

    while not all_full() and attempts < config.max_attempts:
        if time.monotonic() - start > config.max_duration_sec:
            logger.info(f"Time limit reached ({config.max_duration_sec}s). Using collected puzzles.")
            break
        attempts += 1

        regularity = config.regularities[attempts % len(config.regularities)]
        grid_size = config.grid_sizes[attempts % len(config.grid_sizes)]
        current_seed = seed
        seed += 1

        puzzle = generate_candidate(
            current_seed,
            regularity,
            grid_size,
            attempt_budget=config.attempts_per_seed,
            min_region_size=config.min_region_size,
            tracer=tracer,
        )
        if puzzle is None:
            continue

        if has_entire_row_single_region(puzzle.regions):
            tracer.log_rating(current_seed, "", 0, "skipped", "single_region_row")
            continue

        rating = rate_puzzle_difficulty(puzzle.regions, thresholds)
        if not rating.solvable or rating.requires_guessing:
            reason = "requires_guessing" if rating.requires_guessing else "unsolvable"
            tracer.log_rating(current_seed, rating.difficulty, rating.step_count, "skipped", reason)
            continue

        if len(bank[rating.difficulty]) >= target:
            tracer.log_rating(current_seed, rating.difficulty, rating.step_count, "skipped", "tier_full")
            continue

        tracer.log_rating(current_seed, rating.difficulty, rating.step_count, "accepted")
        bank[rating.difficulty].append(
            RatedPuzzle(
                puzzle=puzzle,
                difficulty=rating.difficulty,
                max_technique=int(rating.max_technique),
                step_count=rating.step_count,
            )
        )
        tracer.log_bank_add(current_seed, grid_size, rating.difficulty)
        logger.info(f"{rating.difficulty}: added ({grid_size}x{grid_size}) - {_totals(bank)}")

    elapsed = time.monotonic() - start
    logger.info(f"Generation complete after {attempts} attempts ({elapsed:.0f}s): {_totals(bank)}")
    _backfill(bank, target)
    return bank


def bank_to_records(bank: Bank) -> List[dict]:
    return [record.to_dict() for d in DIFFICULTIES for record in bank[d]]


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    config = load_config(args.config, BankBuildConfig)
    if args.per_difficulty is not None:
        config.target_per_difficulty = args.per_difficulty
    if args.max_attempts is not None:
        config.max_attempts = args.max_attempts
    if args.max_duration is not None:
        config.max_duration_sec = args.max_duration
    if args.grid_sizes:
        config.grid_sizes = args.grid_sizes
    if args.start_seed is not None:
        config.start_seed = args.start_seed

    tracer = Tracer(enabled=args.trace is not None)
    bank = build_bank(config, tracer)

    records = bank_to_records(bank)
    write_bank_records(records, str(args.output))
    logger.info(f"Puzzle bank written to: {args.output} ({len(records)} puzzles)")

    if args.trace:
        tracer.to_csv(args.trace)
        logger.info(f"Trace summary: {tracer.summary()['failures']}")
    return bank


if __name__ == "__main__":
    main()
