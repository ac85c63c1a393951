"""Pre-rated puzzle bank: read-only, bucketed by difficulty, copy on read."""

import copy
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .loader import load_bank_records
from .model import DIFFICULTIES, Puzzle, RatedPuzzle
from .prng import SeededRandom

logger = logging.getLogger(__name__)

DEFAULT_BANK_PATH = Path(__file__).parent / "data" / "puzzle_bank.json"


class PuzzleBank:
    """
    Every read returns a deep copy, so callers can never alias or mutate
    the shared records.
    """

    def __init__(self, records: Iterable[RatedPuzzle]):
        self._buckets: Dict[str, List[RatedPuzzle]] = {d: [] for d in DIFFICULTIES}
        for record in records:
            self._buckets[record.difficulty].append(record)

    @classmethod
    def from_dicts(cls, records: Iterable[Dict]) -> "PuzzleBank":
        return cls(RatedPuzzle.from_dict(r) for r in records)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def counts(self) -> Dict[str, int]:
        return {d: len(bucket) for d, bucket in self._buckets.items()}

    def records(self, difficulty: str) -> List[RatedPuzzle]:
        return [copy.deepcopy(r) for r in self._bucket(difficulty)]

    def _bucket(self, difficulty: str, grid_size: Optional[int] = None) -> List[RatedPuzzle]:
        """
        The requested tier, or the nearest non-empty tier (easier first).
        With `grid_size`, records of that size are preferred when any exist.
        """
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty}")
        if not len(self):
            raise LookupError("Puzzle bank is empty")

        wanted = DIFFICULTIES.index(difficulty)
        order = sorted(range(len(DIFFICULTIES)), key=lambda i: (abs(i - wanted), i))
        tiers = [self._buckets[DIFFICULTIES[i]] for i in order if self._buckets[DIFFICULTIES[i]]]
        if tiers[0] is not self._buckets[difficulty]:
            logger.warning(f"No {difficulty} puzzles in bank, using {tiers[0][0].difficulty}")

        if grid_size is not None:
            for tier in tiers:
                sized = [r for r in tier if r.grid_size == grid_size]
                if sized:
                    return sized
        return tiers[0]

    def get(self, difficulty: str, index: int, grid_size: Optional[int] = None) -> Puzzle:
        """Index wraps around; negative indices use their absolute value."""
        bucket = self._bucket(difficulty, grid_size)
        record = bucket[abs(index) % len(bucket)]
        return copy.deepcopy(record.puzzle)

    def draw(self, difficulty: str, random: SeededRandom, grid_size: Optional[int] = None) -> Puzzle:
        bucket = self._bucket(difficulty, grid_size)
        record = bucket[random.randrange(len(bucket))]
        logger.debug(f"Drew {difficulty} puzzle from bank (seed {random.seed})")
        return copy.deepcopy(record.puzzle)

    def daily(self, difficulty: str, seed: int) -> Puzzle:
        bucket = self._bucket(difficulty)
        return copy.deepcopy(bucket[seed % len(bucket)].puzzle)


_default_bank: Optional[PuzzleBank] = None


def load_bank(path: Optional[Union[str, Path]] = None) -> PuzzleBank:
    """Load a bank file; without a path, the packaged seed bank (cached)."""
    global _default_bank
    if path is None:
        if _default_bank is None:
            _default_bank = PuzzleBank.from_dicts(load_bank_records(str(DEFAULT_BANK_PATH)))
        return _default_bank
    return PuzzleBank.from_dicts(load_bank_records(str(path)))
