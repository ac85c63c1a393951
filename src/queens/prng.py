"""Seeded Mulberry32 PRNG shared by the placement and region generators."""

from datetime import date
from typing import List, MutableSequence, Optional, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class SeededRandom:
    """
    Mulberry32: a 32-bit add-mix-scramble generator.

    The stream depends only on the seed, so a seed reproduces the same
    puzzle on any implementation of the same algorithm. One instance is
    created per generation call and handed down to every sub-generator.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed & _MASK

    def random(self) -> float:
        """Next float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / 4294967296

    __call__ = random

    def randrange(self, stop: int) -> int:
        return int(self.random() * stop)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """In-place Fisher-Yates from the back, one draw per swap."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]

    def shuffled(self, items: List[T]) -> List[T]:
        result = list(items)
        self.shuffle(result)
        return result


def daily_seed(today: Optional[date] = None) -> int:
    """Calendar-day seed, e.g. 2024-03-09 -> 20240309."""
    today = today or date.today()
    return today.year * 10000 + today.month * 100 + today.day
