"""Random valid queen placement used as the seed for region growth."""

from typing import List, Optional, Set

from .model import Position
from .prng import SeededRandom


def generate_placement(random: SeededRandom, grid_size: int) -> Optional[List[Position]]:
    """
    One queen per row and column with no two queens touching.
    Column order is shuffled per row so each seed gives its own placement.
    Returns None when the grid admits no such placement (N = 2 or 3).
    """
    if grid_size < 1:
        raise ValueError(f"Grid size must be positive, got {grid_size}")

    placement: List[Position] = []
    used_cols: Set[int] = set()

    def _backtrack(row: int) -> bool:
        if row == grid_size:
            return True

        for col in random.shuffled(list(range(grid_size))):
            if col in used_cols:
                continue
            # Only the previous row can touch this one.
            if placement and abs(placement[-1].col - col) <= 1:
                continue

            placement.append(Position(row, col))
            used_cols.add(col)
            if _backtrack(row + 1):
                return True
            placement.pop()
            used_cols.remove(col)

        return False

    return list(placement) if _backtrack(0) else None
