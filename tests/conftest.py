"""Shared puzzle fixtures."""

import pytest

# Unique 9x9 layout solved by naked singles alone.
BANK_REGIONS = [
    [1, 1, 5, 0, 6, 3, 7, 2, 4],
    [1, 8, 5, 8, 6, 3, 7, 2, 4],
    [8, 8, 5, 8, 6, 3, 7, 2, 4],
    [8, 8, 5, 8, 6, 3, 7, 7, 4],
    [8, 8, 5, 8, 6, 8, 7, 7, 4],
    [8, 8, 5, 8, 6, 8, 7, 7, 7],
    [8, 8, 8, 8, 6, 8, 7, 7, 7],
    [8, 8, 8, 8, 8, 8, 7, 7, 7],
    [8, 8, 8, 8, 8, 8, 8, 7, 7],
]
BANK_SOLUTION = [(0, 3), (1, 0), (2, 7), (3, 5), (4, 8), (5, 2), (6, 4), (7, 6), (8, 1)]

# Unique 9x9 layouts whose deduction replay needs hidden singles.
MEDIUM_REGIONS = [
    [1, 1, 1, 0, 0, 0, 0, 0, 0],
    [1, 1, 0, 0, 0, 0, 0, 0, 0],
    [1, 1, 2, 0, 0, 3, 0, 0, 0],
    [1, 1, 2, 0, 3, 3, 3, 0, 3],
    [1, 1, 2, 2, 4, 3, 3, 3, 3],
    [1, 1, 1, 4, 4, 3, 3, 3, 5],
    [1, 1, 1, 4, 6, 6, 3, 7, 5],
    [8, 1, 1, 4, 6, 6, 6, 7, 5],
    [8, 8, 8, 4, 6, 6, 6, 7, 7],
]
MEDIUM_SOLUTION = [(0, 3), (1, 0), (2, 2), (3, 6), (4, 4), (5, 8), (6, 5), (7, 7), (8, 1)]

HARD_REGIONS = [
    [1, 1, 0, 0, 0, 0, 0, 0, 0],
    [1, 0, 0, 0, 0, 2, 2, 2, 0],
    [0, 0, 0, 0, 0, 0, 2, 0, 0],
    [0, 0, 0, 0, 3, 0, 2, 0, 0],
    [4, 4, 0, 5, 3, 3, 2, 0, 0],
    [4, 4, 5, 5, 5, 5, 2, 2, 0],
    [6, 6, 6, 6, 5, 5, 2, 2, 7],
    [6, 8, 8, 6, 5, 5, 5, 2, 7],
    [6, 8, 8, 6, 7, 7, 7, 7, 7],
]
HARD_SOLUTION = [(0, 7), (1, 0), (2, 6), (3, 4), (4, 1), (5, 5), (6, 3), (7, 8), (8, 2)]

# Nine 3x3 blocks in row-major order; valid but far from unique.
BLOCK_REGIONS = [[3 * (r // 3) + c // 3 for c in range(9)] for r in range(9)]
BLOCK_SOLUTION_COLS = [1, 4, 7, 0, 3, 6, 2, 5, 8]


@pytest.fixture
def bank_regions():
    return [list(row) for row in BANK_REGIONS]


@pytest.fixture
def block_regions():
    return [list(row) for row in BLOCK_REGIONS]


@pytest.fixture
def row_regions_4x4():
    return [[r] * 4 for r in range(4)]
