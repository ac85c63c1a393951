"""
Hint analysis for a board in progress.

Hints are derived from the placed queens and the region layout only. Manual
and automatic marks are accepted for the caller's convenience but never
trusted, since a player's manual marks can be wrong.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .model import AutoPlacedX, Hint, Position, Queen
from .solver_core import is_valid_placement
from .validator import validate_placement

logger = logging.getLogger(__name__)

REGION_NAMES = ["blue", "red", "green", "orange", "purple", "teal", "yellow", "pink", "gray"]

# Row/column candidate count at or below which a cell is worth pointing at.
ELIMINATION_MAX_OPTIONS = 3
BEST_REGION_MIN_CELLS = 2
BEST_REGION_MAX_CELLS = 5


@dataclass
class _Tip:
    explanation: str
    min_queens: int = 0
    max_queens: Optional[int] = None

    def applies(self, queens_count: int) -> bool:
        if queens_count < self.min_queens:
            return False
        return self.max_queens is None or queens_count < self.max_queens


TIPS = [
    _Tip("Look for rows, columns, or regions with the fewest valid cells - they're easiest to solve!", max_queens=3),
    _Tip("Remember: queens block all 8 adjacent cells (including diagonals). Use this to eliminate options.",
         max_queens=4),
    _Tip("Try focusing on corner regions first - they often have more constraints.", max_queens=5),
    _Tip("If stuck, look for regions where most cells are already blocked by placed queens.", min_queens=3),
    _Tip("Check where your placed queens intersect - the blocking patterns create forced moves.", min_queens=4),
]


def region_name(region_id: int) -> str:
    if 0 <= region_id < len(REGION_NAMES):
        return REGION_NAMES[region_id]
    return f"region {region_id + 1}"


def general_tip(queens_count: int) -> Hint:
    """A strategy tip that rotates with the number of queens placed."""
    applicable = [t for t in TIPS if t.applies(queens_count)] or TIPS[:1]
    tip = applicable[queens_count % len(applicable)]
    return Hint(type="general_tip", position=None, explanation=tip.explanation)


class _Board:
    """Open cells: empty and not ruled out by any placed queen."""

    def __init__(self, queens: List[Queen], regions: Sequence[Sequence[int]]):
        self.queens = queens
        self.regions = regions
        self.size = len(regions)
        positions = [q.position for q in queens]
        self.open = [
            [is_valid_placement(positions, regions, r, c) for c in range(self.size)]
            for r in range(self.size)
        ]
        self.filled_rows = {p.row for p in positions}
        self.filled_cols = {p.col for p in positions}
        self.filled_regions = {regions[p.row][p.col] for p in positions}

    def region_cells(self, region_id: int) -> List[Position]:
        return [
            Position(r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.regions[r][c] == region_id
        ]

    def open_cells(self, cells: Iterable[Position]) -> List[Position]:
        return [p for p in cells if self.open[p.row][p.col]]

    def queen_ids_at(self, cells: Iterable[Position]) -> List[str]:
        cells = set(cells)
        return [q.id for q in self.queens if q.position in cells]


def _conflict_hint(board: _Board) -> Optional[Hint]:
    validation = validate_placement(board.queens, board.regions)
    if validation.is_valid:
        return None
    logger.debug("Found conflict in placement")

    grouped = [
        (validation.row_conflicts, lambda row: f"Row {row + 1}", "row"),
        (validation.col_conflicts, lambda col: f"Column {col + 1}", "column"),
        (validation.region_conflicts, lambda rid: f"The {region_name(rid)} region", "region"),
    ]
    for conflicts, label, unit in grouped:
        if not conflicts:
            continue
        index, cells = next(iter(conflicts.items()))
        return Hint(
            type="conflict",
            position=None,
            explanation=f"{label(index)} has {len(cells)} queens. Each {unit} can only have one queen.",
            highlight_cells=cells,
            highlight_queens=board.queen_ids_at(cells),
        )

    first, second = validation.adjacent_conflicts[0]
    return Hint(
        type="conflict",
        position=None,
        explanation="Two queens are adjacent to each other. Queens cannot touch, even diagonally.",
        highlight_cells=[first, second],
        highlight_queens=board.queen_ids_at([first, second]),
    )


def _naked_single_hint(board: _Board) -> Optional[Hint]:
    size = board.size

    for row in range(size):
        if row in board.filled_rows:
            continue
        cells = [Position(row, c) for c in range(size)]
        candidates = board.open_cells(cells)
        if len(candidates) == 1:
            logger.debug(f"Found naked single in row {row + 1}")
            return Hint(
                type="naked_single_row",
                position=candidates[0],
                explanation=f"Row {row + 1} has only one valid cell remaining. Place a queen here!",
                highlight_cells=cells,
                can_apply=True,
            )

    for col in range(size):
        if col in board.filled_cols:
            continue
        cells = [Position(r, col) for r in range(size)]
        candidates = board.open_cells(cells)
        if len(candidates) == 1:
            logger.debug(f"Found naked single in column {col + 1}")
            return Hint(
                type="naked_single_col",
                position=candidates[0],
                explanation=f"Column {col + 1} has only one valid cell remaining. Place a queen here!",
                highlight_cells=cells,
                can_apply=True,
            )

    for region_id in range(size):
        if region_id in board.filled_regions:
            continue
        cells = board.region_cells(region_id)
        candidates = board.open_cells(cells)
        if len(candidates) == 1:
            name = region_name(region_id)
            logger.debug(f"Found naked single in {name} region")
            return Hint(
                type="naked_single_region",
                position=candidates[0],
                explanation=f"The {name} region has only one valid cell remaining. Place a queen here!",
                highlight_cells=cells,
                can_apply=True,
            )
    return None


def _elimination_hint(board: _Board) -> Optional[Hint]:
    size = board.size
    for row in range(size):
        for col in range(size):
            if not board.open[row][col]:
                continue

            unsatisfied = sum([
                row not in board.filled_rows,
                col not in board.filled_cols,
                board.regions[row][col] not in board.filled_regions,
            ])
            if unsatisfied < 2:
                continue

            in_row = sum(board.open[row])
            in_col = sum(board.open[r][col] for r in range(size))
            if in_row <= ELIMINATION_MAX_OPTIONS or in_col <= ELIMINATION_MAX_OPTIONS:
                logger.debug(f"Found elimination opportunity at ({row}, {col})")
                return Hint(
                    type="elimination",
                    position=Position(row, col),
                    explanation=(
                        f"This cell at row {row + 1}, column {col + 1} is a strong candidate. "
                        f"Row has {in_row} options, column has {in_col} options."
                    ),
                    highlight_cells=[Position(row, col)],
                    can_apply=True,
                )
    return None


def _best_region_hint(board: _Board) -> Optional[Hint]:
    best_region = None
    best_cells: List[Position] = []
    for region_id in range(board.size):
        if region_id in board.filled_regions:
            continue
        candidates = board.open_cells(board.region_cells(region_id))
        if not BEST_REGION_MIN_CELLS <= len(candidates) <= BEST_REGION_MAX_CELLS:
            continue
        if best_region is None or len(candidates) < len(best_cells):
            best_region = region_id
            best_cells = candidates

    if best_region is None:
        return None
    return Hint(
        type="best_region",
        position=best_cells[0],
        explanation=(
            f"The {region_name(best_region)} region has only {len(best_cells)} possible cells "
            "for its queen. Try focusing here!"
        ),
        highlight_cells=best_cells,
    )


def analyze_for_hint(
    queens: Iterable[Queen],
    manual_xs: Iterable[Position],
    auto_xs: Iterable[AutoPlacedX],
    regions: Sequence[Sequence[int]],
) -> Hint:
    """
    Pick the most useful hint for the current board. Never returns None:
    conflicts first, then naked singles (rows, columns, regions), then a
    strong candidate cell, then the tightest region, then a general tip.
    """
    queens = list(queens)
    logger.debug(f"Analyzing for hint with {len(queens)} queens placed")
    board = _Board(queens, regions)

    for finder in (_conflict_hint, _naked_single_hint, _elimination_hint, _best_region_hint):
        hint = finder(board)
        if hint is not None:
            return hint

    logger.debug("No specific hint found, returning general tip")
    return general_tip(len(queens))
