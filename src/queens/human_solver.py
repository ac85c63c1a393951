"""
Deduction-only solver that records which techniques a human would need.

Techniques are tried cheapest first and the loop restarts from the first
technique after every success, so the recorded path is the simplest
explanation this rule set can find. Nothing here guesses or backtracks.
"""

from typing import Dict, List, Optional, Sequence

from .config import DifficultyThresholds
from .difficulty import difficulty_from_counts
from .model import Position, Rating, SolveResult, SolveStep, Technique, check_region_grid

MAX_ITERATIONS = 1000


class _Contradiction(Exception):
    """A row, column or region lost its last candidate."""


class _CandidateGrid:
    def __init__(self, regions: Sequence[Sequence[int]]):
        self.regions = regions
        self.size = len(regions)
        self.candidates = [[True] * self.size for _ in range(self.size)]
        self.row_has_queen = [False] * self.size
        self.col_has_queen = [False] * self.size
        self.region_has_queen = [False] * self.size
        self.placed: List[Position] = []
        self.steps: List[SolveStep] = []
        self.counts: Dict[Technique, int] = {t: 0 for t in Technique}
        self.max_technique = Technique.NAKED_SINGLE
        self.cells_by_region: Dict[int, List[Position]] = {i: [] for i in range(self.size)}
        for r in range(self.size):
            for c in range(self.size):
                self.cells_by_region[regions[r][c]].append(Position(r, c))

    def record(self, technique: Technique) -> None:
        self.counts[technique] += 1
        self.max_technique = max(self.max_technique, technique)

    def place(self, cell: Position, technique: Technique, reasoning: str) -> None:
        region_id = self.regions[cell.row][cell.col]
        self.placed.append(cell)
        self.row_has_queen[cell.row] = True
        self.col_has_queen[cell.col] = True
        self.region_has_queen[region_id] = True
        self.steps.append(SolveStep(technique, cell.row, cell.col, reasoning))
        self.record(technique)

        for i in range(self.size):
            self.candidates[cell.row][i] = False
            self.candidates[i][cell.col] = False
        for other in self.cells_by_region[region_id]:
            self.candidates[other.row][other.col] = False
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                nr, nc = cell.row + dr, cell.col + dc
                if 0 <= nr < self.size and 0 <= nc < self.size:
                    self.candidates[nr][nc] = False

    def row_candidates(self, row: int) -> List[Position]:
        return [Position(row, c) for c in range(self.size) if self.candidates[row][c]]

    def col_candidates(self, col: int) -> List[Position]:
        return [Position(r, col) for r in range(self.size) if self.candidates[r][col]]

    def region_candidates(self, region_id: int) -> List[Position]:
        return [p for p in self.cells_by_region[region_id] if self.candidates[p.row][p.col]]

    def eliminate_line_outside_region(self, region_id: int, row: Optional[int] = None,
                                      col: Optional[int] = None) -> bool:
        if row is not None:
            line = [Position(row, c) for c in range(self.size)]
        else:
            line = [Position(r, col) for r in range(self.size)]
        eliminated = False
        for cell in line:
            if self.candidates[cell.row][cell.col] and self.regions[cell.row][cell.col] != region_id:
                self.candidates[cell.row][cell.col] = False
                eliminated = True
        return eliminated

    def check_consistency(self) -> None:
        for i in range(self.size):
            if not self.row_has_queen[i] and not self.row_candidates(i):
                raise _Contradiction(f"row {i + 1}")
            if not self.col_has_queen[i] and not self.col_candidates(i):
                raise _Contradiction(f"column {i + 1}")
            if not self.region_has_queen[i] and not self.region_candidates(i):
                raise _Contradiction(f"region {i + 1}")


def _naked_single(grid: _CandidateGrid) -> bool:
    for r in range(grid.size):
        if grid.row_has_queen[r]:
            continue
        cells = grid.row_candidates(r)
        if len(cells) == 1:
            grid.place(cells[0], Technique.NAKED_SINGLE, f"Row {r + 1} has only one valid cell")
            return True

    for c in range(grid.size):
        if grid.col_has_queen[c]:
            continue
        cells = grid.col_candidates(c)
        if len(cells) == 1:
            grid.place(cells[0], Technique.NAKED_SINGLE, f"Column {c + 1} has only one valid cell")
            return True

    for region_id in range(grid.size):
        if grid.region_has_queen[region_id]:
            continue
        cells = grid.region_candidates(region_id)
        if len(cells) == 1:
            grid.place(cells[0], Technique.NAKED_SINGLE,
                       f"Region {region_id + 1} has only one valid cell")
            return True
    return False


def _region_row_col_lock(grid: _CandidateGrid) -> bool:
    for axis in ("row", "column"):
        for region_id in range(grid.size):
            if grid.region_has_queen[region_id]:
                continue
            cells = grid.region_candidates(region_id)
            lines = {p.row if axis == "row" else p.col for p in cells}
            if len(lines) != 1:
                continue
            line = lines.pop()
            if axis == "row":
                eliminated = grid.eliminate_line_outside_region(region_id, row=line)
            else:
                eliminated = grid.eliminate_line_outside_region(region_id, col=line)
            if eliminated:
                grid.record(Technique.REGION_ROW_COL_LOCK)
                return True
    return False


def _hidden_single(grid: _CandidateGrid) -> bool:
    for axis in ("row", "column"):
        for line in range(grid.size):
            if axis == "row":
                if grid.row_has_queen[line]:
                    continue
                line_cells = grid.row_candidates(line)
            else:
                if grid.col_has_queen[line]:
                    continue
                line_cells = grid.col_candidates(line)

            by_region: Dict[int, List[Position]] = {}
            for cell in line_cells:
                by_region.setdefault(grid.regions[cell.row][cell.col], []).append(cell)

            for region_id, cells in by_region.items():
                if grid.region_has_queen[region_id]:
                    continue
                if len(cells) == 1 and len(grid.region_candidates(region_id)) > 1:
                    grid.place(cells[0], Technique.HIDDEN_SINGLE,
                               f"Only cell in region {region_id + 1} that can satisfy {axis} {line + 1}")
                    return True
    return False


def _intersection(grid: _CandidateGrid) -> bool:
    """A region whose candidates share one line claims that line."""
    for region_id in range(grid.size):
        if grid.region_has_queen[region_id]:
            continue
        cells = grid.region_candidates(region_id)
        if len(cells) <= 1:
            continue
        rows = {p.row for p in cells}
        if len(rows) == 1 and grid.eliminate_line_outside_region(region_id, row=rows.pop()):
            grid.record(Technique.INTERSECTION)
            return True
        cols = {p.col for p in cells}
        if len(cols) == 1 and grid.eliminate_line_outside_region(region_id, col=cols.pop()):
            grid.record(Technique.INTERSECTION)
            return True
    return False


def _forced_elimination(grid: _CandidateGrid) -> bool:
    size = grid.size
    for r in range(size):
        for c in range(size):
            if not grid.candidates[r][c]:
                continue
            region_id = grid.regions[r][c]

            affected = set()
            for i in range(size):
                if grid.candidates[r][i] and grid.regions[r][i] != region_id:
                    affected.add(grid.regions[r][i])
                if grid.candidates[i][c] and grid.regions[i][c] != region_id:
                    affected.add(grid.regions[i][c])
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < size and 0 <= nc < size and grid.candidates[nr][nc] \
                            and grid.regions[nr][nc] != region_id:
                        affected.add(grid.regions[nr][nc])

            for other_region in sorted(affected):
                if grid.region_has_queen[other_region]:
                    continue
                survivors = [
                    p for p in grid.region_candidates(other_region)
                    if p.row != r and p.col != c
                    and not (abs(p.row - r) <= 1 and abs(p.col - c) <= 1)
                ]
                if not survivors:
                    grid.candidates[r][c] = False
                    grid.record(Technique.FORCED_ELIMINATION)
                    return True
    return False


_TECHNIQUES = (
    _naked_single,
    _region_row_col_lock,
    _hidden_single,
    _intersection,
    _forced_elimination,
)


def solve_with_techniques(regions: Sequence[Sequence[int]]) -> SolveResult:
    """Replay a solve with deductions only and report what it took."""
    check_region_grid(regions)
    grid = _CandidateGrid(regions)
    stuck = False
    contradiction = False

    iterations = 0
    while len(grid.placed) < grid.size and iterations < MAX_ITERATIONS:
        iterations += 1
        try:
            grid.check_consistency()
        except _Contradiction:
            contradiction = True
            break
        if not any(technique(grid) for technique in _TECHNIQUES):
            stuck = True
            break

    solved = len(grid.placed) == grid.size
    return SolveResult(
        solved=solved,
        steps=grid.steps,
        max_technique=grid.max_technique,
        requires_guessing=stuck and not solved and not contradiction,
        technique_counts=grid.counts,
    )


def rate_puzzle_difficulty(
    regions: Sequence[Sequence[int]], thresholds: Optional[DifficultyThresholds] = None
) -> Rating:
    result = solve_with_techniques(regions)
    return Rating(
        difficulty=difficulty_from_counts(result.technique_counts, thresholds),
        max_technique=result.max_technique,
        solvable=result.solved,
        requires_guessing=result.requires_guessing,
        step_count=len(result.steps),
        technique_counts=result.technique_counts,
    )
