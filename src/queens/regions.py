"""Region growth around a queen placement, plus region-shape checks."""

from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .model import Position, RegionGrid
from .prng import SeededRandom

UNASSIGNED = -1

_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class _QueueEntry:
    row: int
    col: int
    region_id: int
    priority: float


def get_neighbors(row: int, col: int, grid_size: int) -> List[Position]:
    """Orthogonal neighbours; regions connect without diagonals."""
    neighbors = []
    for dr, dc in _DIRECTIONS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < grid_size and 0 <= nc < grid_size:
            neighbors.append(Position(nr, nc))
    return neighbors


def is_cell_safe_for_region(cell: Position, solution: Sequence[Position], region_id: int) -> bool:
    """
    A cell is safe for a region when the row-by-row solver could never pick
    it as that region's queen instead of the seeded one: it is the queen
    itself, the queen sits in an earlier row, or a queen of another region
    in an earlier row already covers the cell by column or adjacency.
    """
    queen = solution[region_id]
    if cell == queen:
        return True
    if queen.row < cell.row:
        return True

    for other_id, other in enumerate(solution):
        if other_id == region_id or other.row >= cell.row:
            continue
        if other.col == cell.col:
            return True
        if abs(other.row - cell.row) <= 1 and abs(other.col - cell.col) <= 1:
            return True
    return False


def _safe_table(solution: Sequence[Position], grid_size: int) -> List[List[List[bool]]]:
    """safe[row][col][region_id]"""
    return [
        [
            [is_cell_safe_for_region(Position(r, c), solution, i) for i in range(len(solution))]
            for c in range(grid_size)
        ]
        for r in range(grid_size)
    ]


def generate_regions(
    solution: Sequence[Position], random: SeededRandom, regularity: float
) -> Optional[RegionGrid]:
    """
    Grow one region per queen (region i is seeded at solution[i]) by
    priority flood fill restricted to safe cells, then patch whatever the
    growth left behind. Returns None if cells remain unassigned.
    """
    grid_size = len(solution)
    num_regions = grid_size
    regions: RegionGrid = [[UNASSIGNED] * grid_size for _ in range(grid_size)]
    region_sizes = [0] * num_regions
    safe = _safe_table(solution, grid_size)

    for i, queen in enumerate(solution):
        regions[queen.row][queen.col] = i
        region_sizes[i] = 1

    target_size = -(-(grid_size * grid_size) // num_regions)

    def _rebuild_queue() -> List[_QueueEntry]:
        queue: List[_QueueEntry] = []
        for r in range(grid_size):
            for c in range(grid_size):
                if regions[r][c] != UNASSIGNED:
                    continue
                for neighbor in get_neighbors(r, c, grid_size):
                    region_id = regions[neighbor.row][neighbor.col]
                    if region_id == UNASSIGNED or not safe[r][c][region_id]:
                        continue
                    queen = solution[region_id]
                    dist = abs(r - queen.row) + abs(c - queen.col)
                    early_row_bonus = 5 if queen.row < r else 0
                    queue.append(
                        _QueueEntry(
                            row=r,
                            col=c,
                            region_id=region_id,
                            priority=(10 - dist) + early_row_bonus + random() * regularity * 3,
                        )
                    )
        return queue

    def _score(entry: _QueueEntry) -> float:
        size_bonus = 5 if region_sizes[entry.region_id] < target_size else 0
        return entry.priority + size_bonus

    max_iterations = grid_size * grid_size * 3
    for _ in range(max_iterations):
        queue = _rebuild_queue()
        if not queue:
            break

        best = max(queue, key=_score)
        if regions[best.row][best.col] != UNASSIGNED:
            continue
        if not any(
            regions[n.row][n.col] == best.region_id
            for n in get_neighbors(best.row, best.col, grid_size)
        ):
            continue

        regions[best.row][best.col] = best.region_id
        region_sizes[best.region_id] += 1

    _patch_unassigned(regions, region_sizes, solution, safe)

    if any(UNASSIGNED in row for row in regions):
        return None
    return regions


def _patch_unassigned(
    regions: RegionGrid,
    region_sizes: List[int],
    solution: Sequence[Position],
    safe: List[List[List[bool]]],
) -> None:
    grid_size = len(regions)

    for r in range(grid_size):
        for c in range(grid_size):
            if regions[r][c] != UNASSIGNED:
                continue
            assigned_ids = [
                regions[n.row][n.col]
                for n in get_neighbors(r, c, grid_size)
                if regions[n.row][n.col] != UNASSIGNED
            ]

            safe_ids = [i for i in assigned_ids if safe[r][c][i]]
            if safe_ids:
                chosen = safe_ids[0]
            elif assigned_ids:
                # Region whose queen sits in the earliest row.
                chosen = min(assigned_ids, key=lambda i: solution[i].row)
            else:
                continue
            regions[r][c] = chosen
            region_sizes[chosen] += 1

    # Isolated cells: take the nearest assigned cell by Chebyshev ring.
    for r in range(grid_size):
        for c in range(grid_size):
            if regions[r][c] != UNASSIGNED:
                continue
            for dist in range(1, grid_size):
                nearest = _first_assigned_in_ring(regions, r, c, dist)
                if nearest is not None:
                    regions[r][c] = nearest
                    region_sizes[nearest] += 1
                    break


def _first_assigned_in_ring(regions: RegionGrid, row: int, col: int, dist: int) -> Optional[int]:
    grid_size = len(regions)
    for dr in range(-dist, dist + 1):
        for dc in range(-dist, dist + 1):
            nr, nc = row + dr, col + dc
            if 0 <= nr < grid_size and 0 <= nc < grid_size and regions[nr][nc] != UNASSIGNED:
                return regions[nr][nc]
    return None


def is_region_connected(regions: Sequence[Sequence[int]], region_id: int) -> bool:
    grid_size = len(regions)
    cells = [
        Position(r, c)
        for r in range(grid_size)
        for c in range(grid_size)
        if regions[r][c] == region_id
    ]
    if not cells:
        return True

    visited = {cells[0]}
    queue = deque([cells[0]])
    while queue:
        cell = queue.popleft()
        for neighbor in get_neighbors(cell.row, cell.col, grid_size):
            if neighbor not in visited and regions[neighbor.row][neighbor.col] == region_id:
                visited.add(neighbor)
                queue.append(neighbor)
    return len(visited) == len(cells)


def are_all_regions_connected(regions: Sequence[Sequence[int]]) -> bool:
    return all(is_region_connected(regions, i) for i in range(len(regions)))


def all_region_ids_present(regions: Sequence[Sequence[int]]) -> bool:
    present = {value for row in regions for value in row}
    return present == set(range(len(regions)))


def has_min_region_size(regions: Sequence[Sequence[int]], min_size: int) -> bool:
    sizes = [0] * len(regions)
    for row in regions:
        for value in row:
            sizes[value] += 1
    return all(size >= min_size for size in sizes)


def has_entire_row_single_region(regions: Sequence[Sequence[int]]) -> bool:
    """Degenerate layout: some row belongs to a single region."""
    return any(all(value == row[0] for value in row) for row in regions)
