"""Move validation: report every rule violation on the board at once."""

from typing import Any, Dict, Iterable, List, Sequence

from .model import Position, Queen, ValidationResult


def queen_positions(queens: Iterable[Any]) -> List[Position]:
    """Accept Queen objects or anything Position.from_any understands."""
    return [q.position if isinstance(q, Queen) else Position.from_any(q) for q in queens]


def _group_conflicts(positions: List[Position], key) -> Dict[int, List[Position]]:
    groups: Dict[int, List[Position]] = {}
    for pos in positions:
        groups.setdefault(key(pos), []).append(pos)
    return {k: v for k, v in sorted(groups.items()) if len(v) > 1}


def validate_placement(queens: Iterable[Any], regions: Sequence[Sequence[int]]) -> ValidationResult:
    """
    Check all four rules independently. A cell can show up in more than
    one conflict category; `errors` holds the "r,c" key of every cell
    involved in at least one.
    """
    positions = queen_positions(queens)

    row_conflicts = _group_conflicts(positions, lambda p: p.row)
    col_conflicts = _group_conflicts(positions, lambda p: p.col)
    region_conflicts = _group_conflicts(positions, lambda p: regions[p.row][p.col])

    adjacent_conflicts = []
    for i, first in enumerate(positions):
        for second in positions[i + 1:]:
            if abs(first.row - second.row) <= 1 and abs(first.col - second.col) <= 1:
                adjacent_conflicts.append((first, second))

    errors = set()
    for conflicts in (row_conflicts, col_conflicts, region_conflicts):
        for group in conflicts.values():
            errors.update(p.key for p in group)
    for first, second in adjacent_conflicts:
        errors.add(first.key)
        errors.add(second.key)

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        row_conflicts=row_conflicts,
        col_conflicts=col_conflicts,
        region_conflicts=region_conflicts,
        adjacent_conflicts=adjacent_conflicts,
    )


def check_win_condition(queens: Iterable[Any], regions: Sequence[Sequence[int]]) -> bool:
    positions = queen_positions(queens)
    size = len(regions)
    if len(positions) != size:
        return False
    if not validate_placement(positions, regions).is_valid:
        return False

    rows = {p.row for p in positions}
    cols = {p.col for p in positions}
    region_ids = {regions[p.row][p.col] for p in positions}
    return len(rows) == size and len(cols) == size and len(region_ids) == size
