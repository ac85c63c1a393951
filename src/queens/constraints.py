"""Auto-exclusion marks that follow from a placed queen."""

from typing import Iterable, List, Sequence, Set

from .model import AutoPlacedX, Position, Queen


class IdFactory:
    """Monotonic id source, owned by the caller (one per game session)."""

    def __init__(self, prefix: str = "auto-x", start: int = 0):
        self.prefix = prefix
        self._counter = start

    def __call__(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"


def generate_auto_xs(
    queen: Queen,
    regions: Sequence[Sequence[int]],
    existing_queens: Iterable[Queen],
    existing_auto_xs: Iterable[AutoPlacedX],
    existing_manual_xs: Iterable[Position],
    id_factory: IdFactory,
) -> List[AutoPlacedX]:
    """
    One mark per free cell that `queen` rules out, in order: its row, its
    column, its region, then its 8 neighbours. A cell already holding a
    queen or a mark is skipped, and a cell is marked at most once, under
    the first reason that reaches it.
    """
    size = len(regions)
    row, col = queen.position.row, queen.position.col
    queen_region = regions[row][col]

    taken: Set[Position] = {q.position for q in existing_queens}
    taken.add(queen.position)
    taken.update(x.position for x in existing_auto_xs)
    taken.update(Position.from_any(p) for p in existing_manual_xs)

    candidates = [(Position(row, c), "row") for c in range(size)]
    candidates += [(Position(r, col), "column") for r in range(size)]
    candidates += [
        (Position(r, c), "region")
        for r in range(size)
        for c in range(size)
        if regions[r][c] == queen_region
    ]
    candidates += [
        (Position(row + dr, col + dc), "adjacent")
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if 0 <= row + dr < size and 0 <= col + dc < size
    ]

    marks = []
    for pos, reason in candidates:
        if pos in taken:
            continue
        taken.add(pos)
        marks.append(AutoPlacedX(id=id_factory(), position=pos, owner_id=queen.id, reason=reason))
    return marks


def remove_auto_xs_for_queen(auto_xs: Iterable[AutoPlacedX], queen_id: str) -> List[AutoPlacedX]:
    return [x for x in auto_xs if x.owner_id != queen_id]


def get_blocked_positions(
    queens: Iterable[Queen],
    auto_xs: Iterable[AutoPlacedX],
    manual_xs: Iterable[Position],
) -> Set[str]:
    """Keys ("r,c") of every cell holding a queen or a mark."""
    blocked = {q.position.key for q in queens}
    blocked.update(x.position.key for x in auto_xs)
    blocked.update(Position.from_any(p).key for p in manual_xs)
    return blocked
