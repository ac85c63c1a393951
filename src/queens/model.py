"""Queens core data structures and helper logic."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

RegionGrid = List[List[int]]

DIFFICULTIES: Tuple[str, ...] = ("easy", "medium", "hard", "expert")


@dataclass(frozen=True, order=True)
class Position:
    row: int
    col: int

    @property
    def key(self) -> str:
        return f"{self.row},{self.col}"

    def is_adjacent(self, other: "Position") -> bool:
        """Chebyshev distance of exactly one (the 8 surrounding cells)."""
        if self == other:
            return False
        return abs(self.row - other.row) <= 1 and abs(self.col - other.col) <= 1

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col}

    @classmethod
    def from_any(cls, value: Any) -> "Position":
        if isinstance(value, Position):
            return value
        if isinstance(value, dict):
            return cls(int(value["row"]), int(value["col"]))
        row, col = value
        return cls(int(row), int(col))


@dataclass(frozen=True)
class Queen:
    id: str
    position: Position


@dataclass(frozen=True)
class AutoPlacedX:
    """An exclusion mark derived from a placed queen."""

    id: str
    position: Position
    owner_id: str
    reason: str  # 'row', 'column', 'region' or 'adjacent'


def check_region_grid(regions: Sequence[Sequence[int]]) -> int:
    """
    Fail fast on a malformed grid. Returns the grid size N.
    The grid must be N x N with every value in [0, N).
    """
    size = len(regions)
    if size == 0:
        raise ValueError("Region grid must not be empty")
    for r, row in enumerate(regions):
        if len(row) != size:
            raise ValueError(f"Region grid is not square: row {r} has {len(row)} cells, expected {size}")
        for c, value in enumerate(row):
            if not 0 <= value < size:
                raise ValueError(f"Region id {value} at ({r},{c}) outside [0, {size})")
    return size


def copy_regions(regions: Sequence[Sequence[int]]) -> RegionGrid:
    return [list(row) for row in regions]


@dataclass
class Puzzle:
    regions: RegionGrid
    solution: List[Position]

    def __post_init__(self) -> None:
        self.regions = copy_regions(self.regions)
        self.solution = [Position.from_any(p) for p in self.solution]
        size = check_region_grid(self.regions)
        if len(self.solution) != size:
            raise ValueError(f"Solution has {len(self.solution)} positions, expected {size}")
        for pos in self.solution:
            if not (0 <= pos.row < size and 0 <= pos.col < size):
                raise ValueError(f"Solution position {pos.key} is off the grid")

    @property
    def grid_size(self) -> int:
        return len(self.regions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "regions": copy_regions(self.regions),
            "solution": [p.to_dict() for p in self.solution],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Puzzle":
        return cls(regions=payload["regions"], solution=payload["solution"])


@dataclass
class RatedPuzzle:
    """A bank record: a puzzle plus the rating it was filed under."""

    puzzle: Puzzle
    difficulty: str
    max_technique: int
    step_count: int

    def __post_init__(self) -> None:
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {self.difficulty}")

    @property
    def grid_size(self) -> int:
        return self.puzzle.grid_size

    def to_dict(self) -> Dict[str, Any]:
        record = self.puzzle.to_dict()
        record.update(
            {
                "difficulty": self.difficulty,
                "maxTechnique": int(self.max_technique),
                "stepCount": self.step_count,
                "gridSize": self.grid_size,
            }
        )
        return record

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "RatedPuzzle":
        return cls(
            puzzle=Puzzle.from_dict(record),
            difficulty=str(record["difficulty"]),
            max_technique=int(record.get("maxTechnique", 1)),
            step_count=int(record.get("stepCount", 0)),
        )


class Technique(IntEnum):
    """Deduction techniques; the value is the difficulty weight."""

    NAKED_SINGLE = 1
    REGION_ROW_COL_LOCK = 2
    HIDDEN_SINGLE = 3
    INTERSECTION = 4
    FORCED_ELIMINATION = 5


@dataclass
class SolveStep:
    technique: Technique
    row: int
    col: int
    reasoning: str


@dataclass
class SolveResult:
    solved: bool
    steps: List[SolveStep] = field(default_factory=list)
    max_technique: Technique = Technique.NAKED_SINGLE
    requires_guessing: bool = False
    technique_counts: Dict[Technique, int] = field(
        default_factory=lambda: {t: 0 for t in Technique}
    )


@dataclass
class Rating:
    difficulty: str
    max_technique: Technique
    solvable: bool
    requires_guessing: bool
    step_count: int
    technique_counts: Dict[Technique, int]


@dataclass
class ValidationResult:
    is_valid: bool
    errors: Set[str] = field(default_factory=set)
    row_conflicts: Dict[int, List[Position]] = field(default_factory=dict)
    col_conflicts: Dict[int, List[Position]] = field(default_factory=dict)
    region_conflicts: Dict[int, List[Position]] = field(default_factory=dict)
    adjacent_conflicts: List[Tuple[Position, Position]] = field(default_factory=list)


@dataclass
class Hint:
    type: str
    position: Optional[Position]
    explanation: str
    highlight_cells: List[Position] = field(default_factory=list)
    highlight_queens: List[str] = field(default_factory=list)
    can_apply: bool = False
