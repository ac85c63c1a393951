"""Map technique usage counts to a difficulty tier."""

from typing import Mapping, Optional

from .config import DifficultyThresholds
from .model import Technique


def difficulty_from_counts(
    technique_counts: Mapping[Technique, int],
    thresholds: Optional[DifficultyThresholds] = None,
) -> str:
    t = thresholds or DifficultyThresholds()
    hidden = technique_counts.get(Technique.HIDDEN_SINGLE, 0)
    advanced = (
        technique_counts.get(Technique.INTERSECTION, 0)
        + technique_counts.get(Technique.FORCED_ELIMINATION, 0)
    )

    if advanced >= t.expert_advanced or (advanced > 0 and hidden >= t.expert_hidden_with_advanced):
        return "expert"
    if advanced > 0 or hidden >= t.hard_hidden:
        return "hard"
    if hidden >= t.medium_hidden:
        return "medium"
    return "easy"
