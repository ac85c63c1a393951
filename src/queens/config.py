"""
Configuration for generation, bank building and difficulty policy.

Every setting has a default; a JSON file may override any subset of the
keys of one config class. Unknown keys are ignored with a warning.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

logger = logging.getLogger(__name__)

C = TypeVar("C")


@dataclass
class GeneratorConfig:
    grid_size: int = 9
    attempt_budget: int = 100
    regularity: float = 0.3
    min_region_size: int = 3
    fallback_to_bank: bool = True

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.attempt_budget < 0:
            raise ValueError(f"attempt_budget must not be negative, got {self.attempt_budget}")


@dataclass
class BankBuildConfig:
    target_per_difficulty: int = 30
    max_attempts: int = 100000
    max_duration_sec: float = 180.0
    attempts_per_seed: int = 50
    min_region_size: int = 3
    regularities: List[float] = field(default_factory=lambda: [0.1, 0.2, 0.3, 0.4])
    grid_sizes: List[int] = field(default_factory=lambda: [9, 10])
    start_seed: int = 1


@dataclass
class DifficultyThresholds:
    """Policy constants for the difficulty tiers."""

    expert_advanced: int = 2
    expert_hidden_with_advanced: int = 3
    hard_hidden: int = 4
    medium_hidden: int = 2


def load_config(path: Optional[Union[str, Path]], cls: Type[C]) -> C:
    """
    Load a config dataclass from JSON, merged over its defaults.

    Returns:
        Instance of `cls`. Defaults if path is None or the file is missing.
    """
    if path is None:
        return cls()
    path = Path(path)
    if not path.exists():
        logger.debug(f"Config file {path} not found, using defaults")
        return cls()

    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"Config file {path} must hold a JSON object")

    known = {f.name for f in fields(cls)}
    values: Dict[str, Any] = {}
    for key, value in payload.items():
        if key in known:
            values[key] = value
        else:
            logger.warning(f"Ignoring unknown {cls.__name__} key: {key}")
    config = cls(**values)
    logger.debug(f"Config loaded from {path}: {config}")
    return config
