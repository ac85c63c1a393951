"""Tracing module: logs generation attempts and ratings and writes to CSV."""

import csv
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TraceStep:
    """A single event in a generation or bank-building run."""

    timestamp: float
    step_number: int
    action_type: str  # 'attempt', 'rating', 'bank_add', 'fallback'
    seed: Optional[int] = None
    grid_size: Optional[int] = None
    outcome: Optional[str] = None  # 'accepted', 'rejected', 'skipped'
    reason: Optional[str] = None  # failure category, e.g. 'non_unique'
    difficulty: Optional[str] = None
    step_count: Optional[int] = None


class Tracer:
    """Records generation events for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _append(self, **kwargs: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            **kwargs,
        ))

    def log_attempt(self, seed: Optional[int], grid_size: int, outcome: str, reason: Optional[str] = None):
        """Log one pass of placement -> regions -> checks."""
        if not self.enabled:
            return
        self._append(action_type='attempt', seed=seed, grid_size=grid_size, outcome=outcome, reason=reason)

    def log_rating(self, seed: Optional[int], difficulty: str, step_count: int, outcome: str,
                   reason: Optional[str] = None):
        """Log a human-technique rating of an accepted puzzle."""
        if not self.enabled:
            return
        self._append(action_type='rating', seed=seed, difficulty=difficulty, step_count=step_count,
                     outcome=outcome, reason=reason)

    def log_bank_add(self, seed: Optional[int], grid_size: int, difficulty: str):
        """Log a puzzle filed into the bank."""
        if not self.enabled:
            return
        self._append(action_type='bank_add', seed=seed, grid_size=grid_size, difficulty=difficulty,
                     outcome='accepted')

    def log_fallback(self, seed: Optional[int], difficulty: str, reason: str):
        """Log a draw from the static bank after generation gave up."""
        if not self.enabled:
            return
        self._append(action_type='fallback', seed=seed, difficulty=difficulty, reason=reason)

    def failure_tally(self) -> Dict[str, int]:
        """Rejected attempts per failure reason."""
        tally: Dict[str, int] = {}
        for step in self.steps:
            if step.action_type == 'attempt' and step.outcome == 'rejected' and step.reason:
                tally[step.reason] = tally.get(step.reason, 0) + 1
        return tally

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            logger.info("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'seed', 'grid_size',
            'outcome', 'reason', 'difficulty', 'step_count'
        ]
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        logger.info(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_attempts': action_counts.get('attempt', 0),
            'num_accepted': sum(
                1 for s in self.steps if s.action_type == 'attempt' and s.outcome == 'accepted'
            ),
            'failures': self.failure_tally(),
        }
