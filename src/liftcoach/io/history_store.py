"""
JSONL-based history storage for logged sets.

Handles reading, writing, and managing the training history file.
"""

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path

from ..core.config import HISTORY_FILE_NAME
from ..core.engine.config_loader import get_data_dir
from ..core.exercises.base import ExerciseCatalog
from ..core.max_estimator import estimate_1rm
from ..core.models import WorkoutSet
from .serializers import ValidationError, dict_to_workout_set, workout_set_to_json_line

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Manages logged sets stored in JSONL format.

    The history file contains one JSON object per set, kept in
    chronological order.
    """

    def __init__(self, history_path: str | Path):
        """
        Initialize the history store.

        Args:
            history_path: Path to the JSONL history file
        """
        self.history_path = Path(history_path)

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path.exists()

    def init(self) -> None:
        """
        Initialize empty history file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.history_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.history_path.exists():
            self.history_path.touch()

    def load_history(self) -> list[WorkoutSet]:
        """
        Load all sets from the history file.

        Returns:
            List of WorkoutSet sorted by timestamp

        Raises:
            FileNotFoundError: If history file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )

        sets: list[WorkoutSet] = []

        with open(self.history_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    sets.append(dict_to_workout_set(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e

        sets.sort(key=lambda s: s.local_timestamp)
        logger.debug("Loaded %d sets from %s", len(sets), self.history_path)
        return sets

    def log_set(
        self,
        exercise_name: str,
        weight: float,
        reps: int,
        timestamp: datetime | None = None,
        *,
        catalog: ExerciseCatalog | None = None,
    ) -> WorkoutSet:
        """
        Create a set, derive its estimated 1RM and append it to history.

        Args:
            exercise_name: Exercise performed
            weight: Load in kg
            reps: Repetitions (seconds for timed exercises)
            timestamp: When the set was performed (default: now)
            catalog: Catalog deciding whether a 1RM applies

        Returns:
            The stored WorkoutSet
        """
        try:
            workout_set = WorkoutSet(
                id=uuid.uuid4().hex,
                exercise_name=exercise_name,
                weight=weight,
                reps=reps,
                timestamp=timestamp or datetime.now(),
                estimated_1rm=estimate_1rm(weight, reps, exercise_name, catalog=catalog),
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e
        self.append_set(workout_set)
        return workout_set

    def append_set(self, workout_set: WorkoutSet) -> None:
        """
        Append a set to the history file.

        Maintains chronological order by inserting at the correct position.

        Args:
            workout_set: Set to append
        """
        sets = self.load_history()

        insert_idx = len(sets)
        for i, existing in enumerate(sets):
            if workout_set.local_timestamp < existing.local_timestamp:
                insert_idx = i
                break
        sets.insert(insert_idx, workout_set)

        self._write_sets(sets)

    def _write_sets(self, sets: list[WorkoutSet]) -> None:
        """
        Write all sets to the history file.

        Args:
            sets: Sets to write
        """
        with open(self.history_path, "w", encoding="utf-8") as f:
            for s in sets:
                f.write(workout_set_to_json_line(s) + "\n")

    def delete_set_at(self, index: int) -> WorkoutSet:
        """
        Delete the set at the given 0-based index in sorted history.

        Args:
            index: 0-based index

        Returns:
            The removed set

        Raises:
            IndexError: If index is out of range
        """
        sets = self.load_history()
        if index < 0 or index >= len(sets):
            raise IndexError(f"Set index {index} out of range (0–{len(sets) - 1})")
        removed = sets.pop(index)
        self._write_sets(sets)
        return removed

    def clear_history(self) -> None:
        """
        Clear all history (dangerous - use with caution).
        """
        if self.history_path.exists():
            self.history_path.write_text("")


def get_default_history_path() -> Path:
    """Return the default history file path (~/.liftcoach/history.jsonl)."""
    return get_data_dir() / HISTORY_FILE_NAME
