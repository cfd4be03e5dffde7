"""
JSON/YAML serialization for liftcoach data models.

Handles conversion between dataclasses and JSON-compatible dicts, and
validates external records before they reach the core.
"""

import json
import math
import re
from dataclasses import asdict
from datetime import datetime
from typing import Any

from ..core.models import (
    Block,
    ExerciseSuggestion,
    Program,
    ProgramExercise,
    ProgramSession,
    WorkoutSet,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO 8601 timestamp (a trailing "Z" is accepted).

    Raises:
        ValidationError: If the value is not a valid timestamp
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp: {value!r}") from e


def validate_non_negative(value: Any, name: str) -> float:
    """
    Validate that a value is a non-negative number.

    Raises:
        ValidationError: If the value is negative or not numeric
    """
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(f):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    if f < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return f


def validate_positive_int(value: Any, name: str) -> int:
    """
    Validate that a value is a positive integer.

    Raises:
        ValidationError: If the value is not an integer ≥ 1
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    try:
        i = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValidationError(f"{name} must be an integer, got {value!r}") from e
    if i != float(value) or i < 1:
        raise ValidationError(f"{name} must be a positive integer, got {value}")
    return i


def _required(data: dict, key: str, where: str) -> Any:
    if key not in data or data[key] in (None, ""):
        raise ValidationError(f"{where}: missing required field '{key}'")
    return data[key]


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# ---------------------------------------------------------------------------
# WorkoutSet
# ---------------------------------------------------------------------------


def workout_set_to_dict(workout_set: WorkoutSet) -> dict[str, Any]:
    """
    Convert WorkoutSet to JSON-compatible dict.

    Args:
        workout_set: WorkoutSet to convert

    Returns:
        Dictionary representation
    """
    return {
        "id": workout_set.id,
        "exercise_name": workout_set.exercise_name,
        "weight": workout_set.weight,
        "reps": workout_set.reps,
        "timestamp": workout_set.timestamp.isoformat(),
        "estimated_1rm": workout_set.estimated_1rm,
    }


def dict_to_workout_set(data: dict[str, Any]) -> WorkoutSet:
    """
    Convert dict to WorkoutSet with validation.

    Accepts ``oneRM`` as an alias of ``estimated_1rm`` and ``exerciseName``
    as an alias of ``exercise_name`` (spreadsheet export column names).

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Set record must be an object, got {type(data).__name__}")

    name = data.get("exercise_name", data.get("exerciseName"))
    if not name:
        raise ValidationError("Set record: missing required field 'exercise_name'")

    estimated = data.get("estimated_1rm", data.get("oneRM"))
    try:
        return WorkoutSet(
            id=str(_required(data, "id", "Set record")),
            exercise_name=str(name),
            weight=validate_non_negative(_required(data, "weight", "Set record"), "weight"),
            reps=validate_positive_int(_required(data, "reps", "Set record"), "reps"),
            timestamp=parse_timestamp(_required(data, "timestamp", "Set record")),
            estimated_1rm=(
                None if estimated is None else validate_non_negative(estimated, "estimated_1rm")
            ),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def workout_set_to_json_line(workout_set: WorkoutSet) -> str:
    """Convert a set to a single JSON line (for JSONL)."""
    return json.dumps(workout_set_to_dict(workout_set), separators=(",", ":"))


# ---------------------------------------------------------------------------
# Programs
# ---------------------------------------------------------------------------


def dict_to_program_exercise(data: dict[str, Any], where: str = "exercise") -> ProgramExercise:
    """
    Convert a program exercise entry. ``exercise`` and ``exercise_name`` are
    both accepted for the name; ``reps`` defaults to "" (no recommendation).

    Raises:
        ValidationError: If the entry is malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{where}: expected a mapping, got {type(data).__name__}")
    name = data.get("exercise_name", data.get("exercise"))
    if not name:
        raise ValidationError(f"{where}: missing required field 'exercise'")
    return ProgramExercise(
        exercise_name=str(name).strip(),
        sets=validate_positive_int(data.get("sets", 1), f"{where}.sets"),
        reps="" if data.get("reps") is None else str(data["reps"]).strip(),
        load=_optional_str(data.get("load")),
        rest=_optional_str(data.get("rest")),
        notes=_optional_str(data.get("notes")),
    )


def _list_field(data: dict, key: str, where: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValidationError(f"{where}.{key}: expected a list, got {type(value).__name__}")
    return value


def dict_to_block(data: dict[str, Any], where: str = "block") -> Block:
    if not isinstance(data, dict):
        raise ValidationError(f"{where}: expected a mapping, got {type(data).__name__}")
    exercises = _list_field(data, "exercises", where)
    return Block(
        name=str(data.get("name") or ""),
        exercises=[
            dict_to_program_exercise(ex, f"{where}.exercises[{i}]")
            for i, ex in enumerate(exercises)
        ],
    )


def dict_to_program_session(data: dict[str, Any], where: str = "session") -> ProgramSession:
    if not isinstance(data, dict):
        raise ValidationError(f"{where}: expected a mapping, got {type(data).__name__}")
    blocks = _list_field(data, "blocks", where)
    return ProgramSession(
        label=str(data.get("label") or data.get("name") or ""),
        day=str(data.get("day") or ""),
        blocks=[dict_to_block(b, f"{where}.blocks[{i}]") for i, b in enumerate(blocks)],
    )


def dict_to_program(data: dict[str, Any], where: str = "program") -> Program:
    """
    Convert a program document to a Program, validating the whole tree.

    Raises:
        ValidationError: If any nested structure is malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{where}: expected a mapping, got {type(data).__name__}")
    program_id = str(_required(data, "id", where))
    sessions = _list_field(data, "sessions", where)
    return Program(
        id=program_id,
        title=str(data.get("title") or program_id),
        sessions=[
            dict_to_program_session(s, f"{where}.sessions[{i}]") for i, s in enumerate(sessions)
        ],
    )


def program_to_dict(program: Program) -> dict[str, Any]:
    """Convert Program to a YAML/JSON-compatible dict (program file layout)."""
    return {
        "id": program.id,
        "title": program.title,
        "sessions": [
            {
                "label": session.label,
                "day": session.day,
                "blocks": [
                    {
                        "name": block.name,
                        "exercises": [
                            {
                                k: v
                                for k, v in {
                                    "exercise": ex.exercise_name,
                                    "sets": ex.sets,
                                    "reps": ex.reps,
                                    "load": ex.load,
                                    "rest": ex.rest,
                                    "notes": ex.notes,
                                }.items()
                                if v is not None
                            }
                            for ex in block.exercises
                        ],
                    }
                    for block in session.blocks
                ],
            }
            for session in program.sessions
        ],
    }


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------


def suggestion_to_dict(suggestion: ExerciseSuggestion) -> dict[str, Any]:
    """Convert an ExerciseSuggestion to a JSON-compatible dict."""
    return asdict(suggestion)


def suggestions_to_json(suggestions: list[ExerciseSuggestion]) -> str:
    return json.dumps([suggestion_to_dict(s) for s in suggestions], indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Compact set entry
# ---------------------------------------------------------------------------

_SET_ENTRY = re.compile(
    r"^\s*(?P<weight>\d+(?:\.\d+)?)\s*(?:kg)?\s*[x×]\s*(?P<reps>\d+)\s*$",
    re.IGNORECASE,
)


def parse_set_entry(text: str) -> tuple[float, int]:
    """
    Parse a compact "weight x reps" entry.

    Formats:
        "80x5", "80 x 5", "82.5kg x 3", "0x12" (bodyweight)

    Returns:
        (weight_kg, reps)

    Raises:
        ValidationError: If the entry cannot be parsed or reps < 1
    """
    match = _SET_ENTRY.match(text)
    if not match:
        raise ValidationError(f"Invalid set '{text}'. Expected WEIGHTxREPS, e.g. 80x5")
    weight = float(match.group("weight"))
    reps = int(match.group("reps"))
    if reps < 1:
        raise ValidationError(f"Invalid set '{text}': reps must be at least 1")
    return weight, reps
