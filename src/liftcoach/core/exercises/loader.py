"""
YAML → Exercise loader.

Loads the exercise catalog from the bundled ``src/liftcoach/exercises.yaml``
(a top-level ``exercises:`` list). Each entry matches the Exercise schema.

User overrides: ``~/.liftcoach/exercises.yaml`` uses the same layout. A user
entry whose name matches a bundled one (case-insensitively) is deep-merged
over it, so only changed keys need to be listed; other user entries are
added to the catalog.

Usage (internal — called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # list or None on failure
"""

from __future__ import annotations

import warnings
from pathlib import Path

from ..config import USER_CATALOG_FILE_NAME
from ..engine.config_loader import deep_merge, get_data_dir, load_yaml_file
from .base import Exercise, WarmupStep

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset({"name"})


def _warmup_step_from_dict(d: dict) -> WarmupStep:
    """Convert one warm-up rung; ``weight`` may be "50%" or a number of kg."""
    if "weight" not in d or "reps" not in d:
        raise ValueError(f"warm-up step needs weight and reps, got {sorted(d)}")
    raw = d["weight"]
    unit = str(d.get("unit", "kg"))
    if isinstance(raw, str) and raw.strip().endswith("%"):
        raw = raw.strip()[:-1]
        unit = "%"
    if unit not in ("kg", "%"):
        raise ValueError(f"warm-up unit must be 'kg' or '%', got {unit!r}")
    return WarmupStep(weight=float(raw), unit=unit, reps=int(d["reps"]))  # type: ignore[arg-type]


def exercise_from_dict(d: dict) -> Exercise:
    """Convert a raw dict (from YAML) to an Exercise.

    Raises ValueError if a required field is absent or malformed.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"Exercise missing fields: {sorted(missing)}")

    rep_type = str(d.get("rep_type", "reps"))
    if rep_type not in ("reps", "time"):
        raise ValueError(f"rep_type must be 'reps' or 'time', got {rep_type!r}")

    protocol = tuple(_warmup_step_from_dict(step) for step in d.get("warmup_protocol") or [])

    return Exercise(
        name=str(d["name"]),
        tags=tuple(str(t) for t in d.get("tags") or []),
        favorite=bool(d.get("favorite", False)),
        is_powerlifting=bool(d.get("is_powerlifting", False)),
        bodyweight=bool(d.get("bodyweight", False)),
        rep_type=rep_type,  # type: ignore[arg-type]
        warmup_protocol=protocol,
    )


def _get_bundled_catalog_path() -> Path | None:
    """Return path to the bundled exercises.yaml, or None if not found."""
    # loader.py lives at src/liftcoach/core/exercises/loader.py
    # three levels up → src/liftcoach/
    candidate = Path(__file__).parent.parent.parent / "exercises.yaml"
    return candidate if candidate.is_file() else None


def _get_user_catalog_path() -> Path | None:
    """Return ~/.liftcoach/exercises.yaml if it exists, else None."""
    p = get_data_dir() / USER_CATALOG_FILE_NAME
    return p if p.is_file() else None


def _entries(raw: dict) -> list[dict]:
    entries = raw.get("exercises") or []
    return [e for e in entries if isinstance(e, dict)]


def load_exercises_from_yaml(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> list[Exercise] | None:
    """Return catalog entries loaded from the bundled and user YAML files.

    Returns None (rather than raising) so the registry can report the failure.
    """
    bundled_path = bundled_path or _get_bundled_catalog_path()
    user_path = user_path or _get_user_catalog_path()

    if bundled_path is None and user_path is None:
        return None

    merged: dict[str, dict] = {}
    for path in (bundled_path, user_path):
        if path is None:
            continue
        for entry in _entries(load_yaml_file(path)):
            key = str(entry.get("name", "")).strip().casefold()
            if not key:
                warnings.warn(
                    f"liftcoach: skipping unnamed exercise entry in {path}",
                    stacklevel=2,
                )
                continue
            merged[key] = deep_merge(merged.get(key, {}), entry)

    result: list[Exercise] = []
    for key, raw in merged.items():
        try:
            result.append(exercise_from_dict(raw))
        except (ValueError, TypeError) as exc:
            warnings.warn(
                f"liftcoach: skipping exercise '{key}' — {exc}",
                stacklevel=2,
            )

    return result if result else None
