"""
Estimated one-rep-max.

  Brzycki (2 ≤ reps ≤ 12):
    1RM = weight × 36 / (37 − reps)
  The denominator approaches zero as reps grow (and turns negative at 37),
  so above 12 reps the estimate switches to the linear Epley form:
    1RM = weight × (1 + reps / 30)
  A single is its own 1RM.

Estimates are reported in whole kilograms. Only exercises flagged
``is_powerlifting`` in the catalog get an estimate; an unknown or unnamed
exercise is estimated optimistically.
"""

from __future__ import annotations

import math
from typing import Iterable

from .config import BRZYCKI_DENOMINATOR, BRZYCKI_MAX_REPS, BRZYCKI_NUMERATOR, EPLEY_DIVISOR
from .exercises.base import Exercise, ExerciseCatalog
from .exercises.registry import resolve_catalog
from .models import WorkoutSet


def round_kg(value: float) -> float:
    """Nearest whole kilogram, halves rounded up (112.5 → 113)."""
    return float(math.floor(value + 0.5))


def brzycki_1rm(weight: float, reps: int) -> float:
    """Unrounded Brzycki estimate: weight × 36 / (37 − reps)."""
    return weight * (BRZYCKI_NUMERATOR / (BRZYCKI_DENOMINATOR - reps))


def epley_1rm(weight: float, reps: int) -> float:
    """Unrounded Epley estimate: weight × (1 + reps/30)."""
    return weight * (1 + reps / EPLEY_DIVISOR)


def estimate_1rm(
    weight: float,
    reps: int,
    exercise_name: str | None = None,
    *,
    catalog: ExerciseCatalog | None = None,
) -> float | None:
    """
    Estimate the one-rep-max for a weight × reps pair.

    Args:
        weight: Load lifted in kg
        reps: Repetitions performed
        exercise_name: Optional catalog name; a matching entry that is not
            flagged ``is_powerlifting`` disables the estimate
        catalog: Catalog to consult (defaults to the bundled one)

    Returns:
        Estimated 1RM in kg (the weight itself for a single, whole kg
        otherwise), or None when the exercise has no 1RM concept
    """
    if exercise_name is not None:
        entry = resolve_catalog(catalog).get(exercise_name)
        if entry is not None and not entry.is_powerlifting:
            return None

    if reps == 1:
        return weight
    if reps > BRZYCKI_MAX_REPS:
        return round_kg(epley_1rm(weight, reps))
    return round_kg(brzycki_1rm(weight, reps))


def best_estimated_1rm(history: Iterable[WorkoutSet], exercise_name: str) -> float | None:
    """
    Highest stored estimated 1RM for an exercise (exact name match).

    Returns None when no set of that exercise carries an estimate.
    """
    values = [
        s.estimated_1rm
        for s in history
        if s.exercise_name == exercise_name and s.estimated_1rm
    ]
    return max(values) if values else None


def warmup_ladder(
    exercise: Exercise,
    target_weight: float | None,
) -> list[tuple[float | None, int, str]]:
    """
    Resolve an exercise's warm-up protocol against a target load.

    Percentage rungs become ``round_kg(target × pct / 100)`` when a target is
    known and stay unresolved (None) otherwise; kg rungs are used as-is.

    Returns:
        List of (weight_kg or None, reps, label) in protocol order
    """
    ladder: list[tuple[float | None, int, str]] = []
    for step in exercise.warmup_protocol:
        if step.unit == "%":
            weight = round_kg(target_weight * step.weight / 100) if target_weight else None
        else:
            weight = step.weight
        ladder.append((weight, step.reps, step.label()))
    return ladder


def default_target_weight(
    history: Iterable[WorkoutSet],
    exercise: Exercise,
) -> float | None:
    """
    Target load for a warm-up ladder: the best stored 1RM, or the first
    fixed-weight rung when no estimate exists. Bodyweight exercises have none.
    """
    if exercise.bodyweight:
        return None
    best = best_estimated_1rm(history, exercise.name)
    if best is not None:
        return best
    for step in exercise.warmup_protocol:
        if step.unit != "%":
            return step.weight
    return None
