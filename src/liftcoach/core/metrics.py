"""
Pure progress-metric functions.

Feeds the history and stats views: daily estimated-1RM series, progress
summary, volume totals and warm-up-aware personal records.
"""

from datetime import date, timedelta
from typing import Iterable, Sequence

from .config import SESSION_WINDOW, WARMUP_THRESHOLD
from .exercises.base import ExerciseCatalog
from .models import ProgressStats, WorkoutSet
from .sessions import best_set, group_by_exercise, group_sessions
from .warmup import is_warmup_set


def daily_1rm_series(
    history: Iterable[WorkoutSet],
    exercise_name: str,
) -> list[tuple[date, float]]:
    """
    Best stored estimated 1RM per local calendar day, oldest first.

    Sets without an estimate are ignored; days with no estimate are absent.

    Args:
        history: All logged sets
        exercise_name: Exact exercise name

    Returns:
        List of (day, max estimated 1RM)
    """
    by_day: dict[date, float] = {}
    for s in history:
        if s.exercise_name != exercise_name or not s.estimated_1rm:
            continue
        day = s.local_timestamp.date()
        if s.estimated_1rm > by_day.get(day, 0):
            by_day[day] = s.estimated_1rm
    return sorted(by_day.items())


def progress_stats(series: Sequence[tuple[date, float]]) -> ProgressStats | None:
    """
    Summarise a daily 1RM series.

    change = current − previous day; percent_change is relative to the
    previous day, rounded to one decimal, and 0 when the previous value is
    not positive. A single point has zero change.

    Returns:
        ProgressStats, or None for an empty series
    """
    if not series:
        return None

    values = [v for _, v in series]
    current = values[-1]
    previous = values[-2] if len(values) > 1 else current
    change = current - previous
    percent = round(change / previous * 100, 1) if previous > 0 else 0.0

    return ProgressStats(
        current=current,
        best=max(values),
        change=change,
        percent_change=percent,
    )


def total_volume(sets: Iterable[WorkoutSet]) -> float:
    """Σ weight × reps."""
    return sum(s.volume for s in sets)


def total_reps(sets: Iterable[WorkoutSet]) -> int:
    return sum(s.reps for s in sets)


def personal_records(
    history: Iterable[WorkoutSet],
    *,
    catalog: ExerciseCatalog | None = None,
    threshold: float = WARMUP_THRESHOLD,
    window: timedelta = SESSION_WINDOW,
) -> dict[str, WorkoutSet]:
    """
    Warm-up-aware personal record per exercise.

    Each exercise's history is split into training sessions; every set is
    classified against its own session, and the best working set across
    all sessions is the record.

    Returns:
        {exercise_name: record set}, exercises sorted by name
    """
    records: dict[str, WorkoutSet] = {}
    for name, sets in group_by_exercise(history).items():
        working: list[WorkoutSet] = []
        for session in group_sessions(sets, window):
            working.extend(
                s
                for s in session.sets
                if not is_warmup_set(s, None, session.sets, catalog=catalog, threshold=threshold)
            )
        best = best_set(working)
        if best is not None:
            records[name] = best
    return dict(sorted(records.items()))


def weekly_volume(
    history: Iterable[WorkoutSet],
    today: date,
    weeks: int = 4,
) -> list[float]:
    """
    Total volume per week, oldest first; the last entry is the week ending today.
    """
    totals = [0.0] * weeks
    for s in history:
        weeks_ago = (today - s.local_timestamp.date()).days // 7
        if 0 <= weeks_ago < weeks:
            totals[weeks - 1 - weeks_ago] += s.volume
    return totals
