"""
Session aggregation over a flat set history.

Two notions of "session" coexist:

- the *today session*: every set logged between local midnight and the
  next local midnight, used for completion tracking;
- *training sessions*: sets grouped by time proximity (2 h window by
  default), used for charts and personal records. A long session that
  runs past midnight stays in one group; separate days never merge.

All functions are pure; "now" can be injected for testing.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from .config import SESSION_WINDOW
from .models import ExerciseGroup, SessionGroup, WorkoutSet


def local_day_bounds(now: datetime | None = None) -> tuple[datetime, datetime]:
    """
    Return [start, end) of the local calendar day containing ``now``.

    Both bounds are naive local datetimes.
    """
    if now is None:
        now = datetime.now()
    elif now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    start = datetime(now.year, now.month, now.day)
    return start, start + timedelta(days=1)


def _chronological(sets: Iterable[WorkoutSet]) -> list[WorkoutSet]:
    # sorted() is stable: same-timestamp sets keep their input order
    return sorted(sets, key=lambda s: s.local_timestamp)


def today_session(history: Iterable[WorkoutSet], now: datetime | None = None) -> list[WorkoutSet]:
    """Sets logged today (local calendar day), in chronological order."""
    start, end = local_day_bounds(now)
    return _chronological(s for s in history if start <= s.local_timestamp < end)


def today_sets_by_exercise(
    history: Iterable[WorkoutSet],
    now: datetime | None = None,
) -> dict[str, list[WorkoutSet]]:
    """
    Today's sets keyed by exact exercise name.

    Keys appear in order of each exercise's first set today; each list is
    chronological.
    """
    by_exercise: dict[str, list[WorkoutSet]] = {}
    for s in today_session(history, now):
        by_exercise.setdefault(s.exercise_name, []).append(s)
    return by_exercise


def group_today_by_exercise(today: Sequence[WorkoutSet]) -> list[ExerciseGroup]:
    """Group an already-filtered today session per exercise."""
    groups: dict[str, list[WorkoutSet]] = {}
    for s in today:
        groups.setdefault(s.exercise_name, []).append(s)
    return [ExerciseGroup(exercise_name=name, sets=sets) for name, sets in groups.items()]


def group_sessions(
    sets: Iterable[WorkoutSet],
    window: timedelta = SESSION_WINDOW,
) -> list[SessionGroup]:
    """
    Split sets into training sessions by time proximity.

    Sets are visited chronologically. Each joins the first session (in
    creation order, not recency) holding a set within ``window`` of it;
    otherwise it opens a new session keyed by its calendar date.

    Args:
        sets: Sets in any order
        window: Maximum distance to any set of an existing session

    Returns:
        Sessions in creation order, each with chronological sets
    """
    sessions: list[SessionGroup] = []
    keys_per_day: dict[date, int] = {}

    for s in _chronological(sets):
        ts = s.local_timestamp
        target: SessionGroup | None = None
        for session in sessions:
            if any(abs(ts - other.local_timestamp) <= window for other in session.sets):
                target = session
                break

        if target is None:
            day = ts.date()
            n = keys_per_day.get(day, 0) + 1
            keys_per_day[day] = n
            key = day.isoformat() if n == 1 else f"{day.isoformat()}#{n}"
            target = SessionGroup(key=key, date=day)
            sessions.append(target)

        target.sets.append(s)

    return sessions


def group_by_date(sets: Iterable[WorkoutSet]) -> dict[date, list[WorkoutSet]]:
    """
    Group sets by local calendar date, newest day first.

    Sets within a day are chronological.
    """
    by_date: dict[date, list[WorkoutSet]] = {}
    for s in _chronological(sets):
        by_date.setdefault(s.local_timestamp.date(), []).append(s)
    return dict(sorted(by_date.items(), key=lambda kv: kv[0], reverse=True))


def group_by_exercise(sets: Iterable[WorkoutSet]) -> dict[str, list[WorkoutSet]]:
    """Group sets by exact exercise name, keeping input order."""
    by_exercise: dict[str, list[WorkoutSet]] = {}
    for s in sets:
        by_exercise.setdefault(s.exercise_name, []).append(s)
    return by_exercise


def _rank(indexed: tuple[int, WorkoutSet]) -> tuple:
    i, s = indexed
    return (s.score, s.weight, s.reps, s.local_timestamp, i)


def best_set(sets: Iterable[WorkoutSet]) -> WorkoutSet | None:
    """
    Return the best-performing set, or None for an empty pool.

    Ranked by score (estimated 1RM, else weight × reps). Ties go to the
    heavier set, then the one with more reps, then the later timestamp,
    then the later position in the input.
    """
    indexed = list(enumerate(sets))
    if not indexed:
        return None
    return max(indexed, key=_rank)[1]


def best_set_for(history: Iterable[WorkoutSet], exercise_name: str) -> WorkoutSet | None:
    """All-time best set of one exercise (exact name match)."""
    return best_set(s for s in history if s.exercise_name == exercise_name)


def best_set_comparison(
    history: Iterable[WorkoutSet],
    exercise_name: str,
    today_sets: Iterable[WorkoutSet],
) -> tuple[WorkoutSet | None, WorkoutSet | None]:
    """Return (today's best, all-time best) for one exercise."""
    return best_set(today_sets), best_set_for(history, exercise_name)
