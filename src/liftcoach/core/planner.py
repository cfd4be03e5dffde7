"""
Workout suggestion engine.

Walks the selected program session (blocks, then exercises, in authored
order) against today's logged sets and emits one ExerciseSuggestion per
exercise that still lacks working sets. The whole list is returned so the
caller can cycle or skip between pending exercises.

The engine is stateless: every call recomputes from the history and
program snapshots it is given, and degrades to null suggestions instead of
raising.
"""

import logging
import re
from datetime import datetime
from typing import Sequence

from .config import WARMUP_THRESHOLD
from .days import ANY_DAY, current_day, normalize_day_name
from .exercises.base import ExerciseCatalog
from .models import ExerciseSuggestion, Program, ProgramExercise, ProgramSession, WorkoutSet
from .sessions import best_set_for, today_sets_by_exercise
from .warmup import working_sets

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_rep_target(reps: str | int | None) -> int | None:
    """
    Best-effort rep count from a program rep descriptor.

    Takes the leading integer: "8-12" → 8, "5" → 5, "AMRAP" → None.
    Targets below one rep ("0", "-5") give None.
    """
    if reps is None:
        return None
    if isinstance(reps, int):
        value = reps
    else:
        match = _LEADING_INT.match(reps)
        if not match:
            return None
        value = int(match.group(1))
    return value if value >= 1 else None


def no_program_suggestion() -> ExerciseSuggestion:
    """Signal that no program (or no program session) could be resolved."""
    return ExerciseSuggestion(
        next_exercise=None,
        program_name=None,
        block_name=None,
        completed_series=0,
        total_series=0,
        suggested_reps=None,
        suggested_charge=None,
        exercise_details=None,
    )


def program_complete_suggestion(program: Program, completed: list[str]) -> ExerciseSuggestion:
    """Signal that every exercise of today's session is done."""
    return ExerciseSuggestion(
        next_exercise=None,
        program_name=program.title,
        block_name=None,
        completed_series=0,
        total_series=0,
        suggested_reps=None,
        suggested_charge=None,
        exercise_details=None,
        completed_exercises=completed,
        remaining_exercises=[],
        is_completing_current_exercise=False,
    )


def select_session(program: Program, day: str, explicit: bool = False) -> ProgramSession | None:
    """
    Pick the program session to train.

    Matches on normalised day. Wildcard ("any") sessions only match when the
    day was chosen explicitly; an explicit choice may also name a session
    label. Falls back to the first session, or None for an empty program.
    """
    if not program.sessions:
        return None

    wanted = normalize_day_name(day)
    for session in program.sessions:
        session_day = normalize_day_name(session.day)
        if session_day == ANY_DAY and not explicit:
            continue
        if session_day == wanted:
            return session

    if explicit:
        folded = day.strip().casefold()
        for session in program.sessions:
            if session.label.strip().casefold() == folded:
                return session

    logger.debug("No session of %r matches %r; using the first session", program.id, day)
    return program.sessions[0]


def _suggested_charge(best: WorkoutSet | None) -> float:
    if best is None:
        return 0.0
    if best.estimated_1rm is not None:
        return float(best.estimated_1rm)
    return float(best.weight)


def get_workout_suggestions(
    programs: Sequence[Program],
    history: Sequence[WorkoutSet],
    selected_program_id: str | None = None,
    selected_day: str | None = None,
    *,
    now: datetime | None = None,
    catalog: ExerciseCatalog | None = None,
    threshold: float = WARMUP_THRESHOLD,
) -> list[ExerciseSuggestion]:
    """
    Suggest what to train next.

    Args:
        programs: Program snapshot, in priority order
        history: Every logged set, any order
        selected_program_id: Restrict to this program
        selected_day: Day token or session label overriding today
        now: Clock reading for "today" (defaults to the local clock)
        catalog: Exercise catalog for warm-up detection
        threshold: Warm-up threshold

    Returns:
        One suggestion per incomplete exercise in program order; a single
        terminal suggestion when the session is complete; a single all-null
        suggestion when no program session could be resolved
    """
    day = selected_day or current_day(now)
    today = today_sets_by_exercise(history, now)

    candidates = (
        [p for p in programs if p.id == selected_program_id]
        if selected_program_id
        else list(programs)
    )

    for program in candidates:
        session = select_session(program, day, explicit=bool(selected_day))
        if session is None:
            continue

        logger.debug("Program %r: session %r (day %s)", program.id, session.label, day)

        # Working sets per exercise for the whole session, computed once.
        done: dict[str, int] = {}
        bests: dict[str, WorkoutSet | None] = {}
        for ex in session.all_exercises():
            if ex.exercise_name in done:
                continue
            best = best_set_for(history, ex.exercise_name)
            todays = today.get(ex.exercise_name, [])
            bests[ex.exercise_name] = best
            done[ex.exercise_name] = len(
                working_sets(todays, best, todays, catalog=catalog, threshold=threshold)
            )

        def is_complete(ex: ProgramExercise) -> bool:
            return done[ex.exercise_name] >= ex.sets

        completed_names = [
            name
            for name in today
            if any(ex.exercise_name == name and is_complete(ex) for ex in session.all_exercises())
        ]

        suggestions: list[ExerciseSuggestion] = []
        for block in session.blocks:
            remaining = [ex.exercise_name for ex in block.exercises if not is_complete(ex)]
            for ex in block.exercises:
                if is_complete(ex):
                    continue
                completed = done[ex.exercise_name]
                suggestions.append(
                    ExerciseSuggestion(
                        next_exercise=ex.exercise_name,
                        program_name=program.title,
                        block_name=block.name,
                        completed_series=completed,
                        total_series=ex.sets,
                        suggested_reps=parse_rep_target(ex.reps),
                        suggested_charge=_suggested_charge(bests[ex.exercise_name]),
                        exercise_details=ex,
                        completed_exercises=list(completed_names),
                        remaining_exercises=list(remaining),
                        is_completing_current_exercise=completed > 0,
                    )
                )

        if not suggestions:
            return [program_complete_suggestion(program, list(today))]
        return suggestions

    logger.debug("No program session resolved (%d candidate programs)", len(candidates))
    return [no_program_suggestion()]
