"""
Warm-up detection.

Decides whether a logged set was preparatory or a working set. Working sets
count toward a prescribed set target; warm-ups do not.

Rules, in order:

1. With a session supplied, the reference best is recomputed from it: most
   reps for an unloaded bodyweight session, otherwise highest score.
2. No reference at all: working set.
3. A set logged after the session's best set is a back-off set, never a
   warm-up.
4. Bodyweight exercise: an unloaded set is a warm-up once any set of the
   session carries added weight; otherwise it is a working set.
5. Loaded exercise: warm-up iff its score is below ``threshold`` × the
   reference score (0.90 by default).
"""

from __future__ import annotations

from typing import Sequence

from .config import WARMUP_THRESHOLD
from .exercises.base import ExerciseCatalog
from .exercises.registry import resolve_catalog
from .models import WorkoutSet
from .sessions import best_set


def session_reference(session: Sequence[WorkoutSet], is_bodyweight: bool) -> WorkoutSet | None:
    """
    Best set within a session, used as the warm-up reference.

    An unloaded bodyweight session is ranked by reps; anything else by score.
    """
    if not session:
        return None
    if is_bodyweight and all(s.weight == 0 for s in session):
        indexed = list(enumerate(session))
        # later position wins ties, like best_set()
        return max(indexed, key=lambda p: (p[1].reps, p[0]))[1]
    return best_set(session)


def _index_by_id(session: Sequence[WorkoutSet], set_id: str) -> int:
    if not set_id:
        return -1
    for i, s in enumerate(session):
        if s.id == set_id:
            return i
    return -1


def _comes_after(candidate: WorkoutSet, reference: WorkoutSet, session: Sequence[WorkoutSet]) -> bool:
    """True if ``candidate`` was performed after ``reference`` in this session."""
    ref_idx = _index_by_id(session, reference.id)
    cand_idx = _index_by_id(session, candidate.id)
    if ref_idx != -1 and cand_idx != -1:
        return cand_idx > ref_idx
    return candidate.local_timestamp > reference.local_timestamp


def is_warmup_set(
    candidate: WorkoutSet,
    reference_best: WorkoutSet | None,
    session: Sequence[WorkoutSet] | None = None,
    *,
    catalog: ExerciseCatalog | None = None,
    threshold: float = WARMUP_THRESHOLD,
) -> bool:
    """
    Classify ``candidate`` as warm-up (True) or working set (False).

    Args:
        candidate: Set to classify
        reference_best: All-time best of the exercise; ignored when a
            non-empty session is given
        session: Same-exercise sets of the candidate's session, in order
        catalog: Exercise catalog (defaults to the bundled one)
        threshold: Fraction of the reference score below which a loaded
            set is a warm-up

    Returns:
        True if the set is a warm-up
    """
    is_bodyweight = resolve_catalog(catalog).is_bodyweight(candidate.exercise_name)

    reference = reference_best
    if session:
        reference = session_reference(session, is_bodyweight)

    if reference is None:
        return False

    if session:
        if _comes_after(candidate, reference, session):
            return False
        if is_bodyweight and candidate.weight == 0 and any(s.weight > 0 for s in session):
            return True

    if is_bodyweight:
        return False

    return candidate.score < reference.score * threshold


def working_sets(
    sets: Sequence[WorkoutSet],
    reference_best: WorkoutSet | None,
    session: Sequence[WorkoutSet] | None = None,
    *,
    catalog: ExerciseCatalog | None = None,
    threshold: float = WARMUP_THRESHOLD,
) -> list[WorkoutSet]:
    """Filter ``sets`` down to those not classified as warm-up."""
    return [
        s
        for s in sets
        if not is_warmup_set(s, reference_best, session, catalog=catalog, threshold=threshold)
    ]
