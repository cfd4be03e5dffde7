"""
Integration tests for the workout suggestion engine.

Each test builds a small program and a history, then checks what
get_workout_suggestions() proposes for a fixed "now" (Monday 18:00).
"""

import itertools
import json
from datetime import datetime, timedelta, timezone

import pytest

from liftcoach.core.exercises.base import Exercise, ExerciseCatalog
from liftcoach.core.max_estimator import estimate_1rm
from liftcoach.core.models import Block, Program, ProgramExercise, ProgramSession, WorkoutSet
from liftcoach.core.planner import get_workout_suggestions, parse_rep_target, select_session
from liftcoach.io.serializers import suggestions_to_json

NOW = datetime(2025, 3, 10, 18, 0)  # Monday

CATALOG = ExerciseCatalog([
    Exercise("Bench Press", is_powerlifting=True),
    Exercise("Squat", is_powerlifting=True),
    Exercise("Pull-ups", bodyweight=True),
])

_ids = itertools.count(1)


def _set(name: str, weight: float, reps: int, minutes_ago: int) -> WorkoutSet:
    return WorkoutSet(
        id=f"p{next(_ids)}",
        exercise_name=name,
        weight=weight,
        reps=reps,
        timestamp=NOW - timedelta(minutes=minutes_ago),
        estimated_1rm=estimate_1rm(weight, reps, name, catalog=CATALOG),
    )


def _program(program_id: str = "strength", day: str = "Lundi") -> Program:
    return Program(
        id=program_id,
        title=program_id.title(),
        sessions=[
            ProgramSession(
                label="Heavy",
                day=day,
                blocks=[
                    Block(
                        name="Main",
                        exercises=[
                            ProgramExercise("Bench Press", sets=3, reps="5", load="80%", rest="3min"),
                            ProgramExercise("Squat", sets=2, reps="8-12"),
                        ],
                    )
                ],
            )
        ],
    )


def _suggest(programs, history, **kwargs):
    return get_workout_suggestions(programs, history, now=NOW, catalog=CATALOG, **kwargs)


# ---------------------------------------------------------------------------
# Pending exercises
# ---------------------------------------------------------------------------


class TestPendingExercises:
    def test_partial_session(self):
        history = [_set("Bench Press", 80, 5, 30), _set("Bench Press", 80, 5, 25)]
        suggestions = _suggest([_program()], history)

        assert [s.next_exercise for s in suggestions] == ["Bench Press", "Squat"]

        bench, squat = suggestions
        assert bench.program_name == "Strength"
        assert bench.block_name == "Main"
        assert (bench.completed_series, bench.total_series) == (2, 3)
        assert bench.is_completing_current_exercise is True
        assert bench.suggested_reps == 5
        assert bench.exercise_details.load == "80%"
        assert bench.remaining_exercises == ["Bench Press", "Squat"]
        assert bench.completed_exercises == []

        assert (squat.completed_series, squat.total_series) == (0, 2)
        assert squat.is_completing_current_exercise is False
        assert squat.suggested_reps == 8

    def test_nothing_logged_yet(self):
        suggestions = _suggest([_program()], [])
        assert [s.next_exercise for s in suggestions] == ["Bench Press", "Squat"]
        assert all(s.completed_series == 0 for s in suggestions)

    def test_warmups_do_not_count(self):
        # 40×10 (53) and 60×8 (74) are below 0.90 × 90
        history = [
            _set("Bench Press", 40, 10, 40),
            _set("Bench Press", 60, 8, 35),
            _set("Bench Press", 80, 5, 30),
        ]
        bench = _suggest([_program()], history)[0]
        assert bench.completed_series == 1

    def test_yesterday_does_not_count(self):
        history = [_set("Bench Press", 80, 5, 60 * 24 + m) for m in (0, 5, 10)]
        bench = _suggest([_program()], history)[0]
        assert bench.completed_series == 0

    def test_finished_exercise_is_skipped(self):
        history = [_set("Bench Press", 80, 5, m) for m in (30, 25, 20)]
        suggestions = _suggest([_program()], history)
        assert [s.next_exercise for s in suggestions] == ["Squat"]
        assert suggestions[0].completed_exercises == ["Bench Press"]
        assert suggestions[0].remaining_exercises == ["Squat"]

    def test_suggested_charge_uses_best_1rm(self):
        last_week = _set("Bench Press", 85, 5, 60 * 24 * 7)  # 95.6 → 96
        suggestions = _suggest([_program()], [last_week])
        assert suggestions[0].suggested_charge == 96.0
        assert suggestions[1].suggested_charge == 0.0

    def test_suggested_charge_falls_back_to_weight(self):
        program = Program(
            id="bw",
            title="Bodyweight",
            sessions=[
                ProgramSession("Pull", "Lundi", [Block("Main", [ProgramExercise("Pull-ups", 4, "6-10")])])
            ],
        )
        suggestion = _suggest([program], [_set("Pull-ups", 10, 5, 60 * 24)])[0]
        assert suggestion.suggested_charge == 10.0


# ---------------------------------------------------------------------------
# Terminal suggestions
# ---------------------------------------------------------------------------


class TestCompletionSignals:
    def test_session_complete(self):
        history = [_set("Bench Press", 80, 5, m) for m in (60, 55, 50)] + [
            _set("Squat", 100, 8, m) for m in (30, 25)
        ]
        suggestions = _suggest([_program()], history)
        assert len(suggestions) == 1
        done = suggestions[0]
        assert done.next_exercise is None
        assert done.program_name == "Strength"
        assert done.is_program_complete
        assert done.completed_exercises == ["Bench Press", "Squat"]
        assert done.remaining_exercises == []

    def test_no_programs(self):
        suggestions = _suggest([], [_set("Bench Press", 80, 5, 10)])
        assert len(suggestions) == 1
        none = suggestions[0]
        assert none.next_exercise is None
        assert none.program_name is None
        assert none.block_name is None
        assert none.suggested_reps is None
        assert none.suggested_charge is None
        assert none.exercise_details is None
        assert not none.has_program

    def test_unknown_program_id(self):
        suggestions = _suggest([_program()], [], selected_program_id="missing")
        assert suggestions[0].program_name is None

    def test_program_without_sessions_is_skipped(self):
        empty = Program(id="empty", title="Empty")
        suggestions = _suggest([empty, _program()], [])
        assert suggestions[0].program_name == "Strength"

    def test_only_empty_programs(self):
        suggestions = _suggest([Program(id="empty", title="Empty")], [])
        assert suggestions[0].program_name is None


# ---------------------------------------------------------------------------
# Program and session selection
# ---------------------------------------------------------------------------


class TestSessionSelection:
    @staticmethod
    def _week() -> Program:
        def session(label, day, exercise):
            return ProgramSession(label, day, [Block("Main", [ProgramExercise(exercise, 3, "5")])])

        return Program(
            id="week",
            title="Week",
            sessions=[
                session("Upper", "Mardi", "Bench Press"),
                session("Lower", "thursday", "Squat"),
                session("Free", "any", "Pull-ups"),
            ],
        )

    def test_day_match_across_languages(self):
        assert select_session(self._week(), "Jeudi").label == "Lower"
        assert select_session(self._week(), "tue").label == "Upper"

    def test_falls_back_to_first_session(self):
        assert select_session(self._week(), "Lundi").label == "Upper"

    def test_wildcard_only_when_explicit(self):
        assert select_session(self._week(), "any").label == "Upper"
        assert select_session(self._week(), "any", explicit=True).label == "Free"
        assert select_session(self._week(), "tous", explicit=True).label == "Free"

    def test_explicit_label(self):
        assert select_session(self._week(), "lower", explicit=True).label == "Lower"
        assert select_session(self._week(), "lower").label == "Upper"

    def test_empty_program(self):
        assert select_session(Program(id="x", title="X"), "Lundi") is None

    def test_engine_uses_today(self):
        # Monday: no session → first session
        suggestions = _suggest([self._week()], [])
        assert suggestions[0].next_exercise == "Bench Press"

    @pytest.mark.parametrize("offset_hours", [-12, 14])
    def test_engine_aware_clock_uses_local_day(self, offset_hours):
        # Thursday 00:30 locally is Wednesday or Friday on a UTC-12 / UTC+14
        # wall clock; either of those would fall back to "Upper".
        local_now = datetime(2025, 3, 13, 0, 30).astimezone()
        now = local_now.astimezone(timezone(timedelta(hours=offset_hours)))
        suggestions = get_workout_suggestions([self._week()], [], now=now, catalog=CATALOG)
        assert suggestions[0].next_exercise == "Squat"

    def test_engine_selected_day(self):
        assert _suggest([self._week()], [], selected_day="jeudi")[0].next_exercise == "Squat"
        assert _suggest([self._week()], [], selected_day="*")[0].next_exercise == "Pull-ups"
        assert _suggest([self._week()], [], selected_day="Free")[0].next_exercise == "Pull-ups"

    def test_selected_program(self):
        programs = [_program("first"), _program("second")]
        assert _suggest(programs, [])[0].program_name == "First"
        assert _suggest(programs, [], selected_program_id="second")[0].program_name == "Second"


# ---------------------------------------------------------------------------
# Rep targets and purity
# ---------------------------------------------------------------------------


class TestRepTarget:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("8-12", 8),
            ("5", 5),
            (" 10 reps", 10),
            ("AMRAP", None),
            ("", None),
            (None, None),
            (6, 6),
            ("0", None),
            ("-5", None),
            ("-5-8", None),
            (0, None),
            (-3, None),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_rep_target(raw) == expected


class TestIdempotence:
    def test_same_inputs_same_output(self):
        history = [_set("Bench Press", 60, 8, 40), _set("Bench Press", 80, 5, 30)]
        first = _suggest([_program()], history)
        second = _suggest([_program()], history)
        assert first == second
        assert suggestions_to_json(first) == suggestions_to_json(second)

    def test_json_shape(self):
        payload = json.loads(suggestions_to_json(_suggest([_program()], [])))
        assert payload[0]["next_exercise"] == "Bench Press"
        assert payload[0]["exercise_details"]["exercise_name"] == "Bench Press"
        assert payload[1]["suggested_reps"] == 8
