"""
Tests for serialization and the on-disk stores (JSONL history, YAML programs).
"""

import json
import logging
from datetime import datetime, timezone

import pytest

from liftcoach.core.models import Block, Program, ProgramExercise, ProgramSession, WorkoutSet
from liftcoach.io.history_store import HistoryStore
from liftcoach.io.program_store import ProgramStore
from liftcoach.io.serializers import (
    ValidationError,
    dict_to_program,
    dict_to_workout_set,
    parse_set_entry,
    parse_timestamp,
    program_to_dict,
    workout_set_to_dict,
)


@pytest.fixture
def store(tmp_path):
    s = HistoryStore(tmp_path / "history.jsonl")
    s.init()
    return s


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------


class TestSetSerialization:
    def test_to_dict(self):
        s = WorkoutSet(
            id="a1",
            exercise_name="Squat",
            weight=100.0,
            reps=5,
            timestamp=datetime(2025, 3, 10, 18, 0),
            estimated_1rm=113.0,
        )
        assert workout_set_to_dict(s) == {
            "id": "a1",
            "exercise_name": "Squat",
            "weight": 100.0,
            "reps": 5,
            "timestamp": "2025-03-10T18:00:00",
            "estimated_1rm": 113.0,
        }

    def test_from_dict_with_aliases(self):
        s = dict_to_workout_set({
            "id": 7,
            "exerciseName": "Bench Press",
            "weight": "80",
            "reps": 5,
            "timestamp": "2025-03-10T17:00:00Z",
            "oneRM": 90,
        })
        assert s.id == "7"
        assert s.exercise_name == "Bench Press"
        assert s.weight == 80.0
        assert s.estimated_1rm == 90.0
        assert s.timestamp == datetime(2025, 3, 10, 17, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "patch",
        [
            {"weight": -5},
            {"reps": 0},
            {"reps": 2.5},
            {"timestamp": "yesterday"},
            {"exercise_name": ""},
            {"weight": float("nan")},
            {"weight": float("inf")},
            {"reps": float("inf")},
            {"reps": float("-inf")},
            {"reps": float("nan")},
            {"estimated_1rm": float("nan")},
        ],
    )
    def test_from_dict_rejects(self, patch):
        data = {"id": "x", "exercise_name": "Squat", "weight": 100, "reps": 5, "timestamp": "2025-03-10T18:00:00"}
        data.update(patch)
        with pytest.raises(ValidationError):
            dict_to_workout_set(data)

    def test_missing_field(self):
        with pytest.raises(ValidationError, match="timestamp"):
            dict_to_workout_set({"id": "x", "exercise_name": "Squat", "weight": 100, "reps": 5})

    def test_parse_timestamp_naive_stays_naive(self):
        assert parse_timestamp("2025-03-10 07:30").tzinfo is None


class TestSetEntry:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("80x5", (80.0, 5)),
            ("80 x 5", (80.0, 5)),
            ("82.5kg x 3", (82.5, 3)),
            ("60X10", (60.0, 10)),
            ("0x12", (0.0, 12)),
            ("100×1", (100.0, 1)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_set_entry(text) == expected

    @pytest.mark.parametrize("text", ["80", "x5", "80x0", "-10x5", "eighty x five"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_set_entry(text)


class TestProgramSerialization:
    RAW = {
        "id": "ppl",
        "title": "Push Pull Legs",
        "sessions": [
            {
                "label": "Push",
                "day": "Lundi",
                "blocks": [
                    {
                        "name": "Main",
                        "exercises": [
                            {"exercise": "Bench Press", "sets": 4, "reps": 5, "load": "80%"},
                            {"exercise_name": "Dumbbell Fly", "reps": "10-12"},
                        ],
                    }
                ],
            }
        ],
    }

    def test_from_dict(self):
        program = dict_to_program(self.RAW)
        bench, fly = program.sessions[0].all_exercises()
        assert program.title == "Push Pull Legs"
        assert (bench.exercise_name, bench.sets, bench.reps, bench.load) == ("Bench Press", 4, "5", "80%")
        assert (fly.exercise_name, fly.sets, fly.reps, fly.rest) == ("Dumbbell Fly", 1, "10-12", None)

    def test_title_defaults_to_id(self):
        assert dict_to_program({"id": "solo"}).title == "solo"

    def test_to_dict_drops_empty_fields(self):
        out = program_to_dict(dict_to_program(self.RAW))
        exercises = out["sessions"][0]["blocks"][0]["exercises"]
        assert exercises[1] == {"exercise": "Dumbbell Fly", "sets": 1, "reps": "10-12"}
        assert dict_to_program(out) == dict_to_program(self.RAW)

    @pytest.mark.parametrize(
        "raw",
        [
            {"title": "no id"},
            {"id": "x", "sessions": "Monday"},
            {"id": "x", "sessions": [{"blocks": [{"exercises": [{"sets": 3}]}]}]},
            {"id": "x", "sessions": [{"blocks": [{"exercises": [{"exercise": "Squat", "sets": 0}]}]}]},
            "just a string",
        ],
    )
    def test_malformed(self, raw):
        with pytest.raises(ValidationError):
            dict_to_program(raw)


# ---------------------------------------------------------------------------
# History store
# ---------------------------------------------------------------------------


class TestHistoryStore:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="init"):
            HistoryStore(tmp_path / "nope.jsonl").load_history()

    def test_init_creates_parents(self, tmp_path):
        s = HistoryStore(tmp_path / "deep" / "dir" / "history.jsonl")
        s.init()
        assert s.exists()
        assert s.load_history() == []

    def test_log_set_derives_1rm(self, store):
        s = store.log_set("Bench Press", 80, 5, datetime(2025, 3, 10, 18, 0))
        assert s.estimated_1rm == 90
        assert len(s.id) == 32
        assert store.load_history() == [s]

    def test_log_set_bodyweight_has_no_1rm(self, store):
        assert store.log_set("Pull-ups", 0, 12, datetime(2025, 3, 10, 18, 0)).estimated_1rm is None

    def test_log_set_rejects_bad_values(self, store):
        with pytest.raises(ValidationError):
            store.log_set("Squat", 100, 0)

    def test_chronological_insert(self, store):
        late = store.log_set("Squat", 100, 5, datetime(2025, 3, 10, 19, 0))
        early = store.log_set("Squat", 60, 5, datetime(2025, 3, 10, 18, 0))
        assert store.load_history() == [early, late]
        lines = store.history_path.read_text().splitlines()
        assert json.loads(lines[0])["id"] == early.id

    def test_delete_set_at(self, store):
        a = store.log_set("Squat", 60, 5, datetime(2025, 3, 10, 18, 0))
        b = store.log_set("Squat", 100, 5, datetime(2025, 3, 10, 18, 10))
        assert store.delete_set_at(0) == a
        assert store.load_history() == [b]
        with pytest.raises(IndexError):
            store.delete_set_at(5)

    def test_bad_line_reports_line_number(self, store):
        store.log_set("Squat", 100, 5, datetime(2025, 3, 10, 18, 0))
        with open(store.history_path, "a", encoding="utf-8") as f:
            f.write("\n{not json}\n")
        with pytest.raises(ValidationError, match="line 3"):
            store.load_history()

    @pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN", "1e999"])
    def test_non_finite_reps_report_line_number(self, store, literal):
        # json.loads accepts these tokens; 1e999 overflows to inf.
        store.log_set("Squat", 100, 5, datetime(2025, 3, 10, 18, 0))
        with open(store.history_path, "a", encoding="utf-8") as f:
            f.write(
                '{"id":"x","exercise_name":"Squat","weight":100,'
                f'"reps":{literal},"timestamp":"2025-03-10T18:30:00"}}\n'
            )
        with pytest.raises(ValidationError, match="line 2"):
            store.load_history()

    def test_non_finite_weight_reports_line_number(self, store):
        with open(store.history_path, "a", encoding="utf-8") as f:
            f.write('{"id":"x","exercise_name":"Squat","weight":NaN,"reps":5,"timestamp":"2025-03-10T18:00:00"}\n')
        with pytest.raises(ValidationError, match="weight must be finite"):
            store.load_history()

    def test_clear_history(self, store):
        store.log_set("Squat", 100, 5)
        store.clear_history()
        assert store.load_history() == []


# ---------------------------------------------------------------------------
# Program store
# ---------------------------------------------------------------------------


class TestProgramStore:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProgramStore(tmp_path / "programs.yaml").load_programs()

    def test_round_trip(self, tmp_path):
        program = Program(
            id="p",
            title="P",
            sessions=[ProgramSession("A", "Lundi", [Block("Main", [ProgramExercise("Squat", 3, "5")])])],
        )
        ps = ProgramStore(tmp_path / "sub" / "programs.yaml")
        ps.save_programs([program])
        assert ps.load_programs() == [program]
        assert ps.get_program("p") == program
        assert ps.get_program("q") is None

    def test_malformed_programs_are_skipped(self, tmp_path, caplog):
        path = tmp_path / "programs.yaml"
        path.write_text(
            "programs:\n"
            "  - id: good\n"
            "    sessions:\n"
            "      - {label: A, day: Lundi, blocks: [{name: Main, exercises: [{exercise: Squat, sets: 3}]}]}\n"
            "  - title: missing id\n"
            "  - id: bad-sets\n"
            "    sessions: [{blocks: [{exercises: [{exercise: Squat, sets: -1}]}]}]\n"
            "  - id: good\n"
            "    title: duplicate\n"
        )
        with caplog.at_level(logging.WARNING, logger="liftcoach.io.program_store"):
            programs = ProgramStore(path).load_programs()
        assert [p.id for p in programs] == ["good"]
        assert programs[0].title == "good"
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "programs.yaml"
        path.write_text("programs: [unclosed\n")
        with pytest.raises(ValidationError):
            ProgramStore(path).load_programs()

    def test_programs_must_be_a_list(self, tmp_path):
        path = tmp_path / "programs.yaml"
        path.write_text("programs: {id: x}\n")
        with pytest.raises(ValidationError):
            ProgramStore(path).load_programs()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "programs.yaml"
        path.write_text("")
        assert ProgramStore(path).load_programs() == []
