"""
Data models for liftcoach.

All core dataclasses representing logged sets, training programs and the
suggestions derived from them. Exercise catalog entries live in
core/exercises/base.py.
"""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class WorkoutSet:
    """
    A single performed set.

    ``reps`` holds seconds for time-based exercises. ``estimated_1rm`` is
    derived at log time and is None for exercises without a 1RM concept.
    """

    id: str
    exercise_name: str
    weight: float  # kg; 0 means unloaded / bodyweight
    reps: int
    timestamp: datetime
    estimated_1rm: float | None = None

    def __post_init__(self) -> None:
        """Validate set data."""
        if not self.exercise_name:
            raise ValueError("exercise_name must be non-empty")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.reps < 1:
            raise ValueError("reps must be at least 1")

    @property
    def score(self) -> float:
        """Comparison score: estimated 1RM when known, else weight × reps."""
        return self.estimated_1rm or self.weight * self.reps

    @property
    def volume(self) -> float:
        return self.weight * self.reps

    @property
    def local_timestamp(self) -> datetime:
        """Timestamp as naive local wall-clock time."""
        if self.timestamp.tzinfo is None:
            return self.timestamp
        return self.timestamp.astimezone().replace(tzinfo=None)


@dataclass
class ProgramExercise:
    """
    One prescribed exercise inside a program block.

    ``reps`` is the author's rep descriptor and may be a range ("8-12").
    """

    exercise_name: str
    sets: int
    reps: str
    load: str | None = None
    rest: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if not self.exercise_name:
            raise ValueError("exercise_name must be non-empty")
        if self.sets < 1:
            raise ValueError("sets must be at least 1")


@dataclass
class Block:
    """A named group of exercises, performed in order."""

    name: str
    exercises: list[ProgramExercise] = field(default_factory=list)


@dataclass
class ProgramSession:
    """
    One scheduled training day within a program.

    ``day`` is a free-form token ("Lundi", "mon", "1", "any") resolved by
    core/days.py.
    """

    label: str
    day: str
    blocks: list[Block] = field(default_factory=list)

    def all_exercises(self) -> list[ProgramExercise]:
        """Every exercise of the session in prescribed order."""
        return [ex for block in self.blocks for ex in block.exercises]


@dataclass
class Program:
    """A structured training plan: ordered sessions of ordered blocks."""

    id: str
    title: str
    sessions: list[ProgramSession] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("program id must be non-empty")

    @property
    def exercise_count(self) -> int:
        return sum(len(s.all_exercises()) for s in self.sessions)


@dataclass
class ExerciseSuggestion:
    """
    What to do next within the selected program session.

    ``next_exercise`` None with a ``program_name`` means the session is
    complete for today; both None means no program could be resolved.
    """

    next_exercise: str | None
    program_name: str | None
    block_name: str | None
    completed_series: int
    total_series: int
    suggested_reps: int | None
    suggested_charge: float | None
    exercise_details: ProgramExercise | None
    completed_exercises: list[str] = field(default_factory=list)
    remaining_exercises: list[str] = field(default_factory=list)
    is_completing_current_exercise: bool = False

    @property
    def is_program_complete(self) -> bool:
        return self.next_exercise is None and self.program_name is not None

    @property
    def has_program(self) -> bool:
        return self.program_name is not None


@dataclass
class SessionGroup:
    """Sets performed in one training session (grouped by time proximity)."""

    key: str  # ISO date, suffixed "#2", "#3"… for later sessions on the same day
    date: date
    sets: list[WorkoutSet] = field(default_factory=list)

    @property
    def start(self) -> datetime:
        return self.sets[0].local_timestamp

    @property
    def end(self) -> datetime:
        return self.sets[-1].local_timestamp


@dataclass
class ExerciseGroup:
    """Today's sets of one exercise, as shown in the session recap."""

    exercise_name: str
    sets: list[WorkoutSet]

    @property
    def total_sets(self) -> int:
        return len(self.sets)

    @property
    def total_reps(self) -> int:
        return sum(s.reps for s in self.sets)


@dataclass
class ProgressStats:
    """Summary of a daily estimated-1RM series."""

    current: float
    best: float
    change: float  # current − previous day
    percent_change: float  # rounded to one decimal
