"""
Base types for the exercise catalog.

Exercise holds static metadata for one movement. ExerciseCatalog is the
name-keyed lookup the classifier and the 1RM estimator query: logged sets
refer to exercises by name only, matched case-insensitively.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Literal

RepType = Literal["reps", "time"]
WeightUnit = Literal["kg", "%"]


@dataclass(frozen=True)
class WarmupStep:
    """One rung of an exercise's warm-up protocol."""

    weight: float       # kg, or percent of the target load when unit == "%"
    unit: WeightUnit
    reps: int

    def label(self) -> str:
        if self.unit == "%":
            return f"{self.weight:g}%"
        return f"{self.weight:g}kg"


@dataclass(frozen=True)
class Exercise:
    """
    Catalog entry for one exercise.

    ``is_powerlifting`` gates 1RM estimation. ``bodyweight`` changes how
    warm-ups are detected: unloaded sets are compared by reps, and become
    warm-ups once a weighted set appears in the same session.
    """

    name: str
    tags: tuple[str, ...] = ()
    favorite: bool = False
    is_powerlifting: bool = False
    bodyweight: bool = False
    rep_type: RepType = "reps"
    warmup_protocol: tuple[WarmupStep, ...] = field(default_factory=tuple)

    @property
    def is_timed(self) -> bool:
        return self.rep_type == "time"


class ExerciseCatalog:
    """
    Case-insensitive, name-keyed lookup over catalog entries.

    Built once from the static list; later entries with the same folded
    name replace earlier ones.
    """

    def __init__(self, exercises: Iterable[Exercise] = ()):
        self._by_key: dict[str, Exercise] = {}
        for ex in exercises:
            self._by_key[self._key(ex.name)] = ex

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().casefold()

    def get(self, name: str | None) -> Exercise | None:
        """Return the entry matching ``name``, or None."""
        if not name:
            return None
        return self._by_key.get(self._key(name))

    def is_bodyweight(self, name: str | None) -> bool:
        ex = self.get(name)
        return ex.bodyweight if ex is not None else False

    def is_powerlifting(self, name: str | None) -> bool:
        ex = self.get(name)
        return ex.is_powerlifting if ex is not None else False

    def by_tag(self, tag: str) -> list[Exercise]:
        return [ex for ex in self if tag in ex.tags]

    def favorites(self) -> list[Exercise]:
        return [ex for ex in self if ex.favorite]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)
