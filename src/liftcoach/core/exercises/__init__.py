"""
Exercise catalog for liftcoach.

Each exercise is described by an Exercise entry; the classifier and the
1RM estimator look entries up by name through an ExerciseCatalog.
"""

from .base import Exercise, ExerciseCatalog, WarmupStep
from .registry import EXERCISE_CATALOG, get_exercise, resolve_catalog

__all__ = [
    "Exercise",
    "ExerciseCatalog",
    "WarmupStep",
    "EXERCISE_CATALOG",
    "get_exercise",
    "resolve_catalog",
]
