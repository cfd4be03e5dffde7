"""
Exercise registry.

The catalog is loaded once from the bundled ``src/liftcoach/exercises.yaml``
at import time. If no valid entry can be loaded (missing file, parse error),
a RuntimeError is raised: the application cannot start without a catalog.

User overrides: ``~/.liftcoach/exercises.yaml``.
"""

from .base import Exercise, ExerciseCatalog


def _build_catalog() -> ExerciseCatalog:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "liftcoach: no exercise definitions could be loaded from YAML. "
            "Check that src/liftcoach/exercises.yaml is present and valid."
        )
    return ExerciseCatalog(loaded)


EXERCISE_CATALOG: ExerciseCatalog = _build_catalog()


def resolve_catalog(catalog: ExerciseCatalog | None) -> ExerciseCatalog:
    """Return ``catalog`` or the module-level default."""
    return EXERCISE_CATALOG if catalog is None else catalog


def get_exercise(name: str) -> Exercise:
    """
    Return the catalog entry for the given exercise name.

    Args:
        name: Exercise name, any casing (e.g. "bench press")

    Returns:
        Exercise for the requested name

    Raises:
        ValueError: If no catalog entry matches
    """
    ex = EXERCISE_CATALOG.get(name)
    if ex is None:
        raise ValueError(f"Unknown exercise '{name}'. See 'liftcoach exercises'.")
    return ex
