"""
Day-of-week normalisation.

Program sessions carry free-form day tokens ("Lundi", "monday", "mon",
"1", "any"). Every token resolves to one canonical French day name so that
a program authored in either language matches the local calendar.
"""

from datetime import datetime
from typing import Final

ANY_DAY: Final[str] = "Any"

# Monday first, matching datetime.weekday() and ISO numbering.
FRENCH_DAYS: Final[tuple[str, ...]] = (
    "Lundi",
    "Mardi",
    "Mercredi",
    "Jeudi",
    "Vendredi",
    "Samedi",
    "Dimanche",
)

_ENGLISH_DAYS: Final[tuple[str, ...]] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def _build_day_map() -> dict[str, str]:
    day_map: dict[str, str] = {}
    for index, (fr, en) in enumerate(zip(FRENCH_DAYS, _ENGLISH_DAYS)):
        day_map[fr.lower()] = fr
        day_map[en] = fr
        day_map[fr.lower()[:3]] = fr
        day_map[en[:3]] = fr
        day_map[str(index + 1)] = fr
    for token in ("any", "*", "tous"):
        day_map[token] = ANY_DAY
    return day_map


_DAY_MAP: Final[dict[str, str]] = _build_day_map()


def normalize_day_name(day: str) -> str:
    """
    Map a day token to its canonical French name.

    Matching is trimmed and case-insensitive. Unknown tokens are returned
    unchanged.

    >>> normalize_day_name("MONDAY")
    'Lundi'
    >>> normalize_day_name("7")
    'Dimanche'
    """
    return _DAY_MAP.get(day.strip().lower(), day)


def is_any_day(day: str) -> bool:
    """True for wildcard session days."""
    return normalize_day_name(day) == ANY_DAY


def current_day(now: datetime | None = None) -> str:
    """Return today's canonical day name from the local clock.

    An aware ``now`` is converted to local time first, like local_day_bounds().
    """
    if now is None:
        now = datetime.now()
    elif now.tzinfo is not None:
        now = now.astimezone()
    return FRENCH_DAYS[now.weekday()]
