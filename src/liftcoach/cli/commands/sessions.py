"""Session commands: log, today, history, delete-set."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.exercises.registry import EXERCISE_CATALOG
from ...core.sessions import (
    best_set_comparison,
    group_by_date,
    group_today_by_exercise,
    today_session,
)
from ...core.warmup import is_warmup_set
from ...io.serializers import (
    ValidationError,
    parse_set_entry,
    parse_timestamp,
    workout_set_to_dict,
)
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_settings, get_store


@app.command("log")
def log_set(
    exercise: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Bench Press'")],
    entries: Annotated[
        list[str],
        typer.Argument(help="Sets as WEIGHTxREPS, e.g. 80x5 82.5x3 (0x12 for bodyweight)"),
    ],
    at: Annotated[
        Optional[str],
        typer.Option("--at", help="When the sets were done (ISO 8601, default: now)"),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Log one or more sets of an exercise.

      liftcoach log "Bench Press" 60x8 80x5 80x5
    """
    store = get_store(history_path)

    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create the history file.")
        raise typer.Exit(1)

    entry = EXERCISE_CATALOG.get(exercise)
    name = entry.name if entry is not None else exercise.strip()
    if entry is None:
        views.print_warning(f"'{name}' is not in the catalog.")

    try:
        parsed = [parse_set_entry(e) for e in entries]
        timestamp = parse_timestamp(at) if at else None
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    logged = []
    for weight, reps in parsed:
        try:
            logged.append(store.log_set(name, weight, reps, timestamp or datetime.now()))
        except (FileNotFoundError, ValidationError) as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    if json_out:
        print(json.dumps([workout_set_to_dict(s) for s in logged], indent=2))
        return

    for s in logged:
        one_rm = f" (1RM ~{s.estimated_1rm:g}kg)" if s.estimated_1rm else ""
        views.print_success(f"Logged {s.exercise_name}: {views.format_set(s)}{one_rm}")


@app.command()
def today(
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show today's sets, which of them were warm-ups, and best sets.
    """
    store = get_store(history_path)
    settings = get_settings()

    try:
        history = store.load_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    groups = group_today_by_exercise(today_session(history))

    warmups: set[str] = set()
    comparisons = {}
    for group in groups:
        for s in group.sets:
            if is_warmup_set(s, None, group.sets, threshold=settings.warmup_threshold):
                warmups.add(s.id)
        comparisons[group.exercise_name] = best_set_comparison(
            history, group.exercise_name, group.sets
        )

    if json_out:
        out = [
            {
                "exercise_name": g.exercise_name,
                "total_sets": g.total_sets,
                "sets": [
                    {**workout_set_to_dict(s), "is_warmup": s.id in warmups} for s in g.sets
                ],
            }
            for g in groups
        ]
        print(json.dumps(out, indent=2))
        return

    views.print_today(groups, warmups, comparisons)


@app.command()
def history(
    exercise: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Only show this exercise"),
    ] = None,
    days: Annotated[
        Optional[int],
        typer.Option("--days", "-n", help="Only show the N most recent training days", min=1),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display logged sets grouped by day, newest first.
    """
    store = get_store(history_path)

    try:
        sets = store.load_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    index_of = {s.id: i for i, s in enumerate(sets, 1)}

    if exercise:
        wanted = exercise.strip().casefold()
        sets = [s for s in sets if s.exercise_name.casefold() == wanted]

    by_date = group_by_date(sets)
    if days is not None:
        by_date = dict(list(by_date.items())[:days])

    if json_out:
        out = [
            {
                "date": day.isoformat(),
                "sets": [{**workout_set_to_dict(s), "record_id": index_of[s.id]} for s in day_sets],
            }
            for day, day_sets in by_date.items()
        ]
        print(json.dumps(out, indent=2))
        return

    views.print_history(by_date, index_of)


@app.command("delete-set")
def delete_set(
    record_id: Annotated[int, typer.Argument(help="Record number shown by 'history'")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Delete a logged set by its record number.
    """
    store = get_store(history_path)

    try:
        sets = store.load_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not sets:
        views.print_error("No sets in history.")
        raise typer.Exit(1)

    if record_id < 1 or record_id > len(sets):
        views.print_error(f"Record ID must be between 1 and {len(sets)}")
        raise typer.Exit(1)

    target = sets[record_id - 1]
    label = f"{target.exercise_name} {views.format_set(target)} ({target.local_timestamp:%Y-%m-%d %H:%M})"
    views.console.print(f"Set to delete: [bold]{label}[/bold]")

    if not force and not views.confirm_action("Delete this set?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store.delete_set_at(record_id - 1)
    views.print_success(f"Deleted set #{record_id}: {label}")
