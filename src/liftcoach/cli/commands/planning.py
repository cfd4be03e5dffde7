"""Planning commands: suggest, programs, exercises, warmup."""

import json
from dataclasses import asdict
from typing import Annotated, Optional

import typer

from ...core.days import current_day
from ...core.exercises.registry import EXERCISE_CATALOG, get_exercise
from ...core.max_estimator import default_target_weight, warmup_ladder
from ...core.planner import get_workout_suggestions, select_session
from ...io.serializers import ValidationError, program_to_dict, suggestions_to_json
from .. import views
from ..app import (
    HistoryPathOption,
    JsonOption,
    ProgramsPathOption,
    app,
    get_program_store,
    get_settings,
    get_store,
)


@app.command()
def suggest(
    program: Annotated[
        Optional[str],
        typer.Option("--program", "-P", help="Program id to follow (default: first with sessions)"),
    ] = None,
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="Day or session label to train (default: today)"),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="List every pending exercise"),
    ] = False,
    history_path: HistoryPathOption = None,
    programs_path: ProgramsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Suggest the next exercise of today's session.

    Sets logged today count toward the program once warm-ups are filtered out.
    """
    store = get_store(history_path)
    program_store = get_program_store(programs_path)
    settings = get_settings()

    try:
        history = store.load_history()
        programs = program_store.load_programs()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if program is not None and all(p.id != program for p in programs):
        views.print_warning(f"No program with id '{program}'.")

    suggestions = get_workout_suggestions(
        programs,
        history,
        selected_program_id=program,
        selected_day=day,
        threshold=settings.warmup_threshold,
    )

    if json_out:
        print(suggestions_to_json(suggestions))
        return

    views.print_suggestions(suggestions, show_all=show_all)


@app.command()
def programs(
    show: Annotated[
        Optional[str],
        typer.Option("--show", "-s", help="Show every session of this program id"),
    ] = None,
    programs_path: ProgramsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    List training programs and the session planned for today.
    """
    program_store = get_program_store(programs_path)

    try:
        loaded = program_store.load_programs()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if show is not None:
        selected = next((p for p in loaded if p.id == show), None)
        if selected is None:
            views.print_error(f"No program with id '{show}'.")
            raise typer.Exit(1)
        if json_out:
            print(json.dumps(program_to_dict(selected), indent=2, ensure_ascii=False))
            return
        views.print_program_detail(selected)
        return

    if json_out:
        print(json.dumps([program_to_dict(p) for p in loaded], indent=2, ensure_ascii=False))
        return

    today_name = current_day()
    today_labels = {}
    for p in loaded:
        session = select_session(p, today_name)
        if session is not None:
            today_labels[p.id] = session.label
    views.print_programs(loaded, today_name, today_labels)


@app.command()
def exercises(
    tag: Annotated[
        Optional[str],
        typer.Option("--tag", "-t", help="Only exercises with this tag (e.g. push, legs)"),
    ] = None,
    favorites: Annotated[
        bool,
        typer.Option("--favorites", "-f", help="Only favourite exercises"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Browse the exercise catalog.
    """
    entries = EXERCISE_CATALOG.by_tag(tag.lower()) if tag else list(EXERCISE_CATALOG)
    if favorites:
        starred = EXERCISE_CATALOG.favorites()
        entries = [ex for ex in entries if ex in starred]
    entries.sort(key=lambda ex: ex.name.casefold())

    if json_out:
        print(json.dumps([asdict(ex) for ex in entries], indent=2))
        return

    if not entries:
        views.print_warning("No exercise matches these filters.")
        return
    views.print_exercises(entries)


@app.command()
def warmup(
    exercise: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Deadlift'")],
    target: Annotated[
        Optional[float],
        typer.Option("--target", "-t", help="Working load in kg (default: best estimated 1RM)"),
    ] = None,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Print the warm-up ladder of an exercise.
    """
    try:
        entry = get_exercise(exercise)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if target is None:
        store = get_store(history_path)
        try:
            history = store.load_history() if store.exists() else []
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        target = default_target_weight(history, entry)

    views.print_warmup(entry, target, warmup_ladder(entry, target))
