"""Analysis commands: stats, records, volume."""

import json
from datetime import datetime
from typing import Annotated

import typer

from ...core.ascii_plot import create_1rm_plot, create_weekly_volume_chart
from ...core.exercises.registry import EXERCISE_CATALOG
from ...core.metrics import daily_1rm_series, personal_records, progress_stats, weekly_volume
from ...io.serializers import ValidationError, workout_set_to_dict
from .. import views
from ..app import HistoryPathOption, JsonOption, app, get_settings, get_store


def _load(history_path):
    store = get_store(history_path)

    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create the history file.")
        raise typer.Exit(1)

    try:
        return store.load_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command()
def stats(
    exercise: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Squat'")],
    history_path: HistoryPathOption = None,
    plot: Annotated[
        bool,
        typer.Option("--plot/--no-plot", help="Draw the estimated 1RM chart"),
    ] = True,
    json_out: JsonOption = False,
) -> None:
    """
    Show estimated 1RM progress and the best working set of an exercise.
    """
    history = _load(history_path)
    settings = get_settings()

    entry = EXERCISE_CATALOG.get(exercise)
    name = entry.name if entry is not None else exercise.strip()

    series = daily_1rm_series(history, name)
    summary = progress_stats(series)
    record = personal_records(
        [s for s in history if s.exercise_name == name],
        threshold=settings.warmup_threshold,
        window=settings.session_window,
    ).get(name)

    if json_out:
        print(json.dumps(
            {
                "exercise_name": name,
                "series": [{"date": d.isoformat(), "estimated_1rm": v} for d, v in series],
                "current": summary.current if summary else None,
                "best": summary.best if summary else None,
                "change": summary.change if summary else None,
                "percent_change": summary.percent_change if summary else None,
                "record": workout_set_to_dict(record) if record else None,
            },
            indent=2,
        ))
        return

    views.print_stats(name, summary, record)
    if plot and series:
        views.console.print(create_1rm_plot(series, name))


@app.command()
def records(
    history_path: HistoryPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Best working set of every exercise (warm-ups excluded).
    """
    history = _load(history_path)
    settings = get_settings()

    prs = personal_records(
        history,
        threshold=settings.warmup_threshold,
        window=settings.session_window,
    )

    if json_out:
        print(json.dumps({name: workout_set_to_dict(s) for name, s in prs.items()}, indent=2))
        return

    views.print_records(prs)


@app.command()
def volume(
    history_path: HistoryPathOption = None,
    weeks: Annotated[
        int,
        typer.Option("--weeks", "-w", help="Number of weeks to show", min=1),
    ] = 4,
    json_out: JsonOption = False,
) -> None:
    """
    Show weekly volume chart.
    """
    history = _load(history_path)
    totals = weekly_volume(history, datetime.now().date(), weeks)

    if json_out:
        result = []
        for i, total in enumerate(totals):
            ago = weeks - 1 - i
            label = "This week" if ago == 0 else ("Last week" if ago == 1 else f"{ago} weeks ago")
            result.append({"label": label, "volume": total})
        print(json.dumps({"weeks": result}, indent=2))
        return

    views.console.print(create_weekly_volume_chart(totals))
