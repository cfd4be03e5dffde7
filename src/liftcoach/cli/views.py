"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of sets, programs and suggestions.
"""

from datetime import date, datetime
from typing import Sequence

from rich.console import Console
from rich.table import Table

from ..core.exercises.base import Exercise
from ..core.metrics import total_reps, total_volume
from ..core.models import (
    ExerciseGroup,
    ExerciseSuggestion,
    Program,
    ProgressStats,
    WorkoutSet,
)

console = Console()


def format_weight(weight: float) -> str:
    """82.5 → "82.5kg", 80.0 → "80kg", 0 → "BW"."""
    if weight == 0:
        return "BW"
    return f"{weight:g}kg"


def format_set(s: WorkoutSet) -> str:
    return f"{format_weight(s.weight)} × {s.reps}"


def format_day(day: date, today: date | None = None) -> str:
    """"Today", "Yesterday", or e.g. "Mon, Oct 13"."""
    if today is None:
        today = datetime.now().date()
    delta = (today - day).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Yesterday"
    return day.strftime("%a, %b %d")


def print_history(
    by_date: dict[date, list[WorkoutSet]],
    index_of: dict[str, int],
) -> None:
    """
    Print logged sets grouped by day (newest first) and by exercise.

    Args:
        by_date: Sets per day, as returned by group_by_date()
        index_of: Set id → 1-based record number (for delete-set)
    """
    if not by_date:
        console.print("[yellow]No sets recorded yet.[/yellow]")
        return

    for day, sets in by_date.items():
        table = Table(title=format_day(day), title_justify="left", show_header=True, header_style="dim")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Time", style="cyan")
        table.add_column("Exercise", style="bold")
        table.add_column("Set")
        table.add_column("Est. 1RM", justify="right", style="magenta")

        for s in sets:
            table.add_row(
                str(index_of.get(s.id, "")),
                s.local_timestamp.strftime("%H:%M"),
                s.exercise_name,
                format_set(s),
                f"~{s.estimated_1rm:g}kg" if s.estimated_1rm else "-",
            )

        console.print(table)
        console.print(
            f"[dim]{len(sets)} sets · {total_reps(sets)} reps · "
            f"{total_volume(sets):g} kg volume[/dim]"
        )
        console.print()


def print_today(
    groups: Sequence[ExerciseGroup],
    warmups: set[str],
    comparisons: dict[str, tuple[WorkoutSet | None, WorkoutSet | None]],
) -> None:
    """
    Print today's session recap.

    Args:
        groups: Today's sets per exercise
        warmups: Ids of sets classified as warm-up
        comparisons: Exercise → (today's best, all-time best)
    """
    if not groups:
        console.print("[yellow]Nothing logged today.[/yellow]")
        return

    for group in groups:
        working = [s for s in group.sets if s.id not in warmups]
        console.print(
            f"[bold]{group.exercise_name}[/bold]  "
            f"[dim]{len(working)} working / {group.total_sets} sets · "
            f"{group.total_reps} reps total[/dim]"
        )
        for i, s in enumerate(group.sets, 1):
            tag = "[yellow]warm-up[/yellow]" if s.id in warmups else "[green]working[/green]"
            one_rm = f"  [dim]1RM ~{s.estimated_1rm:g}kg[/dim]" if s.estimated_1rm else ""
            console.print(f"  {i}. {format_set(s)}  {tag}{one_rm}")

        today_best, all_time_best = comparisons.get(group.exercise_name, (None, None))
        if today_best is not None:
            line = f"  Best today: {format_set(today_best)}"
            if all_time_best is not None and all_time_best.id != today_best.id:
                line += f"  ·  All-time: {format_set(all_time_best)}"
            elif all_time_best is not None:
                line += "  [green]· new all-time best![/green]"
            console.print(line)
        console.print()


def print_suggestions(suggestions: Sequence[ExerciseSuggestion], show_all: bool = False) -> None:
    """Print the next exercise (and optionally the whole queue)."""
    first = suggestions[0]

    if not first.has_program:
        console.print("[yellow]No program available. Add one to your programs file.[/yellow]")
        return

    if first.is_program_complete:
        console.print(f"[green]{first.program_name}: session complete for today![/green]")
        if first.completed_exercises:
            console.print(f"[dim]Done: {', '.join(first.completed_exercises)}[/dim]")
        return

    console.print(f"[bold cyan]{first.program_name}[/bold cyan]")
    _print_suggestion_card(first)

    if show_all and len(suggestions) > 1:
        table = Table(title="Up next", title_justify="left", show_header=True, header_style="dim")
        table.add_column("Exercise", style="bold")
        table.add_column("Block")
        table.add_column("Series", justify="right")
        table.add_column("Reps", justify="right")
        table.add_column("Charge", justify="right", style="magenta")
        for s in suggestions[1:]:
            table.add_row(
                s.next_exercise or "",
                s.block_name or "",
                f"{s.completed_series}/{s.total_series}",
                str(s.suggested_reps) if s.suggested_reps is not None else "-",
                format_weight(s.suggested_charge or 0),
            )
        console.print(table)
    elif len(suggestions) > 1:
        console.print(f"[dim]{len(suggestions) - 1} more exercise(s) pending (use --all).[/dim]")


def _print_suggestion_card(s: ExerciseSuggestion) -> None:
    status = "[yellow]in progress[/yellow]" if s.is_completing_current_exercise else "next"
    console.print(f"  {status}: [bold]{s.next_exercise}[/bold]  [dim]({s.block_name})[/dim]")
    console.print(f"  Series: {s.completed_series}/{s.total_series}")
    if s.suggested_reps is not None:
        console.print(f"  Reps: {s.suggested_reps}")
    if s.suggested_charge:
        console.print(f"  Reference load (best 1RM): {format_weight(s.suggested_charge)}")
    details = s.exercise_details
    if details is not None:
        extras = [
            f"{label}: {value}"
            for label, value in (("load", details.load), ("rest", details.rest))
            if value
        ]
        if extras:
            console.print(f"  [dim]{' · '.join(extras)}[/dim]")
        if details.notes:
            console.print(f"  [italic]{details.notes}[/italic]")
    if s.remaining_exercises:
        console.print(f"  [dim]Left in block: {', '.join(s.remaining_exercises)}[/dim]")


def print_programs(programs: Sequence[Program], today_name: str, today_labels: dict[str, str]) -> None:
    """
    Print a program overview.

    Args:
        programs: Programs to list
        today_name: Canonical name of today
        today_labels: Program id → label of today's session (if any)
    """
    if not programs:
        console.print("[yellow]No programs found.[/yellow]")
        return

    table = Table(title=f"Programs ({today_name})", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Sessions", justify="right")
    table.add_column("Exercises", justify="right")
    table.add_column("Today")
    for p in programs:
        table.add_row(
            p.id,
            p.title,
            str(len(p.sessions)),
            str(p.exercise_count),
            today_labels.get(p.id, "[dim]-[/dim]"),
        )
    console.print(table)


def print_program_detail(program: Program) -> None:
    console.print(f"[bold cyan]{program.title}[/bold cyan] [dim]({program.id})[/dim]")
    for session in program.sessions:
        console.print(f"\n[bold]{session.label}[/bold] [dim]— {session.day}[/dim]")
        for block in session.blocks:
            console.print(f"  [magenta]{block.name}[/magenta]")
            for ex in block.exercises:
                extra = " · ".join(v for v in (ex.load, ex.rest) if v)
                extra = f"  [dim]{extra}[/dim]" if extra else ""
                console.print(f"    {ex.exercise_name}: {ex.sets} × {ex.reps or '?'}{extra}")


def print_exercises(exercises: Sequence[Exercise]) -> None:
    table = Table(title="Exercise catalog", show_header=True, header_style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Tags")
    table.add_column("1RM", justify="center")
    table.add_column("BW", justify="center")
    table.add_column("Type")
    for ex in exercises:
        name = f"★ {ex.name}" if ex.favorite else ex.name
        table.add_row(
            name,
            ", ".join(ex.tags),
            "✓" if ex.is_powerlifting else "",
            "✓" if ex.bodyweight else "",
            ex.rep_type,
        )
    console.print(table)


def print_warmup(
    exercise: Exercise,
    target: float | None,
    ladder: Sequence[tuple[float | None, int, str]],
) -> None:
    if not ladder:
        console.print(f"[yellow]No warm-up protocol for {exercise.name}.[/yellow]")
        return

    header = f"[bold]{exercise.name}[/bold] warm-up"
    if target:
        header += f"  [dim](target {format_weight(target)})[/dim]"
    console.print(header)
    for i, (weight, reps, label) in enumerate(ladder, 1):
        shown = format_weight(weight) if weight is not None else label
        console.print(f"  {i}. {shown} × {reps}")


def print_stats(
    exercise_name: str,
    stats: ProgressStats | None,
    record: WorkoutSet | None,
) -> None:
    if stats is None:
        console.print(f"[yellow]No estimated 1RM recorded for {exercise_name} yet.[/yellow]")
        return
    color = "green" if stats.change >= 0 else "red"
    console.print(f"[bold]{exercise_name}[/bold]")
    console.print(f"  Current 1RM: {stats.current:g}kg")
    console.print(f"  Best 1RM:    {stats.best:g}kg")
    console.print(
        f"  Change:      [{color}]{stats.change:+g}kg ({stats.percent_change:+.1f}%)[/{color}]"
    )
    if record is not None:
        console.print(f"  Best working set: {format_set(record)}")
    console.print()


def print_records(records: dict[str, WorkoutSet]) -> None:
    if not records:
        console.print("[yellow]No sets recorded yet.[/yellow]")
        return
    table = Table(title="Personal records (working sets)", show_header=True, header_style="bold")
    table.add_column("Exercise", style="bold")
    table.add_column("Set")
    table.add_column("Est. 1RM", justify="right", style="magenta")
    table.add_column("Date", style="cyan")
    for name, s in records.items():
        table.add_row(
            name,
            format_set(s),
            f"{s.estimated_1rm:g}kg" if s.estimated_1rm else "-",
            s.local_timestamp.strftime("%Y-%m-%d"),
        )
    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
