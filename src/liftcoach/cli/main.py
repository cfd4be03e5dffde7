"""
CLI entry point using Typer.

Provides commands for logging and planning:
- init: Create the history file and starter programs
- log / today / history / delete-set: Record and review sets
- suggest / programs: Follow a training program
- stats / records / volume: Track progress
- exercises / warmup: Browse the exercise catalog
"""

import shutil
from pathlib import Path
from typing import Annotated

import typer

from . import views
from .app import HistoryPathOption, ProgramsPathOption, app, get_program_store, get_store
from .commands import analysis, planning, sessions  # noqa: F401  (registers commands)


def _bundled_programs_path() -> Path:
    return Path(__file__).parent.parent / "programs.yaml"


@app.command()
def init(
    history_path: HistoryPathOption = None,
    programs_path: ProgramsPathOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing programs file with the starter one"),
    ] = False,
) -> None:
    """
    Create the history file and a starter programs file.
    """
    store = get_store(history_path)
    program_store = get_program_store(programs_path)

    if store.exists():
        views.print_info(f"History file already exists: {store.history_path}")
    else:
        store.init()
        views.print_success(f"Created history file: {store.history_path}")

    if program_store.exists() and not force:
        views.print_info(f"Programs file already exists: {program_store.programs_path}")
        return

    program_store.programs_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(_bundled_programs_path(), program_store.programs_path)
    views.print_success(f"Wrote starter programs: {program_store.programs_path}")
    views.print_info("Edit it to match your training, then run 'suggest'.")


if __name__ == "__main__":
    app()
