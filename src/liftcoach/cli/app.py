"""Shared Typer app object, shared option types, and store utilities."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.engine.config_loader import ModelSettings, model_settings
from ..io.history_store import HistoryStore, get_default_history_path
from ..io.program_store import ProgramStore, get_default_programs_path

HistoryPathOption = Annotated[
    Optional[Path],
    typer.Option("--history-path", "-p", help="Path to history JSONL file"),
]

ProgramsPathOption = Annotated[
    Optional[Path],
    typer.Option("--programs-path", help="Path to programs YAML file"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="liftcoach",
    help="Workout log with warm-up detection, 1RM tracking and program suggestions.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    Log sets, follow a program and track your progress.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def get_store(history_path: Path | None) -> HistoryStore:
    """Get history store from path or the default location."""
    if history_path is None:
        history_path = get_default_history_path()
    return HistoryStore(history_path)


def get_program_store(programs_path: Path | None) -> ProgramStore:
    """Get program store from path or the default location."""
    if programs_path is None:
        programs_path = get_default_programs_path()
    return ProgramStore(programs_path)


def get_settings() -> ModelSettings:
    """Model tunables from the bundled and user YAML config."""
    return model_settings()
