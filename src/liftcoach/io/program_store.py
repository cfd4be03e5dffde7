"""
YAML-based program storage.

The programs file holds a top-level ``programs:`` list; each entry is a
program document (id, title, sessions → blocks → exercises). Malformed
programs are skipped with a warning so that they never reach the
suggestion engine.
"""

import logging
from pathlib import Path

import yaml

from ..core.config import PROGRAMS_FILE_NAME
from ..core.engine.config_loader import get_data_dir
from ..core.models import Program
from .serializers import ValidationError, dict_to_program, program_to_dict

logger = logging.getLogger(__name__)


class ProgramStore:
    """Reads and writes training programs stored as YAML."""

    def __init__(self, programs_path: str | Path):
        self.programs_path = Path(programs_path)

    def exists(self) -> bool:
        return self.programs_path.exists()

    def load_programs(self) -> list[Program]:
        """
        Load every valid program, in file order.

        Returns:
            List of Program (empty if the file has no programs)

        Raises:
            FileNotFoundError: If the programs file doesn't exist
            ValidationError: If the file is not valid YAML or has no
                ``programs`` list
        """
        if not self.programs_path.exists():
            raise FileNotFoundError(
                f"Programs file not found: {self.programs_path}. Run 'init' first."
            )

        try:
            with open(self.programs_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValidationError(f"Invalid YAML in {self.programs_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError(f"{self.programs_path}: expected a mapping with 'programs'")
        raw_programs = data.get("programs") or []
        if not isinstance(raw_programs, list):
            raise ValidationError(f"{self.programs_path}: 'programs' must be a list")

        programs: list[Program] = []
        seen_ids: set[str] = set()
        for i, raw in enumerate(raw_programs):
            try:
                program = dict_to_program(raw, f"programs[{i}]")
            except (ValidationError, ValueError) as e:
                logger.warning("Skipping program #%d in %s: %s", i, self.programs_path, e)
                continue
            if program.id in seen_ids:
                logger.warning("Skipping program #%d: duplicate id %r", i, program.id)
                continue
            seen_ids.add(program.id)
            programs.append(program)

        logger.debug("Loaded %d programs from %s", len(programs), self.programs_path)
        return programs

    def save_programs(self, programs: list[Program]) -> None:
        """Write programs to the YAML file, creating parent directories."""
        self.programs_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.programs_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                {"programs": [program_to_dict(p) for p in programs]},
                f,
                sort_keys=False,
                allow_unicode=True,
            )

    def get_program(self, program_id: str) -> Program | None:
        for program in self.load_programs():
            if program.id == program_id:
                return program
        return None


def get_default_programs_path() -> Path:
    """Return the default programs file path (~/.liftcoach/programs.yaml)."""
    return get_data_dir() / PROGRAMS_FILE_NAME
