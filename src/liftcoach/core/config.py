"""
Configuration constants for the set-classification and suggestion model.

All adjustable parameters are centralized here for easy tuning.
User overrides are read from YAML by engine/config_loader.py and passed
into the core functions as plain arguments.
"""

from datetime import timedelta
from typing import Final

# =============================================================================
# WARM-UP DETECTION
# =============================================================================

# A load-bearing set scoring below this fraction of the reference best
# is a warm-up. The reference is recomputed from the session when one is given.
WARMUP_THRESHOLD: Final[float] = 0.90

# Earlier rule: 70 % of the all-time best, no session-relative reference.
LEGACY_WARMUP_THRESHOLD: Final[float] = 0.70

# =============================================================================
# SESSION GROUPING
# =============================================================================

SESSION_WINDOW_HOURS: Final[float] = 2.0  # Max gap to an existing session's set
SESSION_WINDOW: Final[timedelta] = timedelta(hours=SESSION_WINDOW_HOURS)

# =============================================================================
# ONE-REP-MAX ESTIMATION
# =============================================================================

BRZYCKI_NUMERATOR: Final[float] = 36.0
BRZYCKI_DENOMINATOR: Final[float] = 37.0
BRZYCKI_MAX_REPS: Final[int] = 12  # Above this, switch to linear extrapolation
EPLEY_DIVISOR: Final[float] = 30.0

# =============================================================================
# STORAGE
# =============================================================================

DATA_DIR_NAME: Final[str] = ".liftcoach"
DATA_DIR_ENV: Final[str] = "LIFTCOACH_HOME"
HISTORY_FILE_NAME: Final[str] = "history.jsonl"
PROGRAMS_FILE_NAME: Final[str] = "programs.yaml"
USER_CONFIG_FILE_NAME: Final[str] = "config.yaml"
USER_CATALOG_FILE_NAME: Final[str] = "exercises.yaml"

# =============================================================================
# DISPLAY
# =============================================================================

DEFAULT_PLOT_WIDTH: Final[int] = 60
DEFAULT_PLOT_HEIGHT: Final[int] = 16
