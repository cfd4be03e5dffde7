"""
YAML → typed config loader.

Loads model constants from liftcoach.yaml (bundled with the package) and
optionally merges user overrides from ~/.liftcoach/config.yaml.

Usage:
    from liftcoach.core.engine.config_loader import model_settings
    settings = model_settings()
    settings.warmup_threshold   # 0.90 unless overridden

If the bundled YAML cannot be parsed, lookups fall back to the Python
defaults from config.py (no crash). If the user override file has parse
errors, a warning is issued and the file is ignored.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    DATA_DIR_ENV,
    DATA_DIR_NAME,
    SESSION_WINDOW_HOURS,
    USER_CONFIG_FILE_NAME,
    WARMUP_THRESHOLD,
)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; return {} (with a warning) on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"liftcoach: ignoring {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_data_dir() -> Path:
    """Return the user data directory ($LIFTCOACH_HOME or ~/.liftcoach)."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / DATA_DIR_NAME


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled liftcoach.yaml, or None if not found."""
    # config_loader.py lives at src/liftcoach/core/engine/config_loader.py
    candidate = Path(__file__).parent.parent.parent / "liftcoach.yaml"
    return candidate if candidate.is_file() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.liftcoach/config.yaml if it exists, else None."""
    p = get_data_dir() / USER_CONFIG_FILE_NAME
    return p if p.is_file() else None


def load_model_config() -> dict[str, Any]:
    """
    Load and merge model configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/liftcoach/liftcoach.yaml
    2. User override at ~/.liftcoach/config.yaml

    Returns:
        Merged dict of config sections. Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = deep_merge(config, load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        user_cfg = load_yaml_file(user)
        if user_cfg:
            config = deep_merge(config, user_cfg)

    return config


@dataclass(frozen=True)
class ModelSettings:
    """Resolved tunables handed to the core functions by the CLI."""

    warmup_threshold: float = WARMUP_THRESHOLD
    session_window_hours: float = SESSION_WINDOW_HOURS

    @property
    def session_window(self) -> timedelta:
        return timedelta(hours=self.session_window_hours)


def model_settings(config: dict[str, Any] | None = None) -> ModelSettings:
    """
    Resolve a merged config dict into ModelSettings.

    Out-of-range values are ignored with a warning and the config.py
    default is kept.
    """
    if config is None:
        config = load_model_config()

    warmup = config.get("warmup", {}) or {}
    sessions = config.get("sessions", {}) or {}

    threshold = _float_in_range(
        warmup.get("threshold"), WARMUP_THRESHOLD, low=0.0, high=1.0, name="warmup.threshold"
    )
    window = _float_in_range(
        sessions.get("window_hours"), SESSION_WINDOW_HOURS, low=0.0, high=24.0,
        name="sessions.window_hours",
    )
    return ModelSettings(warmup_threshold=threshold, session_window_hours=window)


def _float_in_range(value: Any, default: float, *, low: float, high: float, name: str) -> float:
    if value is None:
        return default
    try:
        f = float(value)
    except (TypeError, ValueError):
        warnings.warn(f"liftcoach: {name}={value!r} is not a number; using {default}", stacklevel=3)
        return default
    if not (low < f <= high):
        warnings.warn(f"liftcoach: {name}={f} outside ({low}, {high}]; using {default}", stacklevel=3)
        return default
    return f
