"""
YAML → typed config loader.

Loads defaults from defaults.yaml (bundled with the package) and optionally
merges user overrides from ~/.interval-timer/config.yaml.

Usage:
    from interval_timer.core.config_loader import load_app_config
    cfg = load_app_config()
    cfg.work_seconds  # default work phase length

If the bundled YAML cannot be parsed, the Python defaults from config.py are
used.  If the user override file has parse errors, a warning is logged and
the file is ignored.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from . import config as defaults
from .models import Goals, SessionConfiguration

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring config file {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _as_int(section: dict, key: str, fallback: int) -> int:
    value = section.get(key, fallback)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Config value {key}={value!r} is not an integer; using {fallback}")
        return fallback


def _as_float(section: dict, key: str, fallback: float) -> float:
    value = section.get(key, fallback)
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        result = math.nan
    if not math.isfinite(result):
        logger.warning(f"Config value {key}={value!r} is not a finite number; using {fallback}")
        return fallback
    return result


def _as_goal(section: dict, key: str, fallback: int) -> int:
    value = _as_int(section, key, fallback)
    if value < 0:
        logger.warning(f"Goal {key}={value} is negative; using {fallback}")
        return fallback
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@dataclass
class AppConfig:
    """Effective defaults after merging bundled and user YAML."""

    get_ready_seconds: int = defaults.DEFAULT_GET_READY_SECONDS
    work_seconds: int = defaults.DEFAULT_WORK_SECONDS
    rest_seconds: int = defaults.DEFAULT_REST_SECONDS
    sets: int = defaults.DEFAULT_SETS
    goals: Goals = field(default_factory=Goals)
    trial_length_days: int = defaults.TRIAL_LENGTH_DAYS
    tick_interval_seconds: float = defaults.TICK_INTERVAL_SECONDS
    met: float = defaults.MET

    def default_configuration(self) -> SessionConfiguration:
        return SessionConfiguration(
            get_ready_seconds=self.get_ready_seconds,
            work_seconds=self.work_seconds,
            rest_seconds=self.rest_seconds,
            sets=self.sets,
        )


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled defaults.yaml, or None if not found."""
    candidate = Path(__file__).parent.parent / "defaults.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.interval-timer/config.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / defaults.STORE_DIR_NAME / "config.yaml"
    return p if p.exists() else None


def load_raw_config() -> dict[str, Any]:
    """
    Load and merge configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/interval_timer/defaults.yaml
    2. User override at ~/.interval-timer/config.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            logger.debug(f"Merging user config from {user}")
            config = _deep_merge(config, user_cfg)

    return config


def load_app_config(raw: dict[str, Any] | None = None) -> AppConfig:
    """Build an AppConfig from merged YAML (or from ``raw`` if given)."""
    if raw is None:
        raw = load_raw_config()

    workout = raw.get("workout") or {}
    goals = raw.get("goals") or {}
    trial = raw.get("trial") or {}
    timer = raw.get("timer") or {}
    calories = raw.get("calories") or {}

    return AppConfig(
        get_ready_seconds=_as_int(workout, "get_ready_seconds", defaults.DEFAULT_GET_READY_SECONDS),
        work_seconds=_as_int(workout, "work_seconds", defaults.DEFAULT_WORK_SECONDS),
        rest_seconds=_as_int(workout, "rest_seconds", defaults.DEFAULT_REST_SECONDS),
        sets=_as_int(workout, "sets", defaults.DEFAULT_SETS),
        goals=Goals(
            daily=_as_goal(goals, "daily", defaults.DEFAULT_DAILY_GOAL),
            weekly=_as_goal(goals, "weekly", defaults.DEFAULT_WEEKLY_GOAL),
            monthly=_as_goal(goals, "monthly", defaults.DEFAULT_MONTHLY_GOAL),
        ),
        trial_length_days=_as_int(trial, "length_days", defaults.TRIAL_LENGTH_DAYS),
        tick_interval_seconds=_as_float(timer, "tick_interval_seconds", defaults.TICK_INTERVAL_SECONDS),
        met=_as_float(calories, "met", defaults.MET),
    )
