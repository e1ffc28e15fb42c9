"""
Scalar settings: default workout durations, goals, profile, entitlement.

Settings are read into explicit objects (SessionConfiguration, Goals,
UserProfile) which are then passed to the engine and analytics; nothing
downstream reads the key-value store directly.
"""

from datetime import datetime, timezone

from loguru import logger

from ..core.config import (
    DEFAULT_HEIGHT_CM,
    DEFAULT_WEIGHT,
    KEY_DAILY_GOAL,
    KEY_GOAL_NOTES,
    KEY_GET_READY,
    KEY_HAS_ONBOARDED,
    KEY_INSTALL_DATE,
    KEY_IS_SUBSCRIBED,
    KEY_LAST_WORKOUT_NAME,
    KEY_MONTHLY_GOAL,
    KEY_REST,
    KEY_SETS,
    KEY_SOUND_TYPE,
    KEY_USER_HEIGHT,
    KEY_USER_SEX,
    KEY_USER_WEIGHT,
    KEY_WEEKLY_GOAL,
    KEY_WEIGHT_UNIT,
    KEY_WORK,
)
from ..core.config_loader import AppConfig
from ..core.models import Goals, SessionConfiguration, UserProfile
from .kv_store import KeyValueStore


class SettingsStore:
    """Typed access to the scalar keys of the key-value store."""

    def __init__(self, kv: KeyValueStore, app_config: AppConfig | None = None):
        self.kv = kv
        self.app_config = app_config or AppConfig()

    # -- workout defaults ---------------------------------------------------

    def load_configuration(self) -> SessionConfiguration:
        """The user's default workout, falling back to configured defaults."""
        cfg = self.app_config
        return SessionConfiguration(
            get_ready_seconds=self.kv.get_int(KEY_GET_READY, cfg.get_ready_seconds),
            work_seconds=self.kv.get_int(KEY_WORK, cfg.work_seconds),
            rest_seconds=self.kv.get_int(KEY_REST, cfg.rest_seconds),
            sets=self.kv.get_int(KEY_SETS, cfg.sets),
        )

    def save_configuration(self, config: SessionConfiguration) -> None:
        self.kv.set(KEY_GET_READY, config.get_ready_seconds)
        self.kv.set(KEY_WORK, config.work_seconds)
        self.kv.set(KEY_REST, config.rest_seconds)
        self.kv.set(KEY_SETS, config.sets)

    def load_last_workout_name(self) -> str:
        return self.kv.get_str(KEY_LAST_WORKOUT_NAME, "")

    def save_last_workout_name(self, name: str) -> None:
        self.kv.set(KEY_LAST_WORKOUT_NAME, name)

    # -- goals --------------------------------------------------------------

    def _load_goal(self, key: str, fallback: int) -> int:
        value = self.kv.get_int(key, fallback)
        if value < 0:
            logger.warning(f"Ignoring negative goal {key!r}: {value}")
            return fallback
        return value

    def load_goals(self) -> Goals:
        fallback = self.app_config.goals
        return Goals(
            daily=self._load_goal(KEY_DAILY_GOAL, fallback.daily),
            weekly=self._load_goal(KEY_WEEKLY_GOAL, fallback.weekly),
            monthly=self._load_goal(KEY_MONTHLY_GOAL, fallback.monthly),
        )

    def save_goals(self, goals: Goals) -> None:
        self.kv.set(KEY_DAILY_GOAL, goals.daily)
        self.kv.set(KEY_WEEKLY_GOAL, goals.weekly)
        self.kv.set(KEY_MONTHLY_GOAL, goals.monthly)

    def load_goal_notes(self) -> str:
        return self.kv.get_str(KEY_GOAL_NOTES, "")

    def save_goal_notes(self, notes: str) -> None:
        self.kv.set(KEY_GOAL_NOTES, notes)

    # -- profile ------------------------------------------------------------

    def has_onboarded(self) -> bool:
        return self.kv.get_bool(KEY_HAS_ONBOARDED)

    def load_profile(self) -> UserProfile:
        """
        Load the body profile.

        Before onboarding the weight reads as 0 (unknown) so that calorie
        estimates come out as 0 rather than guessing.
        """
        onboarded = self.has_onboarded()
        unit = self.kv.get_str(KEY_WEIGHT_UNIT, "kg")
        if unit not in ("kg", "lbs"):
            unit = "kg"
        return UserProfile(
            sex=self.kv.get_str(KEY_USER_SEX, ""),
            height_cm=max(0, self.kv.get_int(KEY_USER_HEIGHT, DEFAULT_HEIGHT_CM if onboarded else 0)),
            weight=max(0, self.kv.get_int(KEY_USER_WEIGHT, DEFAULT_WEIGHT if onboarded else 0)),
            weight_unit=unit,
        )

    def save_profile(self, profile: UserProfile) -> None:
        self.kv.set(KEY_USER_SEX, profile.sex)
        self.kv.set(KEY_USER_HEIGHT, profile.height_cm)
        self.kv.set(KEY_USER_WEIGHT, profile.weight)
        self.kv.set(KEY_WEIGHT_UNIT, profile.weight_unit)
        self.kv.set(KEY_HAS_ONBOARDED, True)

    # -- sound --------------------------------------------------------------

    def load_sound_type(self) -> str:
        return self.kv.get_str(KEY_SOUND_TYPE, "Beep")

    def save_sound_type(self, name: str) -> None:
        self.kv.set(KEY_SOUND_TYPE, name)

    # -- entitlement --------------------------------------------------------

    def ensure_install_date(self, now: datetime | None = None) -> datetime:
        """Return the first-launch timestamp, recording it on first call."""
        current = self.load_install_date()
        if current is not None:
            return current
        now = now or datetime.now(timezone.utc)
        self.kv.set(KEY_INSTALL_DATE, now.timestamp())
        return now

    def load_install_date(self) -> datetime | None:
        value = self.kv.get(KEY_INSTALL_DATE)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return datetime.fromtimestamp(value, tz=timezone.utc)

    def is_subscribed(self) -> bool:
        return self.kv.get_bool(KEY_IS_SUBSCRIBED)

    def set_subscribed(self, active: bool) -> None:
        self.kv.set(KEY_IS_SUBSCRIBED, active)
