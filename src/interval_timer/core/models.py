"""
Data models for interval-timer.

Workout configuration, timer state, and the persisted session records.
Configurations validate themselves; records are immutable once created.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .config import (
    DEFAULT_DAILY_GOAL,
    DEFAULT_MONTHLY_GOAL,
    DEFAULT_WEEKLY_GOAL,
    LBS_PER_KG,
    WEIGHT_UNITS,
)


class Phase(str, Enum):
    """The four mutually exclusive timer phases."""

    GET_READY = "get_ready"
    WORK = "work"
    REST = "rest"
    COMPLETE = "complete"

    @property
    def label(self) -> str:
        return {
            Phase.GET_READY: "Get Ready",
            Phase.WORK: "Work",
            Phase.REST: "Rest",
            Phase.COMPLETE: "Complete",
        }[self]


@dataclass(frozen=True)
class SessionConfiguration:
    """
    Durations and set count for one workout.

    Validation is explicit (see engine.validate_configuration) so that an
    invalid configuration can still be described in an error message.
    """

    get_ready_seconds: int
    work_seconds: int
    rest_seconds: int
    sets: int

    @property
    def workout_seconds(self) -> int:
        """Work plus interleaved rest, excluding the get-ready countdown."""
        return self.work_seconds * self.sets + self.rest_seconds * max(0, self.sets - 1)

    @property
    def total_seconds(self) -> int:
        """Every countdown second from get-ready to completion."""
        return self.get_ready_seconds + self.workout_seconds

    def describe(self) -> str:
        return f"{self.work_seconds}s work / {self.rest_seconds}s rest × {self.sets}"


@dataclass(frozen=True)
class TimerState:
    """Snapshot of the engine's mutable state."""

    phase: Phase
    remaining_seconds: int
    current_set: int
    running: bool


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionRecord:
    """
    A completed workout, or a saved configuration preset.

    The same shape serves both the session history and the saved
    configurations list; for presets the date is the save time.
    """

    work_seconds: int
    rest_seconds: int
    sets: int
    date: datetime = field(default_factory=_now)
    name: str = ""
    intention: str | None = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        """Validate record data."""
        if self.work_seconds < 0:
            raise ValueError("work_seconds must be non-negative")
        if self.rest_seconds < 0:
            raise ValueError("rest_seconds must be non-negative")
        if self.sets < 1:
            raise ValueError("sets must be at least 1")
        if self.date.tzinfo is None:
            raise ValueError("date must be timezone-aware")

    @property
    def workout_seconds(self) -> int:
        return self.work_seconds * self.sets + self.rest_seconds * max(0, self.sets - 1)

    @property
    def display_name(self) -> str:
        return self.name or "Workout"

    def to_configuration(self, get_ready_seconds: int) -> SessionConfiguration:
        """Build a runnable configuration from this record's durations."""
        return SessionConfiguration(
            get_ready_seconds=get_ready_seconds,
            work_seconds=self.work_seconds,
            rest_seconds=self.rest_seconds,
            sets=self.sets,
        )

    def renamed(self, name: str) -> "SessionRecord":
        return SessionRecord(
            work_seconds=self.work_seconds,
            rest_seconds=self.rest_seconds,
            sets=self.sets,
            date=self.date,
            name=name,
            intention=self.intention,
            id=self.id,
        )


@dataclass(frozen=True)
class IntentRecord:
    """One state-of-mind entry captured before a workout."""

    state: str
    date: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)


@dataclass
class Goals:
    """Target session counts per day, week and month."""

    daily: int = DEFAULT_DAILY_GOAL
    weekly: int = DEFAULT_WEEKLY_GOAL
    monthly: int = DEFAULT_MONTHLY_GOAL

    def __post_init__(self) -> None:
        for name in ("daily", "weekly", "monthly"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} goal must be non-negative")


@dataclass
class UserProfile:
    """
    Body data collected during onboarding.

    ``weight`` is stored in ``weight_unit``; 0 means no body-weight data.
    """

    sex: str = ""
    height_cm: int = 0
    weight: int = 0
    weight_unit: str = "kg"

    def __post_init__(self) -> None:
        """Validate profile data."""
        if self.weight_unit not in WEIGHT_UNITS:
            raise ValueError(
                f"Invalid weight_unit: {self.weight_unit!r}. Must be 'kg' or 'lbs'."
            )
        if self.height_cm < 0:
            raise ValueError("height_cm must be non-negative")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")

    @property
    def weight_kg(self) -> float:
        if self.weight_unit == "lbs":
            return self.weight / LBS_PER_KG
        return float(self.weight)

    def with_unit(self, unit: str) -> "UserProfile":
        """Return a copy with the weight converted to ``unit`` (rounded)."""
        if unit not in WEIGHT_UNITS:
            raise ValueError(f"Invalid weight_unit: {unit!r}. Must be 'kg' or 'lbs'.")
        if unit == self.weight_unit:
            return UserProfile(self.sex, self.height_cm, self.weight, unit)
        if unit == "lbs":
            converted = self.weight * LBS_PER_KG
        else:
            converted = self.weight / LBS_PER_KG
        return UserProfile(self.sex, self.height_cm, int(round(converted)), unit)
