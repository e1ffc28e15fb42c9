"""
Read-only aggregates over session history.

All functions take the history (and the user's weight where calories are
involved) as plain arguments and never write anything back.  Session dates
are stored in UTC and bucketed in the caller's timezone (local by default).
"""

import calendar
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Literal

from .calories import estimate_for_record
from .config import MET
from .models import Goals, IntentRecord, SessionRecord

Timeframe = Literal["week", "month", "quarter"]
TIMEFRAMES: tuple[str, ...] = ("week", "month", "quarter")


@dataclass(frozen=True)
class DataPoint:
    """One bar of a calorie chart."""

    label: str
    calories: int
    start: date
    end: date  # exclusive


@dataclass(frozen=True)
class GoalProgress:
    today: int
    this_week: int
    this_month: int
    goals: Goals

    @property
    def daily_met(self) -> bool:
        return self.today >= self.goals.daily

    @property
    def weekly_met(self) -> bool:
        return self.this_week >= self.goals.weekly

    @property
    def monthly_met(self) -> bool:
        return self.this_month >= self.goals.monthly


def local_date(record: SessionRecord, tz: tzinfo | None = None) -> date:
    """Calendar date of a session in ``tz`` (system local time if None)."""
    return record.date.astimezone(tz).date()


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def start_of_week(d: date) -> date:
    """Monday of the week containing ``d``."""
    return d - timedelta(days=d.weekday())


def total_sessions(history: list[SessionRecord]) -> int:
    return len(history)


def days_completed(history: list[SessionRecord], tz: tzinfo | None = None) -> int:
    """Number of distinct days with at least one session."""
    return len({local_date(r, tz) for r in history})


def total_workout_seconds(history: list[SessionRecord]) -> int:
    return sum(r.workout_seconds for r in history)


def _calories_between(
    history: list[SessionRecord],
    start: date,
    end: date,
    weight_kg: float,
    tz: tzinfo | None,
    met: float,
) -> int:
    return sum(
        estimate_for_record(r, weight_kg, met)
        for r in history
        if start <= local_date(r, tz) < end
    )


def calories_last_week_by_day(
    history: list[SessionRecord],
    weight_kg: float,
    today: date,
    tz: tzinfo | None = None,
    met: float = MET,
) -> list[DataPoint]:
    """Seven daily points ending today, oldest first."""
    points = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        end = day + timedelta(days=1)
        points.append(
            DataPoint(
                label=day.strftime("%a %m/%d"),
                calories=_calories_between(history, day, end, weight_kg, tz, met),
                start=day,
                end=end,
            )
        )
    return points


def calories_last_month_by_week(
    history: list[SessionRecord],
    weight_kg: float,
    today: date,
    tz: tzinfo | None = None,
    met: float = MET,
) -> list[DataPoint]:
    """Weekly points from the week containing one month ago through today."""
    week_start = start_of_week(add_months(today, -1))
    points = []
    while week_start <= today:
        next_week = week_start + timedelta(days=7)
        points.append(
            DataPoint(
                label=week_start.strftime("%b %d"),
                calories=_calories_between(history, week_start, next_week, weight_kg, tz, met),
                start=week_start,
                end=next_week,
            )
        )
        week_start = next_week
    return points


def calories_last_quarter_by_month(
    history: list[SessionRecord],
    weight_kg: float,
    today: date,
    tz: tzinfo | None = None,
    met: float = MET,
) -> list[DataPoint]:
    """Calendar-month points from three months ago through the current month."""
    cursor = add_months(today, -3)
    points = []
    while cursor <= today:
        month_start = cursor.replace(day=1)
        month_end = add_months(month_start, 1)
        points.append(
            DataPoint(
                label=month_start.strftime("%B %Y"),
                calories=_calories_between(history, month_start, month_end, weight_kg, tz, met),
                start=month_start,
                end=month_end,
            )
        )
        cursor = add_months(cursor, 1)
    return points


def calorie_points(
    timeframe: Timeframe,
    history: list[SessionRecord],
    weight_kg: float,
    today: date,
    tz: tzinfo | None = None,
    met: float = MET,
) -> list[DataPoint]:
    """Dispatch to the per-timeframe aggregation."""
    if timeframe == "week":
        return calories_last_week_by_day(history, weight_kg, today, tz, met)
    if timeframe == "month":
        return calories_last_month_by_week(history, weight_kg, today, tz, met)
    if timeframe == "quarter":
        return calories_last_quarter_by_month(history, weight_kg, today, tz, met)
    raise ValueError(f"Unknown timeframe: {timeframe!r}. Must be one of {TIMEFRAMES}")


def intention_distribution(intents: list[IntentRecord]) -> list[tuple[str, int]]:
    """(state, count) pairs, most frequent first; ties by name."""
    counts = Counter(i.state for i in intents)
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def sessions_with_intention(history: list[SessionRecord], state: str) -> list[SessionRecord]:
    return [r for r in history if r.intention == state]


def goal_progress(
    history: list[SessionRecord],
    goals: Goals,
    today: date,
    tz: tzinfo | None = None,
) -> GoalProgress:
    """Count sessions today, this (Monday-based) week and this month."""
    week_start = start_of_week(today)
    month_start = today.replace(day=1)
    dates = [local_date(r, tz) for r in history]
    return GoalProgress(
        today=sum(1 for d in dates if d == today),
        this_week=sum(1 for d in dates if week_start <= d <= today),
        this_month=sum(1 for d in dates if month_start <= d <= today),
        goals=goals,
    )


def today_in(tz: tzinfo | None = None) -> date:
    return datetime.now(tz).date()
