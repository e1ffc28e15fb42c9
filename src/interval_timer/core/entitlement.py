"""
Trial/subscription access gate.

Access is granted during the free trial that starts at first launch, and
afterwards only with an active subscription.  The timer engine itself never
checks this; the host decides before starting a workout.
"""

from datetime import datetime, timedelta

from .config import TRIAL_LENGTH_DAYS


def trial_ends_at(install_date: datetime, trial_days: int = TRIAL_LENGTH_DAYS) -> datetime:
    return install_date + timedelta(days=trial_days)


def is_within_trial(
    install_date: datetime | None,
    now: datetime,
    trial_days: int = TRIAL_LENGTH_DAYS,
) -> bool:
    """True while ``now`` is before the trial end; False with no install date."""
    if install_date is None:
        return False
    return now < trial_ends_at(install_date, trial_days)


def may_access_timer(
    install_date: datetime | None,
    is_subscribed: bool,
    now: datetime,
    trial_days: int = TRIAL_LENGTH_DAYS,
) -> bool:
    return is_within_trial(install_date, now, trial_days) or is_subscribed


def trial_days_left(
    install_date: datetime | None,
    now: datetime,
    trial_days: int = TRIAL_LENGTH_DAYS,
) -> int:
    """Whole days remaining in the trial (0 once expired or unknown)."""
    if not is_within_trial(install_date, now, trial_days):
        return 0
    remaining = trial_ends_at(install_date, trial_days) - now  # type: ignore[arg-type]
    return remaining.days + (1 if remaining.seconds or remaining.microseconds else 0)
