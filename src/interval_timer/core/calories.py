"""
MET-based calorie estimate for completed workouts.

    kcal = 0.0175 * MET * weight_kg * work_minutes

Only work time counts; rest and get-ready are ignored.
"""

import math

from .config import KCAL_FACTOR, MET
from .models import SessionRecord


def _round_half_away(value: float) -> int:
    """Round to nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def estimate(
    work_seconds: int,
    sets: int,
    weight_kg: float,
    met: float = MET,
) -> int:
    """
    Estimate kilocalories burned during the work phases of a workout.

    Args:
        work_seconds: Length of one work phase
        sets: Number of work phases
        weight_kg: Body weight; zero or negative means unknown
        met: Metabolic equivalent of the activity

    Returns:
        Non-negative kcal estimate; 0 when no body weight is known
    """
    if weight_kg <= 0 or work_seconds <= 0 or sets <= 0:
        return 0

    total_work_minutes = (work_seconds * sets) / 60.0
    kcal = KCAL_FACTOR * met * weight_kg * total_work_minutes
    return max(0, _round_half_away(kcal))


def estimate_for_record(record: SessionRecord, weight_kg: float, met: float = MET) -> int:
    """Calorie estimate for a stored session."""
    return estimate(record.work_seconds, record.sets, weight_kg, met)
