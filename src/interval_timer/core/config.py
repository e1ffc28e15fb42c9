"""
Configuration constants for the interval timer.

All adjustable parameters are centralized here; values in the bundled
defaults.yaml (and the user's ~/.interval-timer/config.yaml) override the
workout defaults at runtime via config_loader.
"""

from typing import Final

# =============================================================================
# CALORIE ESTIMATE
# =============================================================================

MET: Final[float] = 8.0  # Metabolic equivalent for vigorous interval training
KCAL_FACTOR: Final[float] = 0.0175  # kcal per kg per minute per MET
LBS_PER_KG: Final[float] = 2.20462

# =============================================================================
# WORKOUT DEFAULTS
# =============================================================================

DEFAULT_GET_READY_SECONDS: Final[int] = 3
DEFAULT_WORK_SECONDS: Final[int] = 20
DEFAULT_REST_SECONDS: Final[int] = 10
DEFAULT_SETS: Final[int] = 8

TICK_INTERVAL_SECONDS: Final[float] = 1.0

# =============================================================================
# GOALS (sessions per period)
# =============================================================================

DEFAULT_DAILY_GOAL: Final[int] = 1
DEFAULT_WEEKLY_GOAL: Final[int] = 7
DEFAULT_MONTHLY_GOAL: Final[int] = 30

# =============================================================================
# PROFILE
# =============================================================================

DEFAULT_HEIGHT_CM: Final[int] = 170
DEFAULT_WEIGHT: Final[int] = 70
WEIGHT_UNITS: Final[tuple[str, ...]] = ("kg", "lbs")

# =============================================================================
# ENTITLEMENT
# =============================================================================

TRIAL_LENGTH_DAYS: Final[int] = 7

# =============================================================================
# STORAGE KEYS
# =============================================================================

STORE_DIR_NAME: Final[str] = ".interval-timer"
STORE_FILE_NAME: Final[str] = "store.json"

KEY_SESSION_HISTORY: Final[str] = "sessionHistory"
KEY_SAVED_CONFIGURATIONS: Final[str] = "savedConfigurations"
KEY_DELETED_TEMPLATES: Final[str] = "deletedBuiltInTemplateIds"
KEY_INTENTIONS_HISTORY: Final[str] = "intentionsHistory"

KEY_GET_READY: Final[str] = "getReadyDuration"
KEY_WORK: Final[str] = "timerDuration"
KEY_REST: Final[str] = "restDuration"
KEY_SETS: Final[str] = "sets"
KEY_DAILY_GOAL: Final[str] = "dailyGoal"
KEY_WEEKLY_GOAL: Final[str] = "weeklyGoal"
KEY_MONTHLY_GOAL: Final[str] = "monthlyGoal"
KEY_GOAL_NOTES: Final[str] = "goalNotes"
KEY_USER_SEX: Final[str] = "userSex"
KEY_USER_HEIGHT: Final[str] = "userHeight"
KEY_USER_WEIGHT: Final[str] = "userWeight"
KEY_WEIGHT_UNIT: Final[str] = "weightUnit"
KEY_HAS_ONBOARDED: Final[str] = "hasOnboarded"
KEY_INSTALL_DATE: Final[str] = "installDate"
KEY_IS_SUBSCRIBED: Final[str] = "isSubscribed"
KEY_LAST_WORKOUT_NAME: Final[str] = "lastWorkoutName"
KEY_SOUND_TYPE: Final[str] = "soundType"

# =============================================================================
# INTENTIONS
# =============================================================================

INTENTION_STATES: Final[tuple[str, ...]] = (
    "Calm",
    "Anxious",
    "Focused",
    "Confused",
    "Happy",
    "Sad",
    "Angry",
    "Curious",
)
