"""
Unit tests for core formulas.

Tests calorie estimation, analytics buckets, goal progress, entitlement,
templates, profile units and YAML config loading.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from interval_timer.core.models import Goals, IntentRecord, SessionRecord, UserProfile

UTC = timezone.utc


def make_record(
    day: date,
    work: int = 30,
    rest: int = 15,
    sets: int = 10,
    hour: int = 12,
    intention: str | None = None,
) -> SessionRecord:
    """Helper to create a session record at noon UTC on ``day``."""
    return SessionRecord(
        work_seconds=work,
        rest_seconds=rest,
        sets=sets,
        date=datetime(day.year, day.month, day.day, hour, tzinfo=UTC),
        intention=intention,
    )


# 2026-03-15 is a Sunday
TODAY = date(2026, 3, 15)


# =============================================================================
# Calories
# =============================================================================

class TestCalorieEstimate:
    """Tests for the MET-based calorie estimate."""

    def test_formula(self):
        """0.0175 * 8 * 70 * (160 / 60) = 26.13 -> 26."""
        from interval_timer.core.calories import estimate

        assert estimate(20, 8, 70) == 26

    def test_zero_work_is_zero(self):
        from interval_timer.core.calories import estimate

        assert estimate(0, 1, 70) == 0

    def test_unknown_weight_is_zero(self):
        from interval_timer.core.calories import estimate

        assert estimate(30, 10, 0) == 0
        assert estimate(30, 10, -5) == 0

    def test_five_minutes_of_work(self):
        """300 s of work at 70 kg: 9.8 kcal/min * 5 = 49."""
        from interval_timer.core.calories import estimate

        assert estimate(30, 10, 70) == 49

    def test_rest_is_not_counted(self):
        from interval_timer.core.calories import estimate_for_record

        short_rest = make_record(TODAY, work=30, rest=5, sets=10)
        long_rest = make_record(TODAY, work=30, rest=60, sets=10)
        assert estimate_for_record(short_rest, 70) == estimate_for_record(long_rest, 70)

    def test_custom_met(self):
        from interval_timer.core.calories import estimate

        # 0.0175 * 4 * 80 * 1 = 5.6
        assert estimate(60, 1, 80, met=4.0) == 6

    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (3.5, 4), (2.4, 2), (0.5, 1), (-2.5, -3), (0.0, 0)],
    )
    def test_round_half_away_from_zero(self, value, expected):
        from interval_timer.core.calories import _round_half_away

        assert _round_half_away(value) == expected


# =============================================================================
# Analytics
# =============================================================================

class TestDateHelpers:
    """Tests for month arithmetic and week starts."""

    def test_add_months_clamps_day(self):
        from interval_timer.core.analytics import add_months

        assert add_months(date(2026, 3, 31), -1) == date(2026, 2, 28)

    def test_add_months_crosses_year(self):
        from interval_timer.core.analytics import add_months

        assert add_months(date(2026, 1, 15), -1) == date(2025, 12, 15)
        assert add_months(date(2025, 12, 15), 1) == date(2026, 1, 15)

    def test_start_of_week_is_monday(self):
        from interval_timer.core.analytics import start_of_week

        assert start_of_week(TODAY) == date(2026, 3, 9)
        assert start_of_week(date(2026, 3, 9)) == date(2026, 3, 9)


class TestCalorieBuckets:
    """Tests for the week/month/quarter calorie aggregations."""

    def test_week_has_seven_days_ending_today(self):
        from interval_timer.core.analytics import calories_last_week_by_day

        history = [
            make_record(TODAY),
            make_record(date(2026, 3, 12)),
            make_record(date(2026, 3, 8)),  # outside the window
        ]
        points = calories_last_week_by_day(history, 70, TODAY, tz=UTC)

        assert len(points) == 7
        assert points[0].start == date(2026, 3, 9)
        assert points[-1].start == TODAY
        assert points[-1].calories == 49
        assert points[3].calories == 49  # Thursday 12th
        assert sum(p.calories for p in points) == 98

    def test_week_labels(self):
        from interval_timer.core.analytics import calories_last_week_by_day

        points = calories_last_week_by_day([], 70, TODAY, tz=UTC)
        assert points[-1].label == "Sun 03/15"
        assert all(p.calories == 0 for p in points)

    def test_month_by_week(self):
        from interval_timer.core.analytics import calories_last_month_by_week

        history = [make_record(date(2026, 2, 10)), make_record(date(2026, 2, 11))]
        points = calories_last_month_by_week(history, 70, TODAY, tz=UTC)

        # Weeks starting Feb 9, 16, 23, Mar 2, Mar 9
        assert [p.start for p in points] == [
            date(2026, 2, 9),
            date(2026, 2, 16),
            date(2026, 2, 23),
            date(2026, 3, 2),
            date(2026, 3, 9),
        ]
        assert points[0].label == "Feb 09"
        assert points[0].calories == 98
        assert points[1].calories == 0

    def test_quarter_by_month(self):
        from interval_timer.core.analytics import calories_last_quarter_by_month

        history = [make_record(date(2025, 12, 31)), make_record(date(2026, 3, 1))]
        points = calories_last_quarter_by_month(history, 70, TODAY, tz=UTC)

        assert [p.label for p in points] == [
            "December 2025",
            "January 2026",
            "February 2026",
            "March 2026",
        ]
        assert [p.calories for p in points] == [49, 0, 0, 49]

    def test_no_weight_gives_zero_calories(self):
        from interval_timer.core.analytics import calories_last_week_by_day

        points = calories_last_week_by_day([make_record(TODAY)], 0, TODAY, tz=UTC)
        assert all(p.calories == 0 for p in points)

    def test_calorie_points_dispatch(self):
        from interval_timer.core.analytics import calorie_points

        assert len(calorie_points("week", [], 70, TODAY, tz=UTC)) == 7
        assert len(calorie_points("quarter", [], 70, TODAY, tz=UTC)) == 4

    def test_calorie_points_unknown_timeframe(self):
        from interval_timer.core.analytics import calorie_points

        with pytest.raises(ValueError, match="Unknown timeframe"):
            calorie_points("year", [], 70, TODAY)  # type: ignore[arg-type]


class TestTotals:
    """Tests for session totals and intention breakdowns."""

    def test_totals(self):
        from interval_timer.core.analytics import (
            days_completed,
            total_sessions,
            total_workout_seconds,
        )

        history = [
            make_record(TODAY, work=20, rest=10, sets=3),
            make_record(TODAY, work=20, rest=10, sets=3, hour=18),
            make_record(date(2026, 3, 10), work=60, rest=0, sets=1),
        ]
        assert total_sessions(history) == 3
        assert days_completed(history, tz=UTC) == 2
        # 2 * (60 + 20) + 60
        assert total_workout_seconds(history) == 220

    def test_intention_distribution_orders_by_count_then_name(self):
        from interval_timer.core.analytics import intention_distribution

        intents = [
            IntentRecord(state="Focused"),
            IntentRecord(state="Calm"),
            IntentRecord(state="Calm"),
            IntentRecord(state="Angry"),
        ]
        assert intention_distribution(intents) == [
            ("Calm", 2),
            ("Angry", 1),
            ("Focused", 1),
        ]

    def test_sessions_with_intention(self):
        from interval_timer.core.analytics import sessions_with_intention

        history = [
            make_record(TODAY, intention="Calm"),
            make_record(TODAY, intention=None),
            make_record(TODAY, intention="Happy"),
        ]
        assert len(sessions_with_intention(history, "Calm")) == 1


class TestGoalProgress:
    """Tests for daily/weekly/monthly goal counts."""

    def test_counts(self):
        from interval_timer.core.analytics import goal_progress

        history = [
            make_record(TODAY),
            make_record(TODAY, hour=18),
            make_record(date(2026, 3, 10)),
            make_record(date(2026, 3, 2)),
            make_record(date(2026, 2, 20)),
        ]
        progress = goal_progress(history, Goals(daily=1, weekly=7, monthly=4), TODAY, tz=UTC)

        assert progress.today == 2
        assert progress.this_week == 3
        assert progress.this_month == 4
        assert progress.daily_met
        assert not progress.weekly_met
        assert progress.monthly_met

    def test_empty_history(self):
        from interval_timer.core.analytics import goal_progress

        progress = goal_progress([], Goals(), TODAY, tz=UTC)
        assert (progress.today, progress.this_week, progress.this_month) == (0, 0, 0)
        assert not progress.daily_met


# =============================================================================
# Entitlement
# =============================================================================

INSTALL = datetime(2026, 1, 1, tzinfo=UTC)


class TestEntitlement:
    """Tests for the trial/subscription gate."""

    def test_within_trial(self):
        from interval_timer.core.entitlement import is_within_trial

        assert is_within_trial(INSTALL, INSTALL + timedelta(days=3))
        assert not is_within_trial(INSTALL, INSTALL + timedelta(days=7))

    def test_no_install_date(self):
        from interval_timer.core.entitlement import is_within_trial, may_access_timer

        assert not is_within_trial(None, INSTALL)
        assert not may_access_timer(None, False, INSTALL)
        assert may_access_timer(None, True, INSTALL)

    def test_subscription_overrides_expired_trial(self):
        from interval_timer.core.entitlement import may_access_timer

        later = INSTALL + timedelta(days=30)
        assert not may_access_timer(INSTALL, False, later)
        assert may_access_timer(INSTALL, True, later)

    def test_trial_days_left(self):
        from interval_timer.core.entitlement import trial_days_left

        assert trial_days_left(INSTALL, INSTALL + timedelta(days=3)) == 4
        assert trial_days_left(INSTALL, INSTALL + timedelta(days=2, hours=12)) == 5
        assert trial_days_left(INSTALL, INSTALL + timedelta(days=10)) == 0

    def test_custom_trial_length(self):
        from interval_timer.core.entitlement import is_within_trial

        assert is_within_trial(INSTALL, INSTALL + timedelta(days=10), trial_days=14)


# =============================================================================
# Templates
# =============================================================================

class TestTemplates:
    """Tests for the built-in template catalogue."""

    def test_catalogue(self):
        from interval_timer.core.templates import BUILT_IN_TEMPLATES, is_built_in

        assert [t.name for t in BUILT_IN_TEMPLATES] == ["HIIT", "Tabata", "HILT", "Work-to-Rest"]
        assert all(is_built_in(t.id) for t in BUILT_IN_TEMPLATES)
        assert not is_built_in("not-a-template")

    def test_tabata_shape(self):
        from interval_timer.core.templates import TABATA_ID, TEMPLATES_BY_ID

        tabata = TEMPLATES_BY_ID[TABATA_ID]
        assert (tabata.work_seconds, tabata.rest_seconds, tabata.sets) == (20, 10, 8)

    def test_find_by_name_case_insensitive(self):
        from interval_timer.core.templates import TABATA_ID, find_template

        found = find_template("tabata")
        assert found is not None
        assert found.id == TABATA_ID

    def test_deleted_template_hidden(self):
        from interval_timer.core.templates import TABATA_ID, find_template, visible_templates

        assert find_template("Tabata", {TABATA_ID}) is None
        assert len(visible_templates({TABATA_ID})) == 3


# =============================================================================
# Models
# =============================================================================

class TestModels:
    """Tests for model validation and derived values."""

    def test_workout_seconds(self):
        record = make_record(TODAY, work=20, rest=10, sets=3)
        assert record.workout_seconds == 80

    def test_total_seconds_includes_get_ready(self):
        config = make_record(TODAY, work=20, rest=10, sets=3).to_configuration(3)
        assert config.total_seconds == 83

    def test_naive_date_rejected(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            SessionRecord(work_seconds=20, rest_seconds=10, sets=3, date=datetime(2026, 1, 1))

    def test_zero_sets_rejected(self):
        with pytest.raises(ValueError):
            SessionRecord(work_seconds=20, rest_seconds=10, sets=0)

    def test_display_name(self):
        assert make_record(TODAY).display_name == "Workout"
        assert make_record(TODAY).renamed("Legs").display_name == "Legs"

    def test_renamed_keeps_identity(self):
        record = make_record(TODAY)
        renamed = record.renamed("Legs")
        assert renamed.id == record.id
        assert renamed.date == record.date

    def test_negative_goal_rejected(self):
        with pytest.raises(ValueError):
            Goals(daily=-1)


class TestUserProfile:
    """Tests for weight units."""

    def test_weight_kg_from_lbs(self):
        profile = UserProfile(weight=154, weight_unit="lbs")
        assert profile.weight_kg == pytest.approx(69.85, abs=0.01)

    def test_convert_kg_to_lbs(self):
        profile = UserProfile(sex="Female", height_cm=165, weight=70, weight_unit="kg")
        converted = profile.with_unit("lbs")
        assert converted.weight == 154
        assert converted.weight_unit == "lbs"
        assert converted.height_cm == 165

    def test_convert_lbs_to_kg(self):
        assert UserProfile(weight=154, weight_unit="lbs").with_unit("kg").weight == 70

    def test_invalid_unit(self):
        with pytest.raises(ValueError, match="weight_unit"):
            UserProfile(weight_unit="stone")


# =============================================================================
# Config loading
# =============================================================================

class TestConfigLoader:
    """Tests for YAML config merging."""

    def test_bundled_defaults_exist(self):
        from interval_timer.core.config_loader import get_bundled_yaml_path

        assert get_bundled_yaml_path() is not None

    def test_defaults_without_yaml(self):
        from interval_timer.core.config_loader import load_app_config

        cfg = load_app_config({})
        assert cfg.default_configuration().describe() == "20s work / 10s rest × 8"
        assert cfg.goals == Goals(daily=1, weekly=7, monthly=30)
        assert cfg.met == 8.0

    def test_overrides(self):
        from interval_timer.core.config_loader import load_app_config

        cfg = load_app_config({
            "workout": {"work_seconds": 45},
            "goals": {"weekly": 3},
            "trial": {"length_days": 14},
        })
        assert cfg.work_seconds == 45
        assert cfg.rest_seconds == 10
        assert cfg.goals.weekly == 3
        assert cfg.goals.daily == 1
        assert cfg.trial_length_days == 14

    def test_bad_value_falls_back(self):
        from interval_timer.core.config_loader import load_app_config

        cfg = load_app_config({"workout": {"sets": "many"}})
        assert cfg.sets == 8

    def test_non_finite_values_fall_back(self):
        """YAML .inf / .nan load as floats and must not reach int()."""
        from interval_timer.core.config_loader import load_app_config

        cfg = load_app_config({
            "workout": {"work_seconds": float("inf"), "rest_seconds": float("nan")},
            "calories": {"met": float("inf")},
            "timer": {"tick_interval_seconds": float("nan")},
        })
        assert cfg.work_seconds == 20
        assert cfg.rest_seconds == 10
        assert cfg.met == 8.0
        assert cfg.tick_interval_seconds == 1.0

    def test_negative_goals_fall_back(self):
        from interval_timer.core.config_loader import load_app_config

        cfg = load_app_config({"goals": {"daily": -1, "monthly": 12}})
        assert cfg.goals == Goals(daily=1, weekly=7, monthly=12)

    def test_yaml_inf_literal(self, temp_store_dir):
        from interval_timer.core.config_loader import _load_yaml_file, load_app_config

        path = temp_store_dir / "config.yaml"
        path.write_text("workout:\n  sets: .inf\ngoals:\n  weekly: -2\n", encoding="utf-8")
        cfg = load_app_config(_load_yaml_file(path))
        assert cfg.sets == 8
        assert cfg.goals.weekly == 7

    def test_deep_merge(self):
        from interval_timer.core.config_loader import _deep_merge

        base = {"workout": {"sets": 8, "work_seconds": 20}, "trial": {"length_days": 7}}
        merged = _deep_merge(base, {"workout": {"sets": 4}})
        assert merged == {"workout": {"sets": 4, "work_seconds": 20}, "trial": {"length_days": 7}}
        assert base["workout"]["sets"] == 8

    def test_unparseable_file_ignored(self, temp_store_dir):
        from interval_timer.core.config_loader import _load_yaml_file

        path = temp_store_dir / "config.yaml"
        path.write_text("workout: [unclosed\n", encoding="utf-8")
        assert _load_yaml_file(path) == {}


# =============================================================================
# Charts
# =============================================================================

class TestCalorieChart:
    """Tests for the text bar chart."""

    def test_chart_lines(self):
        from interval_timer.core.analytics import DataPoint
        from interval_timer.core.ascii_plot import create_calorie_chart

        points = [
            DataPoint("Mon", 0, TODAY, TODAY),
            DataPoint("Tue", 49, TODAY, TODAY),
        ]
        chart = create_calorie_chart(points, title="Calories")
        lines = chart.splitlines()
        assert lines[0] == "Calories"
        assert lines[-1].endswith("█" * 40 + " 49")
        assert lines[-2].endswith("│ 0")

    def test_empty_chart(self):
        from interval_timer.core.ascii_plot import create_calorie_chart

        assert create_calorie_chart([]) == "No data to display."
