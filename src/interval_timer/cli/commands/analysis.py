"""Analysis commands: analytics, status."""

import json
from datetime import datetime, timezone
from typing import Annotated

import typer

from ...core.analytics import (
    TIMEFRAMES,
    calorie_points,
    days_completed,
    goal_progress,
    intention_distribution,
    today_in,
    total_sessions,
    total_workout_seconds,
)
from ...core.entitlement import is_within_trial, may_access_timer, trial_days_left
from .. import views
from ..app import JsonOption, StorePathOption, app, get_stores

_CHART_TITLES = {
    "week": "Calories — last 7 days",
    "month": "Calories — last month by week",
    "quarter": "Calories — last 3 months by month",
}


@app.command()
def analytics(
    timeframe: Annotated[
        str,
        typer.Option("--timeframe", "-t", help="week, month or quarter"),
    ] = "week",
    json_out: JsonOption = False,
    store_path: StorePathOption = None,
) -> None:
    """
    Show calorie charts, totals and intention breakdown.
    """
    if timeframe not in TIMEFRAMES:
        views.print_error(f"Unknown timeframe {timeframe!r}. Choose from {', '.join(TIMEFRAMES)}")
        raise typer.Exit(1)

    stores = get_stores(store_path)
    history = stores.history.load()
    intents = stores.intentions.load()
    profile = stores.settings.load_profile()
    today = today_in()

    points = calorie_points(
        timeframe,  # type: ignore[arg-type]
        history,
        profile.weight_kg,
        today,
        met=stores.app_config.met,
    )
    distribution = intention_distribution(intents)

    if json_out:
        print(json.dumps({
            "total_sessions": total_sessions(history),
            "days_completed": days_completed(history),
            "total_seconds": total_workout_seconds(history),
            "timeframe": timeframe,
            "points": [
                {"label": p.label, "start": p.start.isoformat(), "calories": p.calories}
                for p in points
            ],
            "intentions": [{"state": s, "count": c} for s, c in distribution],
        }, indent=2))
        return

    views.console.print()
    views.print_profile(profile)
    views.console.print(
        f"Sessions: [bold]{total_sessions(history)}[/bold]  "
        f"Days completed: [bold]{days_completed(history)}[/bold]  "
        f"Time trained: [bold]{views.format_clock(total_workout_seconds(history))}[/bold]"
    )
    views.console.print()
    if profile.weight_kg <= 0:
        views.print_info("Set your weight with 'profile --weight' to see calorie estimates.")
    views.print_calorie_chart(points, _CHART_TITLES[timeframe])
    views.console.print()
    views.print_intentions(distribution)


@app.command()
def status(
    json_out: JsonOption = False,
    store_path: StorePathOption = None,
) -> None:
    """
    Show access status and goal progress.
    """
    stores = get_stores(store_path)
    settings = stores.settings
    trial_days = stores.app_config.trial_length_days

    now = datetime.now(timezone.utc)
    install_date = settings.ensure_install_date(now)
    subscribed = settings.is_subscribed()
    in_trial = is_within_trial(install_date, now, trial_days)
    progress = goal_progress(stores.history.load(), settings.load_goals(), today_in())

    if json_out:
        print(json.dumps({
            "within_trial": in_trial,
            "trial_days_left": trial_days_left(install_date, now, trial_days),
            "subscribed": subscribed,
            "may_access_timer": may_access_timer(install_date, subscribed, now, trial_days),
            "sessions_today": progress.today,
            "sessions_this_week": progress.this_week,
            "sessions_this_month": progress.this_month,
        }, indent=2))
        return

    views.console.print()
    if subscribed:
        views.console.print("Access: [green]subscribed[/green]")
    elif in_trial:
        days = trial_days_left(install_date, now, trial_days)
        views.console.print(f"Access: [yellow]free trial, {days} day(s) left[/yellow]")
    else:
        views.console.print("Access: [red]trial ended[/red]")
    views.console.print()
    views.print_goal_progress(progress)
