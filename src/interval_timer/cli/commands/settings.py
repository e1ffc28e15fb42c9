"""Settings commands: set-defaults, goals, profile, set-sound, intention, subscription."""

from typing import Annotated, Optional

import typer

from ...core.cues import SOUND_TYPES
from ...core.engine import InvalidConfiguration, validate_configuration
from ...core.models import Goals, SessionConfiguration, UserProfile
from ...io.serializers import ValidationError
from .. import views
from ..app import StorePathOption, app, get_stores


@app.command("set-defaults")
def set_defaults(
    get_ready: Annotated[
        Optional[int],
        typer.Option("--get-ready", "-g", help="Get-ready countdown in seconds"),
    ] = None,
    work: Annotated[
        Optional[int],
        typer.Option("--work", help="Work phase length in seconds"),
    ] = None,
    rest: Annotated[
        Optional[int],
        typer.Option("--rest", help="Rest phase length in seconds"),
    ] = None,
    sets: Annotated[
        Optional[int],
        typer.Option("--sets", "-s", help="Number of sets"),
    ] = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Show or change the default workout used by 'run'.
    """
    stores = get_stores(store_path)
    current = stores.settings.load_configuration()

    if all(v is None for v in (get_ready, work, rest, sets)):
        views.print_defaults(current)
        return

    config = SessionConfiguration(
        get_ready_seconds=get_ready if get_ready is not None else current.get_ready_seconds,
        work_seconds=work if work is not None else current.work_seconds,
        rest_seconds=rest if rest is not None else current.rest_seconds,
        sets=sets if sets is not None else current.sets,
    )
    try:
        validate_configuration(config)
    except InvalidConfiguration as e:
        views.print_error(f"Invalid workout: {e}")
        raise typer.Exit(1)

    stores.settings.save_configuration(config)
    views.print_success("Defaults updated.")
    views.print_defaults(config)


@app.command()
def goals(
    daily: Annotated[
        Optional[int],
        typer.Option("--daily", help="Sessions per day"),
    ] = None,
    weekly: Annotated[
        Optional[int],
        typer.Option("--weekly", help="Sessions per week"),
    ] = None,
    monthly: Annotated[
        Optional[int],
        typer.Option("--monthly", help="Sessions per month"),
    ] = None,
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", help="Free-text notes kept with your goals"),
    ] = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Show or change session goals.
    """
    stores = get_stores(store_path)
    current = stores.settings.load_goals()

    if daily is None and weekly is None and monthly is None:
        if notes is not None:
            stores.settings.save_goal_notes(notes.strip())
            views.print_success("Goal notes updated.")
        views.print_goals(current, stores.settings.load_goal_notes())
        return

    try:
        updated = Goals(
            daily=daily if daily is not None else current.daily,
            weekly=weekly if weekly is not None else current.weekly,
            monthly=monthly if monthly is not None else current.monthly,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    stores.settings.save_goals(updated)
    if notes is not None:
        stores.settings.save_goal_notes(notes.strip())
    views.print_success("Goals updated.")
    views.print_goals(updated, stores.settings.load_goal_notes())


@app.command()
def profile(
    sex: Annotated[
        Optional[str],
        typer.Option("--sex", help="Male or Female"),
    ] = None,
    height_cm: Annotated[
        Optional[int],
        typer.Option("--height-cm", help="Height in centimeters"),
    ] = None,
    weight: Annotated[
        Optional[int],
        typer.Option("--weight", help="Body weight in the selected unit"),
    ] = None,
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="Weight unit: kg or lbs"),
    ] = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Show or update body profile (used for calorie estimates).

    Changing --unit alone converts the stored weight.
    """
    stores = get_stores(store_path)
    current = stores.settings.load_profile()

    if all(v is None for v in (sex, height_cm, weight, unit)):
        if not stores.settings.has_onboarded():
            views.print_info("No profile yet. Set one with --sex, --height-cm, --weight.")
        views.print_profile(current)
        return

    try:
        updated = current
        if unit is not None:
            updated = updated.with_unit(unit.strip().lower())
        updated = UserProfile(
            sex=sex.strip().capitalize() if sex is not None else updated.sex,
            height_cm=height_cm if height_cm is not None else updated.height_cm,
            weight=weight if weight is not None else updated.weight,
            weight_unit=updated.weight_unit,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    stores.settings.save_profile(updated)
    views.print_success("Profile updated.")
    views.print_profile(updated)


@app.command("set-sound")
def set_sound(
    sound: Annotated[str, typer.Argument(help="Cue sound: Beep, Chime or Bell")],
    store_path: StorePathOption = None,
) -> None:
    """
    Choose the cue sound.
    """
    stores = get_stores(store_path)
    display = sound.strip().capitalize()
    if display not in SOUND_TYPES:
        views.print_error(f"Unknown sound {sound!r}. Choose from {', '.join(SOUND_TYPES)}")
        raise typer.Exit(1)
    stores.settings.save_sound_type(display)
    views.print_success(f"Cue sound set to {display}.")


@app.command()
def intention(
    state: Annotated[str, typer.Argument(help="How are you feeling today? (e.g. Calm, Focused)")],
    store_path: StorePathOption = None,
) -> None:
    """
    Record today's state of mind.
    """
    stores = get_stores(store_path)
    try:
        record = stores.intentions.append(state)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_success(f"Intention recorded: {record.state}")


@app.command()
def subscription(
    active: Annotated[
        Optional[bool],
        typer.Option("--active/--inactive", help="Record the subscription status"),
    ] = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Show or record the subscription status.
    """
    stores = get_stores(store_path)
    if active is not None:
        stores.settings.set_subscribed(active)
    state = "active" if stores.settings.is_subscribed() else "inactive"
    views.console.print(f"Subscription: [bold]{state}[/bold]")
