"""Workout command: run."""

import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.cues import CuePlayer
from ...core.engine import InvalidConfiguration
from ...core.entitlement import may_access_timer
from ...core.models import SessionConfiguration, SessionRecord
from ...core.session import WorkoutSession
from ...core.templates import find_template
from ...io.serializers import ValidationError, validate_intention
from .. import views
from ..app import StorePathOption, Stores, app, get_stores


def _resolve_preset(stores: Stores, preset: str) -> SessionRecord | None:
    """Saved configurations win over built-in templates of the same name."""
    found = stores.configs.find(preset)
    if found is not None:
        return found
    return find_template(preset, stores.deleted_templates.load())


@app.command()
def run(
    workout: Annotated[
        Optional[str],
        typer.Option("--workout", "-w", help="Saved configuration or template (name or ID)"),
    ] = None,
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
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Name stored with the session"),
    ] = None,
    intention: Annotated[
        Optional[str],
        typer.Option("--intention", "-i", help="Today's state of mind (e.g. Focused)"),
    ] = None,
    no_sound: Annotated[
        bool,
        typer.Option("--no-sound", help="Do not play phase cues"),
    ] = False,
    sound_dir: Annotated[
        Optional[Path],
        typer.Option("--sound-dir", help="Directory with work/rest/complete sound files"),
    ] = None,
    tick_seconds: Annotated[
        Optional[float],
        typer.Option("--tick-seconds", help="Wall-clock seconds per timer tick"),
    ] = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Run an interval workout and log it when complete.

    Ctrl-C pauses and exits without saving.
    """
    stores = get_stores(store_path)
    settings = stores.settings

    now = datetime.now(timezone.utc)
    install_date = settings.ensure_install_date(now)
    if not may_access_timer(
        install_date, settings.is_subscribed(), now, stores.app_config.trial_length_days
    ):
        views.print_error("Your free trial has ended.")
        views.print_info("Run 'interval-timer subscription --active' once subscribed.")
        raise typer.Exit(1)

    base = settings.load_configuration()
    workout_name = settings.load_last_workout_name()

    if workout is not None:
        preset = _resolve_preset(stores, workout)
        if preset is None:
            views.print_error(f"No saved workout or template named {workout!r}")
            raise typer.Exit(1)
        base = preset.to_configuration(base.get_ready_seconds)
        workout_name = preset.name

    config = SessionConfiguration(
        get_ready_seconds=get_ready if get_ready is not None else base.get_ready_seconds,
        work_seconds=work if work is not None else base.work_seconds,
        rest_seconds=rest if rest is not None else base.rest_seconds,
        sets=sets if sets is not None else base.sets,
    )
    if name is not None:
        workout_name = name

    if intention is not None:
        try:
            intention = validate_intention(intention)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    cue_player = CuePlayer(
        sound_dir=sound_dir,
        sound_type=settings.load_sound_type(),
        enabled=not no_sound,
    )

    try:
        session = WorkoutSession(
            config,
            stores.history,
            name=workout_name,
            intention=intention,
            weight_kg=settings.load_profile().weight_kg,
            cue_player=cue_player,
            listeners=[views.print_timer_event],
            met=stores.app_config.met,
        )
    except InvalidConfiguration as e:
        views.print_error(f"Invalid workout: {e}")
        raise typer.Exit(1)

    if intention is not None:
        stores.intentions.append(intention)

    settings.save_last_workout_name(workout_name)
    interval = tick_seconds if tick_seconds is not None else stores.app_config.tick_interval_seconds

    views.print_workout_header(workout_name, config)
    on_tick = views.print_countdown if interval > 0 else None
    try:
        summary = session.run(time.sleep, max(0.0, interval), on_tick=on_tick)
    except KeyboardInterrupt:
        state = session.engine.state
        views.console.print()
        views.print_warning(
            f"Paused during {state.phase.label} (set {state.current_set}, "
            f"{views.format_clock(state.remaining_seconds)} left). Session not saved."
        )
        raise typer.Exit(130)

    if summary is not None:
        views.print_summary(summary)
