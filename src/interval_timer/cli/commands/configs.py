"""Saved workout commands: save-config, list-configs, delete-config, rename-config, restore-templates."""

import json
from typing import Annotated, Optional

import typer

from ...core.engine import InvalidConfiguration, validate_configuration
from ...core.models import SessionConfiguration, SessionRecord
from ...core.templates import find_template, is_built_in, visible_templates
from ...io.serializers import session_record_to_dict
from .. import views
from ..app import JsonOption, StorePathOption, app, get_stores


@app.command("save-config")
def save_config(
    name: Annotated[str, typer.Argument(help="Name for the saved workout")],
    work: Annotated[
        Optional[int],
        typer.Option("--work", help="Work phase length in seconds (default: current default)"),
    ] = None,
    rest: Annotated[
        Optional[int],
        typer.Option("--rest", help="Rest phase length in seconds (default: current default)"),
    ] = None,
    sets: Annotated[
        Optional[int],
        typer.Option("--sets", "-s", help="Number of sets (default: current default)"),
    ] = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Save a named workout configuration.
    """
    stores = get_stores(store_path)
    base = stores.settings.load_configuration()

    config = SessionConfiguration(
        get_ready_seconds=base.get_ready_seconds,
        work_seconds=work if work is not None else base.work_seconds,
        rest_seconds=rest if rest is not None else base.rest_seconds,
        sets=sets if sets is not None else base.sets,
    )
    try:
        validate_configuration(config)
    except InvalidConfiguration as e:
        views.print_error(f"Invalid workout: {e}")
        raise typer.Exit(1)

    record = SessionRecord(
        name=name.strip(),
        work_seconds=config.work_seconds,
        rest_seconds=config.rest_seconds,
        sets=config.sets,
    )
    stores.configs.add(record)
    views.print_success(f"Saved '{record.name}': {config.describe()}")


@app.command("list-configs")
def list_configs(
    json_out: JsonOption = False,
    store_path: StorePathOption = None,
) -> None:
    """
    List saved workouts and built-in templates.
    """
    stores = get_stores(store_path)
    saved = stores.configs.load()
    templates = visible_templates(stores.deleted_templates.load())

    if json_out:
        output = [dict(session_record_to_dict(r), kind="saved") for r in saved]
        output += [dict(session_record_to_dict(r), kind="built-in") for r in templates]
        print(json.dumps(output, indent=2))
        return

    views.print_configs(saved, templates)


@app.command("delete-config")
def delete_config(
    workout: Annotated[str, typer.Argument(help="Saved workout or template (name or ID)")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    store_path: StorePathOption = None,
) -> None:
    """
    Delete a saved workout, or hide a built-in template.
    """
    stores = get_stores(store_path)
    saved = stores.configs.find(workout)
    template = None if saved is not None else find_template(workout, stores.deleted_templates.load())
    target = saved or template

    if target is None:
        views.print_error(f"No saved workout or template named {workout!r}")
        raise typer.Exit(1)

    if not force and not views.confirm_action(f"Delete '{target.display_name}'?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    if saved is not None:
        stores.configs.delete(saved.id)
    else:
        stores.deleted_templates.mark_deleted(target.id)
    views.print_success(f"Deleted '{target.display_name}'")


@app.command("rename-config")
def rename_config(
    workout: Annotated[str, typer.Argument(help="Saved workout (name or ID)")],
    new_name: Annotated[str, typer.Argument(help="New name")],
    store_path: StorePathOption = None,
) -> None:
    """
    Rename a saved workout.
    """
    stores = get_stores(store_path)
    saved = stores.configs.find(workout)

    if saved is None:
        if is_built_in(workout) or find_template(workout) is not None:
            views.print_error("Built-in templates cannot be renamed; save a copy instead.")
        else:
            views.print_error(f"No saved workout named {workout!r}")
        raise typer.Exit(1)

    renamed = stores.configs.rename(saved.id, new_name.strip())
    views.print_success(f"Renamed '{saved.display_name}' to '{renamed.display_name}'")


@app.command("restore-templates")
def restore_templates(store_path: StorePathOption = None) -> None:
    """
    Bring back every deleted built-in template.
    """
    stores = get_stores(store_path)
    stores.deleted_templates.restore_all()
    views.print_success("Built-in templates restored.")
