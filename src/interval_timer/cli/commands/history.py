"""History commands: history, delete-record, clear-history."""

import json
from typing import Annotated, Optional

import typer

from ...core.calories import estimate_for_record
from ...io.history_store import SessionHistoryStore
from ...io.serializers import session_record_to_dict
from .. import views
from ..app import JsonOption, StorePathOption, app, get_stores


@app.command()
def history(
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", min=1, help="Show only the most recent N sessions"),
    ] = None,
    json_out: JsonOption = False,
    store_path: StorePathOption = None,
) -> None:
    """
    Display the workout log, newest first.
    """
    stores = get_stores(store_path)
    records = SessionHistoryStore.sorted_by_date_descending(stores.history.load())
    weight_kg = stores.settings.load_profile().weight_kg

    if limit is not None:
        records = records[:limit]

    if json_out:
        output = []
        for record in records:
            d = session_record_to_dict(record)
            d["calories"] = estimate_for_record(record, weight_kg, stores.app_config.met)
            d["total_seconds"] = record.workout_seconds
            output.append(d)
        print(json.dumps(output, indent=2))
        return

    views.print_history(records, weight_kg, stores.app_config.met)


@app.command("delete-record")
def delete_record(
    record_number: Annotated[
        int,
        typer.Argument(help="Session number to delete (see # column in history)"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    store_path: StorePathOption = None,
) -> None:
    """
    Remove one session from the log.
    """
    stores = get_stores(store_path)
    records = SessionHistoryStore.sorted_by_date_descending(stores.history.load())

    if not records:
        views.print_error("No sessions in history.")
        raise typer.Exit(1)

    if record_number < 1 or record_number > len(records):
        views.print_error(f"Session number must be between 1 and {len(records)}")
        raise typer.Exit(1)

    target = records[record_number - 1]
    label = f"{views.format_date(target.date)} ({target.display_name})"
    views.console.print(f"Session to delete: [bold]{label}[/bold]")

    if not force and not views.confirm_action("Delete this session?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    stores.history.delete(target.id)
    views.print_success(f"Deleted session #{record_number}: {label}")


@app.command("clear-history")
def clear_history(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    store_path: StorePathOption = None,
) -> None:
    """
    Delete the whole workout log. This cannot be undone.
    """
    stores = get_stores(store_path)

    if not force and not views.confirm_action("Clear workout log? This cannot be undone."):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    stores.history.clear()
    views.print_success("Workout log cleared.")
