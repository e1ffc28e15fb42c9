"""
CLI entry point using Typer.

Provides commands for interval workouts:
- run: Run a workout and log it
- history / delete-record / clear-history: Workout log
- save-config / list-configs / delete-config / rename-config / restore-templates
- set-defaults / goals / profile / set-sound / intention / subscription
- analytics / status
"""

from typing import Annotated

import typer

from ..core.logger import setup_logger
from . import views
from .app import app
from .commands import analysis, configs, history, settings, workout  # noqa: F401  (registers commands)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Interval workout timer. Run without a command for interactive mode.
    """
    setup_logger(level="DEBUG" if verbose else "WARNING")

    if ctx.invoked_subcommand is not None:
        return  # A sub-command was given; let it handle things

    # ── Interactive main menu ───────────────────────────────────────────────
    views.console.print()
    views.console.print("[bold cyan]interval-timer[/bold cyan] — get ready, work, rest, repeat")
    views.console.print()

    menu = {
        "1": (workout.run,             "Start workout (defaults)"),
        "2": (history.history,         "Workout log"),
        "3": (configs.list_configs,    "Saved workouts & templates"),
        "4": (analysis.analytics,      "Analytics"),
        "5": (analysis.status,         "Goals & access status"),
        "6": (settings.set_defaults,   "Show default workout"),
        "7": (settings.profile,        "Show profile"),
        "0": (None,                    "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    entry = menu.get(choice)
    if entry is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    ctx.invoke(entry[0])


if __name__ == "__main__":
    app()
