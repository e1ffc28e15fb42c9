"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of workouts, history and analytics.
"""

from datetime import datetime

from rich.console import Console
from rich.table import Table

from ..core.analytics import DataPoint, GoalProgress
from ..core.ascii_plot import create_calorie_chart
from ..core.calories import estimate_for_record
from ..core.config import MET
from ..core.engine import PhaseStarted, TimerEvent, WorkoutCompleted, WorkoutTimerEngine
from ..core.models import Goals, Phase, SessionConfiguration, SessionRecord, UserProfile
from ..core.session import WorkoutSummary

console = Console()

_PHASE_STYLE = {
    Phase.GET_READY: "yellow",
    Phase.WORK: "bold green",
    Phase.REST: "bold blue",
    Phase.COMPLETE: "bold magenta",
}


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS."""
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_date(value: datetime) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def print_workout_header(name: str, config: SessionConfiguration) -> None:
    console.print()
    console.print(f"[bold cyan]{name or 'Workout'}[/bold cyan] — {config.describe()}")
    console.print(
        f"[dim]Get ready {config.get_ready_seconds}s · "
        f"total {format_clock(config.total_seconds)}[/dim]"
    )
    console.print()
    console.print(f"[{_PHASE_STYLE[Phase.GET_READY]}]Get Ready...[/]")


def print_timer_event(event: TimerEvent) -> None:
    """Announce a phase change."""
    if isinstance(event, PhaseStarted):
        style = _PHASE_STYLE[event.phase]
        if event.phase is Phase.WORK:
            console.print(f"[{style}]Work[/] — set {event.set_number}")
        else:
            console.print(f"[{style}]Rest Time[/]")
    elif isinstance(event, WorkoutCompleted):
        console.print(f"[{_PHASE_STYLE[Phase.COMPLETE]}]Great Work![/]")


def print_countdown(engine: WorkoutTimerEngine) -> None:
    """Redraw the countdown on a single line."""
    if engine.is_complete:
        return
    style = _PHASE_STYLE[engine.phase]
    console.print(
        f"  [{style}]{engine.phase.label:<9}[/] {format_clock(engine.remaining_seconds)}",
        end="\r",
        highlight=False,
    )


def print_summary(summary: WorkoutSummary) -> None:
    """Print the workout-complete card."""
    record = summary.record
    table = Table(title="Workout Complete!", show_header=False, title_style="bold green")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Workout", record.display_name)
    table.add_row("Calories Burned", f"{summary.calories} kcal")
    table.add_row("Total Time", format_clock(summary.total_seconds))
    table.add_row("Date", format_date(record.date))
    if record.intention:
        table.add_row("Intention", record.intention)
    console.print()
    console.print(table)
    if not summary.saved:
        print_warning("Session could not be saved to history.")


def format_history_table(records: list[SessionRecord], weight_kg: float, met: float = MET) -> Table:
    """
    Format session history (already sorted) as a Rich table.

    The # column is the 1-based position used by delete-record.
    """
    table = Table(title="Workout Log", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Name")
    table.add_column("Work", justify="right")
    table.add_column("Rest", justify="right")
    table.add_column("Sets", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("kcal", justify="right", style="bold")
    table.add_column("Intention", style="magenta")

    for i, record in enumerate(records, 1):
        table.add_row(
            str(i),
            format_date(record.date),
            record.display_name,
            f"{record.work_seconds}s",
            f"{record.rest_seconds}s",
            str(record.sets),
            format_clock(record.workout_seconds),
            str(estimate_for_record(record, weight_kg, met)),
            record.intention or "-",
        )
    return table


def print_history(records: list[SessionRecord], weight_kg: float, met: float = MET) -> None:
    if not records:
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return
    console.print(format_history_table(records, weight_kg, met))


def print_configs(saved: list[SessionRecord], templates: list[SessionRecord]) -> None:
    """List saved presets and the remaining built-in templates."""
    table = Table(title="Workouts", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Work", justify="right")
    table.add_column("Rest", justify="right")
    table.add_column("Sets", justify="right")
    table.add_column("ID", style="dim")

    for record in saved:
        table.add_row(record.display_name, "saved", f"{record.work_seconds}s",
                      f"{record.rest_seconds}s", str(record.sets), record.id)
    for record in templates:
        table.add_row(record.name, "built-in", f"{record.work_seconds}s",
                      f"{record.rest_seconds}s", str(record.sets), record.id)

    if not saved and not templates:
        console.print("[yellow]No saved workouts.[/yellow]")
        return
    console.print(table)


def print_defaults(config: SessionConfiguration) -> None:
    console.print(
        f"Get ready: [bold]{config.get_ready_seconds}s[/bold]  "
        f"Work: [bold]{config.work_seconds}s[/bold]  "
        f"Rest: [bold]{config.rest_seconds}s[/bold]  "
        f"Sets: [bold]{config.sets}[/bold]"
    )


def print_goals(goals: Goals, notes: str = "") -> None:
    console.print(
        f"Daily: [bold]{goals.daily}[/bold]  "
        f"Weekly: [bold]{goals.weekly}[/bold]  "
        f"Monthly: [bold]{goals.monthly}[/bold]"
    )
    if notes:
        console.print(f"Notes: {notes}", highlight=False, markup=False)


def print_profile(profile: UserProfile) -> None:
    weight = f"{profile.weight} {profile.weight_unit}" if profile.weight else "-"
    height = f"{profile.height_cm} cm" if profile.height_cm else "-"
    console.print(
        f"Sex: [bold]{profile.sex or '-'}[/bold]  "
        f"Height: [bold]{height}[/bold]  "
        f"Weight: [bold]{weight}[/bold]"
    )


def _goal_cell(done: int, goal: int) -> str:
    mark = "[green]✓[/green]" if done >= goal else ""
    return f"{done}/{goal} {mark}".strip()


def print_goal_progress(progress: GoalProgress) -> None:
    table = Table(title="Goals", show_header=True, header_style="bold")
    table.add_column("Today", justify="center")
    table.add_column("This week", justify="center")
    table.add_column("This month", justify="center")
    table.add_row(
        _goal_cell(progress.today, progress.goals.daily),
        _goal_cell(progress.this_week, progress.goals.weekly),
        _goal_cell(progress.this_month, progress.goals.monthly),
    )
    console.print(table)


def print_calorie_chart(points: list[DataPoint], title: str) -> None:
    console.print(create_calorie_chart(points, title=title))


def print_intentions(distribution: list[tuple[str, int]]) -> None:
    if not distribution:
        console.print("[dim]No intentions recorded.[/dim]")
        return
    table = Table(title="Intentions", show_header=True, header_style="bold")
    table.add_column("State", style="magenta")
    table.add_column("Count", justify="right")
    for state, count in distribution:
        table.add_row(state, str(count))
    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
