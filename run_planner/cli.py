"""
Command-line interface for the running planner.

Provides commands for:
- Plan generation with per-week schedule tables
- Plan export to JSON or Markdown
- Race distance reference
"""

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from run_planner.config import LOG_LEVELS, MAX_TRAINING_DAYS, MIN_TRAINING_DAYS, get_settings
from run_planner.export import ExportFormat, save_plan
from run_planner.logging_config import configure_logging
from run_planner.pace import pace_string_to_seconds, seconds_to_pace
from run_planner.plan_schemas import DISTANCE_INFO, DayType, Pace, RaceDistance, TrainingPlan, TrainingWeek
from run_planner.planner import generate_training_plan

app = typer.Typer(help="Running Planner - personalized 80/20 training plans from your current and goal pace")
console = Console()

DAY_TYPE_STYLES = {
    DayType.REST: "dim",
    DayType.EASY: "green",
    DayType.QUALITY: "red",
    DayType.LONG: "cyan",
    DayType.RECOVERY: "blue",
}

PHASE_COLORS = {
    "Base Building": "green",
    "Build Phase": "yellow",
    "Peak Training": "red",
    "Taper": "blue",
}


def parse_pace_text(text: str) -> Pace:
    """
    Parse CLI pace input such as "5:30" or "5:30/km".

    Raises:
        typer.BadParameter: If the text is not in M:SS form
    """
    try:
        return seconds_to_pace(pace_string_to_seconds(text))
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    upper = value.upper()
    if upper not in LOG_LEVELS:
        raise typer.BadParameter(f"'{value}' is not one of {', '.join(LOG_LEVELS)}")
    return upper


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        callback=_validate_log_level,
        help="Override the configured log level (DEBUG, INFO, ...)",
    ),
):
    """Configure logging before any command runs."""
    configure_logging(log_level)


# ===== DISPLAY HELPER FUNCTIONS =====


def _display_plan_summary(plan: TrainingPlan):
    """
    Display the plan header, summary and phase breakdown.

    Args:
        plan: TrainingPlan to display
    """
    info = plan.info
    header = (
        f"[bold]{info.name}[/bold] ({info.km_label})  |  "
        f"Current: [yellow]{plan.current_pace}[/yellow]  |  "
        f"Target: [green]{plan.target_pace}[/green]  |  "
        f"{plan.training_days} days/week  |  {len(plan.weeks)} weeks\n\n"
        f"{plan.summary}"
    )
    console.print(Panel(header, title="Your Training Plan", border_style="cyan"))

    console.print("\n[bold]Phase Distribution:[/bold]")
    for phase, weeks in plan.get_phase_breakdown().items():
        color = PHASE_COLORS.get(phase, "white")
        console.print(f"  [{color}]{phase}[/{color}]: {weeks} weeks")
    console.print(f"  Total mileage: {plan.total_mileage_km()} km\n")


def _display_week(week: TrainingWeek):
    """
    Display one week as a table of daily workouts.

    Args:
        week: TrainingWeek to display
    """
    color = PHASE_COLORS.get(week.phase.value, "white")
    quality_percent = week.quality_fraction() * 100
    table = Table(
        title=f"Week {week.week} - [{color}]{week.phase.value}[/{color}] - {week.total_mileage} "
        f"({quality_percent:.0f}% quality)",
        box=box.ROUNDED,
    )
    table.add_column("Day", style="bold")
    table.add_column("Workout")
    table.add_column("Pace", justify="right")
    table.add_column("Distance", justify="right")
    table.add_column("Details", style="dim")

    for day in week.days:
        style = DAY_TYPE_STYLES.get(day.day_type, "")
        workout = f"[{style}]{day.workout}[/{style}]" if style else day.workout
        table.add_row(day.day.value, workout, day.pace or "-", day.distance or "-", day.description)

    console.print(table)


# ===== CLI COMMANDS =====


@app.command()
def generate(
    distance: RaceDistance = typer.Argument(..., help="Race distance: 5k, 10k, half or full"),
    current: str = typer.Option(..., "--current", "-c", help="Current average pace per km (M:SS)"),
    target: str = typer.Option(..., "--target", "-t", help="Target average pace per km (M:SS)"),
    days: Optional[int] = typer.Option(
        None,
        "--days",
        "-d",
        min=MIN_TRAINING_DAYS,
        max=MAX_TRAINING_DAYS,
        help="Training days per week (defaults to the configured value)",
    ),
    week: Optional[int] = typer.Option(None, "--week", "-w", min=1, help="Show a single week"),
    all_weeks: bool = typer.Option(False, "--all-weeks", "-a", help="Show every week of the plan"),
    export_format: Optional[ExportFormat] = typer.Option(
        None,
        "--export",
        "-e",
        help="Save the plan (json or markdown)",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for exported plans"),
):
    """
    Generate a training plan and display it week by week.
    """
    settings = get_settings()
    current_pace = parse_pace_text(current)
    target_pace = parse_pace_text(target)
    training_days = days if days is not None else settings.default_training_days

    plan = generate_training_plan(distance, current_pace, target_pace, training_days)

    if week is not None and week > len(plan.weeks):
        console.print(f"[red]✗ Week {week} does not exist - this plan has {len(plan.weeks)} weeks[/red]")
        raise typer.Exit(1)

    _display_plan_summary(plan)

    if all_weeks:
        selected = plan.weeks
    elif week is not None:
        selected = [plan.weeks[week - 1]]
    else:
        selected = plan.weeks[:1]

    for plan_week in selected:
        _display_week(plan_week)

    if export_format:
        try:
            path = save_plan(plan, output or settings.export_dir, format=export_format.value)
        except OSError as e:
            console.print(f"[red]✗ Failed to save plan: {e}[/red]")
            raise typer.Exit(1)
        console.print(f"\n✓ Plan saved: [cyan]{path}[/cyan]")


@app.command()
def distances():
    """
    List supported race distances and plan lengths.
    """
    table = Table(title="Race Distances", box=box.ROUNDED)
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Kilometers", justify="right")
    table.add_column("Miles", justify="right")
    table.add_column("Plan Length", justify="right")

    for distance, info in DISTANCE_INFO.items():
        table.add_row(distance.value, info.name, f"{info.km:g}", f"{info.miles:g}", f"{info.weeks} weeks")

    console.print(table)


if __name__ == "__main__":
    app()
