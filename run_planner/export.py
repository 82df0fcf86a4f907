"""
Training plan export.

Plans are exported to JSON (camelCase wire shape) for other tools and to
Markdown for human reading.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from run_planner.plan_schemas import TrainingPlan

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    """Supported plan export formats."""

    JSON = "json"
    MARKDOWN = "markdown"


SUPPORTED_FORMATS = tuple(f.value for f in ExportFormat)


def export_plan_to_json(plan: TrainingPlan) -> dict:
    """
    Export plan to a JSON-serializable dictionary.

    Returns:
        Dictionary using the camelCase field names (currentPace, dayType, ...)
    """
    return plan.model_dump(mode="json", by_alias=True)


def export_plan_to_markdown(plan: TrainingPlan) -> str:
    """
    Export plan to human-readable Markdown.

    Returns:
        Markdown document with a header, phase breakdown and one table per week
    """
    info = plan.info
    lines = []

    lines.append(f"# {info.name} Training Plan")
    lines.append("")
    lines.append(f"**Distance:** {info.name} ({info.km_label}, {info.miles:g} mi)")
    lines.append(f"**Current Pace:** {plan.current_pace}")
    lines.append(f"**Target Pace:** {plan.target_pace}")
    lines.append(f"**Training Days:** {plan.training_days} days/week")
    lines.append(f"**Duration:** {len(plan.weeks)} weeks")
    lines.append("")
    lines.append(plan.summary)
    lines.append("")
    lines.append("---")
    lines.append("")

    lines.append("## Phases")
    lines.append("")
    for phase, count in plan.get_phase_breakdown().items():
        lines.append(f"- **{phase}:** {count} weeks")
    lines.append("")

    for week in plan.weeks:
        lines.append(f"## Week {week.week} - {week.phase.value} ({week.total_mileage})")
        lines.append("")
        lines.append("| Day | Workout | Pace | Distance | Details |")
        lines.append("|-----|---------|------|----------|---------|")
        for day in week.days:
            lines.append(
                f"| {day.day.value} | {day.workout} | {day.pace or '-'} "
                f"| {day.distance or '-'} | {day.description} |"
            )
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append(f"*Total planned mileage: {plan.total_mileage_km()} km*")
    lines.append("")

    return "\n".join(lines)


def save_plan(
    plan: TrainingPlan,
    output_dir: Path,
    format: str = ExportFormat.JSON.value,
    timestamp: Optional[datetime] = None,
) -> Path:
    """
    Save plan to a timestamped file.

    Args:
        plan: Plan to save
        output_dir: Directory to save into (created if missing)
        format: Output format ("json" or "markdown")
        timestamp: Timestamp used in the filename (defaults to now)

    Returns:
        Path to saved file

    Raises:
        ValueError: If format is not supported
    """
    if format not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported format: {format}. Use 'json' or 'markdown'")
    format = ExportFormat(format)

    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp_str = (timestamp or datetime.now()).strftime("%Y%m%d_%H%M%S")

    if format == ExportFormat.JSON:
        filepath = output_dir / f"plan_{plan.distance.value}_{timestamp_str}.json"
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(export_plan_to_json(plan), f, indent=2)
    else:
        filepath = output_dir / f"plan_{plan.distance.value}_{timestamp_str}.md"
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(export_plan_to_markdown(plan))

    logger.info("Saved %s plan to %s", format.value, filepath)
    return filepath


def load_plan_from_file(filepath: Path) -> TrainingPlan:
    """
    Load a plan from a JSON export.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a valid plan
    """
    if not filepath.exists():
        raise FileNotFoundError(f"Plan file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid plan file: {e}") from e

    try:
        return TrainingPlan.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid plan file: {e}") from e
