"""
Tests for plan export.

Ensures that plans can be exported to JSON and Markdown and loaded back.
"""

import json
from datetime import datetime

import pytest

from run_planner.export import (
    export_plan_to_json,
    export_plan_to_markdown,
    load_plan_from_file,
    save_plan,
)
from run_planner.plan_schemas import Pace
from run_planner.planner import generate_training_plan


@pytest.fixture
def plan():
    return generate_training_plan("10k", Pace(minutes=6, seconds=0), Pace(minutes=5, seconds=30), 4)


def test_export_to_json_uses_camel_case(plan):
    """Test the JSON export matches the wire shape."""
    data = export_plan_to_json(plan)
    assert data["distance"] == "10k"
    assert data["currentPace"] == {"minutes": 6, "seconds": 0}
    assert data["trainingDays"] == 4
    assert len(data["weeks"]) == 10
    week = data["weeks"][0]
    assert week["totalMileage"].endswith(" km")
    assert week["days"][0]["dayType"] == "rest"
    # Must be JSON serializable
    json.dumps(data)


def test_export_to_markdown(plan):
    """Test the Markdown export contains header, phases and weeks."""
    markdown = export_plan_to_markdown(plan)
    assert "# 10K Training Plan" in markdown
    assert "**Training Days:** 4 days/week" in markdown
    assert "## Phases" in markdown
    assert "## Week 1 - Base Building" in markdown
    assert "## Week 10 - Taper" in markdown
    assert "RACE DAY - 10K" in markdown
    assert plan.summary in markdown


def test_save_and_load_json(plan, tmp_path):
    """Test a saved JSON plan loads back unchanged."""
    filepath = save_plan(plan, tmp_path, format="json", timestamp=datetime(2024, 3, 1, 7, 30))
    assert filepath.name == "plan_10k_20240301_073000.json"
    assert load_plan_from_file(filepath) == plan


def test_save_markdown(plan, tmp_path):
    filepath = save_plan(plan, tmp_path / "out", format="markdown")
    assert filepath.suffix == ".md"
    assert filepath.read_text(encoding="utf-8").startswith("# 10K Training Plan")


def test_save_unsupported_format(plan, tmp_path):
    with pytest.raises(ValueError, match="Unsupported format"):
        save_plan(plan, tmp_path, format="pdf")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_plan_from_file(tmp_path / "missing.json")


def test_load_invalid_file(tmp_path):
    """Test malformed and incomplete plan files are rejected."""
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid plan file"):
        load_plan_from_file(broken)

    incomplete = tmp_path / "incomplete.json"
    incomplete.write_text(json.dumps({"distance": "5k"}), encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid plan file"):
        load_plan_from_file(incomplete)
