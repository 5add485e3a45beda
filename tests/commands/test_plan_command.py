"""Unit tests for the planner commands (plan, tasks, events, check)."""

from __future__ import annotations

import json

import pytest
import yaml
from typer.testing import CliRunner

from autoplanner.commands.plan_command import app
from autoplanner.services.config_service import get_config_service

runner = CliRunner()

SEED = {
    "projects": [{"id": "p1", "title": "Website", "color": "#3f51b5"}],
    "tasks": [
        {
            "id": "t1",
            "title": "Kickoff",
            "project_id": "p1",
            "estimated_hours": 2,
            "locked": True,
            "scheduled_start": "2024-06-03T10:00:00",
            "scheduled_end": "2024-06-03T12:00:00",
        },
        {"id": "t2", "title": "Wireframes", "project_id": "p1", "estimated_hours": 2, "priority": "HIGH"},
        {"id": "t3", "title": "Mockups", "project_id": "p1", "estimated_hours": 1},
        {"id": "t4", "title": "Someday", "project_id": "p1", "estimated_hours": 1, "auto_schedule": False},
    ],
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def seed_file(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text(yaml.safe_dump(SEED), encoding="utf-8")
    return str(path)


def _invoke(*args):
    return runner.invoke(app, list(args))


# ---------------------------------------------------------------------------
# plan
# ---------------------------------------------------------------------------


class TestPlan:
    def test_json_places_eligible_tasks(self, seed_file):
        result = _invoke("plan", "--seed", seed_file, "--output", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        tasks = {t["id"]: t for t in data["tasks"]}
        assert tasks["t2"]["scheduled_start"] is not None
        assert tasks["t3"]["scheduled_start"] is not None
        assert tasks["t4"]["scheduled_start"] is None
        assert tasks["t1"]["scheduled_start"] == "2024-06-03T10:00:00"
        assert {e["task_id"] for e in data["events"]} == {"t1", "t2", "t3"}

    def test_higher_priority_is_placed_first(self, seed_file):
        result = _invoke("plan", "-s", seed_file, "-o", "json")

        tasks = {t["id"]: t for t in json.loads(result.output)["tasks"]}
        assert tasks["t2"]["scheduled_end"] <= tasks["t3"]["scheduled_start"]

    def test_pretty(self, seed_file):
        result = _invoke("plan", "--seed", seed_file)

        assert result.exit_code == 0, result.output
        assert "Placed 2 task(s)" in result.output
        assert "Calendar" in result.output
        assert "Wireframes" in result.output

    def test_yaml(self, seed_file):
        result = _invoke("plan", "--seed", seed_file, "--output", "yaml")

        assert result.exit_code == 0
        assert len(yaml.safe_load(result.output)["events"]) == 3

    def test_nothing_to_schedule(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps({"projects": []}), encoding="utf-8")

        result = _invoke("plan", "--seed", str(path))

        assert result.exit_code == 0
        assert "Nothing to schedule" in result.output

    def test_default_seed_is_sample_data(self):
        result = _invoke("plan", "--output", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["projects"]) == 5
        assert len(data["tasks"]) == 14

    def test_configured_output_format(self, seed_file):
        get_config_service().set("output.format", "json")

        result = _invoke("plan", "--seed", seed_file)

        assert "tasks" in json.loads(result.output)

    def test_configured_seed_file(self, seed_file):
        get_config_service().set("seed_file", seed_file)

        result = _invoke("plan", "--output", "json")

        assert [p["id"] for p in json.loads(result.output)["projects"]] == ["p1"]

    def test_missing_seed_file(self, tmp_path):
        result = _invoke("plan", "--seed", str(tmp_path / "missing.yaml"))

        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_undecodable_seed_file(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_bytes(b'{"projects": [{"title": "\xff\xfe"}]}')

        result = _invoke("plan", "--seed", str(path))

        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_invalid_seed(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps({"tasks": [{"title": "No project"}]}), encoding="utf-8")

        result = _invoke("plan", "--seed", str(path))

        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# tasks / events
# ---------------------------------------------------------------------------


class TestListing:
    def test_tasks_without_plan(self, seed_file):
        result = _invoke("tasks", "--seed", seed_file, "--output", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert set(data) == {"tasks", "projects"}
        assert [t["id"] for t in data["tasks"] if t["scheduled_start"]] == ["t1"]

    def test_tasks_with_plan(self, seed_file):
        result = _invoke("tasks", "--seed", seed_file, "--output", "json", "--plan")

        scheduled = [t["id"] for t in json.loads(result.output)["tasks"] if t["scheduled_start"]]
        assert scheduled == ["t1", "t2", "t3"]

    def test_tasks_pretty(self, seed_file):
        result = _invoke("tasks", "--seed", seed_file)

        assert result.exit_code == 0
        assert "Tasks" in result.output
        assert "Someday" in result.output

    def test_events(self, seed_file):
        result = _invoke("events", "--seed", seed_file, "--output", "json")

        assert result.exit_code == 0
        events = json.loads(result.output)["events"]
        assert [e["task_id"] for e in events] == ["t1"]
        assert events[0]["color"] == "#3f51b5"

    def test_events_with_plan(self, seed_file):
        result = _invoke("events", "--seed", seed_file, "--output", "json", "--plan")

        assert len(json.loads(result.output)["events"]) == 3


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheck:
    def test_free_interval(self, seed_file):
        result = _invoke("check", "2024-06-03T12:00", "2024-06-03T13:00", "--seed", seed_file)

        assert result.exit_code == 0, result.output
        assert "is available" in result.output

    def test_taken_interval(self, seed_file):
        result = _invoke("check", "2024-06-03T11:00", "2024-06-03T13:00", "--seed", seed_file)

        assert result.exit_code == 3
        assert "overlaps 1 event(s)" in result.output
        assert "Kickoff" in result.output

    def test_invalid_datetime(self, seed_file):
        result = _invoke("check", "noon", "2024-06-03T13:00", "--seed", seed_file)

        assert result.exit_code == 2

    def test_end_before_start(self, seed_file):
        result = _invoke("check", "2024-06-03T13:00", "2024-06-03T12:00", "--seed", seed_file)

        assert result.exit_code == 2
        assert "END must be after START" in result.output
