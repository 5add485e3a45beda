"""Tests for output formatters."""

from __future__ import annotations

import json

import yaml

from autoplanner.utils.ui.formatters import (
    format_calendar_pretty,
    format_error,
    format_output,
    format_success,
    format_tasks_pretty,
)

EVENTS = [
    {
        "id": "e2",
        "title": "Review",
        "start": "2024-06-04T13:00:00",
        "end": "2024-06-04T14:00:00",
        "all_day": False,
        "color": "#4caf50",
        "task_id": "t2",
        "project_id": "p1",
    },
    {
        "id": "e1",
        "title": "Wireframes",
        "start": "2024-06-03T09:30:00",
        "end": "2024-06-03T11:30:00",
        "all_day": False,
        "color": "not-a-color",
        "task_id": "t1",
        "project_id": "p1",
    },
]

TASKS = [
    {
        "id": "t1",
        "title": "Wireframes",
        "priority": "HIGH",
        "project_id": "p1",
        "estimated_hours": 2.0,
        "completed": False,
        "auto_schedule": True,
        "locked": False,
        "scheduled_start": "2024-06-03T09:30:00",
        "scheduled_end": "2024-06-03T11:30:00",
    },
    {
        "id": "t2",
        "title": "Launch",
        "priority": "URGENT",
        "project_id": "p1",
        "estimated_hours": 1.0,
        "completed": True,
        "auto_schedule": True,
        "locked": False,
        "scheduled_start": None,
        "scheduled_end": None,
    },
]

PROJECTS = [{"id": "p1", "title": "Website"}]


def test_json_output(capsys):
    format_output({"events": EVENTS}, "json")

    assert json.loads(capsys.readouterr().out) == {"events": EVENTS}


def test_yaml_output(capsys):
    format_output({"tasks": TASKS}, "yaml")

    assert yaml.safe_load(capsys.readouterr().out) == {"tasks": TASKS}


def test_calendar_groups_by_day_in_start_order(capsys):
    format_calendar_pretty(EVENTS, PROJECTS)

    out = capsys.readouterr().out
    assert "2 events" in out
    assert out.index("Mon 03 Jun 2024") < out.index("Wireframes") < out.index("Tue 04 Jun 2024")
    assert "09:30-11:30" in out
    assert "Website" in out


def test_calendar_empty(capsys):
    format_output({"events": []}, "pretty")

    assert "No events scheduled" in capsys.readouterr().out


def test_tasks_grouped_by_priority(capsys):
    format_tasks_pretty(TASKS, PROJECTS)

    out = capsys.readouterr().out
    assert "1 active, 1 completed" in out
    assert out.index("URGENT") < out.index("HIGH")
    assert "unscheduled" in out
    assert "2024-06-03 09:30 → 11:30" in out


def test_table_output(capsys):
    format_output([{"id": "e1", "all_day": False, "task_id": None}], "table")

    out = capsys.readouterr().out
    assert "All Day" in out
    assert "✗" in out


def test_messages(capsys):
    format_error("boom")
    format_success("done")

    out = capsys.readouterr().out
    assert "Error: boom" in out
    assert "Success: done" in out
