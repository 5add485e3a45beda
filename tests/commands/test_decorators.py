"""Unit tests for command decorators."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import typer

from autoplanner.commands.decorators import AppError, command_wrapper, exit_code_for
from autoplanner.exceptions import (
    NotFoundError,
    PlannerError,
    SchedulingConflictError,
    SeedError,
    ValidationError,
)


class TestExitCodeFor:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (NotFoundError("Task", "t1"), 5),
            (ValidationError("bad"), 2),
            (SeedError("bad seed"), 2),
            (SchedulingConflictError("taken"), 3),
            (PlannerError("other"), 1),
        ],
    )
    def test_mapping(self, error, code):
        assert exit_code_for(error) == code


class TestCommandWrapper:
    def test_returns_result(self):
        @command_wrapper
        def ok():
            return 42

        assert ok() == 42

    def test_preserves_name(self):
        @command_wrapper
        def my_command():
            """Doc."""

        assert my_command.__name__ == "my_command"
        assert my_command.__doc__ == "Doc."

    def test_planner_error_maps_to_exit_code(self):
        @command_wrapper
        def missing():
            raise NotFoundError("Task", "t1")

        with patch("autoplanner.commands.decorators.format_error") as fmt:
            with pytest.raises(typer.Exit) as exc_info:
                missing()

        assert exc_info.value.exit_code == 5
        fmt.assert_called_once_with("Task not found: t1")

    def test_app_error_uses_its_exit_code(self):
        @command_wrapper
        def bad():
            raise AppError("nope", exit_code=2)

        with patch("autoplanner.commands.decorators.format_error"):
            with pytest.raises(typer.Exit) as exc_info:
                bad()

        assert exc_info.value.exit_code == 2

    def test_typer_exit_passes_through(self):
        @command_wrapper
        def leave():
            raise typer.Exit(code=3)

        with pytest.raises(typer.Exit) as exc_info:
            leave()

        assert exc_info.value.exit_code == 3

    def test_unexpected_error_is_general(self):
        @command_wrapper
        def crash():
            raise RuntimeError("kaboom")

        with patch("autoplanner.commands.decorators.format_error") as fmt:
            with pytest.raises(typer.Exit) as exc_info:
                crash()

        assert exc_info.value.exit_code == 1
        assert "kaboom" in fmt.call_args.args[0]


class TestAppError:
    def test_default_exit_code(self):
        assert AppError("x").exit_code == 1
