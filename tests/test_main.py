"""Unit tests for main.py - the CLI entry point."""

from __future__ import annotations

from unittest.mock import patch

from typer.testing import CliRunner

from autoplanner import __version__
from autoplanner.main import app, main

runner = CliRunner()


def _invoke(*args):
    return runner.invoke(app, list(args))


class TestTopLevel:
    def test_help_lists_commands(self):
        result = _invoke("--help")

        assert result.exit_code == 0
        for command in ("plan", "tasks", "events", "check", "config", "version"):
            assert command in result.output

    def test_no_args_shows_help(self):
        result = _invoke()
        assert "Usage" in result.output

    def test_version(self):
        result = _invoke("version")

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_subcommand(self):
        result = _invoke("config", "get", "scheduling.buffer_minutes")

        assert result.exit_code == 0
        assert "30" in result.output

    def test_typo_suggests_command(self):
        result = _invoke("evnts")

        assert result.exit_code == 1
        assert "Did you mean this?" in result.output
        assert "events" in result.output


def test_main_runs_app():
    with patch("autoplanner.main.app") as mock_app:
        main()

    mock_app.assert_called_once_with()
