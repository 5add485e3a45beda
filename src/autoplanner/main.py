"""Main entry point for the autoplanner CLI."""

import typer

from autoplanner.commands import config, plan_command, version_command
from autoplanner.utils.typer_helpers import SuggestingGroup

# Create main app with custom group class
app = typer.Typer(
    name="autoplanner",
    cls=SuggestingGroup,
    help="Auto-schedule project tasks into working hours",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(config.app, name="config", help="Configuration management")

# Add top-level commands
app.command("version")(version_command.version)
app.command("plan")(plan_command.plan)
app.command("tasks")(plan_command.tasks)
app.command("events")(plan_command.events)
app.command("check")(plan_command.check)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
