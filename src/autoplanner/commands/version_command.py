"""Command 'version' of autoplanner"""

import typer

from autoplanner import __version__
from autoplanner.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information"""
    console.print(__version__)
