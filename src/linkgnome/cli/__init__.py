"""Command-line interface for linkgnome.

This package provides the Typer app and global console for all CLI commands and
user-facing output.

- app: The Typer application object, used by all CLI entrypoints and subcommands.
- console: Rich Console instance for consistent, styled output.
"""

import typer
from rich.console import Console
from rich.traceback import install

# Install rich traceback handler for all CLI commands
install(show_locals=False)

console = Console()

app = typer.Typer(
    name="linkgnome",
    help="Hardlink movies and TV episodes into a Plex-style library.",
    add_completion=True,
)


@app.callback()
def callback() -> None:
    """Hardlink movies and TV episodes into a Plex-style library."""


@app.command()
def version() -> None:
    """Show the version of linkgnome."""
    from linkgnome.__about__ import __version__

    console.print(f"LinkGnome version: [bold]{__version__}[/bold]")
