"""
Notes CLI.

Terminal front end for the notes API.
Built with Typer for commands and Rich for formatted output.

Usage:
    scribe --help
    scribe notes list                       # Active notes
    scribe notes list --archived            # Archived notes
    scribe notes list -q milk -t home       # Search and tag filters
    scribe notes show 3f2a                  # Show a note by id prefix
    scribe notes new "<p>Buy milk</p>" -t home
    scribe notes pin 3f2a
    scribe notes progress 3f2a 50
    scribe tags                             # Every tag in use
    scribe health status                    # Is the API up?

Options:
    --api-url         API base URL (overrides SCRIBE_API_URL and config)
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
"""

from typing import Optional

import typer

from scribe.backend.core.config import validate_project_root
from scribe.cli.commands import health_app, notes_app
from scribe.cli.commands.notes import tags as tags_command
from scribe.cli.render import console

app = typer.Typer(
    name="scribe",
    help="Scribe Notes - write, tag and organize notes from the terminal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(notes_app, name="notes")
app.add_typer(health_app, name="health")
app.command("tags")(tags_command)


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        help="Notes API base URL",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Scribe Notes CLI.
    """
    validate_project_root()
    ctx.obj = {"api_url": api_url}

    from scribe.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console")


if __name__ == "__main__":
    app()
