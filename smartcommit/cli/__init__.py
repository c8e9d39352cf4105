"""CLI entry point for smartcommit.

Combines the web server, the git commands and the configuration
subcommands into a single interface.
"""

import typer

from smartcommit import __version__
from smartcommit.cli.config import config_app
from smartcommit.cli.git import commit_command, draft_command, status_command
from smartcommit.cli.serve import serve_command

app = typer.Typer(
    name="smartcommit",
    help="smartcommit: draft git commit messages with LLMs through a git MCP server",
    add_completion=False,
)

app.add_typer(config_app, name="config")

app.command("serve")(serve_command)
app.command("status")(status_command)
app.command("draft")(draft_command)
app.command("commit")(commit_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"smartcommit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Draft git commit messages with LLMs."""


__all__ = ["app"]
