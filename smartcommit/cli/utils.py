"""Shared helpers for CLI commands."""

import typer

from smartcommit.config import AppConfig, load_config
from smartcommit.global_config import GlobalConfigError
from smartcommit.logging_config import configure_logging


def load_cli_config(verbose: bool = False) -> AppConfig:
    """Load configuration and set up logging, exiting with code 1 on bad config."""
    try:
        config = load_config()
    except GlobalConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    configure_logging("DEBUG" if verbose else config.log_level)
    return config


def print_file_section(title: str, files: list[str]) -> None:
    if not files:
        return
    typer.echo(f"{title} ({len(files)}):")
    for path in files:
        typer.echo(f"  {path}")
