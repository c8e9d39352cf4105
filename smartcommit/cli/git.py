"""CLI commands for inspecting, drafting and committing."""

import asyncio

import typer

from smartcommit.git import (
    EmptyCommitMessageError,
    GitError,
    get_diff_and_files,
    get_status,
    commit_changes,
    validate_commit_message,
)
from smartcommit.llm import CommitMessageDrafter, LLMError
from smartcommit.cli.utils import load_cli_config, print_file_section


def status_command(
    repo_path: str = typer.Argument(".", help="Path to the git repository"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show branch and staged, unstaged and untracked files."""
    config = load_cli_config(verbose)

    try:
        status = asyncio.run(get_status(repo_path, config))
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Branch: {status.branch}")
    print_file_section("Staged", status.staged)
    print_file_section("Unstaged", status.unstaged)
    print_file_section("Untracked", status.untracked)
    if not (status.staged or status.unstaged or status.untracked):
        typer.echo("No changes detected")


def _draft(repo_path: str, config) -> str:
    payload = asyncio.run(get_diff_and_files(repo_path, config))
    return CommitMessageDrafter.from_config(config).draft(payload.diff, payload.files).text


def draft_command(
    repo_path: str = typer.Argument(".", help="Path to the git repository"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Draft a commit message for the staged changes and print it."""
    config = load_cli_config(verbose)

    try:
        message = _draft(repo_path, config)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(message)


def commit_command(
    repo_path: str = typer.Argument(".", help="Path to the git repository"),
    message: str = typer.Option(
        None,
        "--message",
        "-m",
        help="Commit message. Drafted from the staged changes when omitted.",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Bypass confirmation prompt and commit immediately",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Commit staged changes, drafting the message first if none is given."""
    config = load_cli_config(verbose)

    try:
        if message is None:
            typer.echo("Drafting commit message...", err=True)
            message = _draft(repo_path, config)

            typer.echo("")
            typer.echo("=" * 60)
            typer.echo(message)
            typer.echo("=" * 60)

            if not yes:
                typer.echo("")
                confirm = typer.prompt(
                    "Commit with this message? [Y/n]",
                    default="y",
                    show_default=False,
                )
                if confirm.lower() not in ("y", "yes", ""):
                    typer.echo("Commit cancelled.", err=True)
                    raise typer.Exit(0)

        validate_commit_message(message)
        typer.echo("Committing...", err=True)
        output = asyncio.run(commit_changes(repo_path, message, config))

    except EmptyCommitMessageError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Commit successful!", err=True)
    typer.echo(output)
