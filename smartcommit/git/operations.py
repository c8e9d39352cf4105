"""Git operations used by the web app and the CLI.

Each function maps one request type onto a single with_repository call:
- get_status: Branch plus staged/unstaged/untracked files
- get_diff_and_files: Diff and file listing to draft a message from
- commit_changes: Commit staged changes with a message
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from smartcommit.config import AppConfig
from smartcommit.git.exceptions import EmptyCommitMessageError, NoStagedChangesError
from smartcommit.git.mcp_client import Connector, GitSession, with_repository
from smartcommit.git.status import RepositoryStatus, parse_status

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_OUTPUT = "Commit successful"

UNSTAGED_EDITS_LABEL = "Unstaged edits to staged files (not part of this commit):"

# "diff --git a/<old> b/<new>"
DIFF_HEADER_PATTERN = re.compile(r"^diff --git a/.+ b/(.+)$")


@dataclass
class DiffPayload:
    """Raw diff text plus the raw listing of changed files."""

    diff: str
    files: str


async def get_status(
    repo_path: Optional[str],
    config: Optional[AppConfig] = None,
    connect: Optional[Connector] = None,
) -> RepositoryStatus:
    """Get the structured status of a repository.

    Args:
        repo_path: Repository path; empty means the current directory.
        config: Application configuration.
        connect: Connection factory override.

    Returns:
        The parsed RepositoryStatus.
    """
    config = config or AppConfig()

    async def operation(git: GitSession) -> RepositoryStatus:
        status_text = await git.status()
        log_text = await git.log(max_count=1)
        return parse_status(status_text, log_text, strategy=config.status_parser)

    return await with_repository(repo_path, operation, config=config, connect=connect)


def select_file_diffs(diff_text: str, paths: Iterable[str]) -> str:
    """Keep only the per-file sections of a diff whose path is in paths."""
    wanted = set(paths)
    kept = []
    keep = False
    for line in diff_text.splitlines():
        header = DIFF_HEADER_PATTERN.match(line)
        if header:
            keep = header.group(1).strip() in wanted
        if keep:
            kept.append(line)
    return "\n".join(kept)


async def get_diff_and_files(
    repo_path: Optional[str],
    config: Optional[AppConfig] = None,
    connect: Optional[Connector] = None,
) -> DiffPayload:
    """Collect the diff and file listing used to draft a commit message.

    The git server only exposes the unstaged diff, which describes what the
    commit will not contain. The staged changes are therefore described by
    the status text; unstaged hunks are appended, labelled, only for files
    that also have staged changes.

    Args:
        repo_path: Repository path; empty means the current directory.
        config: Application configuration.
        connect: Connection factory override.

    Returns:
        A DiffPayload.

    Raises:
        NoStagedChangesError: If the status shows no staged files.
    """
    config = config or AppConfig()

    async def operation(git: GitSession) -> DiffPayload:
        status_text = await git.status()
        diff_text = await git.diff_unstaged()

        status = parse_status(status_text, strategy=config.status_parser)
        if not status.has_staged_changes:
            raise NoStagedChangesError("No staged changes found. Please stage your changes first.")

        diff = status_text
        staged_edits = select_file_diffs(diff_text, status.staged)
        if staged_edits.strip():
            diff = f"{status_text.rstrip()}\n\n{UNSTAGED_EDITS_LABEL}\n{staged_edits}"
        return DiffPayload(diff=diff, files=status_text)

    return await with_repository(repo_path, operation, config=config, connect=connect)


def validate_commit_message(message: Optional[str]) -> str:
    """Return the message unchanged if it has content.

    Raises:
        EmptyCommitMessageError: If the message is empty or whitespace only.
    """
    if not message or not message.strip():
        raise EmptyCommitMessageError("Commit message is required")
    return message


async def commit_changes(
    repo_path: Optional[str],
    message: Optional[str],
    config: Optional[AppConfig] = None,
    connect: Optional[Connector] = None,
) -> str:
    """Commit staged changes.

    The message is validated before any connection is opened.

    Args:
        repo_path: Repository path; empty means the current directory.
        message: Commit message.
        config: Application configuration.
        connect: Connection factory override.

    Returns:
        The git server's output, or "Commit successful" when it returns nothing.

    Raises:
        EmptyCommitMessageError: If the message is empty or whitespace only.
    """
    message = validate_commit_message(message)

    async def operation(git: GitSession) -> str:
        output = await git.commit(message)
        logger.info("Committed changes in %s", git.repo_path)
        return output or DEFAULT_COMMIT_OUTPUT

    return await with_repository(repo_path, operation, config=config, connect=connect)
