"""Git-related exception classes.

Contains all exception classes for git operations:
- GitError: Base exception for git-related errors
- GitOperationError: Raised when talking to the git MCP server fails
- NoStagedChangesError: Raised when there are no staged changes to describe
- EmptyCommitMessageError: Raised when a commit message is blank
"""

from typing import Optional


class GitError(Exception):
    """Base exception for git-related errors."""

    pass


class GitOperationError(GitError):
    """Raised when a git MCP operation fails.

    Covers connection failures, errors reported by the remote tool and
    malformed payloads. The remote error payload, when there is one, is
    kept in ``detail``; the underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail


class NoStagedChangesError(GitError):
    """Raised when there are no staged changes."""

    pass


class EmptyCommitMessageError(GitError):
    """Raised when the commit message is empty or whitespace only."""

    pass
