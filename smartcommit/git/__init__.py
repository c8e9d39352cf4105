"""Git access module for smartcommit.

This package talks to a git MCP server and interprets its output:
- exceptions: GitError, GitOperationError, NoStagedChangesError, EmptyCommitMessageError
- mcp_client: open_connection, with_repository, GitSession
- status: RepositoryStatus, parse_status, extract_branch
- operations: get_status, get_diff_and_files, commit_changes
"""

# Exceptions
from smartcommit.git.exceptions import (
    EmptyCommitMessageError,
    GitError,
    GitOperationError,
    NoStagedChangesError,
)

# MCP connection handling
from smartcommit.git.mcp_client import (
    GitSession,
    MCPConnection,
    open_connection,
    with_repository,
)

# Status interpretation
from smartcommit.git.status import (
    RepositoryStatus,
    extract_branch,
    get_status_parser,
    parse_status,
)

# Request-level operations
from smartcommit.git.operations import (
    DiffPayload,
    commit_changes,
    get_diff_and_files,
    get_status,
    validate_commit_message,
)


__all__ = [
    # Exceptions
    "GitError",
    "GitOperationError",
    "NoStagedChangesError",
    "EmptyCommitMessageError",
    # MCP
    "GitSession",
    "MCPConnection",
    "open_connection",
    "with_repository",
    # Status
    "RepositoryStatus",
    "extract_branch",
    "get_status_parser",
    "parse_status",
    # Operations
    "DiffPayload",
    "commit_changes",
    "get_diff_and_files",
    "get_status",
    "validate_commit_message",
]
