"""Git access through a git MCP server.

Every logical request opens its own connection: the git MCP server is
spawned as a subprocess scoped to the repository, the requested tools are
called in order, and the connection is torn down before returning.

Contains:
- MCPConnection: A live stdio connection to the git MCP server
- open_connection: Spawn the server and initialize an MCP session
- GitSession: The named git tools available inside with_repository
- with_repository: Run an operation against one short-lived connection
"""

import logging
import os
from contextlib import AsyncExitStack
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar

import anyio
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from smartcommit.config import AppConfig
from smartcommit.git.exceptions import GitError, GitOperationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

REPO_PATH_PLACEHOLDER = "{repo_path}"

TOOL_STATUS = "git_status"
TOOL_LOG = "git_log"
TOOL_DIFF_UNSTAGED = "git_diff_unstaged"
TOOL_COMMIT = "git_commit"


class Connection(Protocol):
    """What with_repository needs from a connection."""

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any: ...

    async def close(self) -> None: ...


Connector = Callable[[str, AppConfig], Awaitable[Connection]]


class MCPConnection:
    """A stdio connection to a git MCP server subprocess."""

    def __init__(self, session: ClientSession, exit_stack: AsyncExitStack):
        self._session = session
        self._exit_stack = exit_stack

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        return await self._session.call_tool(name, arguments=arguments)

    async def close(self) -> None:
        # Closes the session, then terminates the server process
        await self._exit_stack.aclose()


def normalize_repo_path(repo_path: Optional[str]) -> str:
    """Return an absolute repository path; empty means the current directory.

    Raises:
        TypeError: If repo_path is not a string.
    """
    if repo_path is None:
        repo_path = ""
    if not isinstance(repo_path, str):
        raise TypeError(f"Repository path must be a string, got {type(repo_path).__name__}")
    return os.path.abspath(os.path.expanduser(repo_path.strip() or "."))


def build_server_parameters(repo_path: str, config: AppConfig) -> StdioServerParameters:
    """Build the command line that launches the git MCP server for repo_path."""
    command = [part.replace(REPO_PATH_PLACEHOLDER, repo_path) for part in config.git_server_command]
    if not command:
        raise GitOperationError("No git server command configured")
    return StdioServerParameters(command=command[0], args=command[1:], env=dict(os.environ))


async def open_connection(repo_path: str, config: AppConfig) -> MCPConnection:
    """Spawn the git MCP server and initialize a client session.

    Args:
        repo_path: Absolute path of the repository the server is scoped to.
        config: Application configuration.

    Returns:
        An initialized MCPConnection. The caller must close it.

    Raises:
        GitOperationError: If the server does not finish initializing within
            config.git_timeout seconds.
    """
    params = build_server_parameters(repo_path, config)
    logger.debug("Starting git MCP server: %s %s", params.command, " ".join(params.args))

    exit_stack = AsyncExitStack()
    try:
        read_stream, write_stream = await exit_stack.enter_async_context(stdio_client(params))
        session = await exit_stack.enter_async_context(ClientSession(read_stream, write_stream))
        # Only the handshake is bounded; the scope must not span the task groups above
        with anyio.fail_after(config.git_timeout):
            await session.initialize()
    except TimeoutError as e:
        await exit_stack.aclose()
        raise GitOperationError(
            f"git MCP server did not initialize within {config.git_timeout}s"
        ) from e
    except Exception:
        await exit_stack.aclose()
        raise

    return MCPConnection(session, exit_stack)


def _content_text(content: Any) -> str:
    if not isinstance(content, list):
        return str(content)
    return "\n".join(str(getattr(item, "text", item)) for item in content)


def extract_text(tool: str, result: Any) -> str:
    """Return the text payload of a tool result.

    Args:
        tool: Tool name, for error messages.
        result: The CallToolResult returned by the server.

    Returns:
        The text of the first content item, or "" when there is no content.

    Raises:
        GitOperationError: If the tool reported an error or the payload is malformed.
    """
    if getattr(result, "isError", False):
        detail = _content_text(getattr(result, "content", None))
        raise GitOperationError(f"MCP tool error from {tool}: {detail}", detail=detail)

    content = getattr(result, "content", None)
    if not isinstance(content, list):
        raise GitOperationError(f"Malformed response from {tool}: missing content")
    if not content:
        return ""

    first = content[0]
    text = getattr(first, "text", None)
    if getattr(first, "type", "text") != "text" or not isinstance(text, str):
        raise GitOperationError(f"Malformed response from {tool}: expected text content")
    return text


class GitSession:
    """The git tools callable on an open connection, bound to one repository."""

    def __init__(self, connection: Connection, repo_path: str, timeout: Optional[float] = None):
        self.connection = connection
        self.repo_path = repo_path
        self.timeout = timeout

    async def call(self, tool: str, **arguments: Any) -> str:
        """Call a git tool with repo_path filled in and return its text."""
        arguments = {"repo_path": self.repo_path, **arguments}
        logger.debug("Calling %s for %s", tool, self.repo_path)

        try:
            with anyio.fail_after(self.timeout):
                result = await self.connection.call_tool(tool, arguments)
        except TimeoutError as e:
            raise GitOperationError(f"{tool} timed out after {self.timeout}s") from e
        except Exception as e:
            raise GitOperationError(f"{tool} failed: {e}") from e

        return extract_text(tool, result)

    async def status(self) -> str:
        return await self.call(TOOL_STATUS)

    async def log(self, max_count: int = 1) -> str:
        return await self.call(TOOL_LOG, max_count=max_count)

    async def diff_unstaged(self) -> str:
        return await self.call(TOOL_DIFF_UNSTAGED)

    async def commit(self, message: str) -> str:
        return await self.call(TOOL_COMMIT, message=message)


async def with_repository(
    repo_path: Optional[str],
    operation: Callable[[GitSession], Awaitable[T]],
    *,
    config: Optional[AppConfig] = None,
    connect: Optional[Connector] = None,
) -> T:
    """Run an operation against a fresh git MCP connection.

    The connection is closed exactly once on every exit path before this
    function returns or raises.

    Args:
        repo_path: Repository path; empty means the current directory.
        operation: Async callable receiving a GitSession.
        config: Application configuration. Defaults to AppConfig().
        connect: Connection factory. Defaults to open_connection.

    Returns:
        Whatever the operation returns.

    Raises:
        GitOperationError: If connecting, a tool call, or the operation fails.
        GitError: Other git errors raised by the operation propagate unchanged.
    """
    config = config or AppConfig()
    connect = connect or open_connection
    repo_path = normalize_repo_path(repo_path)

    try:
        connection = await connect(repo_path, config)
    except Exception as e:
        logger.error("Could not connect to git MCP server for %s", repo_path, exc_info=True)
        raise GitOperationError(
            f"Failed to connect to git server for {repo_path}. "
            "Make sure you are in a git repository."
        ) from e

    try:
        return await operation(GitSession(connection, repo_path, config.git_timeout))
    except GitOperationError:
        logger.error("Git operation failed for %s", repo_path, exc_info=True)
        raise
    except GitError:
        raise
    except Exception as e:
        logger.error("Git operation failed for %s", repo_path, exc_info=True)
        raise GitOperationError(f"Git operation failed: {e}") from e
    finally:
        try:
            await connection.close()
        except Exception:
            logger.warning("Error while closing git MCP connection for %s", repo_path, exc_info=True)
