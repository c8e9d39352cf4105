"""Smart git commit assistant: draft commit messages from a git MCP server."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("smartcommit")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
