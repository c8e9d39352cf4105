"""Web interface for smartcommit."""

from smartcommit.web.app import APIError, create_app

__all__ = ["APIError", "create_app"]
