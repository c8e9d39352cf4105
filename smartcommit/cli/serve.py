"""CLI command running the web app."""

import typer
import uvicorn

from smartcommit.cli.utils import load_cli_config


def serve_command(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes (development)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Serve the browser UI and HTTP API."""
    config = load_cli_config(verbose)

    host = host or config.host
    port = port or config.port
    typer.echo(f"Serving smartcommit on http://{host}:{port}", err=True)

    uvicorn.run(
        "smartcommit.web.app:create_app_from_env",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="debug" if verbose else config.log_level.lower(),
    )
