"""FastAPI application serving the commit assistant.

Routes are thin: each maps one request onto one git operation (plus the
drafting chain for /generate-commit) and turns failures into a JSON
``{"error": ...}`` body. Internal details are logged, never returned.
"""

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool

from smartcommit import __version__
from smartcommit.config import AppConfig
from smartcommit.git import (
    EmptyCommitMessageError,
    GitOperationError,
    NoStagedChangesError,
    RepositoryStatus,
    commit_changes,
    get_diff_and_files,
    get_status,
)
from smartcommit.git.mcp_client import Connector
from smartcommit.llm import CommitMessageDrafter, ProviderExhaustedError
from smartcommit.web.page import INDEX_HTML
from smartcommit.web.schemas import (
    CommitRequest,
    CommitResponse,
    ErrorResponse,
    GenerateCommitResponse,
    RepoRequest,
)

logger = logging.getLogger(__name__)

STATUS_FAILED_MESSAGE = "Failed to get git status. Make sure you are in a git repository."
GENERATE_FAILED_MESSAGE = "Failed to generate commit message"
COMMIT_FAILED_MESSAGE = "Failed to commit changes. Make sure you have staged changes."

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


class APIError(Exception):
    """An error returned to the client as ``{"error": message}``."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index() -> str:
    return INDEX_HTML


@router.get("/health")
async def health_check():
    """Simple health check endpoint to confirm the API is running."""
    return {"status": "ok"}


@router.post("/status", response_model=RepositoryStatus, responses=ERROR_RESPONSES)
async def status_endpoint(body: RepoRequest, request: Request) -> RepositoryStatus:
    """Get branch and staged/unstaged/untracked files."""
    state = request.app.state
    try:
        return await get_status(body.repo_path, state.config, connect=state.connect)
    except GitOperationError as e:
        logger.error("Git status error: %s", e)
        raise APIError(500, STATUS_FAILED_MESSAGE) from e


@router.post("/generate-commit", response_model=GenerateCommitResponse, responses=ERROR_RESPONSES)
async def generate_commit_endpoint(body: RepoRequest, request: Request) -> GenerateCommitResponse:
    """Draft a commit message for the staged changes."""
    state = request.app.state
    try:
        payload = await get_diff_and_files(body.repo_path, state.config, connect=state.connect)
    except NoStagedChangesError as e:
        raise APIError(400, str(e)) from e
    except GitOperationError as e:
        logger.error("Generate commit error: %s", e)
        raise APIError(500, GENERATE_FAILED_MESSAGE) from e

    drafter: CommitMessageDrafter = state.drafter
    try:
        # Provider SDKs are synchronous
        result = await run_in_threadpool(drafter.draft, payload.diff, payload.files)
    except ProviderExhaustedError as e:
        logger.error("Generate commit error: %s", e)
        raise APIError(500, str(e)) from e

    return GenerateCommitResponse(message=result.text, provider=result.provider, model=result.model)


@router.post("/commit", response_model=CommitResponse, responses=ERROR_RESPONSES)
async def commit_endpoint(body: CommitRequest, request: Request) -> CommitResponse:
    """Commit staged changes with the given message."""
    state = request.app.state
    try:
        output = await commit_changes(body.repo_path, body.message, state.config, connect=state.connect)
    except EmptyCommitMessageError as e:
        raise APIError(400, str(e)) from e
    except GitOperationError as e:
        logger.error("Git commit error: %s", e)
        raise APIError(500, COMMIT_FAILED_MESSAGE) from e

    return CommitResponse(success=True, output=output)


async def _api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(
    config: Optional[AppConfig] = None,
    drafter: Optional[CommitMessageDrafter] = None,
    connect: Optional[Connector] = None,
) -> FastAPI:
    """Create the web application.

    Args:
        config: Application configuration. Defaults to AppConfig().
        drafter: Drafting chain. Defaults to one built from config.
        connect: Git MCP connection factory override.

    Returns:
        The FastAPI application.
    """
    config = config or AppConfig()

    app = FastAPI(
        title="Smart Git Commit Assistant",
        version=__version__,
        description="Draft and commit git commit messages with LLM providers",
    )
    app.state.config = config
    app.state.drafter = drafter or CommitMessageDrafter.from_config(config)
    app.state.connect = connect

    app.add_exception_handler(APIError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(router)

    configured = [p.value for p in config.configured_providers()]
    if configured:
        logger.info("LLM providers in priority order: %s", ", ".join(configured))
    else:
        logger.warning("No LLM API key configured; commit message drafting is unavailable")

    return app


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn: load configuration from files and the environment."""
    from smartcommit.config import load_config

    return create_app(load_config())
