"""Request and response bodies for the HTTP API.

Field names on the wire are camelCase (``repoPath``) to match the browser UI.
"""

from pydantic import BaseModel, ConfigDict, Field


class RepoRequest(BaseModel):
    """Body for endpoints that only need a repository."""

    model_config = ConfigDict(populate_by_name=True)

    repo_path: str = Field(default=".", alias="repoPath")


class CommitRequest(RepoRequest):
    """Body for POST /commit."""

    message: str = ""


class GenerateCommitResponse(BaseModel):
    message: str
    provider: str
    model: str


class CommitResponse(BaseModel):
    success: bool
    output: str


class ErrorResponse(BaseModel):
    error: str
