"""Tests for smartcommit.web.app module."""

import os

import pytest
from fastapi.testclient import TestClient

from smartcommit.config import AppConfig, LLMProvider
from smartcommit.llm import CommitMessageDrafter
from smartcommit.web.app import (
    COMMIT_FAILED_MESSAGE,
    GENERATE_FAILED_MESSAGE,
    STATUS_FAILED_MESSAGE,
    create_app,
)


@pytest.fixture
def make_client(app_config, make_connector, fake_connection):
    """Build a TestClient around a fake git connection and the given providers."""

    def factory(providers=(), connect=None):
        app = create_app(
            app_config,
            drafter=CommitMessageDrafter(list(providers)),
            connect=connect or make_connector(fake_connection),
        )
        return TestClient(app)

    return factory


class TestIndexAndHealth:
    """Tests for the page and health endpoints."""

    def test_index_serves_page(self, make_client):
        response = make_client().get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/generate-commit" in response.text

    def test_health(self, make_client):
        response = make_client().get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestStatusEndpoint:
    """Tests for POST /status."""

    def test_returns_parsed_status(self, make_client, fake_connection, sample_status_text):
        fake_connection.responses["git_status"] = sample_status_text

        response = make_client().post("/status", json={"repoPath": "/repo"})

        assert response.status_code == 200
        assert response.json() == {
            "branch": "feature/login",
            "staged": ["src/auth.py", "README.md"],
            "unstaged": ["setup.cfg"],
            "untracked": ["notes.txt", "scripts/run.sh"],
        }
        assert fake_connection.calls[0] == ("git_status", {"repo_path": "/repo"})

    def test_missing_repo_path_uses_cwd(self, make_client, make_connector, fake_connection):
        connect = make_connector(fake_connection)

        response = make_client(connect=connect).post("/status", json={})

        assert response.status_code == 200
        assert connect.opened == [os.path.abspath(".")]

    def test_git_failure_is_500(self, make_client, fake_connection, text_tool_result):
        fake_connection.responses["git_status"] = text_tool_result("fatal: not a git repository", is_error=True)

        response = make_client().post("/status", json={"repoPath": "/nowhere"})

        assert response.status_code == 500
        assert response.json() == {"error": STATUS_FAILED_MESSAGE}
        assert "fatal" not in response.text

    def test_invalid_body_is_400(self, make_client):
        response = make_client().post("/status", json={"repoPath": 42})

        assert response.status_code == 400
        assert "error" in response.json()


class TestGenerateCommitEndpoint:
    """Tests for POST /generate-commit."""

    def test_returns_first_successful_draft(
        self, make_client, make_provider, fake_connection, sample_status_text, sample_diff
    ):
        """Test that a failing provider is skipped and the next one's message returned."""
        fake_connection.responses["git_status"] = sample_status_text
        fake_connection.responses["git_diff_unstaged"] = sample_diff
        provider_a = make_provider(LLMProvider.GROQ, error=RuntimeError("rate limited"))
        provider_b = make_provider(LLMProvider.OPENAI, reply="fix: correct parsing")
        provider_c = make_provider(LLMProvider.ANTHROPIC, reply="unused")

        response = make_client([provider_a, provider_b, provider_c]).post(
            "/generate-commit", json={"repoPath": "/repo"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "fix: correct parsing",
            "provider": "openai",
            "model": "openai-model",
        }
        assert provider_c.calls == []
        _, user_prompt = provider_b.calls[0]
        assert "new file:   src/auth.py" in user_prompt
        assert "+version = 0.2.0" not in user_prompt

    def test_no_staged_changes_is_400(self, make_client, make_provider, fake_connection, clean_status_text):
        fake_connection.responses["git_status"] = clean_status_text
        provider = make_provider(LLMProvider.GROQ, reply="unused")

        response = make_client([provider]).post("/generate-commit", json={"repoPath": "/repo"})

        assert response.status_code == 400
        assert response.json() == {"error": "No staged changes found. Please stage your changes first."}
        assert provider.calls == []

    def test_no_providers_is_500_with_hint(self, make_client, fake_connection, sample_status_text):
        fake_connection.responses["git_status"] = sample_status_text

        response = make_client([]).post("/generate-commit", json={"repoPath": "/repo"})

        assert response.status_code == 500
        assert "GROQ_API_KEY" in response.json()["error"]

    def test_all_providers_fail_is_500(self, make_client, make_provider, fake_connection, sample_status_text):
        fake_connection.responses["git_status"] = sample_status_text
        providers = [
            make_provider(LLMProvider.GROQ, error=RuntimeError("down")),
            make_provider(LLMProvider.OPENAI, reply=""),
        ]

        response = make_client(providers).post("/generate-commit", json={"repoPath": "/repo"})

        assert response.status_code == 500
        assert "All LLM providers failed" in response.json()["error"]

    def test_git_failure_is_500(self, make_client, fake_connection):
        fake_connection.responses["git_status"] = RuntimeError("pipe closed")

        response = make_client().post("/generate-commit", json={"repoPath": "/repo"})

        assert response.status_code == 500
        assert response.json() == {"error": GENERATE_FAILED_MESSAGE}


class TestCommitEndpoint:
    """Tests for POST /commit."""

    def test_commits(self, make_client, fake_connection):
        fake_connection.responses["git_commit"] = "Changes committed successfully with hash abc123"

        response = make_client().post("/commit", json={"repoPath": "/repo", "message": "feat: add login"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "output": "Changes committed successfully with hash abc123",
        }

    def test_empty_output_reports_success(self, make_client, fake_connection):
        fake_connection.responses["git_commit"] = ""

        response = make_client().post("/commit", json={"repoPath": "/repo", "message": "chore: tidy"})

        assert response.json() == {"success": True, "output": "Commit successful"}

    @pytest.mark.parametrize("body", [{"repoPath": "/repo"}, {"repoPath": "/repo", "message": "   "}])
    def test_empty_message_is_400(self, body, make_client, make_connector, fake_connection):
        connect = make_connector(fake_connection)

        response = make_client(connect=connect).post("/commit", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Commit message is required"}
        assert connect.opened == []

    def test_git_failure_is_500(self, make_client, fake_connection, text_tool_result):
        fake_connection.responses["git_commit"] = text_tool_result("nothing to commit", is_error=True)

        response = make_client().post("/commit", json={"repoPath": "/repo", "message": "fix: x"})

        assert response.status_code == 500
        assert response.json() == {"error": COMMIT_FAILED_MESSAGE}


class TestCreateApp:
    """Tests for create_app."""

    def test_builds_drafter_from_config(self):
        config = AppConfig(api_keys={LLMProvider.OPENAI: "key"})

        app = create_app(config)

        assert [p.name for p in app.state.drafter.providers] == ["openai"]
        assert app.state.config is config
