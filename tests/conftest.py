"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest
from mcp.types import CallToolResult, TextContent

from smartcommit.config import AppConfig, LLMProvider
from smartcommit.llm.base import BaseLLMProvider, LLMResult


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point ~/.smartcommit at a temporary directory."""
    mock_dir = temp_dir / ".smartcommit"
    mocker.patch("smartcommit.global_config._CONFIG_DIR", mock_dir)
    return mock_dir


@pytest.fixture
def sample_status_text():
    """Output of the git_status tool for a repo with every kind of change."""
    return (
        "Repository status:\n"
        "On branch feature/login\n"
        "Changes to be committed:\n"
        '  (use "git restore --staged <file>..." to unstage)\n'
        "\tnew file:   src/auth.py\n"
        "\tmodified:   README.md\n"
        "\n"
        "Changes not staged for commit:\n"
        '  (use "git add <file>..." to update what will be committed)\n'
        '  (use "git restore <file>..." to discard changes in working directory)\n'
        "\tmodified:   setup.cfg\n"
        "\n"
        "Untracked files:\n"
        '  (use "git add <file>..." to include in what will be committed)\n'
        "\tnotes.txt\n"
        "\tscripts/run.sh\n"
    )


@pytest.fixture
def clean_status_text():
    """Output of the git_status tool for a clean working tree."""
    return (
        "Repository status:\n"
        "On branch main\n"
        "nothing to commit, working tree clean\n"
    )


@pytest.fixture
def sample_diff():
    return """diff --git a/setup.cfg b/setup.cfg
index 1234567..abcdefg 100644
--- a/setup.cfg
+++ b/setup.cfg
@@ -1,3 +1,4 @@
 [metadata]
 name = demo
+version = 0.2.0
"""


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


class FakeConnection:
    """In-memory stand-in for a git MCP connection."""

    def __init__(self, responses=None):
        # tool name -> CallToolResult, str, or exception to raise
        self.responses = dict(responses or {})
        self.calls = []
        self.close_count = 0

    async def call_tool(self, name, arguments):
        self.calls.append((name, arguments))
        response = self.responses.get(name, "")
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, str):
            return text_result(response)
        return response

    async def close(self):
        self.close_count += 1


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def make_connector():
    """Build a connector returning the given FakeConnection, recording each connect."""

    def factory(connection):
        opened = []

        async def connect(repo_path, config):
            opened.append(repo_path)
            return connection

        connect.opened = opened
        return connect

    return factory


@pytest.fixture
def text_tool_result():
    return text_result


class FakeProvider(BaseLLMProvider):
    """Provider returning a canned reply or raising a canned error."""

    def __init__(self, provider=LLMProvider.GROQ, reply="", error=None):
        super().__init__(api_key="test-key", model=f"{provider.value}-model")
        self.provider = provider
        self.reply = reply
        self.error = error
        self.calls = []

    def get_api_key(self) -> str:
        return self.api_key

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResult:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return LLMResult(
            text=self.reply,
            provider=self.name,
            model=self.model,
            input_tokens=10,
            output_tokens=5,
        )


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def app_config():
    """Configuration with every provider keyed and a harmless git command."""
    return AppConfig(
        api_keys={
            LLMProvider.GROQ: "groq-key",
            LLMProvider.OPENAI: "openai-key",
            LLMProvider.ANTHROPIC: "anthropic-key",
        },
        git_server_command=("mcp-server-git", "--repository", "{repo_path}"),
    )
