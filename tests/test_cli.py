"""Tests for smartcommit.cli module."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from typer.testing import CliRunner

from smartcommit import __version__
from smartcommit.cli import app
from smartcommit.config import AppConfig, LLMProvider, load_config
from smartcommit.git import DiffPayload, GitOperationError, NoStagedChangesError, RepositoryStatus
from smartcommit.global_config import GlobalConfigError, save_global_config
from smartcommit.llm import NoProviderConfiguredError
from smartcommit.llm.base import LLMResult


runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_config(mocker):
    """Skip reading files and configuring logging for every command."""
    config = AppConfig(api_keys={LLMProvider.GROQ: "key"})
    mocker.patch("smartcommit.cli.utils.load_config", return_value=config)
    mocker.patch("smartcommit.cli.utils.configure_logging")
    return config


@pytest.fixture
def mock_drafter(mocker):
    drafter = MagicMock()
    drafter.draft.return_value = LLMResult(text="feat: add login", provider="groq", model="m")
    mocker.patch("smartcommit.cli.git.CommitMessageDrafter.from_config", return_value=drafter)
    return drafter


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestStatusCommand:
    """Tests for smartcommit status command."""

    def test_prints_sections(self, mocker):
        mocker.patch(
            "smartcommit.cli.git.get_status",
            new=AsyncMock(return_value=RepositoryStatus(
                branch="feature/login",
                staged=["src/auth.py"],
                unstaged=["setup.cfg"],
                untracked=["notes.txt", "todo.md"],
            )),
        )

        result = runner.invoke(app, ["status", "/repo"])

        assert result.exit_code == 0
        assert "Branch: feature/login" in result.output
        assert "Staged (1):" in result.output
        assert "Untracked (2):" in result.output
        assert "todo.md" in result.output

    def test_clean_tree(self, mocker):
        mocker.patch("smartcommit.cli.git.get_status", new=AsyncMock(return_value=RepositoryStatus()))

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "No changes detected" in result.output

    def test_git_error(self, mocker):
        mocker.patch(
            "smartcommit.cli.git.get_status",
            new=AsyncMock(side_effect=GitOperationError("not a repo")),
        )

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "Git error" in result.output

    def test_bad_config_value_exits_cleanly(self, mocker, config_dir):
        """Test that an unconvertible config value ends with a message, not a traceback."""
        save_global_config({"port": "eighty"})
        mocker.patch(
            "smartcommit.cli.utils.load_config",
            side_effect=lambda: load_config(env={}, load_env_file=False),
        )

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        assert "port" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_bad_config_exits(self, mocker):
        mocker.patch("smartcommit.cli.utils.load_config", side_effect=GlobalConfigError("bad yaml"))

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestDraftCommand:
    """Tests for smartcommit draft command."""

    def test_prints_message(self, mocker, mock_drafter):
        mocker.patch(
            "smartcommit.cli.git.get_diff_and_files",
            new=AsyncMock(return_value=DiffPayload(diff="+x", files="M  a.py")),
        )

        result = runner.invoke(app, ["draft", "/repo"])

        assert result.exit_code == 0
        assert "feat: add login" in result.output
        mock_drafter.draft.assert_called_once_with("+x", "M  a.py")

    def test_no_staged_changes(self, mocker, mock_drafter):
        mocker.patch(
            "smartcommit.cli.git.get_diff_and_files",
            new=AsyncMock(side_effect=NoStagedChangesError("No staged changes found.")),
        )

        result = runner.invoke(app, ["draft"])

        assert result.exit_code == 1
        assert "No staged changes" in result.output
        mock_drafter.draft.assert_not_called()

    def test_llm_error(self, mocker, mock_drafter):
        mocker.patch(
            "smartcommit.cli.git.get_diff_and_files",
            new=AsyncMock(return_value=DiffPayload(diff="+x", files="M  a.py")),
        )
        mock_drafter.draft.side_effect = NoProviderConfiguredError()

        result = runner.invoke(app, ["draft"])

        assert result.exit_code == 1
        assert "LLM error" in result.output


class TestCommitCommand:
    """Tests for smartcommit commit command."""

    def test_commit_with_message(self, mocker, mock_drafter):
        mock_commit = mocker.patch(
            "smartcommit.cli.git.commit_changes",
            new=AsyncMock(return_value="Changes committed successfully"),
        )

        result = runner.invoke(app, ["commit", "/repo", "-m", "fix: typo"])

        assert result.exit_code == 0
        assert "Changes committed successfully" in result.output
        assert mock_commit.call_args.args[:2] == ("/repo", "fix: typo")
        mock_drafter.draft.assert_not_called()

    def test_empty_message_rejected(self, mocker):
        mock_commit = mocker.patch("smartcommit.cli.git.commit_changes", new=AsyncMock())

        result = runner.invoke(app, ["commit", "-m", "   "])

        assert result.exit_code == 1
        assert "Commit message is required" in result.output
        mock_commit.assert_not_called()

    def test_drafts_and_commits_with_yes(self, mocker, mock_drafter):
        mocker.patch(
            "smartcommit.cli.git.get_diff_and_files",
            new=AsyncMock(return_value=DiffPayload(diff="+x", files="M  a.py")),
        )
        mock_commit = mocker.patch(
            "smartcommit.cli.git.commit_changes",
            new=AsyncMock(return_value="ok"),
        )

        result = runner.invoke(app, ["commit", "--yes"])

        assert result.exit_code == 0
        assert mock_commit.call_args.args[1] == "feat: add login"

    def test_declined_confirmation(self, mocker, mock_drafter):
        mocker.patch(
            "smartcommit.cli.git.get_diff_and_files",
            new=AsyncMock(return_value=DiffPayload(diff="+x", files="M  a.py")),
        )
        mock_commit = mocker.patch("smartcommit.cli.git.commit_changes", new=AsyncMock())

        result = runner.invoke(app, ["commit"], input="n\n")

        assert result.exit_code == 0
        assert "Commit cancelled" in result.output
        mock_commit.assert_not_called()

    def test_git_error(self, mocker):
        mocker.patch(
            "smartcommit.cli.git.commit_changes",
            new=AsyncMock(side_effect=GitOperationError("nothing to commit")),
        )

        result = runner.invoke(app, ["commit", "-m", "fix: x"])

        assert result.exit_code == 1
        assert "Git error" in result.output


class TestConfigCommands:
    """Tests for smartcommit config subcommands."""

    def test_init_writes_file(self, config_dir):
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert (config_dir / "config.yaml").exists()

    def test_set_key(self, config_dir):
        result = runner.invoke(app, ["config", "set-key", "groq"], input="gsk-secret\n")

        assert result.exit_code == 0
        assert "GROQ_API_KEY=gsk-secret" in (config_dir / "credentials").read_text()

    def test_set_key_invalid_provider(self, config_dir):
        result = runner.invoke(app, ["config", "set-key", "cohere"])

        assert result.exit_code == 1
        assert "Invalid provider" in result.output

    def test_set_model_warns_on_unknown(self, config_dir):
        result = runner.invoke(app, ["config", "set-model", "openai", "gpt-custom"])

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert "gpt-custom" in (config_dir / "config.yaml").read_text()

    def test_set_order(self, config_dir):
        result = runner.invoke(app, ["config", "set-order", "anthropic", "groq"])

        assert result.exit_code == 0
        assert "anthropic -> groq" in result.output

    def test_set_order_rejects_duplicates(self, config_dir):
        result = runner.invoke(app, ["config", "set-order", "groq", "groq"])

        assert result.exit_code == 1

    def test_show_masks_keys(self, config_dir, mocker):
        mocker.patch.dict("os.environ", {"GROQ_API_KEY": "gsk_1234567890abcdef"}, clear=True)
        mocker.patch("smartcommit.config.load_dotenv")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "gsk_1234...cdef" in result.output
        assert "gsk_1234567890abcdef" not in result.output
        assert "OPENAI_API_KEY: not set" in result.output

    def test_list_providers(self):
        result = runner.invoke(app, ["config", "list-providers"])

        assert result.exit_code == 0
        assert "groq (GROQ_API_KEY)" in result.output
        assert "claude-3-5-sonnet-20241022" in result.output
