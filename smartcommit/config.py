"""Configuration for smartcommit.

Settings are read once at startup by load_config() into an immutable
AppConfig, which is then passed explicitly to the git adapter, the drafting
chain and the web app. Sources, later ones winning:

1. Built-in defaults below
2. ~/.smartcommit/config.yaml (see smartcommit.global_config)
3. Environment variables (a repo-level .env file is loaded first)

API keys are resolved from the environment first, then from
~/.smartcommit/credentials.
"""

import os
import shlex
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from dotenv import load_dotenv


class LLMProvider(Enum):
    """Supported LLM providers."""

    GROQ = "groq"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# ============================================================
# DEFAULT VALUES
# ============================================================

# Providers are tried in this order when drafting a message
DEFAULT_PROVIDER_ORDER = (LLMProvider.GROQ, LLMProvider.OPENAI, LLMProvider.ANTHROPIC)

DEFAULT_MODELS = {
    LLMProvider.GROQ: "llama-3.3-70b-versatile",
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.ANTHROPIC: "claude-3-5-sonnet-20241022",
}

DEFAULT_MAX_TOKENS = 200
DEFAULT_TEMPERATURE = 0.7

# Seconds allowed for one provider attempt and for one git MCP tool call
DEFAULT_LLM_TIMEOUT = 30.0
DEFAULT_GIT_TIMEOUT = 60.0

# "{repo_path}" is substituted in every argument
DEFAULT_GIT_SERVER_COMMAND = ("uvx", "mcp-server-git", "--repository", "{repo_path}")

STATUS_PARSERS = ("sections", "legacy")
DEFAULT_STATUS_PARSER = "sections"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.GROQ: [
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
        "mixtral-8x7b-32768",
    ],
    LLMProvider.OPENAI: [
        "gpt-4o-mini",
        "gpt-4o",
        "gpt-4.1",
        "gpt-4.1-mini",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-3-5-sonnet-20241022",
        "claude-3-5-haiku-latest",
        "claude-sonnet-4-20250514",
    ],
}

# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.GROQ: "GROQ_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
}

# Environment overrides for non-secret settings
ENV_GIT_SERVER = "SMARTCOMMIT_GIT_SERVER"
ENV_STATUS_PARSER = "SMARTCOMMIT_STATUS_PARSER"
ENV_LOG_LEVEL = "SMARTCOMMIT_LOG_LEVEL"


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]


@dataclass(frozen=True)
class AppConfig:
    """Immutable process-wide settings.

    Attributes:
        provider_order: Providers in drafting priority order.
        models: Model name per provider.
        api_keys: API keys for the providers that have one configured.
        max_tokens: Completion token limit for every provider call.
        temperature: Sampling temperature for every provider call.
        llm_timeout: Seconds allowed for a single provider attempt.
        git_timeout: Seconds allowed for a single git MCP tool call.
        git_server_command: Command line launching the git MCP server.
        status_parser: Name of the git status parsing strategy.
        host: Bind address for the web app.
        port: Port for the web app.
        log_level: Root log level name.
    """

    provider_order: tuple[LLMProvider, ...] = DEFAULT_PROVIDER_ORDER
    models: Mapping[LLMProvider, str] = field(default_factory=lambda: dict(DEFAULT_MODELS))
    api_keys: Mapping[LLMProvider, str] = field(default_factory=dict)
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    llm_timeout: float = DEFAULT_LLM_TIMEOUT
    git_timeout: float = DEFAULT_GIT_TIMEOUT
    git_server_command: tuple[str, ...] = DEFAULT_GIT_SERVER_COMMAND
    status_parser: str = DEFAULT_STATUS_PARSER
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    def has_credential(self, provider: LLMProvider) -> bool:
        """Return True if an API key is configured for the provider."""
        return bool(self.api_keys.get(provider))

    def api_key(self, provider: LLMProvider) -> Optional[str]:
        """Return the configured API key for the provider, if any."""
        return self.api_keys.get(provider) or None

    def model_for(self, provider: LLMProvider) -> str:
        """Return the model to use for the provider."""
        return self.models.get(provider) or DEFAULT_MODELS[provider]

    def configured_providers(self) -> list[LLMProvider]:
        """Providers with a credential, in priority order."""
        return [p for p in self.provider_order if self.has_credential(p)]


def _parse_provider(name: str) -> LLMProvider:
    from smartcommit.global_config import GlobalConfigError

    try:
        return LLMProvider(str(name).lower())
    except ValueError:
        valid = ", ".join(p.value for p in LLMProvider)
        raise GlobalConfigError(f"Unknown provider '{name}'. Valid providers: {valid}")


def _parse_command(value) -> tuple[str, ...]:
    from smartcommit.global_config import GlobalConfigError

    if isinstance(value, str):
        try:
            return tuple(shlex.split(value))
        except ValueError as e:
            raise GlobalConfigError(f"Invalid git server command {value!r}: {e}") from e
    if not isinstance(value, (list, tuple)):
        raise GlobalConfigError("git_server_command must be a string or a list of arguments")
    return tuple(str(part) for part in value)


def _setting(file_config: Mapping, key: str, default, cast):
    """Read one scalar from the config file, converted with cast."""
    from smartcommit.global_config import GlobalConfigError

    value = file_config.get(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise GlobalConfigError(f"Invalid value for '{key}': {value!r}") from e


def load_config(env: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> AppConfig:
    """Load configuration from defaults, the global config file and the environment.

    Args:
        env: Environment mapping to read. Defaults to os.environ.
        load_env_file: Whether to load a .env file into os.environ first.

    Returns:
        A frozen AppConfig.

    Raises:
        GlobalConfigError: If the config file is unreadable or holds invalid values.
    """
    # Import here to avoid circular dependency
    from smartcommit import global_config
    from smartcommit.global_config import GlobalConfigError

    if load_env_file:
        load_dotenv()
    if env is None:
        env = os.environ

    file_config = global_config.load_global_config()
    credentials = global_config.load_credentials()

    provider_order = DEFAULT_PROVIDER_ORDER
    if file_config.get("provider_order"):
        if not isinstance(file_config["provider_order"], list):
            raise GlobalConfigError("'provider_order' must be a list of provider names")
        provider_order = tuple(_parse_provider(name) for name in file_config["provider_order"])

    models = dict(DEFAULT_MODELS)
    file_models = file_config.get("models") or {}
    if not isinstance(file_models, dict):
        raise GlobalConfigError("'models' must be a mapping of provider name to model")
    for name, model in file_models.items():
        models[_parse_provider(name)] = model

    api_keys = {}
    for provider, env_var in API_KEY_ENV_VARS.items():
        api_key = env.get(env_var) or credentials.get(env_var)
        if api_key:
            api_keys[provider] = api_key

    git_server_command = DEFAULT_GIT_SERVER_COMMAND
    if env.get(ENV_GIT_SERVER):
        git_server_command = _parse_command(env[ENV_GIT_SERVER])
    elif file_config.get("git_server_command"):
        git_server_command = _parse_command(file_config["git_server_command"])

    status_parser = env.get(ENV_STATUS_PARSER) or file_config.get("status_parser") or DEFAULT_STATUS_PARSER
    if status_parser not in STATUS_PARSERS:
        raise GlobalConfigError(
            f"Unknown status parser '{status_parser}'. Valid parsers: {', '.join(STATUS_PARSERS)}"
        )

    return AppConfig(
        provider_order=provider_order,
        models=models,
        api_keys=api_keys,
        max_tokens=_setting(file_config, "max_tokens", DEFAULT_MAX_TOKENS, int),
        temperature=_setting(file_config, "temperature", DEFAULT_TEMPERATURE, float),
        llm_timeout=_setting(file_config, "llm_timeout", DEFAULT_LLM_TIMEOUT, float),
        git_timeout=_setting(file_config, "git_timeout", DEFAULT_GIT_TIMEOUT, float),
        git_server_command=git_server_command,
        status_parser=status_parser,
        host=str(file_config.get("host", DEFAULT_HOST)),
        port=_setting(file_config, "port", DEFAULT_PORT, int),
        log_level=str(env.get(ENV_LOG_LEVEL) or file_config.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
    )
