"""Global configuration management for smartcommit.

Handles user-level configuration stored in ~/.smartcommit/:
- config.yaml: Provider order, models and server settings
- credentials: API keys for LLM providers
"""

import os
import stat
from pathlib import Path
from typing import Dict, Any

import yaml

from smartcommit.config import (
    DEFAULT_GIT_SERVER_COMMAND,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODELS,
    DEFAULT_PROVIDER_ORDER,
    DEFAULT_STATUS_PARSER,
    DEFAULT_TEMPERATURE,
    LLMProvider,
)


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".smartcommit"


def get_global_config_dir() -> Path:
    """Get the global smartcommit configuration directory.

    Returns:
        Path to ~/.smartcommit/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.smartcommit/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file."""
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file."""
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.smartcommit/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except Exception as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.smartcommit/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except Exception as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _read_credentials_file(credentials_file: Path) -> Dict[str, str]:
    credentials = {}
    with open(credentials_file, "r") as f:
        for line in f:
            line = line.strip()
            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse KEY=value format
            if "=" in line:
                key, value = line.split("=", 1)
                credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.smartcommit/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        return _read_credentials_file(credentials_file)
    except Exception as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(provider_key: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        provider_key: Environment variable name (e.g., "GROQ_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = {}
    if credentials_file.exists():
        try:
            existing_creds = _read_credentials_file(credentials_file)
        except Exception as e:
            raise GlobalConfigError(f"Failed to read existing credentials: {e}")

    existing_creds[provider_key] = api_key

    try:
        with open(credentials_file, "w") as f:
            f.write("# smartcommit API credentials\n")
            f.write("# Format: PROVIDER_API_KEY=your_key_here\n\n")

            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)

    except Exception as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def set_provider_model(provider: LLMProvider, model: str) -> None:
    """Set the model used for one provider.

    Args:
        provider: The LLM provider.
        model: The model name to use.
    """
    config = load_global_config()
    models = config.get("models") or {}
    models[provider.value] = model
    config["models"] = models
    save_global_config(config)


def set_provider_order(providers: list[LLMProvider]) -> None:
    """Set the order in which providers are tried.

    Args:
        providers: Providers in priority order.
    """
    config = load_global_config()
    config["provider_order"] = [p.value for p in providers]
    save_global_config(config)


def initialize_default_config() -> None:
    """Initialize config.yaml with default values if it doesn't exist."""
    config_file = get_config_file_path()

    if config_file.exists():
        return

    default_config = {
        "provider_order": [p.value for p in DEFAULT_PROVIDER_ORDER],
        "models": {p.value: m for p, m in DEFAULT_MODELS.items()},
        "max_tokens": DEFAULT_MAX_TOKENS,
        "temperature": DEFAULT_TEMPERATURE,
        "git_server_command": list(DEFAULT_GIT_SERVER_COMMAND),
        "status_parser": DEFAULT_STATUS_PARSER,
    }

    save_global_config(default_config)


def is_configured() -> bool:
    """Check if smartcommit has a config file.

    Returns:
        True if config.yaml exists, False otherwise.
    """
    return get_config_file_path().exists()
