"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when API key is not set
- ProviderExhaustedError: Raised when no provider produced a message
- NoProviderConfiguredError: No provider has a credential configured
- AllProvidersFailedError: Every configured provider failed
"""

from smartcommit.config import API_KEY_ENV_VARS


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


def _credential_hint() -> str:
    env_vars = ", ".join(API_KEY_ENV_VARS.values())
    return f"Please set one of {env_vars} in your environment or .env file."


class ProviderExhaustedError(LLMError):
    """Raised when the drafting chain could not produce a commit message."""

    pass


class NoProviderConfiguredError(ProviderExhaustedError):
    """Raised when no LLM provider has a credential configured."""

    def __init__(self, message: str | None = None):
        super().__init__(message or f"No LLM API key configured. {_credential_hint()}")


class AllProvidersFailedError(ProviderExhaustedError):
    """Raised when every configured LLM provider failed or returned nothing."""

    def __init__(self, attempted: list[str] | None = None):
        self.attempted = list(attempted or [])
        tried = ", ".join(self.attempted) or "none"
        super().__init__(
            f"All LLM providers failed to generate a commit message (tried: {tried}). "
            f"Check your API keys: {_credential_hint()}"
        )
