"""LLM provider module for smartcommit.

This module provides a unified interface to the supported LLM providers
and the failover chain that drafts commit messages with them.
"""

from smartcommit.config import AppConfig, LLMProvider
from smartcommit.llm.base import BaseLLMProvider, LLMResult
from smartcommit.llm.exceptions import (
    AllProvidersFailedError,
    LLMError,
    MissingAPIKeyError,
    NoProviderConfiguredError,
    ProviderExhaustedError,
)
from smartcommit.llm.drafter import CommitMessageDrafter, draft_message


def get_provider(provider: LLMProvider, config: AppConfig | None = None) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        provider: The provider to use.
        config: Supplies the API key, model, limits and timeout. Defaults to AppConfig().

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    config = config or AppConfig()

    if provider == LLMProvider.GROQ:
        from smartcommit.llm.groq_provider import GroqProvider

        provider_cls = GroqProvider

    elif provider == LLMProvider.OPENAI:
        from smartcommit.llm.openai_provider import OpenAIProvider

        provider_cls = OpenAIProvider

    elif provider == LLMProvider.ANTHROPIC:
        from smartcommit.llm.anthropic_provider import AnthropicProvider

        provider_cls = AnthropicProvider

    else:
        raise ValueError(f"Unsupported provider: {provider}")

    return provider_cls(
        api_key=config.api_key(provider),
        model=config.model_for(provider),
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        timeout=config.llm_timeout,
    )


def build_providers(config: AppConfig) -> list[BaseLLMProvider]:
    """Build the providers that have a credential, in priority order."""
    return [get_provider(provider, config) for provider in config.configured_providers()]


__all__ = [
    "BaseLLMProvider",
    "LLMResult",
    "LLMError",
    "MissingAPIKeyError",
    "ProviderExhaustedError",
    "NoProviderConfiguredError",
    "AllProvidersFailedError",
    "CommitMessageDrafter",
    "build_providers",
    "draft_message",
    "get_provider",
]
