"""Commit message drafting with provider failover.

Providers are tried one after another in priority order. A provider that
raises or returns an empty message is skipped; the first non-empty message
wins. Nothing is retried.
"""

import logging
from typing import Optional, Sequence

from smartcommit.config import AppConfig
from smartcommit.llm.base import BaseLLMProvider, LLMResult
from smartcommit.llm.exceptions import AllProvidersFailedError, NoProviderConfiguredError
from smartcommit.llm.prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)


class CommitMessageDrafter:
    """Draft commit messages from an ordered list of providers."""

    def __init__(self, providers: Sequence[BaseLLMProvider], system_prompt: str = SYSTEM_PROMPT):
        self.providers = list(providers)
        self.system_prompt = system_prompt

    @classmethod
    def from_config(cls, config: AppConfig) -> "CommitMessageDrafter":
        """Build a drafter using every provider that has a credential in config."""
        # Import here to avoid circular dependency
        from smartcommit.llm import build_providers

        return cls(build_providers(config))

    def draft(self, diff: str, files: str) -> LLMResult:
        """Draft a commit message.

        Args:
            diff: Raw diff text.
            files: Raw listing of changed files.

        Returns:
            The LLMResult of the first provider that produced a non-empty message.

        Raises:
            NoProviderConfiguredError: If there are no providers. No calls are made.
            AllProvidersFailedError: If every provider failed or returned nothing.
        """
        if not self.providers:
            raise NoProviderConfiguredError()

        user_prompt = build_user_prompt(diff, files)
        attempted = []

        for provider in self.providers:
            attempted.append(provider.name)
            try:
                result = provider.generate(self.system_prompt, user_prompt)
            except Exception as e:
                logger.warning("%s failed to draft a commit message: %s", provider.name, e)
                continue

            message = (result.text or "").strip()
            if not message:
                logger.warning("%s returned an empty commit message", provider.name)
                continue

            logger.info(
                "Drafted commit message with %s (%s, %d in / %d out tokens)",
                provider.name, result.model, result.input_tokens, result.output_tokens,
            )
            result.text = message
            return result

        raise AllProvidersFailedError(attempted)


def draft_message(
    diff: str,
    files: str,
    config: Optional[AppConfig] = None,
    providers: Optional[Sequence[BaseLLMProvider]] = None,
) -> str:
    """Draft a commit message and return its text.

    Args:
        diff: Raw diff text.
        files: Raw listing of changed files.
        config: Configuration used to build providers when none are given.
        providers: Explicit providers, in priority order.

    Returns:
        The commit message.
    """
    if providers is None:
        drafter = CommitMessageDrafter.from_config(config or AppConfig())
    else:
        drafter = CommitMessageDrafter(providers)
    return drafter.draft(diff, files).text
