"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

from smartcommit.config import DEFAULT_MODELS, LLMProvider, get_api_key_env_var
from smartcommit.llm.base import BaseLLMProvider, LLMResult


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    provider = LLMProvider.ANTHROPIC
    default_model = DEFAULT_MODELS[LLMProvider.ANTHROPIC]

    def get_api_key(self) -> str:
        """Get the Anthropic API key.

        Raises:
            MissingAPIKeyError: If ANTHROPIC_API_KEY is not found.
        """
        return self._require_api_key(get_api_key_env_var(self.provider), "Anthropic")

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResult:
        client = Anthropic(api_key=self.get_api_key(), timeout=self.timeout, max_retries=0)

        message = client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )

        # Only text blocks carry the message
        text = "".join(block.text for block in message.content if getattr(block, "type", None) == "text")

        return LLMResult(
            text=text,
            provider=self.name,
            model=self.model,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
