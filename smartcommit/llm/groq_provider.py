"""Groq provider implementation."""

from groq import Groq

from smartcommit.config import DEFAULT_MODELS, LLMProvider, get_api_key_env_var
from smartcommit.llm.base import BaseLLMProvider, LLMResult


class GroqProvider(BaseLLMProvider):
    """Groq LLM provider (fast inference for open-source models)."""

    provider = LLMProvider.GROQ
    default_model = DEFAULT_MODELS[LLMProvider.GROQ]

    def get_api_key(self) -> str:
        """Get the Groq API key.

        Raises:
            MissingAPIKeyError: If GROQ_API_KEY is not found.
        """
        return self._require_api_key(get_api_key_env_var(self.provider), "Groq")

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResult:
        client = Groq(api_key=self.get_api_key(), timeout=self.timeout, max_retries=0)

        # OpenAI-compatible chat completions API
        response = client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )

        usage = response.usage
        return LLMResult(
            text=response.choices[0].message.content or "",
            provider=self.name,
            model=self.model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
