"""Base classes and shared utilities for LLM providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from smartcommit.config import (
    DEFAULT_LLM_TIMEOUT,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    LLMProvider,
)
from smartcommit.llm.exceptions import LLMError, MissingAPIKeyError


@dataclass
class LLMResult:
    """Result from an LLM generation call, including token usage."""

    text: str
    provider: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Every provider offers the same capability, generate(system, prompt),
    so the drafting chain can iterate over them without knowing which
    SDK sits behind each one.
    """

    provider: LLMProvider
    default_model: str = ""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = DEFAULT_LLM_TIMEOUT,
    ):
        """Initialize the provider.

        Args:
            api_key: API key, as resolved by load_config().
            model: The model to use. Defaults to the provider's default model.
            max_tokens: Completion token limit.
            temperature: Sampling temperature.
            timeout: Seconds allowed for the API call.
        """
        self.api_key = api_key
        self.model = model or self.default_model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.provider.value

    @abstractmethod
    def get_api_key(self) -> str:
        """Get the API key for this provider.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        pass

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str) -> LLMResult:
        """Call the provider's API once.

        Raises:
            Exception: Whatever the SDK raises; generate() wraps it.
        """
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResult:
        """Generate text from a system instruction and a user prompt.

        Args:
            system_prompt: Shared instruction describing the task.
            user_prompt: The request itself.

        Returns:
            An LLMResult with the trimmed text and token usage.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For API failures.
        """
        try:
            result = self.complete(system_prompt, user_prompt)
        except LLMError:
            raise
        except Exception as e:
            raise LLMError(f"{self.name} API call failed: {e}") from e

        result.text = (result.text or "").strip()
        return result

    def _require_api_key(self, env_var_name: str, provider_name: str) -> str:
        """Return the API key given to the constructor.

        Keys are resolved once by load_config() from the environment and
        ~/.smartcommit/credentials, so nothing is looked up here.

        Args:
            env_var_name: Environment variable name, for the error message.
            provider_name: Human-readable provider name for error messages.

        Raises:
            MissingAPIKeyError: If no API key was configured.
        """
        if self.api_key:
            return self.api_key

        raise MissingAPIKeyError(
            f"{provider_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: smartcommit config set-key {provider_name.lower()}\n"
            f"  3. Manually add to ~/.smartcommit/credentials"
        )
