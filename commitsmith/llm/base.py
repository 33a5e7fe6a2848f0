"""Base classes and shared utilities for LLM providers."""

from abc import ABC, abstractmethod
from typing import Optional

from commitsmith.config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_REQUEST_TIMEOUT,
    OLLAMA_URI_ENV_VAR,
    LLMProvider,
    ProviderDescriptor,
)
from commitsmith.exceptions import ConfigurationError, EmptyResponseError
from commitsmith.global_config import ProviderConfig
from commitsmith.llm.composer import RequestPrompt

# Model families that reject any temperature other than the provider default.
# Sending one fails the whole request, so the configured value is dropped.
TEMPERATURE_LOCKED_PREFIXES = {
    LLMProvider.OPENAI: ("o1", "o3", "o4", "gpt-5"),
}


def is_temperature_locked(provider: LLMProvider, model: str) -> bool:
    """Check if a model only accepts the provider's default temperature.

    Args:
        provider: The provider family.
        model: The model name.

    Returns:
        True if the model name starts with a locked prefix for this provider.
    """
    prefixes = TEMPERATURE_LOCKED_PREFIXES.get(provider, ())
    return model.strip().lower().startswith(prefixes)


def resolve_temperature(
    provider: LLMProvider, model: str, temperature: float
) -> Optional[float]:
    """Get the temperature to send with a request.

    Args:
        provider: The provider family.
        model: The model name.
        temperature: The configured temperature.

    Returns:
        The configured temperature when it is greater than 0 and the model
        accepts it, otherwise None (leave the provider default in place).
    """
    if is_temperature_locked(provider, model):
        return None
    if temperature > 0:
        return temperature
    return None


def validate_provider_config(descriptor: ProviderDescriptor, config: ProviderConfig) -> None:
    """Check that every required field is set for a provider.

    Args:
        descriptor: The provider's catalog entry.
        config: The provider settings.

    Raises:
        ConfigurationError: Naming the first missing field and the provider.
    """
    for field in sorted(descriptor.required):
        value = getattr(config, field, "") or ""
        if value.strip():
            continue

        message = f"{field} is required for provider {descriptor.title}."
        if field == "api_key":
            message += f" Set it in the config file or export {descriptor.api_key_env_var}."
        elif descriptor.title == LLMProvider.OLLAMA.value:
            message += f" Set it in the config file or export {OLLAMA_URI_ENV_VAR}."
        raise ConfigurationError(message, provider=descriptor.title, field=field)


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    A provider accepts a system + user prompt and returns the generated text.
    """

    provider: LLMProvider

    def __init__(
        self,
        config: ProviderConfig,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        """Initialize the provider.

        Args:
            config: The provider settings (credentials, endpoint, model, temperature).
            max_tokens: Maximum tokens for the generated message.
            timeout: Request timeout in seconds.
        """
        self.config = config
        self.model = config.model
        self.max_tokens = max_tokens
        self.timeout = timeout

    @property
    def temperature(self) -> Optional[float]:
        """The temperature to send, or None to use the provider default."""
        return resolve_temperature(self.provider, self.model, self.config.temperature)

    @property
    def display_name(self) -> str:
        return self.provider.value

    @abstractmethod
    def generate(self, prompt: RequestPrompt) -> str:
        """Generate a commit message.

        Args:
            prompt: The composed system instructions and user content.

        Returns:
            The generated text, stripped.

        Raises:
            GenerationError: If the API call fails.
            EmptyResponseError: If the response contains no text.
        """
        pass

    def _require_text(self, text: Optional[str]) -> str:
        """Strip the extracted text and reject blank responses."""
        cleaned = (text or "").strip()
        if not cleaned:
            raise EmptyResponseError(
                f"{self.display_name} returned an empty response (model: {self.model})",
                provider=self.provider.value,
            )
        return cleaned
