"""LLM provider module for commitsmith.

This module provides a unified interface to the supported LLM providers:
validation of provider settings against the catalog in commitsmith.config,
selection of the concrete client and a single dispatch entry point.
"""

from commitsmith.config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_REQUEST_TIMEOUT,
    LLMProvider,
    get_descriptor,
)
from commitsmith.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    GenerationError,
)
from commitsmith.global_config import ProviderConfig
from commitsmith.llm.base import (
    BaseLLMProvider,
    resolve_temperature,
    validate_provider_config,
)
from commitsmith.llm.composer import RequestPrompt, compose_prompt
from commitsmith.logging import get_logger

logger = get_logger("llm")


def get_provider(
    provider_name: str,
    config: ProviderConfig,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        provider_name: The logical provider name (openai, anthropic, ollama, google).
        config: The provider settings.
        max_tokens: Maximum tokens for the generated message.
        timeout: Request timeout in seconds.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ConfigurationError: If the provider is unknown or a required field is blank.
    """
    descriptor = get_descriptor(provider_name)
    validate_provider_config(descriptor, config)

    if not config.model.strip():
        config = config.model_copy(update={"model": descriptor.default_model})

    provider = LLMProvider(descriptor.title)

    if provider == LLMProvider.OPENAI:
        from commitsmith.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(config, max_tokens=max_tokens, timeout=timeout)

    elif provider == LLMProvider.ANTHROPIC:
        from commitsmith.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(config, max_tokens=max_tokens, timeout=timeout)

    elif provider == LLMProvider.OLLAMA:
        from commitsmith.llm.ollama_provider import OllamaProvider

        return OllamaProvider(config, max_tokens=max_tokens, timeout=timeout)

    elif provider == LLMProvider.GOOGLE:
        from commitsmith.llm.google_provider import GoogleProvider

        return GoogleProvider(config, max_tokens=max_tokens, timeout=timeout)

    else:
        raise ConfigurationError(f"Unsupported provider: {provider_name}", provider=provider_name)


def dispatch(
    provider_name: str,
    config: ProviderConfig,
    prompt: RequestPrompt,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> str:
    """Send a composed prompt to a provider and return the generated text.

    This is the main entry point for talking to an LLM. Validation happens
    before any client is created, so a misconfigured provider never
    causes a network call.

    Args:
        provider_name: The logical provider name.
        config: The provider settings.
        prompt: The composed prompt.
        max_tokens: Maximum tokens for the generated message.
        timeout: Request timeout in seconds.

    Returns:
        The generated text, stripped.

    Raises:
        ConfigurationError: If the provider is unknown or a required field is blank.
        GenerationError: If the API call fails.
        EmptyResponseError: If the response contains no text.
    """
    provider = get_provider(provider_name, config, max_tokens=max_tokens, timeout=timeout)
    logger.debug(
        "Dispatching to %s (model=%s, temperature=%s, timeout=%ss)",
        provider.provider.value,
        provider.model,
        provider.temperature,
        timeout,
    )
    return provider.generate(prompt)


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "ConfigurationError",
    "GenerationError",
    "EmptyResponseError",
    "RequestPrompt",
    "compose_prompt",
    "get_provider",
    "dispatch",
    "resolve_temperature",
    "validate_provider_config",
]
