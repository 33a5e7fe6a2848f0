"""Ollama provider implementation.

Talks to a self-hosted Ollama server through its OpenAI-compatible API.
"""

from openai import OpenAI

from commitsmith.config import LLMProvider
from commitsmith.llm.openai_provider import OpenAIProvider

# The OpenAI SDK insists on a key; Ollama ignores it unless a proxy checks it
PLACEHOLDER_API_KEY = "ollama"


def build_base_url(uri: str) -> str:
    """Get the OpenAI-compatible base URL for an Ollama server.

    Args:
        uri: Server address, e.g. http://localhost:11434

    Returns:
        The address with a single trailing /v1.
    """
    base = uri.strip().rstrip("/")
    if not base.endswith("/v1"):
        base += "/v1"
    return base


class OllamaProvider(OpenAIProvider):
    """Self-hosted Ollama provider."""

    provider = LLMProvider.OLLAMA

    @property
    def display_name(self) -> str:
        return "Ollama"

    def _build_client(self) -> OpenAI:
        return OpenAI(
            api_key=self.config.api_key.strip() or PLACEHOLDER_API_KEY,
            base_url=build_base_url(self.config.uri),
            timeout=self.timeout,
        )
