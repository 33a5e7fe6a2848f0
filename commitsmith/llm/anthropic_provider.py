"""Anthropic Claude provider implementation."""

from typing import Any, Optional

from anthropic import Anthropic

from commitsmith.config import LLMProvider
from commitsmith.exceptions import GenerationError
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.composer import RequestPrompt


def extract_message_text(message: Any) -> Optional[str]:
    """Get the first non-empty text block from a Messages API response."""
    for block in getattr(message, "content", None) or []:
        if getattr(block, "type", None) != "text":
            continue
        text = getattr(block, "text", None)
        if text and text.strip():
            return text
    return None


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    provider = LLMProvider.ANTHROPIC

    @property
    def display_name(self) -> str:
        return "Anthropic"

    def build_request(self, prompt: RequestPrompt) -> dict:
        """Build the keyword arguments for messages.create."""
        request = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": prompt.system,
            "messages": [{"role": "user", "content": prompt.user}],
        }
        temperature = self.temperature
        if temperature is not None:
            request["temperature"] = temperature
        return request

    def generate(self, prompt: RequestPrompt) -> str:
        """Generate a commit message using Anthropic Claude.

        Args:
            prompt: The composed system instructions and user content.

        Returns:
            The generated text, stripped.

        Raises:
            GenerationError: If the API call fails.
            EmptyResponseError: If the response contains no text.
        """
        client = Anthropic(
            api_key=self.config.api_key,
            base_url=self.config.uri.strip() or None,
            timeout=self.timeout,
        )

        try:
            message = client.messages.create(**self.build_request(prompt))
        except Exception as e:
            raise GenerationError(
                f"Anthropic API call failed: {e}",
                provider=self.provider.value,
            ) from e

        return self._require_text(extract_message_text(message))
