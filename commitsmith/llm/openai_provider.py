"""OpenAI provider implementation."""

from typing import Any, Optional

from openai import OpenAI

from commitsmith.config import LLMProvider
from commitsmith.exceptions import GenerationError
from commitsmith.llm.base import BaseLLMProvider, is_temperature_locked
from commitsmith.llm.composer import RequestPrompt


def extract_chat_text(response: Any) -> Optional[str]:
    """Get the first non-empty message content from a chat completion.

    Args:
        response: A chat completion response.

    Returns:
        The text, or None if no choice carries any.
    """
    for choice in getattr(response, "choices", None) or []:
        message = getattr(choice, "message", None)
        content = getattr(message, "content", None) if message else None
        if content and content.strip():
            return content
    return None


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions provider.

    The optional ``uri`` points the client at any OpenAI-compatible endpoint.
    """

    provider = LLMProvider.OPENAI

    @property
    def display_name(self) -> str:
        return "OpenAI"

    def _build_client(self) -> OpenAI:
        """Create the SDK client from the configured credentials."""
        return OpenAI(
            api_key=self.config.api_key,
            base_url=self.config.uri.strip() or None,
            timeout=self.timeout,
        )

    def build_request(self, prompt: RequestPrompt) -> dict:
        """Build the keyword arguments for chat.completions.create.

        Temperature-locked models get no temperature and use
        max_completion_tokens, which is the only token limit they accept.
        """
        request = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
        }

        if is_temperature_locked(self.provider, self.model):
            request["max_completion_tokens"] = self.max_tokens
        else:
            request["max_tokens"] = self.max_tokens

        temperature = self.temperature
        if temperature is not None:
            request["temperature"] = temperature

        return request

    def generate(self, prompt: RequestPrompt) -> str:
        """Generate a commit message using the chat completions API.

        Args:
            prompt: The composed system instructions and user content.

        Returns:
            The generated text, stripped.

        Raises:
            GenerationError: If the API call fails.
            EmptyResponseError: If the response contains no text.
        """
        client = self._build_client()
        request = self.build_request(prompt)

        try:
            response = client.chat.completions.create(**request)
        except Exception as e:
            raise GenerationError(
                f"{self.display_name} API call failed: {e}",
                provider=self.provider.value,
            ) from e

        return self._require_text(extract_chat_text(response))
