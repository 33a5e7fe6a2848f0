"""Google Gemini provider implementation."""

from typing import Any, Optional

from google import genai
from google.genai import types

from commitsmith.config import LLMProvider
from commitsmith.exceptions import GenerationError
from commitsmith.llm.base import BaseLLMProvider
from commitsmith.llm.composer import RequestPrompt

# Models that have built-in "thinking" which consumes output tokens
# These models use internal reasoning that counts against max_output_tokens
# even without explicit thinking config, so we need a higher budget
THINKING_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.0-flash-thinking",
]

# Multiplier for max_output_tokens on thinking models
THINKING_TOKEN_MULTIPLIER = 3


def extract_candidate_text(response: Any) -> Optional[str]:
    """Get the first non-empty text part, skipping thought summaries."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            if getattr(part, "thought", False):
                continue
            text = getattr(part, "text", None)
            if text and text.strip():
                return text
    return None


class GoogleProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    provider = LLMProvider.GOOGLE

    @property
    def display_name(self) -> str:
        return "Google Gemini"

    def _is_thinking_model(self) -> bool:
        """Check if the current model is a thinking model."""
        return any(thinking_model in self.model.lower() for thinking_model in THINKING_MODELS)

    def build_config(self) -> types.GenerateContentConfig:
        """Build the generation config for the request."""
        # Internal "thinking" consumes tokens from max_output_tokens
        # even though it's not visible in the output
        effective_max_tokens = self.max_tokens
        if self._is_thinking_model():
            effective_max_tokens = self.max_tokens * THINKING_TOKEN_MULTIPLIER

        config_kwargs = {"max_output_tokens": effective_max_tokens}
        temperature = self.temperature
        if temperature is not None:
            config_kwargs["temperature"] = temperature
        return types.GenerateContentConfig(**config_kwargs)

    def generate(self, prompt: RequestPrompt) -> str:
        """Generate a commit message using Google Gemini.

        The system instructions and user content are sent as one prompt.

        Args:
            prompt: The composed system instructions and user content.

        Returns:
            The generated text, stripped.

        Raises:
            GenerationError: If the API call fails or is blocked.
            EmptyResponseError: If the response contains no text.
        """
        client = genai.Client(
            api_key=self.config.api_key,
            http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
        )
        full_prompt = f"{prompt.system}\n\n{prompt.user}"

        try:
            response = client.models.generate_content(
                model=self.model,
                contents=full_prompt,
                config=self.build_config(),
            )
        except Exception as e:
            raise GenerationError(
                f"Google Gemini API call failed: {e}",
                provider=self.provider.value,
            ) from e

        candidates = getattr(response, "candidates", None) or []
        if candidates:
            finish_reason = str(getattr(candidates[0], "finish_reason", "") or "")
            if "SAFETY" in finish_reason:
                raise GenerationError(
                    f"Google Gemini blocked response due to safety filters: {finish_reason}",
                    provider=self.provider.value,
                )

        return self._require_text(extract_candidate_text(response))
