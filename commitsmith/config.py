"""Provider catalog, commit styles and configuration defaults.

The user configuration itself is stored in ~/.commitsmith/config.json.
Use 'commitsmith init' or 'commitsmith config' commands to modify it.
"""

from dataclasses import dataclass
from enum import Enum

from commitsmith.exceptions import ConfigurationError


class LLMProvider(Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"
    GOOGLE = "google"


class CommitStyle(Enum):
    """Commit message styles and their advisory character budgets."""

    CONVENTIONAL = "conventional"
    SIMPLE = "simple"
    DETAILED = "detailed"

    @property
    def budget(self) -> int:
        """Maximum number of characters the model is asked to stay under."""
        return STYLE_BUDGETS[self]

    @classmethod
    def parse(cls, value: str) -> "CommitStyle":
        """Look up a style by name (case-insensitive).

        Raises:
            ConfigurationError: If the style is unknown.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(style.value for style in cls)
            raise ConfigurationError(
                f"Unknown commit style: {value!r}. Valid styles: {valid}"
            )


STYLE_BUDGETS = {
    CommitStyle.CONVENTIONAL: 500,
    CommitStyle.SIMPLE: 100,
    CommitStyle.DETAILED: 1000,
}


# ============================================================
# DEFAULT VALUES
# ============================================================
# Used for any key missing from ~/.commitsmith/config.json

DEFAULT_PROVIDER = LLMProvider.OPENAI
DEFAULT_MAX_TOKENS = 500
DEFAULT_COMMIT_STYLE = CommitStyle.CONVENTIONAL
DEFAULT_TRUNCATE_LINES = 1000
DEFAULT_MAX_LINE_WIDTH = 300
DEFAULT_REQUEST_TIMEOUT = 60.0

# Repository-local file that replaces the built-in prompt rules
CUSTOM_RULES_FILENAME = ".commitsmithrules"


# ============================================================
# PROVIDER CATALOG
# ============================================================

@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of a provider and the config fields it needs."""

    title: str
    name: str
    required: frozenset[str]
    optional: frozenset[str]
    api_key_env_var: str
    default_model: str


PROVIDERS: tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        title=LLMProvider.OPENAI.value,
        name="OpenAI",
        required=frozenset({"api_key"}),
        optional=frozenset({"uri"}),
        api_key_env_var="OPENAI_API_KEY",
        default_model="gpt-4o-mini",
    ),
    ProviderDescriptor(
        title=LLMProvider.ANTHROPIC.value,
        name="Anthropic",
        required=frozenset({"api_key"}),
        optional=frozenset({"uri"}),
        api_key_env_var="ANTHROPIC_API_KEY",
        default_model="claude-3-5-haiku-latest",
    ),
    ProviderDescriptor(
        title=LLMProvider.OLLAMA.value,
        name="Ollama",
        required=frozenset({"uri"}),
        optional=frozenset({"api_key"}),
        api_key_env_var="OLLAMA_API_KEY",
        default_model="llama3.1",
    ),
    ProviderDescriptor(
        title=LLMProvider.GOOGLE.value,
        name="Google",
        required=frozenset({"api_key"}),
        optional=frozenset(),
        api_key_env_var="GOOGLE_API_KEY",
        default_model="gemini-2.0-flash",
    ),
)

# Environment variable consulted for a blank ollama uri
OLLAMA_URI_ENV_VAR = "OLLAMA_URI"


def get_descriptor(provider_name: str) -> ProviderDescriptor:
    """Get the catalog entry for a provider.

    Args:
        provider_name: The logical provider name (e.g. "openai").

    Returns:
        The matching ProviderDescriptor.

    Raises:
        ConfigurationError: If the provider is not supported.
    """
    key = (provider_name or "").strip().lower()
    for descriptor in PROVIDERS:
        if descriptor.title == key:
            return descriptor
    valid = ", ".join(d.title for d in PROVIDERS)
    raise ConfigurationError(
        f"Unsupported provider: {provider_name!r}. Valid providers: {valid}",
        provider=provider_name,
    )


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.OPENAI: [
        "gpt-4o-mini",
        "gpt-4o",
        "gpt-4.1",
        "gpt-4.1-mini",
        "o4-mini",
        "o3-mini",
        "gpt-5-mini",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-3-5-haiku-latest",
        "claude-3-5-sonnet-latest",
        "claude-sonnet-4-20250514",
        "claude-3-opus-latest",
    ],
    LLMProvider.OLLAMA: [
        "llama3.1",
        "mistral",
        "qwen2.5-coder",
        "codellama",
    ],
    LLMProvider.GOOGLE: [
        "gemini-2.0-flash",
        "gemini-2.0-flash-lite",
        "gemini-2.5-flash",
        "gemini-2.5-pro",
    ],
}
