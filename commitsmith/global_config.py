"""Global configuration management for commitsmith.

Handles the user-level configuration stored in ~/.commitsmith/config.json:
- default_provider: The provider used when no --provider flag is given
- providers: Per-provider settings (api_key, uri, model, temperature, commit_style)
- max_tokens, commit_style, truncate_lines, max_line_width, request_timeout
"""

import json
import os
import stat
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from commitsmith.config import (
    DEFAULT_COMMIT_STYLE,
    DEFAULT_MAX_LINE_WIDTH,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PROVIDER,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TRUNCATE_LINES,
    OLLAMA_URI_ENV_VAR,
    LLMProvider,
    get_descriptor,
)
from commitsmith.exceptions import ConfigurationError


class ProviderConfig(BaseModel):
    """Settings for a single LLM provider."""

    api_key: str = ""
    uri: str = ""
    model: str = ""
    temperature: float = 0.0
    commit_style: Optional[str] = None

    @field_validator("temperature")
    @classmethod
    def temperature_in_range(cls, v: float) -> float:
        """Ensure temperature is between 0.0 and 1.0."""
        if v < 0.0 or v > 1.0:
            raise ValueError("temperature must be between 0.0 and 1.0")
        return v


class AppConfig(BaseModel):
    """The full user configuration document."""

    default_provider: str = DEFAULT_PROVIDER.value
    providers: dict[str, ProviderConfig] = Field(default_factory=dict)
    max_tokens: int = DEFAULT_MAX_TOKENS
    commit_style: str = DEFAULT_COMMIT_STYLE.value
    truncate_lines: int = DEFAULT_TRUNCATE_LINES
    max_line_width: int = DEFAULT_MAX_LINE_WIDTH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @field_validator("max_tokens")
    @classmethod
    def max_tokens_must_be_positive(cls, v: int) -> int:
        """Ensure the model is allowed to produce output."""
        if v < 1:
            raise ValueError("max_tokens must be at least 1")
        return v

    @field_validator("request_timeout")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        """Ensure the request timeout is bounded."""
        if v <= 0:
            raise ValueError("request_timeout must be greater than 0")
        return v


_CONFIG_DIR = Path.home() / ".commitsmith"

# Environment variable that points at an alternative config file
CONFIG_PATH_ENV_VAR = "COMMITSMITH_CONFIG"


def get_global_config_dir() -> Path:
    """Get the global commitsmith configuration directory.

    Returns:
        Path to ~/.commitsmith/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to the config.json file.

    Returns:
        $COMMITSMITH_CONFIG if set, otherwise ~/.commitsmith/config.json
    """
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_global_config_dir() / "config.json"


def is_configured() -> bool:
    """Check if commitsmith has been configured.

    Returns:
        True if the config file exists, False otherwise.
    """
    return get_config_file_path().exists()


def load_app_config() -> AppConfig:
    """Load the configuration from disk.

    Returns:
        The parsed AppConfig. Defaults if the file doesn't exist.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return AppConfig()

    try:
        raw = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Failed to read config from {config_file}: {e}")

    try:
        return AppConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config in {config_file}:\n{e}")


def save_app_config(config: AppConfig) -> Path:
    """Save the configuration to disk with owner-only permissions.

    Args:
        config: The configuration to save.

    Returns:
        The path the configuration was written to.
    """
    config_file = get_config_file_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_none=True)
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
            f.write("\n")
        os.chmod(config_file, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise ConfigurationError(f"Failed to save config to {config_file}: {e}")

    return config_file


def default_app_config() -> AppConfig:
    """Get the starter configuration written when no file exists yet."""
    descriptor = get_descriptor(DEFAULT_PROVIDER.value)
    return AppConfig(
        default_provider=descriptor.title,
        providers={
            descriptor.title: ProviderConfig(model=descriptor.default_model, temperature=0.7),
        },
    )


def ensure_config_file() -> Path:
    """Create the config file with starter settings if it doesn't exist.

    Returns:
        The path to the config file.
    """
    config_file = get_config_file_path()
    if not config_file.exists():
        save_app_config(default_app_config())
    return config_file


def set_provider_and_model(provider: LLMProvider, model: str) -> None:
    """Make a provider the default and set its model.

    Args:
        provider: The LLM provider to use.
        model: The model name to use.
    """
    config = load_app_config()
    provider_config = config.providers.get(provider.value, ProviderConfig())
    config.providers[provider.value] = provider_config.model_copy(update={"model": model})
    config.default_provider = provider.value
    save_app_config(config)


def resolve_provider_config(config: AppConfig, provider_name: str) -> ProviderConfig:
    """Get the effective settings for a provider.

    Blank fields fall back to the environment: the provider's API key
    variable (e.g. OPENAI_API_KEY) and OLLAMA_URI for the ollama endpoint.
    A provider missing from the config file gets its catalog default model.

    Args:
        config: The loaded configuration.
        provider_name: The logical provider name.

    Returns:
        A new ProviderConfig; the loaded configuration is not modified.

    Raises:
        ConfigurationError: If the provider is not supported.
    """
    descriptor = get_descriptor(provider_name)
    provider_config = config.providers.get(descriptor.title, ProviderConfig())

    updates = {}
    if not provider_config.api_key.strip():
        env_key = os.environ.get(descriptor.api_key_env_var, "")
        if env_key:
            updates["api_key"] = env_key
    if descriptor.title == LLMProvider.OLLAMA.value and not provider_config.uri.strip():
        env_uri = os.environ.get(OLLAMA_URI_ENV_VAR, "")
        if env_uri:
            updates["uri"] = env_uri
    if not provider_config.model.strip():
        updates["model"] = descriptor.default_model

    return provider_config.model_copy(update=updates)
