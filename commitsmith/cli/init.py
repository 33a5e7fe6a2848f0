"""CLI command for initializing commitsmith configuration."""

import json

import typer
from pydantic import ValidationError

from commitsmith import global_config
from commitsmith.config import (
    AVAILABLE_MODELS,
    DEFAULT_MAX_TOKENS,
    PROVIDERS,
    CommitStyle,
    LLMProvider,
)
from commitsmith.exceptions import ConfigurationError
from commitsmith.global_config import ProviderConfig
from commitsmith.cli.utils import mask_secret, select_index

DEFAULT_OLLAMA_URI = "http://localhost:11434"
DEFAULT_TEMPERATURE = 0.7


def init_config() -> None:
    """Initialize commitsmith configuration interactively."""
    typer.echo("Welcome to commitsmith! Let's set up your configuration.")
    config_file = global_config.get_config_file_path()
    typer.echo(f"The configuration will be saved to {config_file}")
    typer.echo()

    try:
        config = global_config.load_app_config()
    except ConfigurationError as e:
        typer.echo(f"Existing configuration is invalid and will be replaced: {e}", err=True)
        config = global_config.AppConfig()

    # Select provider
    typer.echo("Available LLM providers:")
    descriptor = PROVIDERS[select_index("Select a provider", [d.title for d in PROVIDERS])]

    if descriptor.title in config.providers:
        overwrite = typer.confirm(
            f"{descriptor.title} is already configured. Overwrite?",
            default=False,
        )
        if not overwrite:
            typer.echo("Keeping existing configuration.")
            raise typer.Exit(0)

    # Select model
    models = AVAILABLE_MODELS[LLMProvider(descriptor.title)]
    typer.echo()
    typer.echo(f"Available models for {descriptor.title}:")
    model = models[select_index("Select a model", models)]

    # Provider fields: required ones must be filled, optional ones may stay blank
    typer.echo()
    fields = {}
    for field in ("api_key", "uri"):
        if field not in descriptor.required and field not in descriptor.optional:
            continue
        required = field in descriptor.required
        label = "API key" if field == "api_key" else "server URI"
        suffix = "" if required else " (optional)"
        if field == "uri":
            default = DEFAULT_OLLAMA_URI if descriptor.title == LLMProvider.OLLAMA.value else ""
        else:
            default = ""
        value = typer.prompt(
            f"Enter your {descriptor.name} {label}{suffix}",
            default=default,
            hide_input=field == "api_key",
            show_default=bool(default),
        ).strip()
        if required and not value:
            typer.echo(f"{label} cannot be empty. Aborting.", err=True)
            raise typer.Exit(1)
        fields[field] = value

    temperature = typer.prompt("Temperature (0.0-1.0)", type=float, default=DEFAULT_TEMPERATURE)

    typer.echo()
    typer.echo("Commit styles:")
    styles = list(CommitStyle)
    style = styles[select_index("Select a commit style", [f"{s.value} (under {s.budget} characters)" for s in styles])]

    max_tokens = typer.prompt("Max tokens for responses", type=int, default=DEFAULT_MAX_TOKENS)

    try:
        config.providers[descriptor.title] = ProviderConfig(
            model=model,
            temperature=temperature,
            **fields,
        )
        config.default_provider = descriptor.title
        config.commit_style = style.value
        config.max_tokens = max_tokens
        config = global_config.AppConfig.model_validate(config.model_dump())
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    # Preview with the key masked, then confirm
    preview = config.model_dump(exclude_none=True)
    for provider_settings in preview["providers"].values():
        if provider_settings.get("api_key"):
            provider_settings["api_key"] = mask_secret(provider_settings["api_key"])
    typer.echo()
    typer.echo("Configuration preview:")
    typer.echo(json.dumps(preview, indent=4))
    typer.echo()
    if not typer.confirm("Save this configuration?", default=True):
        typer.echo("Configuration not saved.")
        raise typer.Exit(0)

    try:
        saved_to = global_config.save_app_config(config)
    except ConfigurationError as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo()
    typer.echo(f"✓ Configuration saved to {saved_to}")
    typer.echo(f"  Provider: {descriptor.title}")
    typer.echo(f"  Model: {model}")
    typer.echo(f"  Commit style: {style.value}")
    typer.echo(f"  Max tokens: {max_tokens}")
    typer.echo()
    typer.echo("You can now use 'commitsmith' in any git repository!")
