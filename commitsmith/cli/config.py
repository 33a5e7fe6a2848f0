"""CLI commands for global configuration management."""

from typing import Optional

import typer
from pydantic import ValidationError

from commitsmith import global_config
from commitsmith.config import (
    AVAILABLE_MODELS,
    PROVIDERS,
    CommitStyle,
    LLMProvider,
    get_descriptor,
)
from commitsmith.exceptions import ConfigurationError
from commitsmith.global_config import AppConfig, ProviderConfig
from commitsmith.cli.utils import mask_secret, open_editor, select_index

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage the global commitsmith configuration",
    add_completion=False,
)

VALID_PROVIDERS = ", ".join(p.value for p in LLMProvider)


def _parse_provider(provider: str) -> LLMProvider:
    """Parse a provider argument or exit with a usage error."""
    try:
        return LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {VALID_PROVIDERS}")
        raise typer.Exit(1)


def _load_or_exit() -> AppConfig:
    try:
        return global_config.load_app_config()
    except ConfigurationError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    if not global_config.is_configured():
        typer.echo("No configuration found. Run 'commitsmith init' to set up.")
        return

    config = _load_or_exit()

    typer.echo(f"Current commitsmith configuration ({global_config.get_config_file_path()}):")
    typer.echo()
    typer.echo(f"  Default provider: {config.default_provider}")
    typer.echo(f"  Commit style: {config.commit_style}")
    typer.echo(f"  Max tokens: {config.max_tokens}")
    typer.echo(f"  Truncate lines: {config.truncate_lines}")
    typer.echo(f"  Max line width: {config.max_line_width}")
    typer.echo(f"  Request timeout: {config.request_timeout}s")

    for name, provider_config in config.providers.items():
        typer.echo()
        typer.echo(f"  [{name}]")
        typer.echo(f"    Model: {provider_config.model or 'not set'}")
        typer.echo(f"    Temperature: {provider_config.temperature}")
        typer.echo(f"    API key: {mask_secret(provider_config.api_key)}")
        if provider_config.uri:
            typer.echo(f"    URI: {provider_config.uri}")
        if provider_config.commit_style:
            typer.echo(f"    Commit style: {provider_config.commit_style}")
    typer.echo()


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(
        ...,
        help=f"Provider name ({VALID_PROVIDERS})"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (optional, will prompt if not provided)"
    )
) -> None:
    """Set the default LLM provider and its model."""
    llm_provider = _parse_provider(provider)

    if not model:
        models = AVAILABLE_MODELS[llm_provider]
        typer.echo(f"Available models for {llm_provider.value}:")
        model = models[select_index("Select a model", models)]
    elif model not in AVAILABLE_MODELS[llm_provider]:
        typer.echo(f"Warning: {model} is not in the list of known models for {llm_provider.value}")
        if not typer.confirm("Continue anyway?", default=False):
            raise typer.Exit(0)

    try:
        global_config.set_provider_and_model(llm_provider, model)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider set to: {llm_provider.value}")
    typer.echo(f"✓ Model set to: {model}")


@config_app.command("edit")
def config_edit() -> None:
    """Open the configuration file in your editor."""
    try:
        config_file = global_config.ensure_config_file()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    open_editor(config_file)

    try:
        global_config.load_app_config()
    except ConfigurationError as e:
        typer.echo(f"Warning: the configuration is no longer valid: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Configuration at {config_file} is valid")


@config_app.command("edit-provider")
def config_edit_provider(
    provider: str = typer.Argument(
        ...,
        help=f"Provider name ({VALID_PROVIDERS})"
    )
) -> None:
    """Change one provider's API key, model, temperature and URI.

    Leaving a prompt blank keeps the current value.
    """
    llm_provider = _parse_provider(provider)
    descriptor = get_descriptor(llm_provider.value)
    config = _load_or_exit()
    current = config.providers.get(descriptor.title, ProviderConfig())

    typer.echo(f"Editing {descriptor.title} (blank keeps the current value)")
    typer.echo()

    updates = {}
    if "api_key" in descriptor.required or "api_key" in descriptor.optional:
        typer.echo(f"Current API key: {mask_secret(current.api_key)}")
        api_key = typer.prompt(
            "New API key",
            default="",
            hide_input=True,
            show_default=False,
        ).strip()
        if api_key:
            updates["api_key"] = api_key

    models = AVAILABLE_MODELS[llm_provider]
    current_model = current.model or descriptor.default_model
    typer.echo(f"Available models for {descriptor.title}:")
    for i, m in enumerate(models, 1):
        marker = " [current]" if m == current_model else ""
        typer.echo(f"  {i}. {m}{marker}")
    choice = typer.prompt(
        f"Select a model (1-{len(models)}, 0 keeps {current_model})",
        type=int,
        default=0,
    )
    if choice < 0 or choice > len(models):
        typer.echo("Invalid choice. Aborting.", err=True)
        raise typer.Exit(1)
    updates["model"] = models[choice - 1] if choice else current_model

    updates["temperature"] = typer.prompt(
        "Temperature (0.0-1.0)",
        type=float,
        default=current.temperature,
    )

    if current.uri or "uri" in descriptor.required:
        uri = typer.prompt("Server URI", default=current.uri, show_default=bool(current.uri)).strip()
        if "uri" in descriptor.required and not uri:
            typer.echo("server URI cannot be empty. Aborting.", err=True)
            raise typer.Exit(1)
        updates["uri"] = uri

    try:
        config.providers[descriptor.title] = ProviderConfig.model_validate(
            {**current.model_dump(), **updates}
        )
        global_config.save_app_config(config)
    except (ValidationError, ConfigurationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Updated provider '{descriptor.title}'")


@config_app.command("set-defaults")
def config_set_defaults() -> None:
    """Change the default provider, commit style and diff limits.

    Leaving a prompt blank keeps the current value.
    """
    config = _load_or_exit()

    providers = [p.value for p in LLMProvider]
    typer.echo("Default provider:")
    provider_index = select_index(
        "Select default provider",
        [f"{p} [current]" if p == config.default_provider else p for p in providers],
        default=providers.index(config.default_provider) + 1 if config.default_provider in providers else 1,
    )

    styles = [s.value for s in CommitStyle]
    typer.echo()
    typer.echo("Commit style:")
    style_index = select_index(
        "Select commit style",
        [f"{s} [current]" if s == config.commit_style else s for s in styles],
        default=styles.index(config.commit_style) + 1 if config.commit_style in styles else 1,
    )

    typer.echo()
    max_tokens = typer.prompt("Max tokens", type=int, default=config.max_tokens)
    truncate_lines = typer.prompt(
        "Diff lines kept at each end of every file (0 keeps everything)",
        type=int,
        default=config.truncate_lines,
    )
    max_line_width = typer.prompt("Max line width", type=int, default=config.max_line_width)
    if truncate_lines < 0:
        typer.echo("Error: truncate lines must be 0 or greater", err=True)
        raise typer.Exit(1)
    if max_line_width <= 0:
        typer.echo("Error: max line width must be greater than 0", err=True)
        raise typer.Exit(1)

    try:
        config = AppConfig.model_validate({
            **config.model_dump(),
            "default_provider": providers[provider_index],
            "commit_style": styles[style_index],
            "max_tokens": max_tokens,
            "truncate_lines": truncate_lines,
            "max_line_width": max_line_width,
        })
        global_config.save_app_config(config)
    except (ValidationError, ConfigurationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✓ Defaults updated")


@config_app.command("list-providers")
def config_list_providers() -> None:
    """List all available LLM providers and the fields they need."""
    typer.echo("Available LLM providers:")
    typer.echo()
    for descriptor in PROVIDERS:
        required = ", ".join(sorted(descriptor.required)) or "none"
        typer.echo(f"  • {descriptor.title} ({descriptor.name}) - requires: {required}")
    typer.echo()
    typer.echo("Use 'commitsmith config list-models <provider>' to see available models.")


@config_app.command("list-models")
def config_list_models(
    provider: Optional[str] = typer.Argument(
        None,
        help="Provider name (optional, shows all if not provided)"
    )
) -> None:
    """List available models for a provider (or all providers)."""
    if provider:
        llm_provider = _parse_provider(provider)
        typer.echo(f"Available models for {llm_provider.value}:")
        typer.echo()
        for model in AVAILABLE_MODELS[llm_provider]:
            typer.echo(f"  • {model}")
        typer.echo()
    else:
        for llm_provider in LLMProvider:
            typer.echo(f"{llm_provider.value}:")
            for model in AVAILABLE_MODELS[llm_provider]:
                typer.echo(f"  • {model}")
            typer.echo()
