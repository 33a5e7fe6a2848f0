"""Main CLI command for generating and committing a message."""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from commitsmith import __version__
from commitsmith import global_config
from commitsmith.config import CUSTOM_RULES_FILENAME
from commitsmith.exceptions import CommitsmithError, ConfigurationError
from commitsmith.git import (
    GitError,
    commit,
    get_repo_root,
    get_staged_changes,
    get_unstaged_changes,
    is_git_repository,
)
from commitsmith.logging import configure_logging
from commitsmith.pipeline import generate_commit_message
from commitsmith.cli.utils import apply_overrides, show_unstaged_changes


def main_command(
    ctx: typer.Context,
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Run with a specific provider (openai, anthropic, ollama, google)",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Run with a specific model",
    ),
    temperature: Optional[float] = typer.Option(
        None,
        "--temperature",
        "-t",
        help="Run with a specific temperature (0.0-1.0)",
    ),
    style: Optional[str] = typer.Option(
        None,
        "--style",
        "-s",
        help="Run with a specific commit style (conventional, simple, detailed)",
    ),
    truncate_lines: Optional[int] = typer.Option(
        None,
        "--truncate-lines",
        "-l",
        help="Diff lines kept at each end of every file (0 keeps everything)",
    ),
    max_line_width: Optional[int] = typer.Option(
        None,
        "--max-line-width",
        "-w",
        help="Maximum characters per diff line sent to the model",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Bypass confirmation prompt and commit immediately",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version information",
    ),
) -> None:
    """Generate an AI-powered git commit message from staged changes."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    if version:
        typer.echo(f"commitsmith version {__version__}")
        raise typer.Exit(0)

    configure_logging(verbose=verbose)
    load_dotenv(Path.cwd() / ".env")

    # Step 1: Load configuration
    try:
        config = global_config.load_app_config()
    except ConfigurationError as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        raise typer.Exit(1)

    if not global_config.is_configured():
        typer.echo("No configuration file found; using defaults and environment variables.", err=True)
        typer.echo("Run 'commitsmith init' to set up a provider.", err=True)

    # Step 2: Collect staged changes
    if not is_git_repository():
        typer.echo("Error: not a git repository", err=True)
        raise typer.Exit(1)

    try:
        repo_root = get_repo_root()
        typer.echo("Analyzing git changes...", err=True)
        changes = get_staged_changes(repo_root)

        if not changes:
            typer.echo("No staged changes found. Use 'git add' first.", err=True)
            typer.echo()
            show_unstaged_changes(get_unstaged_changes())
            raise typer.Exit(0)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)

    # Step 3: Resolve the provider and apply command-line overrides
    provider_name = provider or config.default_provider
    try:
        provider_config = global_config.resolve_provider_config(config, provider_name)
        config, provider_config, overrides = apply_overrides(
            config,
            provider_config,
            model=model,
            temperature=temperature,
            style=style,
            truncate_lines=truncate_lines,
            max_line_width=max_line_width,
        )
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    if provider:
        overrides.insert(0, f"provider({provider})")
    if overrides:
        typer.echo(f"Overriding configuration: {', '.join(overrides)}", err=True)

    # Step 4: Generate the message
    typer.echo(f"Generating commit message using {provider_name} ({provider_config.model})...", err=True)
    try:
        message = generate_commit_message(
            config,
            changes,
            provider_name,
            provider_config,
            custom_rules_path=repo_root / CUSTOM_RULES_FILENAME,
        )
    except CommitsmithError as e:
        typer.echo(f"Error generating commit message: {e}", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("Cancelled.", err=True)
        raise typer.Exit(130)

    # Step 5: Preview and confirm
    typer.echo("")
    typer.echo(f"Generated commit message ({provider_config.model}):")
    typer.echo("=" * 60)
    typer.echo(message)
    typer.echo("=" * 60)

    if not yes:
        typer.echo("")
        if not typer.confirm("Proceed with this commit message?", default=True):
            typer.echo("Commit cancelled.", err=True)
            raise typer.Exit(0)

    # Step 6: Commit
    typer.echo("Committing...", err=True)
    try:
        output = commit(message)
    except GitError as e:
        typer.echo(f"Commit failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Commit successful!", err=True)
    if output:
        typer.echo(output)
