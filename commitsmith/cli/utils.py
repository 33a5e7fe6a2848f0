"""Shared utility functions for CLI commands."""

import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from commitsmith.config import CommitStyle
from commitsmith.exceptions import ConfigurationError
from commitsmith.git import StagedChange
from commitsmith.global_config import AppConfig, ProviderConfig

# Unstaged files shown when nothing is staged
MAX_UNSTAGED_FILES_SHOWN = 10


def apply_overrides(
    config: AppConfig,
    provider_config: ProviderConfig,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    style: Optional[str] = None,
    truncate_lines: Optional[int] = None,
    max_line_width: Optional[int] = None,
) -> tuple[AppConfig, ProviderConfig, list[str]]:
    """Merge command-line flags into the effective configuration.

    Args:
        config: The loaded configuration.
        provider_config: The effective settings of the selected provider.
        model: --model flag.
        temperature: --temperature flag.
        style: --style flag.
        truncate_lines: --truncate-lines flag (0 disables truncation).
        max_line_width: --max-line-width flag.

    Returns:
        New (config, provider_config) plus a description of each override.

    Raises:
        ConfigurationError: If an override value is invalid.
    """
    provider_updates = {}
    config_updates = {}
    notes = []

    if model:
        provider_updates["model"] = model
        notes.append(f"model({model})")

    if temperature is not None:
        provider_updates["temperature"] = temperature
        notes.append(f"temperature({temperature:.2f})")

    if style:
        provider_updates["commit_style"] = CommitStyle.parse(style).value
        notes.append(f"style({style})")

    if truncate_lines is not None:
        if truncate_lines < 0:
            raise ConfigurationError("--truncate-lines must be 0 or greater")
        config_updates["truncate_lines"] = truncate_lines
        notes.append(f"truncate_lines({truncate_lines})")

    if max_line_width is not None:
        if max_line_width <= 0:
            raise ConfigurationError("--max-line-width must be greater than 0")
        config_updates["max_line_width"] = max_line_width
        notes.append(f"max_line_width({max_line_width})")

    # Re-validate so flag values go through the same checks as the config file
    try:
        new_provider_config = ProviderConfig.model_validate(
            {**provider_config.model_dump(), **provider_updates}
        )
        new_config = AppConfig.model_validate({**config.model_dump(), **config_updates})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid override:\n{e}")

    return new_config, new_provider_config, notes


def show_unstaged_changes(unstaged: list[StagedChange]) -> None:
    """Print the files that could be staged.

    Args:
        unstaged: Unstaged, untracked or deleted files.
    """
    if not unstaged:
        return

    typer.echo("Modified files that could be staged:")
    typer.echo("-" * 36)
    for change in unstaged[:MAX_UNSTAGED_FILES_SHOWN]:
        typer.echo(f"  • {change.path} ({change.status})")

    remaining = len(unstaged) - MAX_UNSTAGED_FILES_SHOWN
    if remaining > 0:
        typer.echo()
        typer.echo(f"And {remaining} more files...")

    typer.echo()
    typer.echo("Try: git add <file> to stage specific files")
    typer.echo("  or: git add . to stage all files")


def mask_secret(value: str) -> str:
    """Mask an API key for display."""
    if not value:
        return "not set"
    return value[:8] + "..." + value[-4:] if len(value) > 12 else "***"


def select_index(label: str, items: list[str], default: int = 1) -> int:
    """Show a numbered list and return the chosen 0-based index."""
    for i, item in enumerate(items, 1):
        typer.echo(f"  {i}. {item}")

    choice = typer.prompt(f"{label} (1-{len(items)})", type=int, default=default)
    if choice < 1 or choice > len(items):
        typer.echo("Invalid choice. Aborting.", err=True)
        raise typer.Exit(1)
    return choice - 1


# Tried in order after $VISUAL and $EDITOR
FALLBACK_EDITORS = ("nvim", "vim", "vi", "nano")


def find_editor() -> Optional[list[str]]:
    """Find an available text editor.

    Preference order:
    1. $VISUAL
    2. $EDITOR
    3. nvim, vim, vi, nano

    Returns:
        List of command parts to run the editor, or None if none is installed.
    """
    candidates = []
    for var in ("VISUAL", "EDITOR"):
        value = os.environ.get(var, "").strip()
        if value:
            candidates.append(shlex.split(value))
    candidates.extend([name] for name in FALLBACK_EDITORS)

    for command in candidates:
        if shutil.which(command[0]):
            return command
    return None


def open_editor(file_path: Path) -> None:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.
    """
    editor_cmd = find_editor()
    if editor_cmd is None:
        typer.echo("Error: no editor found; set $VISUAL or $EDITOR, or install vim/nano", err=True)
        raise typer.Exit(1)

    typer.echo(f"Opening editor: {' '.join(editor_cmd)}")

    try:
        result = subprocess.run(editor_cmd + [str(file_path)], check=False)
    except OSError as e:
        typer.echo(f"Error: could not start editor {editor_cmd[0]}: {e}", err=True)
        raise typer.Exit(1)

    if result.returncode != 0:
        typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)
