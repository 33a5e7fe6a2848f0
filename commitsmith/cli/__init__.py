"""CLI entry point for commitsmith.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from commitsmith.cli.config import config_app
from commitsmith.cli.init import init_config
from commitsmith.cli.main import main_command

# Main application
app = typer.Typer(
    name="commitsmith",
    help="commitsmith: AI-generated commit messages for staged changes",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("init")(init_config)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "init_config",
    "main_command",
]
