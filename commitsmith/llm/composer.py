"""Prompt composition for commit message generation.

Contains:
- RequestPrompt: The system instructions and user content sent to a provider
- compress: Drop blank lines and trim every line to save tokens
- load_custom_rules: Read the repository rules file, if any
- build_system_prompt: Default rules or custom rules + safety notice, plus budget
- build_changes_summary: Per-file summaries with shaped diffs
- compose_prompt: Build the full RequestPrompt
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from commitsmith.config import CommitStyle
from commitsmith.exceptions import FileAccessError
from commitsmith.git import StagedChange
from commitsmith.llm.prompts import (
    BUDGET_DIRECTIVE_TEMPLATE,
    DEFAULT_SYSTEM_PROMPT,
    FILE_SUMMARY_TEMPLATE,
    SAFETY_NOTICE,
    USER_PROMPT_TEMPLATE,
)
from commitsmith.llm.shaper import shape_diff
from commitsmith.logging import get_logger

logger = get_logger("llm.composer")

# Custom rules this short are treated as accidental and ignored
MIN_CUSTOM_RULES_LENGTH = 100


@dataclass(frozen=True)
class RequestPrompt:
    """A composed prompt, ready to be sent to a provider."""

    system: str
    user: str


def compress(text: str) -> str:
    """Trim every line and drop blank or whitespace-only lines.

    Args:
        text: Instruction text.

    Returns:
        The remaining lines joined by single newlines.
    """
    return "\n".join(line.strip() for line in text.splitlines() if line.strip())


def load_custom_rules(path: Path) -> Optional[str]:
    """Read a repository-provided rules file.

    Args:
        path: Path to the rules file.

    Returns:
        The file contents, or None if the file doesn't exist.

    Raises:
        FileAccessError: If the file exists but cannot be read.
    """
    if not path.exists():
        return None

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Failed to read custom rules from {path}: {e}", path=path)


def build_system_prompt(style: CommitStyle, custom_rules: Optional[str] = None) -> str:
    """Build the system instructions.

    Custom rules longer than MIN_CUSTOM_RULES_LENGTH characters replace the
    built-in rules and always get the safety notice appended. The style's
    character budget is added as the last line.

    Args:
        style: The commit style.
        custom_rules: Repository-provided rules, if any.

    Returns:
        The compressed system instructions.
    """
    if custom_rules and len(custom_rules.strip()) > MIN_CUSTOM_RULES_LENGTH:
        logger.debug("Using custom rules (%d chars)", len(custom_rules))
        instructions = f"{custom_rules}\n\n{SAFETY_NOTICE}"
    else:
        if custom_rules:
            logger.debug("Ignoring custom rules shorter than %d chars", MIN_CUSTOM_RULES_LENGTH + 1)
        instructions = DEFAULT_SYSTEM_PROMPT

    directive = BUDGET_DIRECTIVE_TEMPLATE.format(budget=style.budget)
    return f"{compress(instructions)}\n{directive}"


def build_changes_summary(
    changes: Iterable[StagedChange],
    truncate_lines: int,
    max_line_width: int,
) -> str:
    """Summarize changed files with their shaped diffs, in input order."""
    return "".join(
        FILE_SUMMARY_TEMPLATE.format(
            path=change.path,
            status=change.status,
            diff=shape_diff(change.diff, truncate_lines, max_line_width),
        )
        for change in changes
    )


def compose_prompt(
    changes: Iterable[StagedChange],
    style: CommitStyle,
    truncate_lines: int,
    max_line_width: int,
    custom_rules: Optional[str] = None,
) -> RequestPrompt:
    """Compose the full request for a set of changes.

    Args:
        changes: The staged changes.
        style: The commit style.
        truncate_lines: Lines kept at each end of every diff (0 keeps all).
        max_line_width: Maximum characters per diff line (0 disables capping).
        custom_rules: Repository-provided rules, if any.

    Returns:
        The RequestPrompt with system instructions and user content.
    """
    summary = build_changes_summary(changes, truncate_lines, max_line_width)
    system = build_system_prompt(style, custom_rules)
    user = USER_PROMPT_TEMPLATE.format(style=style.value, summary=summary)

    logger.debug("Composed prompt: system=%d chars, user=%d chars", len(system), len(user))
    return RequestPrompt(system=system, user=user)
