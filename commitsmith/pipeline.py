"""Commit message generation pipeline.

Sequences the stages for one invocation:
1. Resolve the effective commit style
2. Load the repository's custom rules, if any
3. Shape the diffs and compose the prompt
4. Dispatch the prompt to the provider

Every failure propagates with its original type; the failing stage is
recorded on the exception's ``stage`` attribute.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

from commitsmith.config import CommitStyle
from commitsmith.exceptions import CommitsmithError
from commitsmith.git import NoStagedChangesError, StagedChange
from commitsmith.global_config import AppConfig, ProviderConfig
from commitsmith.llm import dispatch
from commitsmith.llm.composer import compose_prompt, load_custom_rules
from commitsmith.logging import get_logger

logger = get_logger("pipeline")


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Tag errors raised inside the block with the stage name."""
    try:
        yield
    except CommitsmithError as e:
        e.stage = name
        logger.debug("Stage '%s' failed: %s", name, e)
        raise


def resolve_style(config: AppConfig, provider_config: ProviderConfig) -> CommitStyle:
    """Get the effective commit style.

    The provider's own commit_style wins over the global one.

    Raises:
        ConfigurationError: If the style name is unknown.
    """
    style_name = provider_config.commit_style or config.commit_style
    return CommitStyle.parse(style_name)


def generate_commit_message(
    config: AppConfig,
    changes: Sequence[StagedChange],
    provider_name: str,
    provider_config: ProviderConfig,
    custom_rules_path: Optional[Path] = None,
) -> str:
    """Generate a commit message for a set of staged changes.

    Args:
        config: The effective configuration (limits, style, timeout).
        changes: The staged changes, in git's order.
        provider_name: The logical provider name.
        provider_config: The effective settings for that provider.
        custom_rules_path: Path to the repository's rules file, if any.

    Returns:
        The generated commit message, stripped.

    Raises:
        NoStagedChangesError: If there are no changes.
        ConfigurationError: If the style or provider settings are invalid.
        FileAccessError: If the rules file exists but cannot be read.
        GenerationError: If the provider call fails or returns no text.
    """
    if not changes:
        raise NoStagedChangesError(
            "No staged changes found. Stage your changes first with: git add <files>"
        )

    with _stage("config"):
        style = resolve_style(config, provider_config)

    custom_rules = None
    if custom_rules_path is not None:
        with _stage("rules"):
            custom_rules = load_custom_rules(custom_rules_path)

    with _stage("compose"):
        prompt = compose_prompt(
            changes,
            style,
            truncate_lines=config.truncate_lines,
            max_line_width=config.max_line_width,
            custom_rules=custom_rules,
        )

    with _stage("dispatch"):
        message = dispatch(
            provider_name,
            provider_config,
            prompt,
            max_tokens=config.max_tokens,
            timeout=config.request_timeout,
        )

    if len(message) > style.budget:
        # Advisory only: the budget is an instruction to the model
        logger.warning(
            "Generated message is %d characters, over the %d character budget for '%s'",
            len(message),
            style.budget,
            style.value,
        )

    return message
