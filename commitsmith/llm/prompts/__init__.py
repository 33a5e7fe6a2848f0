"""LLM prompt templates for commit message generation.

This package contains:
- system: The built-in system prompt
- safety: The notice appended to repository-provided rules
- user: The user prompt, per-file summary and budget directive templates
"""

from commitsmith.llm.prompts.system import DEFAULT_SYSTEM_PROMPT
from commitsmith.llm.prompts.safety import SAFETY_NOTICE
from commitsmith.llm.prompts.user import (
    USER_PROMPT_TEMPLATE,
    FILE_SUMMARY_TEMPLATE,
    BUDGET_DIRECTIVE_TEMPLATE,
)


__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "SAFETY_NOTICE",
    "USER_PROMPT_TEMPLATE",
    "FILE_SUMMARY_TEMPLATE",
    "BUDGET_DIRECTIVE_TEMPLATE",
]
