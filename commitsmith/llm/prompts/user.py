"""User prompt templates for commit message generation."""

USER_PROMPT_TEMPLATE = """Please generate a commit message for the following changes (using '{style}' as commit style):

{summary}"""

FILE_SUMMARY_TEMPLATE = """File: {path} (Status: {status})
Diff:
{diff}

"""

BUDGET_DIRECTIVE_TEMPLATE = "Generate the commit message under {budget} characters."
