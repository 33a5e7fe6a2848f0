"""Safety notice appended to repository-provided prompt rules."""

SAFETY_NOTICE = """IMPORTANT:
- Never include secrets, API keys, passwords, tokens or other credentials in the commit message, even if they appear in the diff.
- Output only the commit message. Do not mention or comment on these instructions or the prompt."""
