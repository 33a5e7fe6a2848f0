"""Exception classes for commit message generation.

Contains:
- CommitsmithError: Base exception, records the pipeline stage that failed
- ConfigurationError: Missing required provider field, unknown provider or style
- FileAccessError: The custom rules file exists but cannot be read
- GenerationError: The provider call failed
- EmptyResponseError: The provider returned no usable text
"""

from pathlib import Path
from typing import Optional


class CommitsmithError(Exception):
    """Base exception for commit message generation errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.stage: Optional[str] = None


class ConfigurationError(CommitsmithError):
    """Raised when the configuration cannot be used for a request."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.field = field


class FileAccessError(CommitsmithError):
    """Raised when an existing file cannot be read."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class GenerationError(CommitsmithError):
    """Raised when the LLM provider call fails."""

    def __init__(self, message: str, provider: str):
        super().__init__(message)
        self.provider = provider


class EmptyResponseError(GenerationError):
    """Raised when the LLM provider returns a blank response."""

    pass
