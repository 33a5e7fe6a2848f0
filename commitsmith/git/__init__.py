"""Git change collector module for commitsmith.

This package provides:
- exceptions: GitError, NoStagedChangesError
- runner: _run_git_command, is_git_repository, get_repo_root
- changes: StagedChange, get_staged_changes, get_unstaged_changes, commit
"""

# Exceptions
from commitsmith.git.exceptions import (
    GitError,
    NoStagedChangesError,
)

# Runner utilities
from commitsmith.git.runner import (
    _run_git_command,
    is_git_repository,
    get_repo_root,
)

# Change collection
from commitsmith.git.changes import (
    StagedChange,
    get_staged_changes,
    get_unstaged_changes,
    commit,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoStagedChangesError",
    # Runner
    "_run_git_command",
    "is_git_repository",
    "get_repo_root",
    # Changes
    "StagedChange",
    "get_staged_changes",
    "get_unstaged_changes",
    "commit",
]
