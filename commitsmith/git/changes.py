"""Staged and unstaged change collection.

Contains:
- StagedChange: One changed file with its status and diff
- get_staged_changes: Staged files with their per-file diffs
- get_unstaged_changes: Modified, untracked and deleted files not yet staged
- commit: Create a commit with a given message
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from commitsmith.git.runner import _run_git_command, get_repo_root
from commitsmith.logging import get_logger

logger = get_logger("git")

# Worktree status codes from `git status --porcelain` worth listing
_UNSTAGED_STATUS = {
    "M": "modified",
    "?": "untracked",
    "D": "deleted",
}


@dataclass(frozen=True)
class StagedChange:
    """A single changed file.

    Attributes:
        path: Repository-relative path (the new path for renames and copies).
        status: Status code from git (A, M, D, R100, ...) or a description
            for unstaged files.
        diff: Raw unified diff text, empty when git reports none.
    """

    path: str
    status: str
    diff: str = ""


def _parse_name_status(output: str) -> list[tuple[str, str]]:
    """Parse `git diff --name-status -z` output.

    Fields are NUL-separated and paths are never quoted, so names with
    spaces or non-ASCII characters come through as-is.

    Returns:
        (status, path) pairs in the order git reports them.
    """
    fields = output.split("\0")
    entries = []
    i = 0
    while i < len(fields):
        status = fields[i]
        i += 1
        if not status:
            continue
        # Renames and copies list the old path first, then the new one
        path_count = 2 if status[0] in ("R", "C") else 1
        paths = fields[i:i + path_count]
        i += path_count
        if len(paths) < path_count:
            break
        entries.append((status, paths[-1]))
    return entries


def get_staged_changes(repo_root: Optional[Path] = None) -> list[StagedChange]:
    """Get the staged changes with one diff per file.

    Paths from git are relative to the repository root, so every command
    runs from there regardless of the current directory.

    Args:
        repo_root: The repository root. Looked up when not given.

    Returns:
        List of StagedChange in the order git reports them. Empty if
        nothing is staged.

    Raises:
        GitError: If a git command fails.
    """
    if repo_root is None:
        repo_root = get_repo_root()

    output = _run_git_command(
        ["diff", "--cached", "--name-status", "-z"], strip=False, cwd=repo_root
    )

    changes = []
    for status, path in _parse_name_status(output):
        # Literal pathspec: names with glob characters or a leading colon match only themselves
        diff = _run_git_command(
            ["diff", "--cached", "--", f":(literal){path}"], strip=False, cwd=repo_root
        )
        changes.append(StagedChange(path=path, status=status, diff=diff))

    logger.debug("Collected %d staged change(s)", len(changes))
    return changes


def get_unstaged_changes() -> list[StagedChange]:
    """Get modified, untracked and deleted files that are not staged.

    Returns:
        List of StagedChange with a descriptive status and no diff.

    Raises:
        GitError: If the git command fails.
    """
    output = _run_git_command(["status", "--porcelain", "-z"], strip=False)

    changes = []
    entries = iter(output.split("\0"))
    for entry in entries:
        if len(entry) < 4:
            continue
        if entry[0] in ("R", "C"):
            # The original path follows as its own field
            next(entries, None)
        worktree_code = entry[1]
        if worktree_code in _UNSTAGED_STATUS:
            changes.append(
                StagedChange(
                    path=entry[3:],
                    status=_UNSTAGED_STATUS[worktree_code],
                )
            )

    return changes


def commit(message: str) -> str:
    """Create a commit from the staged changes.

    Args:
        message: The commit message, passed verbatim.

    Returns:
        The stdout of `git commit`.

    Raises:
        GitError: If the commit fails.
    """
    return _run_git_command(["commit", "-m", message])
