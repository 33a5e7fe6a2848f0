"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- is_git_repository: Check whether the working directory is inside a repo
- get_repo_root: Get the root directory of the current git repository
"""

import subprocess
from pathlib import Path
from typing import Optional

from commitsmith.git.exceptions import GitError


def _run_git_command(
    args: list[str], strip: bool = True, cwd: Optional[Path] = None
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        strip: Whether to strip surrounding whitespace from stdout.
        cwd: Directory to run git in. Defaults to the current directory.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip() if strip else result.stdout
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def is_git_repository() -> bool:
    """Check if the current directory is inside a git work tree."""
    try:
        return _run_git_command(["rev-parse", "--is-inside-work-tree"]) == "true"
    except GitError:
        return False


def get_repo_root() -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"])
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
