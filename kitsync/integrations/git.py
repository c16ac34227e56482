"""Git operations for KITSYNC.

Covers the shared repository checkouts (shallow clone, pull) and the
optional auto-commit of an installed artifact in a consumer project.
"""

import shlex
from pathlib import Path

from kitsync.integrations.shell import OutputCallback, run_streaming
from kitsync.utils.errors import GitOperationError


def _git(args: list[str], cwd: Path, on_line: OutputCallback | None = None) -> None:
    """Run a git command and raise GitOperationError on failure."""
    cmd = ["git", *args]
    try:
        returncode = run_streaming(cmd, cwd, on_line)
    except FileNotFoundError as e:
        raise GitOperationError("git executable not found", command=shlex.join(cmd)) from e

    if returncode != 0:
        raise GitOperationError(
            f"'{shlex.join(cmd)}' failed with exit code {returncode} in {cwd}",
            command=shlex.join(cmd),
            returncode=returncode,
        )


def clone(url: str, dest: Path, depth: int = 1, on_line: OutputCallback | None = None) -> None:
    """Shallow-clone a repository into dest.

    The destination directory is created first and the clone targets it
    directly (``git clone <url> --depth <n> .``).

    Raises:
        GitOperationError: If the clone fails
    """
    dest.mkdir(parents=True, exist_ok=True)
    _git(["clone", url, "--depth", str(depth), "."], dest, on_line)


def pull(cwd: Path, on_line: OutputCallback | None = None) -> None:
    """Pull the current branch.

    Raises:
        GitOperationError: If the pull fails
    """
    _git(["pull"], cwd, on_line)


def add_all(cwd: Path, on_line: OutputCallback | None = None) -> None:
    _git(["add", "-A"], cwd, on_line)


def commit(cwd: Path, message: str, on_line: OutputCallback | None = None) -> None:
    _git(["commit", "-m", message], cwd, on_line)


def push(cwd: Path, on_line: OutputCallback | None = None) -> None:
    _git(["push"], cwd, on_line)


def commit_and_push(cwd: Path, message: str, on_line: OutputCallback | None = None) -> None:
    """Stage everything, commit, pull and push.

    Stops at the first failing step.

    Raises:
        GitOperationError: If any step fails
    """
    add_all(cwd, on_line)
    commit(cwd, message, on_line)
    pull(cwd, on_line)
    push(cwd, on_line)


__all__ = [
    "clone",
    "pull",
    "add_all",
    "commit",
    "push",
    "commit_and_push",
]
