"""Running external commands with line-by-line output."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path

from kitsync.utils.logging import log_command

OutputCallback = Callable[[str], None]


def run_streaming(
    cmd: list[str],
    cwd: Path,
    on_line: OutputCallback | None = None,
) -> int:
    """Run a command, delivering each line of combined output as it arrives.

    stderr is merged into stdout so that progress from tools like npm and
    git reaches the caller in order. Output is decoded as UTF-8 with
    undecodable bytes replaced.

    Args:
        cmd: Command and arguments
        cwd: Working directory
        on_line: Callback receiving each output line without its newline

    Returns:
        The command's exit code

    Raises:
        FileNotFoundError: If the executable does not exist
    """
    process = subprocess.Popen(
        cmd,
        cwd=cwd,
        stdin=subprocess.DEVNULL,  # Never wait on a credential or confirmation prompt
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
        bufsize=1,
    )
    if process.stdout is not None:
        for line in process.stdout:
            if on_line is not None:
                on_line(line.rstrip("\n"))

    returncode = process.wait()
    log_command(shlex.join(cmd), returncode)
    return returncode


__all__ = [
    "OutputCallback",
    "run_streaming",
]
