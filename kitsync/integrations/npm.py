"""npm invocation for third-party dependencies of installed artifacts."""

import shlex
from pathlib import Path

from kitsync.integrations.shell import OutputCallback, run_streaming
from kitsync.utils.errors import NpmError


def install(project_path: Path, specs: list[str], on_line: OutputCallback | None = None) -> None:
    """Install packages into a project and save them as dependencies.

    Runs ``npm install -S <specs...>`` once for all specs. An empty spec
    list does nothing.

    Args:
        project_path: Project root containing package.json
        specs: ``name@version`` strings
        on_line: Callback receiving npm output lines

    Raises:
        NpmError: If npm is missing or exits non-zero
    """
    if not specs:
        return

    cmd = ["npm", "install", "-S", *specs]
    try:
        returncode = run_streaming(cmd, project_path, on_line)
    except FileNotFoundError as e:
        raise NpmError("npm executable not found", command=shlex.join(cmd)) from e

    if returncode != 0:
        raise NpmError(
            f"'{shlex.join(cmd)}' failed with exit code {returncode} in {project_path}",
            command=shlex.join(cmd),
            returncode=returncode,
        )


__all__ = [
    "install",
]
