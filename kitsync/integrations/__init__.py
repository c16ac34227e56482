"""External tool integrations (git, npm) for KITSYNC."""

from kitsync.integrations import git, npm
from kitsync.integrations.shell import OutputCallback, run_streaming

__all__ = [
    "git",
    "npm",
    "OutputCallback",
    "run_streaming",
]
