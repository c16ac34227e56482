"""Installer runners for KITSYNC.

Importing this package registers both runners so that either one can
dispatch internal dependencies to the other.
"""

from kitsync.installer.block import BlockRunner
from kitsync.installer.com import ComRunner
from kitsync.installer.reporter import BufferedSink, Reporter
from kitsync.installer.runner import ArtifactRunner, RunnerPlan, SyncFailure

RUNNERS: dict[str, type[ArtifactRunner]] = {
    ComRunner.scope: ComRunner,
    BlockRunner.scope: BlockRunner,
}

__all__ = [
    "ArtifactRunner",
    "BlockRunner",
    "BufferedSink",
    "ComRunner",
    "Reporter",
    "RUNNERS",
    "RunnerPlan",
    "SyncFailure",
]
