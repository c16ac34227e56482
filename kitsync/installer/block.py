"""Runner for shared page blocks."""

from kitsync.artifacts.models import ArtifactKind
from kitsync.installer.runner import ArtifactRunner


class BlockRunner(ArtifactRunner):
    """Installs page blocks (src/pages).

    Blocks usually depend on shared components, so components, utilities
    and blocks already in the project all count as provided dependencies.
    """

    scope = "block"
    kinds = (ArtifactKind.BLOCK,)
    dependency_kinds = (ArtifactKind.COM, ArtifactKind.UTIL, ArtifactKind.BLOCK)


__all__ = [
    "BlockRunner",
]
