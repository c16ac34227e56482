"""Runner for shared components and utilities."""

from kitsync.artifacts.models import ArtifactKind
from kitsync.installer.runner import ArtifactRunner


class ComRunner(ArtifactRunner):
    """Installs components (src/components) and utilities (src/utils).

    When analysing a project, components and utilities already copied into
    it count as provided dependencies.
    """

    scope = "com"
    kinds = (ArtifactKind.COM, ArtifactKind.UTIL)
    dependency_kinds = (ArtifactKind.COM, ArtifactKind.UTIL)


__all__ = [
    "ComRunner",
]
