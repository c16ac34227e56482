"""Discovery of artifacts inside a repository checkout or a project."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from kitsync.artifacts.layout import MANIFEST_PATTERNS
from kitsync.artifacts.models import Artifact, ArtifactKind
from kitsync.utils.console import print_warning

if TYPE_CHECKING:
    from kitsync.links import LinkRegistry

logger = logging.getLogger(__name__)


class Catalog:
    """Lists the artifacts of the given kinds found under a root directory.

    Scans are memoised per root path; call ``invalidate`` after the files
    under a root change (e.g. after copying an artifact into a project).

    Attributes:
        kinds: Artifact kinds this catalog scans for
    """

    def __init__(self, kinds: tuple[ArtifactKind, ...]) -> None:
        self.kinds = kinds
        self._cache: dict[Path, list[Artifact]] = {}
        self._lock = threading.Lock()

    def list(self, root: Path) -> list[Artifact]:
        """List artifacts under a root, scanning it on first use."""
        key = root.resolve()
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        artifacts: list[Artifact] = []
        for kind in self.kinds:
            for manifest in sorted(key.glob(MANIFEST_PATTERNS[kind])):
                artifact = self._read_manifest(manifest, kind)
                if artifact is not None:
                    artifacts.append(artifact)

        with self._lock:
            self._cache[key] = artifacts
        return artifacts

    def invalidate(self, root: Path | None = None) -> None:
        """Forget memoised scans for one root, or for every root."""
        with self._lock:
            if root is None:
                self._cache.clear()
            else:
                self._cache.pop(root.resolve(), None)

    def find(self, name: str, root: Path) -> Artifact | None:
        """Find an artifact by its full package name."""
        for artifact in self.list(root):
            if artifact.name == name:
                return artifact
        return None

    def dependency_map(self, root: Path) -> dict[str, str]:
        """Artifacts under a root as a dependency map (name -> ^version)."""
        return {artifact.name: f"^{artifact.version}" for artifact in self.list(root)}

    def linked(self, root: Path, registry: LinkRegistry) -> list[Artifact]:
        """Artifacts under a root that are linked to at least one project."""
        return [a for a in self.list(root) if registry.is_linked(a.kind.link_key, a.name)]

    @staticmethod
    def _read_manifest(path: Path, kind: ArtifactKind) -> Artifact | None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return Artifact.from_package(data, kind)
        except (OSError, ValueError, AttributeError) as e:
            print_warning(f"Skipping invalid manifest {path}: {e}")
            logger.debug("Invalid manifest %s", path, exc_info=True)
            return None


__all__ = [
    "Catalog",
]
