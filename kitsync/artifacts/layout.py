"""Where each artifact kind lives inside a repository or project.

Layout (relative to the repository or project root):

    COM    src/components/<Pascal>/package.json   files: src/components/<Pascal>
    UTIL   src/utils/<short>.package.json         files: src/utils/<short>.*,
                                                         src/utils/*/<short>.*,
                                                         src/utils/*/<short>
    BLOCK  src/pages/<Pascal>/package.json        files: src/pages/<Pascal>
"""

from __future__ import annotations

from pathlib import Path

from kitsync.artifacts.models import Artifact, ArtifactKind, pascal_case

MANIFEST_PATTERNS: dict[ArtifactKind, str] = {
    ArtifactKind.COM: "src/components/*/package.json",
    ArtifactKind.UTIL: "src/utils/*.package.json",
    ArtifactKind.BLOCK: "src/pages/*/package.json",
}

_DIRECTORY_ROOTS: dict[ArtifactKind, str] = {
    ArtifactKind.COM: "src/components",
    ArtifactKind.BLOCK: "src/pages",
}


def file_patterns(artifact: Artifact) -> list[str]:
    """Glob patterns selecting the files that make up an artifact."""
    if artifact.kind is ArtifactKind.UTIL:
        short = artifact.short_name
        return [
            f"src/utils/{short}.*",
            f"src/utils/*/{short}.*",
            f"src/utils/*/{short}",
        ]
    return [f"{_DIRECTORY_ROOTS[artifact.kind]}/{pascal_case(artifact.short_name)}"]


def artifact_files(artifact: Artifact, root: Path) -> list[Path]:
    """Resolve an artifact's files under a root, relative to that root.

    Results are de-duplicated and sorted so copies happen in a stable order.
    """
    matches: set[Path] = set()
    for pattern in file_patterns(artifact):
        for match in root.glob(pattern):
            matches.add(match.relative_to(root))
    return sorted(matches)


def has_foreign_conflict(artifact: Artifact, project_path: Path) -> bool:
    """Check whether the project holds a same-named path that is not an artifact.

    Component and block directories count as managed when they hold a
    package.json. A utility module counts as managed when its sibling
    ``<short>.package.json`` exists.
    """
    if artifact.kind is ArtifactKind.UTIL:
        target = project_path / "src" / "utils" / f"{artifact.short_name}.ts"
        manifest = project_path / "src" / "utils" / f"{artifact.short_name}.package.json"
    else:
        target = project_path / _DIRECTORY_ROOTS[artifact.kind] / pascal_case(artifact.short_name)
        manifest = target / "package.json"
    return target.exists() and not manifest.exists()


__all__ = [
    "MANIFEST_PATTERNS",
    "file_patterns",
    "artifact_files",
    "has_foreign_conflict",
]
