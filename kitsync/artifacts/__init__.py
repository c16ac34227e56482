"""Shared artifact model, layout and discovery."""

from kitsync.artifacts.catalog import Catalog
from kitsync.artifacts.layout import artifact_files, file_patterns, has_foreign_conflict
from kitsync.artifacts.models import Artifact, ArtifactKind, pascal_case

__all__ = [
    "Artifact",
    "ArtifactKind",
    "Catalog",
    "artifact_files",
    "file_patterns",
    "has_foreign_conflict",
    "pascal_case",
]
