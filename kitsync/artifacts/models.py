"""Artifact model for shared components, utilities and blocks.

Every shared artifact carries its own package.json manifest. The manifest
name is scoped (``@group/short-name``); the short name decides where the
artifact's files live.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ArtifactKind(Enum):
    """Kinds of shared artifacts."""

    COM = "com"
    UTIL = "util"
    BLOCK = "block"

    @property
    def link_key(self) -> str:
        """Registry namespace for this kind.

        Components and utilities come from the same repository and share
        the "com" namespace.
        """
        return "block" if self is ArtifactKind.BLOCK else "com"


_WORD_PATTERN = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")


def pascal_case(text: str) -> str:
    """Convert a short name to PascalCase.

    Examples:
        >>> pascal_case("button-group")
        'ButtonGroup'
        >>> pascal_case("userProfile")
        'UserProfile'
    """
    return "".join(word[:1].upper() + word[1:].lower() for word in _WORD_PATTERN.findall(text))


@dataclass
class Artifact:
    """A shared artifact described by its package.json manifest.

    Attributes:
        name: Full package name, e.g. "@qg-com/button"
        version: Declared version
        kind: Artifact kind
        group: Scope part of the name, e.g. "@qg-com"
        short_name: Name without the scope, e.g. "button"
        feature: Short feature label shown in selection prompts
        description: Human readable description
        dependencies: Declared dependency map (name -> version spec)
        license: Declared license
        repository: Declared repository metadata
    """

    name: str
    version: str
    kind: ArtifactKind
    group: str = ""
    short_name: str = ""
    feature: str = ""
    description: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)
    license: str = ""
    repository: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_package(cls, data: dict[str, Any], kind: ArtifactKind) -> Artifact:
        """Build an artifact from a parsed package.json.

        Raises:
            ValueError: If the manifest has no name or version, or its
                dependencies are not a map of strings
        """
        name = data.get("name")
        version = data.get("version")
        if not name or not version:
            raise ValueError("manifest must declare 'name' and 'version'")

        dependencies = data.get("dependencies") or {}
        if not isinstance(dependencies, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in dependencies.items()
        ):
            raise ValueError("'dependencies' must map package names to version strings")

        group, _, short_name = str(name).partition("/")
        if not short_name:
            # Unscoped names have no group
            group, short_name = "", group

        repository = data.get("repository") or {}
        if isinstance(repository, str):
            repository = {"url": repository}

        return cls(
            name=str(name),
            version=str(version),
            kind=kind,
            group=group,
            short_name=short_name,
            feature=str(data.get("feature") or ""),
            description=str(data.get("description") or ""),
            dependencies=dict(dependencies),
            license=str(data.get("license") or ""),
            repository=repository,
        )

    @property
    def label(self) -> str:
        """Display label used in selection prompts."""
        return f"{self.name}[{self.feature}](description: {self.description})"


__all__ = [
    "Artifact",
    "ArtifactKind",
    "pascal_case",
]
