"""Dependency reconciliation between an artifact and a consumer project.

An artifact declares the dependencies it needs. Each one is classified
against what the project already has:

- satisfied: present at an equal or newer version, nothing to do
- update: third-party package present at an older version
- install: third-party package not present
- internal: shared artifact (scope prefix match) that is missing or
  older; it is installed recursively by copying, not through npm
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from kitsync.utils.errors import ProjectNotFoundError
from kitsync.versions import is_older, normalize_version


@dataclass
class DependencyPlan:
    """Classified dependencies of one artifact for one project.

    Attributes:
        install: Third-party packages to add, as (name, version)
        update: Third-party packages to bump, as (name, version)
        internal: Shared artifacts to install recursively
        satisfied: Dependencies that need no action
    """

    install: list[tuple[str, str]] = field(default_factory=list)
    update: list[tuple[str, str]] = field(default_factory=list)
    internal: list[str] = field(default_factory=list)
    satisfied: list[str] = field(default_factory=list)

    @property
    def npm_specs(self) -> list[str]:
        """``name@version`` arguments for a single npm install, installs first."""
        return [f"{name}@{ver}" for name, ver in [*self.install, *self.update]]

    @property
    def is_empty(self) -> bool:
        return not (self.install or self.update or self.internal)


def reconcile(
    required: Mapping[str, str],
    project_deps: Mapping[str, str],
    internal_prefix: str,
) -> DependencyPlan:
    """Classify an artifact's dependencies against a project.

    Declaration order of ``required`` is preserved within each category.

    Args:
        required: Dependency map declared by the artifact
        project_deps: Dependency map of the project (see project_dependencies)
        internal_prefix: Package name prefix marking shared artifacts

    Returns:
        The classified dependency plan
    """
    plan = DependencyPlan()
    for name, spec in required.items():
        internal = name.startswith(internal_prefix)
        installed = project_deps.get(name)

        if installed:
            if not is_older(installed, spec):
                plan.satisfied.append(name)
            elif internal:
                plan.internal.append(name)
            else:
                plan.update.append((name, normalize_version(spec)))
        elif internal:
            plan.internal.append(name)
        else:
            plan.install.append((name, normalize_version(spec)))
    return plan


def read_package_json(project_path: Path) -> dict:
    """Read a project's package.json.

    Raises:
        ProjectNotFoundError: If the project has no readable package.json
    """
    manifest = project_path / "package.json"
    try:
        return json.loads(manifest.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ProjectNotFoundError(f"No package.json in project: {project_path}") from None
    except json.JSONDecodeError as e:
        raise ProjectNotFoundError(f"Invalid package.json in {project_path}: {e}") from e


def project_dependencies(
    project_path: Path,
    internal_maps: Iterable[Mapping[str, str]] = (),
) -> dict[str, str]:
    """Everything a project already provides, as one dependency map.

    Merges ``dependencies``, then ``devDependencies``, then each map of
    shared artifacts already copied into the project. Later sources win.
    """
    package = read_package_json(project_path)
    merged: dict[str, str] = {}
    merged.update(package.get("dependencies") or {})
    merged.update(package.get("devDependencies") or {})
    for mapping in internal_maps:
        merged.update(mapping)
    return merged


__all__ = [
    "DependencyPlan",
    "reconcile",
    "read_package_json",
    "project_dependencies",
]
