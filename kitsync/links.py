"""Registry of which projects consume which shared artifacts.

Stored as JSON:

    {
      "com":   {"@qg-com/button": {"project": {"/abs/path/app": {}}}},
      "block": {"@qg-block/login": {"project": {"/abs/path/admin": {}}}}
    }

The per-project value is an empty object reserved for per-link metadata.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from kitsync.utils.logging import log_message

logger = logging.getLogger(__name__)

LINK_KINDS = ("com", "block")


class LinkRegistry:
    """Link relationships between shared artifacts and projects.

    Attributes:
        path: JSON file backing the registry
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._data: dict[str, dict[str, dict[str, Any]]] = {kind: {} for kind in LINK_KINDS}
        self._loaded = False

    def load(self) -> LinkRegistry:
        """Read the registry from disk; a missing file is an empty registry."""
        self._data = {kind: {} for kind in LINK_KINDS}
        if self.path.exists():
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                logger.warning(f"Ignoring unreadable link registry {self.path}: {e}")
                raw = {}
            for kind in LINK_KINDS:
                entries = raw.get(kind)
                if isinstance(entries, dict):
                    self._data[kind] = entries
        self._loaded = True
        return self

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def link(self, kind: str, name: str, project: Path | str) -> None:
        """Record that a project consumes an artifact."""
        self._ensure_loaded()
        entry = self._data[kind].setdefault(name, {"project": {}})
        entry.setdefault("project", {})[str(project)] = {}
        log_message(f"Linked {name} -> {project}")

    def unlink(self, kind: str, name: str, project: Path | str) -> bool:
        """Remove a project from an artifact's links.

        The artifact entry is dropped once no project links to it.

        Returns:
            True if a link was removed, False if there was none
        """
        self._ensure_loaded()
        entry = self._data[kind].get(name)
        if not entry or str(project) not in entry.get("project", {}):
            return False

        del entry["project"][str(project)]
        if not entry["project"]:
            del self._data[kind][name]
        log_message(f"Unlinked {name} -> {project}")
        return True

    def projects(self, kind: str, name: str) -> list[str]:
        """Projects linked to an artifact, in registration order."""
        self._ensure_loaded()
        entry = self._data[kind].get(name) or {}
        return list(entry.get("project", {}))

    def is_linked(self, kind: str, name: str) -> bool:
        return bool(self.projects(kind, name))

    def linked_to(self, kind: str, project: Path | str) -> list[str]:
        """Names of artifacts linked to a project."""
        self._ensure_loaded()
        key = str(project)
        return [name for name, entry in self._data[kind].items() if key in entry.get("project", {})]

    def save(self) -> None:
        """Atomically write the registry to disk."""
        self._ensure_loaded()
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".kitsync-links-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
                f.write("\n")
            Path(temp_path).replace(self.path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise
        log_message(f"Link registry saved to {self.path}")


__all__ = [
    "LINK_KINDS",
    "LinkRegistry",
]
