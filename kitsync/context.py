"""Project and cache locations.

The consumer project is the nearest directory, walking upward from the
current working directory, that contains a package.json.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from kitsync.config.settings import CONFIG_FILE, Settings
from kitsync.utils.errors import ProjectNotFoundError


def find_project_root(start: Path | None = None) -> Path:
    """Find the nearest ancestor directory that contains a package.json.

    Args:
        start: Directory to start from (defaults to the current directory)

    Returns:
        Absolute path of the project root

    Raises:
        ProjectNotFoundError: If no package.json is found up to the filesystem root
    """
    origin = (start or Path.cwd()).resolve()
    current = origin
    while True:
        if (current / "package.json").is_file():
            return current

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ProjectNotFoundError(f"Could not find a project root (package.json) above: {origin}")


@dataclass
class Context:
    """Filesystem locations used by the runners.

    Attributes:
        com_path: Local checkout of the shared component repository
        block_path: Local checkout of the shared block repository
        links_path: Link registry file
        config_path: Global configuration file
    """

    com_path: Path
    block_path: Path
    links_path: Path
    config_path: Path = CONFIG_FILE
    _project_path: Path | None = field(default=None, repr=False)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        project_path: Path | None = None,
        config_path: Path | None = None,
    ) -> Context:
        cache_dir = Path(settings.cache_dir)
        return cls(
            com_path=cache_dir / "com",
            block_path=cache_dir / "block",
            config_path=config_path or CONFIG_FILE,
            links_path=Path(settings.links_file),
            _project_path=project_path,
        )

    @property
    def project_path(self) -> Path:
        """Consumer project root, located on first access."""
        if self._project_path is None:
            self._project_path = find_project_root()
        return self._project_path

    def cache_path(self, scope: str) -> Path:
        """Local checkout directory for a runner scope ("com" or "block")."""
        return self.block_path if scope == "block" else self.com_path


__all__ = [
    "Context",
    "find_project_root",
]
