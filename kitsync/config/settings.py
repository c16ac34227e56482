"""Settings dataclass for KITSYNC configuration.

This module defines the Settings dataclass that holds all configuration
values together with the mapping between config file keys and attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# Default locations under the user's home directory
KITSYNC_HOME = Path.home() / ".kitsync"
CONFIG_FILE = KITSYNC_HOME / "config"
DEFAULT_CACHE_DIR = KITSYNC_HOME / "cache"
DEFAULT_LINKS_FILE = KITSYNC_HOME / "links.json"


@dataclass
class Settings:
    """Configuration settings for KITSYNC.

    All settings have defaults and can be loaded from the configuration
    file (~/.kitsync/config), a local .kitsync file or the environment.

    Attributes:
        com_url: Git URL of the shared component repository
        block_url: Git URL of the shared block repository
        cache_dir: Directory holding the local repository checkouts
        links_file: JSON file holding the project link registry
        internal_scope_prefix: Package name prefix marking shared artifacts
        block_scope_prefix: Package name prefix marking shared blocks
        sync_max_parallel: Maximum number of projects updated at once during sync
        git_clone_depth: Depth used for the initial shallow clone
    """

    # Repository settings
    com_url: str = ""
    block_url: str = ""

    # Storage settings
    cache_dir: str = str(DEFAULT_CACHE_DIR)
    links_file: str = str(DEFAULT_LINKS_FILE)

    # Dependency settings
    internal_scope_prefix: str = "@qg-"
    block_scope_prefix: str = "@qg-block"

    # Execution settings
    sync_max_parallel: int = 4
    git_clone_depth: int = 1

    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "COM_URL": "com_url",
            "BLOCK_URL": "block_url",
            "CACHE_DIR": "cache_dir",
            "LINKS_FILE": "links_file",
            "INTERNAL_SCOPE_PREFIX": "internal_scope_prefix",
            "BLOCK_SCOPE_PREFIX": "block_scope_prefix",
            "SYNC_MAX_PARALLEL": "sync_max_parallel",
            "GIT_CLONE_DEPTH": "git_clone_depth",
        },
        repr=False,
    )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key."""
        return self._key_mapping.get(key)

    def get_key_for_attribute(self, attr: str) -> str | None:
        """Get the config key for an attribute name."""
        for key, value in self._key_mapping.items():
            if value == attr:
                return key
        return None

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get list of all valid configuration keys."""
        return list(cls()._key_mapping.keys())

    def url_for(self, scope: str) -> str:
        """Repository URL configured for a runner scope ("com" or "block")."""
        return self.block_url if scope == "block" else self.com_url

    @staticmethod
    def url_key_for(scope: str) -> str:
        """Config key holding the repository URL for a runner scope."""
        return "BLOCK_URL" if scope == "block" else "COM_URL"


__all__ = [
    "Settings",
    "KITSYNC_HOME",
    "CONFIG_FILE",
    "DEFAULT_CACHE_DIR",
    "DEFAULT_LINKS_FILE",
]
