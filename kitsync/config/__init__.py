"""Configuration management for KITSYNC.

This package contains:
- settings: Settings dataclass with configuration fields
- manager: ConfigManager class for loading/saving configuration

Configuration Format
====================
The configuration format is flat KEY=VALUE (environment variable style).

Examples:
    COM_URL=git@example.com:frontend/shared-components.git
    BLOCK_URL=git@example.com:frontend/shared-blocks.git
    SYNC_MAX_PARALLEL=4
"""

from kitsync.config.manager import ConfigManager
from kitsync.config.settings import CONFIG_FILE, KITSYNC_HOME, Settings

__all__ = [
    "Settings",
    "ConfigManager",
    "CONFIG_FILE",
    "KITSYNC_HOME",
]
