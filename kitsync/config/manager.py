"""Configuration manager for KITSYNC.

This module provides the ConfigManager class for loading, saving, and
managing configuration values with a cascading hierarchy:

    1. Environment Variables (highest priority)
    2. Local Config (.kitsync in project/parent directories)
    3. Global Config (~/.kitsync/config)
    4. Built-in Defaults (lowest priority)
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from kitsync.config.settings import CONFIG_FILE, Settings
from kitsync.utils.console import console, print_header, print_info
from kitsync.utils.logging import log_message

logger = logging.getLogger(__name__)

_LINE_PATTERN = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)=(.*)$")
_KEY_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

_CONFIG_HEADER = [
    "# KITSYNC configuration",
    "# Format: KEY=VALUE. Environment variables override these values.",
]


class ConfigManager:
    """Manages configuration loading and saving with cascading hierarchy.

    Security features:
    - Safe line-by-line parsing (no eval/exec)
    - Key name validation
    - Atomic file writes
    - Secure file permissions (600)

    Attributes:
        settings: Current settings instance
        global_config_path: Path to global ~/.kitsync/config file
        local_config_path: Path to discovered local .kitsync file (after load)
    """

    LOCAL_CONFIG_NAME = ".kitsync"

    def __init__(self, global_config_path: Path | None = None) -> None:
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self.settings = Settings()
        self._raw_values: dict[str, str] = {}
        self._config_sources: dict[str, str] = {}

    def ensure_global_config(self) -> bool:
        """Create the global config file from defaults if it does not exist.

        Returns:
            True if the file was created, False if it already existed
        """
        if self.global_config_path.exists():
            return False

        print_info("Initializing configuration file")
        defaults = Settings()
        lines = list(_CONFIG_HEADER)
        for key in Settings.get_config_keys():
            attr = defaults.get_attribute_for_key(key)
            value = str(getattr(defaults, attr)) if attr else ""
            lines.append(f'{key}="{self._escape_value_for_storage(value)}"')
        self._atomic_write_to_path(lines, self.global_config_path)
        log_message(f"Created global configuration at {self.global_config_path}")
        return True

    def load(self) -> Settings:
        """Load configuration from all sources with cascading precedence.

        Each call starts from clean defaults so that repeated loads never
        keep stale values.

        Returns:
            Settings instance with loaded values
        """
        self.settings = Settings()
        self.local_config_path = None
        self._raw_values = {}
        self._config_sources = {}

        if self.global_config_path.exists():
            log_message(f"Loading global configuration from {self.global_config_path}")
            self._load_file(self.global_config_path, source="global")

        local_path = self._find_local_config()
        if local_path:
            self.local_config_path = local_path
            log_message(f"Loading local configuration from {local_path}")
            self._load_file(local_path, source=f"local ({local_path})")

        self._load_environment()

        for key, value in self._raw_values.items():
            self._apply_value_to_settings(key, value)

        log_message(f"Configuration loaded successfully ({len(self._raw_values)} keys)")
        return self.settings

    def _find_local_config(self) -> Path | None:
        """Find local .kitsync config by traversing up from CWD.

        Stops at the first .kitsync file, at a repository root (.git) or at
        the filesystem root.
        """
        current = Path.cwd()
        while True:
            config_path = current / self.LOCAL_CONFIG_NAME
            if config_path.is_file():
                return config_path

            if (current / ".git").exists():
                break

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def _load_file(self, path: Path, source: str = "file") -> None:
        """Load key=value pairs from a config file."""
        for key, value in self._read_file_values(path).items():
            self._raw_values[key] = value
            self._config_sources[key] = source

    def _load_environment(self) -> None:
        """Override config with environment variables for known keys only."""
        for key in Settings.get_config_keys():
            env_value = os.environ.get(key)
            if env_value is not None:
                self._raw_values[key] = env_value
                self._config_sources[key] = "environment"

    def _apply_value_to_settings(self, key: str, value: str) -> None:
        """Apply a raw config value to the settings object."""
        attr = self.settings.get_attribute_for_key(key)
        if attr is None:
            return

        current_value = getattr(self.settings, attr)

        if isinstance(current_value, bool):
            setattr(self.settings, attr, value.lower() in ("true", "1", "yes"))
        elif isinstance(current_value, int):
            try:
                parsed = int(value)
            except ValueError:
                logger.warning(f"Invalid integer for {key}: '{value}', keeping default")
                return
            if parsed < 1:
                logger.warning(f"{key} must be at least 1, keeping default")
                return
            setattr(self.settings, attr, parsed)
        else:
            # Path-valued keys accept ~ for the home directory
            if attr.endswith(("_dir", "_file")):
                value = os.path.expanduser(value)
            setattr(self.settings, attr, value)

    def save(self, key: str, value: str) -> str | None:
        """Save a configuration value to the global config file.

        Writes the value to the target file and reloads so that
        ``settings`` reflects the effective value after precedence.

        Args:
            key: Configuration key (must match [a-zA-Z_][a-zA-Z0-9_]*)
            value: Configuration value to save

        Returns:
            Warning message if an environment variable overrides the saved
            value, None otherwise.

        Raises:
            ValueError: If the key name is invalid
        """
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid config key: {key}")

        target_path = self.global_config_path

        existing_lines: list[str] = []
        if target_path.exists():
            existing_lines = target_path.read_text().splitlines()

        new_lines: list[str] = []
        written = False
        escaped_value = self._escape_value_for_storage(value)

        for line in existing_lines:
            match = _LINE_PATTERN.match(line.strip())
            if match and match.group(1) == key:
                new_lines.append(f'{key}="{escaped_value}"')
                written = True
            else:
                new_lines.append(line)

        if not written:
            new_lines.append(f'{key}="{escaped_value}"')

        self._atomic_write_to_path(new_lines, target_path)
        log_message(f"Configuration saved to global: {key}")

        warning = None
        if os.environ.get(key) is not None:
            warning = (
                f"Warning: '{key}' saved to global config but is overridden "
                f"by environment variable (effective value: '{os.environ.get(key)}')"
            )

        self.load()
        return warning

    def _read_file_values(self, path: Path) -> dict[str, str]:
        """Read key=value pairs from a config file without modifying state."""
        values: dict[str, str] = {}
        if not path.exists():
            return values

        with path.open() as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                match = _LINE_PATTERN.match(line)
                if match:
                    key, value = match.groups()
                    # Only double-quoted values are unescaped
                    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                        value = self._unescape_value(value[1:-1])
                    elif len(value) >= 2 and value.startswith("'") and value.endswith("'"):
                        value = value[1:-1]
                    values[key] = value
        return values

    def _atomic_write_to_path(self, lines: list[str], target_path: Path) -> None:
        """Atomically write lines to a config file."""
        target_path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=target_path.parent,
            prefix=".kitsync-config-",
        )
        try:
            with os.fdopen(fd, "w") as f:
                f.write("\n".join(lines))
                if lines:
                    f.write("\n")

            os.chmod(temp_path, 0o600)
            Path(temp_path).replace(target_path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    @staticmethod
    def _escape_value_for_storage(value: str) -> str:
        """Escape backslashes and double quotes for double-quoted storage."""
        result = value.replace("\\", "\\\\")
        result = result.replace('"', '\\"')
        return result

    @staticmethod
    def _unescape_value(value: str) -> str:
        """Reverse _escape_value_for_storage."""
        result = value.replace("\\\\", "\\")
        result = result.replace('\\"', '"')
        return result

    def get_config_source(self, key: str) -> str:
        """Describe where the effective value of a key came from."""
        return self._config_sources.get(key, "default")

    def show(self) -> None:
        """Display current configuration using Rich formatting."""
        print_header("Current Configuration")

        print_info(f"Global config: {self.global_config_path}")
        if self.local_config_path:
            print_info(f"Local config:  {self.local_config_path}")
        else:
            print_info("Local config:  (not found)")
        console.print()

        s = self.settings

        console.print("  [bold]Repositories:[/bold]")
        console.print(f"    Component Repository: {s.com_url or '(not set)'}")
        console.print(f"    Block Repository: {s.block_url or '(not set)'}")
        console.print()

        console.print("  [bold]Storage:[/bold]")
        console.print(f"    Cache Directory: {s.cache_dir}")
        console.print(f"    Link Registry: {s.links_file}")
        console.print()

        console.print("  [bold]Dependencies:[/bold]")
        console.print(f"    Internal Scope Prefix: {s.internal_scope_prefix}")
        console.print(f"    Block Scope Prefix: {s.block_scope_prefix}")
        console.print()

        console.print("  [bold]Execution:[/bold]")
        console.print(f"    Sync Max Parallel: {s.sync_max_parallel}")
        console.print(f"    Git Clone Depth: {s.git_clone_depth}")
        console.print()


__all__ = [
    "ConfigManager",
]
