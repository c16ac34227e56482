"""Tests for kitsync.config.settings module."""

from kitsync.config.settings import DEFAULT_CACHE_DIR, Settings


class TestSettings:
    """Tests for Settings dataclass."""

    def test_defaults(self):
        """Defaults point at the user's kitsync home."""
        settings = Settings()

        assert settings.cache_dir == str(DEFAULT_CACHE_DIR)
        assert settings.block_scope_prefix == "@qg-block"
        assert settings.git_clone_depth == 1

    def test_key_attribute_mapping(self):
        """Config keys map to attributes and back."""
        settings = Settings()

        assert settings.get_attribute_for_key("SYNC_MAX_PARALLEL") == "sync_max_parallel"
        assert settings.get_key_for_attribute("links_file") == "LINKS_FILE"
        assert settings.get_attribute_for_key("UNKNOWN") is None
        assert settings.get_key_for_attribute("unknown") is None

    def test_config_keys(self):
        """Every setting has a config key."""
        keys = Settings.get_config_keys()

        assert "COM_URL" in keys
        assert "BLOCK_URL" in keys
        assert len(keys) == 8

    def test_url_for_scope(self):
        """Each runner scope has its own repository URL."""
        settings = Settings(com_url="com.git", block_url="block.git")

        assert settings.url_for("com") == "com.git"
        assert settings.url_for("block") == "block.git"
        assert Settings.url_key_for("com") == "COM_URL"
        assert Settings.url_key_for("block") == "BLOCK_URL"
