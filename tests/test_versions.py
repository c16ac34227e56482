"""Tests for kitsync.versions module."""

import logging

import pytest

from kitsync.versions import is_older, normalize_version


class TestNormalizeVersion:
    """Tests for normalize_version."""

    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("^1.2.3", "1.2.3"),
            ("~1.2.3", "1.2.3"),
            (" ^1.0.0 ", "1.0.0"),
            ("=2.0.0", "2.0.0"),
            ("v3.1.0", "3.1.0"),
            ("1.0.0", "1.0.0"),
            ("latest", "latest"),
        ],
    )
    def test_strips_range_markers(self, spec, expected):
        """Caret, tilde, equals and a leading v are removed."""
        assert normalize_version(spec) == expected


class TestIsOlder:
    """Tests for is_older."""

    def test_older(self):
        """A lower installed version is older."""
        assert is_older("^17.0.2", "^18.2.0") is True

    def test_equal(self):
        """Equal versions are not older."""
        assert is_older("^1.2.0", "1.2.0") is False

    def test_newer(self):
        """A newer installed version satisfies the requirement."""
        assert is_older("2.0.0", "^1.9.9") is False

    def test_numeric_not_lexical(self):
        """Components are compared numerically."""
        assert is_older("1.9.0", "1.10.0") is True

    def test_unparseable_equal_is_satisfied(self):
        """Identical non-version specs count as satisfied."""
        assert is_older("latest", "latest") is False

    def test_unparseable_different_is_older(self, caplog):
        """Different non-version specs count as outdated with a warning."""
        with caplog.at_level(logging.WARNING, logger="kitsync.versions"):
            assert is_older("latest", "^1.0.0") is True

        assert "Cannot compare versions" in caplog.text

    @pytest.mark.parametrize(
        "installed,required,expected",
        [
            ("1.0.0-1", "1.0.0", True),
            ("1.0.0-beta.1", "^1.0.0", True),
            ("1.0.0", "1.0.0-beta.1", False),
            ("1.0.0-beta.1", "1.0.0-beta.2", True),
            ("1.0.0-beta.10", "1.0.0-beta.2", False),
            ("1.0.0-2", "1.0.0-alpha", True),
            ("1.0.0-rc.1", "1.0.0-rc.1", False),
            ("0.9.0", "1.0.0-1", True),
            ("1.0.1-0", "1.0.0", False),
        ],
    )
    def test_hyphenated_prereleases(self, installed, required, expected):
        """A hyphen suffix is a prerelease that sorts before its release."""
        assert is_older(installed, required) is expected
