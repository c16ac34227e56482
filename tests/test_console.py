"""Tests for kitsync.utils.console module."""

from unittest.mock import patch

from kitsync.utils.console import (
    custom_theme,
    print_error,
    print_header,
    print_info,
    print_step,
    print_success,
    print_warning,
    separator,
    show_version,
)


class TestCustomTheme:
    """Tests for custom Rich theme."""

    def test_theme_has_level_styles(self):
        """Theme defines a style for every message level."""
        for name in ("error", "success", "warning", "info", "header", "step"):
            assert name in custom_theme.styles


class TestPrintFunctions:
    """Tests for print functions."""

    @patch("kitsync.utils.console.console_err")
    @patch("kitsync.utils.logging.log_message")
    def test_print_error(self, mock_log, mock_console_err):
        """print_error writes to stderr and logs."""
        print_error("Test error")

        mock_console_err.print.assert_called_once()
        call_args = mock_console_err.print.call_args
        assert "[ERROR]" in call_args[0][0]
        assert "Test error" in call_args[0][0]
        mock_log.assert_called_once_with("ERROR: Test error")

    @patch("kitsync.utils.console.console")
    @patch("kitsync.utils.logging.log_message")
    def test_print_success(self, mock_log, mock_console):
        """print_success outputs success message."""
        print_success("Test success")

        call_args = mock_console.print.call_args
        assert "[SUCCESS]" in call_args[0][0]
        assert "Test success" in call_args[0][0]
        mock_log.assert_called_once_with("SUCCESS: Test success")

    @patch("kitsync.utils.console.console")
    @patch("kitsync.utils.logging.log_message")
    def test_print_warning(self, mock_log, mock_console):
        """print_warning outputs warning message."""
        print_warning("Test warning")

        call_args = mock_console.print.call_args
        assert "[WARNING]" in call_args[0][0]
        mock_log.assert_called_once_with("WARNING: Test warning")

    @patch("kitsync.utils.console.console")
    @patch("kitsync.utils.logging.log_message")
    def test_print_info(self, mock_log, mock_console):
        """print_info outputs info message."""
        print_info("Test info")

        call_args = mock_console.print.call_args
        assert "[INFO]" in call_args[0][0]
        mock_log.assert_called_once_with("INFO: Test info")

    @patch("kitsync.utils.console.console")
    def test_print_header(self, mock_console):
        """print_header outputs header with formatting."""
        print_header("Sync @qg-com/button")

        assert mock_console.print.call_count == 3
        calls = mock_console.print.call_args_list
        assert "=== Sync @qg-com/button ===" in calls[1][0][0]

    @patch("kitsync.utils.console.console")
    def test_print_step(self, mock_console):
        """print_step outputs step with arrow."""
        print_step("Test step")

        call_args = mock_console.print.call_args
        assert "➜" in call_args[0][0]
        assert "Test step" in call_args[0][0]

    @patch("kitsync.utils.console.console")
    def test_separator(self, mock_console):
        """separator prints a blank line."""
        separator()

        mock_console.print.assert_called_once_with()


class TestShowVersion:
    """Tests for version display."""

    @patch("kitsync.utils.console.console")
    def test_shows_version_and_requirements(self, mock_console):
        """Version output names the tool and its external requirements."""
        show_version()

        output = " ".join(str(c[0][0]) for c in mock_console.print.call_args_list if c[0])
        assert "KITSYNC" in output
        assert "1.0.0" in output
        assert "git" in output
        assert "npm" in output
