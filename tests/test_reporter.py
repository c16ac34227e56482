"""Tests for kitsync.installer.reporter module."""

from unittest.mock import patch

from kitsync.installer.reporter import BufferedSink, Reporter, counter


class TestCounter:
    """Tests for counter."""

    def test_format(self):
        """Counters look like [i/n] - ."""
        assert counter(2, 5) == "[2/5] - "


class TestReporterConsole:
    """Tests for a reporter printing to the console."""

    @patch("kitsync.installer.reporter.print_step")
    def test_pending_prints_step(self, mock_step):
        """Pending messages carry the scope."""
        Reporter("com").pending("analysing")

        mock_step.assert_called_once_with("[com] analysing")

    @patch("kitsync.installer.reporter.print_success")
    @patch("kitsync.installer.reporter.print_warning")
    @patch("kitsync.installer.reporter.print_error")
    @patch("kitsync.installer.reporter.print_info")
    def test_levels(self, mock_info, mock_error, mock_warning, mock_success):
        """Each level uses its console function."""
        reporter = Reporter("block")

        reporter.success("ok")
        reporter.warning("careful")
        reporter.error("bad")
        reporter.info("fyi")

        mock_success.assert_called_once_with("[block] ok")
        mock_warning.assert_called_once_with("[block] careful")
        mock_error.assert_called_once_with("[block] bad")
        mock_info.assert_called_once_with("[block] fyi")

    @patch("kitsync.installer.reporter.console")
    def test_output_is_printed_raw(self, mock_console):
        """Command output is printed without markup."""
        Reporter("com").output("[notice] npm")

        args, kwargs = mock_console.print.call_args
        assert args[0] == "    [notice] npm"
        assert kwargs["markup"] is False


class TestReporterSink:
    """Tests for a reporter writing to a sink."""

    def test_lines_go_to_sink(self):
        """Messages are buffered with level and scope."""
        sink = BufferedSink()
        reporter = Reporter("com", sink)

        reporter.pending("start")
        reporter.output("npm line")

        assert sink.lines == ["[PENDING] [com] start", "    npm line"]

    def test_child_shares_sink(self):
        """A nested reporter writes to the same destination."""
        sink = BufferedSink()
        child = Reporter("com", sink).child("com->@qg-com/modal")

        child.success("done")

        assert sink.lines == ["[SUCCESS] [com->@qg-com/modal] done"]

    @patch("kitsync.installer.reporter.console")
    def test_flush_prints_and_clears(self, mock_console):
        """Flushing prints every buffered line once."""
        sink = BufferedSink()
        sink("one")
        sink("two")

        sink.flush()

        assert [c[0][0] for c in mock_console.print.call_args_list] == ["one", "two"]
        assert sink.lines == []
