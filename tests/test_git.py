"""Tests for kitsync.integrations.git module."""

from unittest.mock import call, patch

import pytest

from kitsync.integrations.git import (
    add_all,
    clone,
    commit,
    commit_and_push,
    pull,
    push,
)
from kitsync.utils.errors import GitOperationError


@pytest.fixture
def mock_run():
    """Mock the streaming runner used by the git helpers."""
    with patch("kitsync.integrations.git.run_streaming") as mock:
        mock.return_value = 0
        yield mock


class TestClone:
    """Tests for clone function."""

    def test_clones_into_created_directory(self, mock_run, tmp_path):
        """The destination is created and cloned into as '.'."""
        dest = tmp_path / "cache" / "com"

        clone("git@example.com:com.git", dest, depth=1)

        assert dest.is_dir()
        mock_run.assert_called_once_with(
            ["git", "clone", "git@example.com:com.git", "--depth", "1", "."], dest, None
        )

    def test_depth_is_passed(self, mock_run, tmp_path):
        """A custom clone depth reaches git."""
        clone("url", tmp_path / "x", depth=5)

        assert "5" in mock_run.call_args[0][0]

    def test_failure_raises(self, mock_run, tmp_path):
        """A failed clone raises GitOperationError with the command."""
        mock_run.return_value = 128

        with pytest.raises(GitOperationError) as exc_info:
            clone("url", tmp_path / "x")

        assert exc_info.value.returncode == 128
        assert exc_info.value.command.startswith("git clone url")


class TestSimpleCommands:
    """Tests for pull, add_all, commit and push."""

    def test_pull(self, mock_run, tmp_path):
        """pull runs git pull in the directory."""
        pull(tmp_path)

        mock_run.assert_called_once_with(["git", "pull"], tmp_path, None)

    def test_add_all(self, mock_run, tmp_path):
        """add_all stages everything."""
        add_all(tmp_path)

        mock_run.assert_called_once_with(["git", "add", "-A"], tmp_path, None)

    def test_commit(self, mock_run, tmp_path):
        """commit passes the message as one argument."""
        commit(tmp_path, "chore(com): install @qg-com/button")

        mock_run.assert_called_once_with(
            ["git", "commit", "-m", "chore(com): install @qg-com/button"], tmp_path, None
        )

    def test_push(self, mock_run, tmp_path):
        """push runs git push."""
        push(tmp_path)

        mock_run.assert_called_once_with(["git", "push"], tmp_path, None)

    def test_missing_git(self, mock_run, tmp_path):
        """A missing git executable raises GitOperationError."""
        mock_run.side_effect = FileNotFoundError("git")

        with pytest.raises(GitOperationError, match="git executable not found"):
            pull(tmp_path)


class TestCommitAndPush:
    """Tests for commit_and_push."""

    def test_runs_steps_in_order(self, mock_run, tmp_path):
        """Stage, commit, pull and push run in sequence."""
        on_line = lambda line: None  # noqa: E731

        commit_and_push(tmp_path, "msg", on_line)

        assert mock_run.call_args_list == [
            call(["git", "add", "-A"], tmp_path, on_line),
            call(["git", "commit", "-m", "msg"], tmp_path, on_line),
            call(["git", "pull"], tmp_path, on_line),
            call(["git", "push"], tmp_path, on_line),
        ]

    def test_stops_at_first_failure(self, mock_run, tmp_path):
        """A failed commit stops before pull and push."""
        mock_run.side_effect = [0, 1]

        with pytest.raises(GitOperationError):
            commit_and_push(tmp_path, "msg")

        assert mock_run.call_count == 2
