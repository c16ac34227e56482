"""Tests for kitsync.ui.prompts module."""

from unittest.mock import patch

import pytest

from kitsync.artifacts.models import Artifact, ArtifactKind
from kitsync.ui.prompts import (
    SELECT_AT_LEAST_ONE,
    custom_style,
    prompt_checkbox,
    select_artifacts,
)
from kitsync.utils.errors import KitsyncError, UserCancelledError


def make(name: str) -> Artifact:
    return Artifact.from_package(
        {"name": name, "version": "1.0.0", "feature": "ui", "description": "desc"},
        ArtifactKind.COM,
    )


class TestCustomStyle:
    """Tests for custom_style."""

    def test_style_has_qmark(self):
        """Style defines qmark."""
        assert any("qmark" in str(s) for s in custom_style.style_rules)


class TestPromptCheckbox:
    """Tests for prompt_checkbox function."""

    @patch("questionary.checkbox")
    def test_returns_selection(self, mock_checkbox):
        """Returns the selected values."""
        mock_checkbox.return_value.ask.return_value = ["a", "b"]

        assert prompt_checkbox("Pick", ["a", "b", "c"]) == ["a", "b"]

    @patch("questionary.checkbox")
    def test_raises_on_cancel(self, mock_checkbox):
        """Raises UserCancelledError when the prompt is dismissed."""
        mock_checkbox.return_value.ask.return_value = None

        with pytest.raises(UserCancelledError):
            prompt_checkbox("Pick", ["a"])

    @patch("questionary.checkbox")
    def test_raises_on_ctrl_c(self, mock_checkbox):
        """Raises UserCancelledError on KeyboardInterrupt."""
        mock_checkbox.return_value.ask.side_effect = KeyboardInterrupt

        with pytest.raises(UserCancelledError, match="Ctrl\\+C"):
            prompt_checkbox("Pick", ["a"])

    @patch("questionary.checkbox")
    def test_validator_requires_selection(self, mock_checkbox):
        """With require_selection an empty answer is rejected."""
        mock_checkbox.return_value.ask.return_value = ["a"]

        prompt_checkbox("Pick", ["a"], require_selection=True)

        validate = mock_checkbox.call_args[1]["validate"]
        assert validate([]) == SELECT_AT_LEAST_ONE
        assert validate(["a"]) is True

    @patch("questionary.checkbox")
    def test_validator_allows_empty_by_default(self, mock_checkbox):
        """Without require_selection an empty answer is fine."""
        mock_checkbox.return_value.ask.return_value = []

        prompt_checkbox("Pick", ["a"])

        validate = mock_checkbox.call_args[1]["validate"]
        assert validate([]) is True


class TestSelectArtifacts:
    """Tests for select_artifacts function."""

    @patch("questionary.checkbox")
    def test_returns_selected_artifacts(self, mock_checkbox):
        """Selected artifacts come back as Artifact objects."""
        button = make("@qg-com/button")
        mock_checkbox.return_value.ask.return_value = [button]

        result = select_artifacts("Select", [button, make("@qg-com/modal")])

        assert result == [button]

    @patch("questionary.checkbox")
    def test_choices_use_artifact_labels(self, mock_checkbox):
        """Choices are titled with the artifact label."""
        button = make("@qg-com/button")
        mock_checkbox.return_value.ask.return_value = [button]

        select_artifacts("Select", [button])

        choices = mock_checkbox.call_args[1]["choices"]
        assert choices[0].title == "@qg-com/button[ui](description: desc)"
        assert choices[0].value is button

    @patch("questionary.checkbox")
    def test_empty_candidates(self, mock_checkbox):
        """No candidates raises without prompting."""
        with pytest.raises(KitsyncError, match="No artifacts available"):
            select_artifacts("Select the artifacts to sync", [])

        mock_checkbox.assert_not_called()
