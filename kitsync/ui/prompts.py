"""Interactive prompts for KITSYNC.

This module provides Questionary-based user input prompts with
consistent styling and error handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import questionary
from questionary import Style

from kitsync.utils.errors import KitsyncError, UserCancelledError
from kitsync.utils.logging import log_message

if TYPE_CHECKING:
    from kitsync.artifacts.models import Artifact

# Custom style matching the application theme
custom_style = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
        ("separator", "fg:cyan"),
        ("instruction", "fg:white"),
        ("text", ""),
        ("disabled", "fg:gray italic"),
    ]
)

SELECT_AT_LEAST_ONE = "Select at least one artifact"


def prompt_checkbox(
    message: str,
    choices: list[questionary.Choice] | list[str],
    *,
    require_selection: bool = False,
) -> list[Any]:
    """Prompt for multiple selections from a list.

    Args:
        message: Prompt message
        choices: Choices (plain strings or questionary.Choice with values)
        require_selection: Reject an empty selection

    Returns:
        Values of the selected choices

    Raises:
        UserCancelledError: If user presses Ctrl+C
    """
    log_message(f"Prompt checkbox: {message}")

    def validate(selected: list[Any]) -> bool | str:
        if require_selection and not selected:
            return SELECT_AT_LEAST_ONE
        return True

    try:
        result = questionary.checkbox(
            message,
            choices=choices,
            validate=validate,
            style=custom_style,
        ).ask()

        if result is None:
            raise UserCancelledError("User cancelled checkbox prompt")

        log_message(f"User selected {len(result)} item(s)")
        return result

    except KeyboardInterrupt:
        raise UserCancelledError("User cancelled with Ctrl+C")


def select_artifacts(message: str, artifacts: list[Artifact]) -> list[Artifact]:
    """Let the user pick one or more artifacts.

    Each choice is labelled ``name[feature](description: ...)``.

    Args:
        message: Prompt message
        artifacts: Candidates

    Returns:
        The selected artifacts

    Raises:
        KitsyncError: If there is nothing to choose from
        UserCancelledError: If the user cancels
    """
    if not artifacts:
        raise KitsyncError(f"No artifacts available for: {message}")

    choices = [
        questionary.Choice(title=artifact.label, value=artifact) for artifact in artifacts
    ]
    selected = prompt_checkbox(message, choices, require_selection=True)
    log_message(f"Selected artifacts: {', '.join(a.name for a in selected)}")
    return selected


__all__ = [
    "custom_style",
    "prompt_checkbox",
    "select_artifacts",
]
