"""Interactive user interface helpers for KITSYNC."""

from kitsync.ui.prompts import custom_style, prompt_checkbox, select_artifacts

__all__ = [
    "custom_style",
    "prompt_checkbox",
    "select_artifacts",
]
