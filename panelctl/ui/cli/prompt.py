"""
Confirmation prompt — the gate in front of every destructive action.

Only a single ``y`` or ``Y`` counts as yes. Anything else, including
empty input when no default is offered, is no.
"""

from __future__ import annotations

import re
from collections.abc import Callable

import click

_AFFIRMATIVE = re.compile(r"[yY]")


def _click_reader(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix=": ")


class ConfirmationPrompt:
    """Ask yes/no questions and read free-form answers.

    Args:
        reader: Takes the prompt text and returns the raw answer.
            Defaults to ``click.prompt``.
    """

    def __init__(self, reader: Callable[[str], str] | None = None):
        self._reader = reader or _click_reader

    def read(self, text: str) -> str:
        """Read one raw line of input."""
        return self._reader(text)

    def ask(self, text: str, default: bool | str | None = None) -> bool:
        """Ask a yes/no question.

        Args:
            text: The question.
            default: Answer used when the operator just presses enter.
                ``True``/``False`` are shown as ``y``/``n``.

        Returns:
            True only for an affirmative answer.
        """
        if isinstance(default, bool):
            default = "y" if default else "n"

        if default:
            response = self._reader(f"{text} [default: {default}]").strip() or default
        else:
            response = self._reader(f"{text} [y/n]").strip()

        return _AFFIRMATIVE.fullmatch(response) is not None
