"""
Operator output — one colored status line per outcome.

Colors live in an immutable Presentation value handed to the Reporter,
so tests and alternative front ends can swap the palette without
touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass

import click

from panelctl.core.models.outcome import OperationOutcome


@dataclass(frozen=True)
class Presentation:
    """Palette and labels for operator-facing lines."""

    info_color: str = "green"
    error_color: str = "red"
    warn_color: str = "yellow"
    accent_color: str = "green"
    color: bool | None = None       # None = let click decide from the TTY

    info_label: str = "[INFO]"
    error_label: str = "[ERROR]"
    warn_label: str = "[WARN]"


PLAIN = Presentation(color=False)


class Reporter:
    """Render status lines and relayed collaborator output."""

    def __init__(self, presentation: Presentation | None = None):
        self.presentation = presentation or Presentation()

    def info(self, message: str) -> None:
        p = self.presentation
        click.secho(f"{p.info_label} {message}", fg=p.info_color, color=p.color)

    def warn(self, message: str) -> None:
        p = self.presentation
        click.secho(f"{p.warn_label} {message}", fg=p.warn_color, color=p.color)

    def error(self, message: str) -> None:
        p = self.presentation
        click.secho(f"{p.error_label} {message}", fg=p.error_color, err=True, color=p.color)

    def accent(self, text: str) -> str:
        """Style a fragment (menu numbers, titles) without printing it."""
        return click.style(text, fg=self.presentation.accent_color)

    def outcome(self, outcome: OperationOutcome) -> None:
        """Print any relayed output, then the single status line."""
        if outcome.detail:
            click.echo(outcome.detail, color=self.presentation.color)
        if outcome.ok:
            self.info(outcome.message)
        elif outcome.cancelled:
            self.warn(outcome.message)
        else:
            self.error(outcome.message)
