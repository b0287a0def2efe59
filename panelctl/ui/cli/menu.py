"""
Interactive menu — render, read one choice, dispatch, repeat.

The loop has a single exit: choice 0. Every other choice, valid or
not, comes back to a freshly rendered menu.
"""

from __future__ import annotations

import click

from panelctl.core.models.service import OperationIntent
from panelctl.ui.cli.prompt import ConfirmationPrompt
from panelctl.ui.cli.router import CommandRouter

Intent = OperationIntent

MENU_ITEMS: list[tuple[OperationIntent, str]] = [
    (Intent.EXIT, "Exit"),
    (Intent.INSTALL, "Install {unit}"),
    (Intent.UPDATE, "Update {unit}"),
    (Intent.UNINSTALL, "Uninstall {unit}"),
    (Intent.RESET_CREDENTIALS, "Reset Username/Password"),
    (Intent.RESET_SETTINGS, "Reset Panel Settings"),
    (Intent.SET_PORT, "Set Panel Port"),
    (Intent.VIEW_SETTINGS, "View Current Panel Settings"),
    (Intent.START, "Start {unit}"),
    (Intent.STOP, "Stop {unit}"),
    (Intent.RESTART, "Restart {unit}"),
    (Intent.STATUS, "View {unit} Status"),
    (Intent.INSTALL_CERT, "Install SSL Certificate"),
]

LAST_CHOICE = len(MENU_ITEMS) - 1
INVALID_CHOICE = f"Invalid choice. Please enter a number between 0 and {LAST_CHOICE}."


def parse_choice(raw: str) -> OperationIntent | None:
    """Menu number to intent, or None for anything out of range."""
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()) or len(raw) > 2:
        return None
    index = int(raw)
    if index > LAST_CHOICE:
        return None
    return MENU_ITEMS[index][0]


class MenuLoop:
    """The interactive session."""

    def __init__(self, router: CommandRouter, prompt: ConfirmationPrompt, unit: str):
        self.router = router
        self.prompt = prompt
        self.unit = unit

    def render(self) -> None:
        reporter = self.router.reporter
        click.echo()
        click.echo(f"  {reporter.accent(f'{self.unit} Management Script')}")
        for number, (_, label) in enumerate(MENU_ITEMS):
            click.echo(f"  {reporter.accent(f'{number}.')} {label.format(unit=self.unit)}")
        click.echo()

    def run(self) -> int:
        """Loop until the operator picks Exit. Returns the exit code."""
        while True:
            self.render()
            intent = parse_choice(self.prompt.read(f"Please choose an option [0-{LAST_CHOICE}]"))
            if intent is None:
                self.router.reporter.error(INVALID_CHOICE)
                continue
            if intent is Intent.EXIT:
                return 0
            self.router.dispatch(intent)
