"""
Command router — turn a CLI token or menu choice into an intent and
hand it to the lifecycle controller.

Dispatch is the operation boundary: whatever happens inside one
intent is reported as one outcome, and the caller (menu loop or
argument mode) carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import click

from panelctl.core.engine.controller import LifecycleController
from panelctl.core.models.outcome import OperationOutcome
from panelctl.core.models.service import ARGUMENT_INTENTS, OperationIntent
from panelctl.ui.cli.output import Reporter

logger = logging.getLogger(__name__)

Intent = OperationIntent

INVALID_ARGUMENT = "Invalid argument. Use start, stop, restart, or status."


def intent_from_argument(token: str) -> OperationIntent | None:
    """Exact, case-sensitive match against the argument surface."""
    for intent in ARGUMENT_INTENTS:
        if token == intent.value:
            return intent
    return None


class CommandRouter:
    """Dispatch intents to controller operations and report the outcome."""

    def __init__(self, controller: LifecycleController, reporter: Reporter):
        self.controller = controller
        self.reporter = reporter
        self._handlers: dict[OperationIntent, Callable[[], OperationOutcome]] = {
            Intent.INSTALL: controller.install,
            Intent.UPDATE: controller.update,
            Intent.UNINSTALL: controller.uninstall,
            Intent.RESET_CREDENTIALS: controller.reset_credentials,
            Intent.RESET_SETTINGS: controller.reset_settings,
            Intent.SET_PORT: controller.set_port,
            Intent.VIEW_SETTINGS: controller.view_settings,
            Intent.START: controller.start,
            Intent.STOP: controller.stop,
            Intent.RESTART: controller.restart,
            Intent.STATUS: controller.status,
            Intent.INSTALL_CERT: controller.install_cert,
        }

    def dispatch(self, intent: OperationIntent) -> OperationOutcome:
        """Run one intent and print its outcome line.

        Never raises for an operation failure. ``click.Abort`` (Ctrl-C or
        EOF at a prompt) is passed through so the process can end.
        """
        handler = self._handlers.get(intent)
        if handler is None:
            outcome = OperationOutcome.failure(intent, f"No operation for '{intent}'.")
        else:
            logger.debug("Dispatching %s", intent)
            try:
                outcome = handler()
            except click.Abort:
                raise
            except Exception as e:
                # Collaborators return receipts, but never let one intent kill the session
                logger.exception("Operation %s raised", intent)
                outcome = OperationOutcome.failure(intent, f"Unexpected error: {e}")

        self.reporter.outcome(outcome)
        return outcome

    def run_argument(self, token: str) -> int:
        """Argument mode: dispatch one token, return the process exit code."""
        intent = intent_from_argument(token)
        if intent is None:
            self.reporter.error(INVALID_ARGUMENT)
            return 1
        outcome = self.dispatch(intent)
        return 1 if outcome.failed else 0
