"""
Lifecycle controller — the state machine behind every operator intent.

The controller is stateless between invocations. Each operation runs
to completion, probes the unit when it changed something, and returns
exactly one OperationOutcome. Nothing is retried and nothing raises
for an external-process failure.

Settling operations (start / stop / restart):

    verb → sleep(settle_delay) → status() → classify

    start/restart succeed iff the probe says RUNNING; stop succeeds iff
    it says STOPPED. The verb's own exit code is only logged. UNKNOWN is
    never read as STOPPED.

Destructive or rewriting operations go through ``confirm_then_maybe``:

    ask → (decline: no change) → action → (failure: stop) → cascade
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from panelctl.adapters.base import ServiceManagerAdapter
from panelctl.adapters.shell.filesystem import FilesystemOps
from panelctl.core.models.action import Receipt
from panelctl.core.models.config import PanelConfig
from panelctl.core.models.outcome import OperationOutcome
from panelctl.core.models.service import OperationIntent, ServiceState
from panelctl.core.services.cert_issuer import CertIssuer
from panelctl.core.services.installer import InstallerInvoker
from panelctl.core.services.panel_binary import PanelBinary

logger = logging.getLogger(__name__)

Intent = OperationIntent

_CHECK_LOGS = "Check logs for details."

# (expected state, past tense) per settling intent
_SETTLE_RULES: dict[OperationIntent, tuple[ServiceState, str]] = {
    Intent.START: (ServiceState.RUNNING, "started"),
    Intent.STOP: (ServiceState.STOPPED, "stopped"),
    Intent.RESTART: (ServiceState.RUNNING, "restarted"),
}


class Prompt(Protocol):
    """What the controller needs from the interactive layer."""

    def ask(self, text: str, default: bool | str | None = None) -> bool: ...

    def read(self, text: str) -> str: ...


def _exit_detail(receipt: Receipt) -> str:
    if receipt.return_code is None:
        return receipt.error or "did not run"
    return f"exit code {receipt.return_code}"


class LifecycleController:
    """Maps intents onto service-manager and collaborator calls."""

    def __init__(
        self,
        service: ServiceManagerAdapter,
        installer: InstallerInvoker,
        panel: PanelBinary,
        cert_issuer: CertIssuer,
        prompt: Prompt,
        config: PanelConfig,
        filesystem: FilesystemOps | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.service = service
        self.installer = installer
        self.panel = panel
        self.cert_issuer = cert_issuer
        self.prompt = prompt
        self.config = config
        self.filesystem = filesystem or FilesystemOps()
        self._sleep = sleep

    @property
    def unit(self) -> str:
        return self.config.unit_name

    # ── Settling operations ─────────────────────────────────────

    def start(self) -> OperationOutcome:
        return self._settle(Intent.START)

    def stop(self) -> OperationOutcome:
        return self._settle(Intent.STOP)

    def restart(self) -> OperationOutcome:
        return self._settle(Intent.RESTART)

    def _settle(self, intent: OperationIntent) -> OperationOutcome:
        expected, past = _SETTLE_RULES[intent]
        verb = getattr(self.service, intent.value)

        receipt: Receipt = verb()
        logger.debug("%s %s returned %s", self.service.name, intent, receipt.return_code)

        self._sleep(self.config.settle_delay)
        state = self.service.status()
        logger.info("%s after %s: %s", self.unit, intent, state)

        if state == expected:
            return OperationOutcome.success(
                intent, f"{self.unit} {past} successfully.", state=state
            )
        return OperationOutcome.failure(
            intent, f"Failed to {intent.value} {self.unit}. {_CHECK_LOGS}", state=state
        )

    def status(self) -> OperationOutcome:
        """Probe once and relay the manager's own status output."""
        receipt = self.service.probe()
        state = ServiceState.from_exit_code(receipt.return_code)
        detail = receipt.output or (receipt.error or "")
        return OperationOutcome.success(
            Intent.STATUS, f"{self.unit} status: {state}", state=state, detail=detail
        )

    # ── Confirmation helper ─────────────────────────────────────

    def confirm_then_maybe(
        self,
        intent: OperationIntent,
        prompt: str,
        default: bool | str | None,
        action: Callable[[], OperationOutcome],
        then: Callable[[OperationOutcome], OperationOutcome] | None = None,
        on_decline: Callable[[], OperationOutcome] | None = None,
        cancel_message: str = "",
    ) -> OperationOutcome:
        """Ask, act, and optionally cascade.

        Args:
            intent: Intent the outcome is reported under.
            prompt: Question shown to the operator.
            default: Answer used on empty input.
            action: Runs only after an affirmative answer.
            then: Receives a successful action outcome and returns the
                final outcome (e.g. a restart). Skipped on failure.
            on_decline: Outcome to return on a negative answer. Defaults
                to a cancellation with no state change.
            cancel_message: Message for the default cancellation.
        """
        if not self.prompt.ask(prompt, default):
            logger.info("%s declined by operator", intent)
            if on_decline is not None:
                return on_decline()
            return OperationOutcome.cancel(intent, cancel_message)

        outcome = action()
        if outcome.failed or then is None:
            return outcome
        return then(outcome)

    def confirm_restart(
        self,
        intent: OperationIntent = Intent.RESTART,
        prefix: str = "",
    ) -> OperationOutcome:
        """Offer to restart now; declining leaves the change pending."""
        return self.confirm_then_maybe(
            intent,
            "Restart the panel? This will also restart xray.",
            "y",
            action=lambda: self._retag(self.restart(), intent, prefix),
            on_decline=lambda: self._restart_deferred(intent, prefix),
        )

    def _restart_deferred(self, intent: OperationIntent, prefix: str) -> OperationOutcome:
        state = self.service.status()
        return OperationOutcome.success(
            intent,
            _join(prefix, "Changes take effect after the next restart."),
            state=state,
        )

    @staticmethod
    def _retag(outcome: OperationOutcome, intent: OperationIntent, prefix: str) -> OperationOutcome:
        return outcome.model_copy(
            update={"intent": intent, "message": _join(prefix, outcome.message)}
        )

    # ── Install / update / uninstall ────────────────────────────

    def install(self) -> OperationOutcome:
        """Run the installer, then start the fresh service."""
        receipt = self.installer.run(self.config.installer_url)
        if receipt.failed:
            return OperationOutcome.failure(
                Intent.INSTALL, f"Installation failed ({_exit_detail(receipt)})."
            )
        return self._retag(self.start(), Intent.INSTALL, "Installation complete.")

    def update(self) -> OperationOutcome:
        """Reinstall the latest release, then restart without asking."""
        return self.confirm_then_maybe(
            Intent.UPDATE,
            "This will forcibly reinstall the latest version without losing data. Continue?",
            "n",
            action=self._run_update,
            then=lambda _: self._retag(self.restart(), Intent.UPDATE, "Update complete."),
            cancel_message="Update canceled.",
        )

    def _run_update(self) -> OperationOutcome:
        receipt = self.installer.run(self.config.installer_url)
        if receipt.failed:
            return OperationOutcome.failure(
                Intent.UPDATE, f"Update failed ({_exit_detail(receipt)})."
            )
        return OperationOutcome.success(Intent.UPDATE)

    def uninstall(self) -> OperationOutcome:
        """Stop, disable, and delete the unit and its install directories."""
        return self.confirm_then_maybe(
            Intent.UNINSTALL,
            "Are you sure you want to uninstall the panel? This will also uninstall xray.",
            "n",
            action=self._remove_everything,
            cancel_message="Uninstallation canceled.",
        )

    def _remove_everything(self) -> OperationOutcome:
        # stop first: never delete files a running process still holds
        steps: list[tuple[str, Callable[[], Receipt]]] = [
            ("stop", self.service.stop),
            ("disable on boot", self.service.disable_on_boot),
            ("remove unit file", self.service.remove_unit_file),
        ]
        for directory in self.config.install_dirs:
            steps.append((f"remove {directory}", lambda d=directory: self.filesystem.remove_tree(d)))

        failed: list[str] = []
        for label, step in steps:
            receipt = step()
            if receipt.failed:
                logger.error("Uninstall step '%s' failed: %s", label, receipt.error)
                failed.append(label)

        state = self.service.status()
        if failed:
            return OperationOutcome.failure(
                Intent.UNINSTALL,
                f"Uninstallation incomplete, failed to: {', '.join(failed)}. {_CHECK_LOGS}",
                state=state,
            )
        return OperationOutcome.success(
            Intent.UNINSTALL,
            "Uninstallation successful. To remove panelctl itself, run 'pip uninstall panelctl'.",
            state=state,
        )

    # ── Panel settings ──────────────────────────────────────────

    def reset_credentials(self) -> OperationOutcome:
        user = self.config.reset_username
        password = self.config.reset_password
        return self.confirm_then_maybe(
            Intent.RESET_CREDENTIALS,
            f"Reset username and password to '{user}'?",
            "n",
            action=lambda: self._panel_call(
                Intent.RESET_CREDENTIALS,
                self.panel.set_credentials(user, password),
                f"Username and password reset to '{user}'.",
            ),
            then=lambda done: self.confirm_restart(done.intent, done.message),
            cancel_message="Credential reset canceled.",
        )

    def reset_settings(self) -> OperationOutcome:
        return self.confirm_then_maybe(
            Intent.RESET_SETTINGS,
            "Reset all panel settings? Account data will not be lost, "
            "and the username and password will not change.",
            "n",
            action=lambda: self._panel_call(
                Intent.RESET_SETTINGS,
                self.panel.reset_settings(),
                "All panel settings reset to default. "
                f"The panel is now on port {self.config.default_port}.",
            ),
            then=lambda done: self.confirm_restart(done.intent, done.message),
            cancel_message="Settings reset canceled.",
        )

    def set_port(self) -> OperationOutcome:
        raw = self.prompt.read("Enter port number [1-65535]").strip()
        if not raw:
            return OperationOutcome.cancel(Intent.SET_PORT, "Port change canceled.")
        if not (raw.isascii() and raw.isdigit()) or len(raw) > 5 or not 1 <= int(raw) <= 65535:
            return OperationOutcome.failure(Intent.SET_PORT, f"Invalid port: {raw}")

        port = int(raw)
        done = self._panel_call(
            Intent.SET_PORT, self.panel.set_port(port), f"Panel port set to {port}."
        )
        if done.failed:
            return done
        return self.confirm_restart(Intent.SET_PORT, done.message)

    def view_settings(self) -> OperationOutcome:
        receipt = self.panel.show_settings()
        if receipt.failed:
            return OperationOutcome.failure(
                Intent.VIEW_SETTINGS,
                f"Could not read panel settings ({_exit_detail(receipt)}).",
                detail=receipt.output,
            )
        return OperationOutcome.success(
            Intent.VIEW_SETTINGS, "Current panel settings.", detail=receipt.output
        )

    def _panel_call(self, intent: OperationIntent, receipt: Receipt, message: str) -> OperationOutcome:
        if receipt.failed:
            return OperationOutcome.failure(
                intent, f"Panel command failed ({_exit_detail(receipt)}). {_CHECK_LOGS}"
            )
        return OperationOutcome.success(intent, message)

    # ── Certificates ────────────────────────────────────────────

    def install_cert(self) -> OperationOutcome:
        domain = self.prompt.read("Enter your domain name").strip()
        if not domain:
            return OperationOutcome.cancel(Intent.INSTALL_CERT, "Certificate request canceled.")

        receipt = self.cert_issuer.issue(domain)
        if receipt.failed:
            return OperationOutcome.failure(
                Intent.INSTALL_CERT,
                f"Certificate issuance for {domain} failed: {receipt.error or _exit_detail(receipt)}",
            )
        key_file, chain_file = self.cert_issuer.cert_paths(domain)
        return OperationOutcome.success(
            Intent.INSTALL_CERT,
            f"Certificate for {domain} installed: key {key_file}, chain {chain_file}.",
        )


def _join(prefix: str, message: str) -> str:
    return f"{prefix} {message}".strip() if prefix else message
