"""
Panel binary — the x-ui executable's own ``setting`` subcommands.

Outcome is communicated by exit code only. ``show_settings`` is the
one call whose output matters, and it is relayed to the operator
verbatim.
"""

from __future__ import annotations

import logging

from panelctl.adapters.shell.command import run_command
from panelctl.core.models.action import Receipt

logger = logging.getLogger(__name__)


class PanelBinary:
    """Thin wrapper over ``<panel_binary> setting ...``."""

    name = "panel"

    def __init__(self, path: str, timeout: float = 60):
        self.path = path
        self.timeout = timeout

    def set_credentials(self, username: str, password: str) -> Receipt:
        """Overwrite the panel login."""
        logger.info("Resetting panel credentials for user %s", username)
        return self._setting("set_credentials", "-username", username, "-password", password)

    def reset_settings(self) -> Receipt:
        """Restore every panel setting except the account to defaults."""
        return self._setting("reset_settings", "-reset")

    def set_port(self, port: int) -> Receipt:
        """Change the port the panel listens on."""
        return self._setting("set_port", "-port", str(port))

    def show_settings(self) -> Receipt:
        """Print the current panel settings."""
        return self._setting("show_settings", "-show", "true")

    def _setting(self, action_id: str, *args: str) -> Receipt:
        return run_command(
            [self.path, "setting", *args],
            adapter=self.name,
            action_id=action_id,
            timeout=self.timeout,
        )
