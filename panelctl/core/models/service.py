"""
Service models — observed state and operator intents.
"""

from __future__ import annotations

from enum import StrEnum


class ServiceState(StrEnum):
    """Observed state of the managed unit, recomputed on every probe."""

    RUNNING = "running"
    STOPPED = "stopped"
    UNKNOWN = "unknown"

    @classmethod
    def from_exit_code(cls, code: int | None) -> ServiceState:
        """Map a status probe exit code onto a state.

        0 is running, 1 is stopped, anything else (including a probe
        that never ran) is unknown.
        """
        if code == 0:
            return cls.RUNNING
        if code == 1:
            return cls.STOPPED
        return cls.UNKNOWN


class OperationIntent(StrEnum):
    """Everything an operator can ask panelctl to do."""

    INSTALL = "install"
    UPDATE = "update"
    UNINSTALL = "uninstall"
    RESET_CREDENTIALS = "reset_credentials"
    RESET_SETTINGS = "reset_settings"
    SET_PORT = "set_port"
    VIEW_SETTINGS = "view_settings"
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    STATUS = "status"
    INSTALL_CERT = "install_cert"
    EXIT = "exit"


# Intents reachable from the command-line argument surface.
ARGUMENT_INTENTS: frozenset[OperationIntent] = frozenset({
    OperationIntent.START,
    OperationIntent.STOP,
    OperationIntent.RESTART,
    OperationIntent.STATUS,
})
