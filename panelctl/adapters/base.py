"""
Adapter base — the contract between the lifecycle controller and the
host's service manager.

The controller only talks to the service manager through this
protocol, never directly to rc-service or systemctl. Every adapter is
bound to exactly one unit for its whole lifetime.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from panelctl.adapters.shell.filesystem import FilesystemOps
from panelctl.core.models.action import Receipt
from panelctl.core.models.service import ServiceState


class ServiceManagerAdapter(ABC):
    """Abstract base class for service manager adapters.

    Lifecycle verbs are fire-and-forget: they relay the manager's raw
    exit code in a Receipt and never decide whether the service really
    reached the requested state. Only ``status()`` interprets anything,
    and it does so with the fixed 0/1/other mapping.

    Adapters NEVER raise. Failures are captured in the Receipt.

    To add a service manager:
        1. Subclass ServiceManagerAdapter
        2. Implement name, is_available, default_unit_file and the verbs
        3. Register it in panelctl.adapters.registry
    """

    def __init__(
        self,
        unit_name: str,
        unit_file: str | None = None,
        timeout: float = 60,
        filesystem: FilesystemOps | None = None,
    ):
        self.unit_name = unit_name
        self.unit_file = unit_file or self.default_unit_file()
        self.timeout = timeout
        self.filesystem = filesystem or FilesystemOps()

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'openrc', 'systemd')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying service manager exists on this host.

        Should be fast and never raise.
        """

    @abstractmethod
    def default_unit_file(self) -> str:
        """Where this manager keeps the unit definition for ``unit_name``."""

    # ── Lifecycle verbs ─────────────────────────────────────────

    @abstractmethod
    def start(self) -> Receipt:
        """Ask the manager to start the unit."""

    @abstractmethod
    def stop(self) -> Receipt:
        """Ask the manager to stop the unit."""

    @abstractmethod
    def restart(self) -> Receipt:
        """Ask the manager to restart the unit."""

    @abstractmethod
    def probe(self) -> Receipt:
        """Run the manager's status command.

        ``return_code`` follows the tri-state convention 0 = running,
        1 = stopped, anything else = unknown. The captured output is
        what the operator sees for the status intent.
        """

    def status(self) -> ServiceState:
        """Probe the unit and map the result onto a ServiceState."""
        return ServiceState.from_exit_code(self.probe().return_code)

    # ── Boot and removal ────────────────────────────────────────

    @abstractmethod
    def enable_on_boot(self) -> Receipt:
        """Start the unit automatically at boot."""

    @abstractmethod
    def disable_on_boot(self) -> Receipt:
        """Stop starting the unit at boot."""

    def remove_unit_file(self) -> Receipt:
        """Delete the unit definition from disk."""
        return self.filesystem.remove_file(self.unit_file)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} unit={self.unit_name!r}>"
