"""
systemd adapter — systemctl on a system (not --user) unit.
"""

from __future__ import annotations

import shutil

from panelctl.adapters.base import ServiceManagerAdapter
from panelctl.adapters.shell.command import run_command
from panelctl.core.models.action import Receipt

# `systemctl is-active` exits 3 for an inactive unit
_SYSTEMCTL_INACTIVE = 3
_STOPPED = 1


class SystemdAdapter(ServiceManagerAdapter):
    """Drive one unit through ``systemctl``."""

    @property
    def name(self) -> str:
        return "systemd"

    def is_available(self) -> bool:
        return shutil.which("systemctl") is not None

    def default_unit_file(self) -> str:
        return f"/etc/systemd/system/{self.unit_name}.service"

    def start(self) -> Receipt:
        return self._systemctl("start", self.unit_name)

    def stop(self) -> Receipt:
        return self._systemctl("stop", self.unit_name)

    def restart(self) -> Receipt:
        return self._systemctl("restart", self.unit_name)

    def probe(self) -> Receipt:
        receipt = self._systemctl("is-active", self.unit_name, action_id="status")
        if receipt.return_code == _SYSTEMCTL_INACTIVE:
            receipt.return_code = _STOPPED
        return receipt

    def enable_on_boot(self) -> Receipt:
        return self._systemctl("enable", self.unit_name)

    def disable_on_boot(self) -> Receipt:
        return self._systemctl("disable", self.unit_name)

    def remove_unit_file(self) -> Receipt:
        receipt = super().remove_unit_file()
        if receipt.ok:
            reload = self._systemctl("daemon-reload")
            if reload.failed:
                return reload
        return receipt

    def _systemctl(self, verb: str, *args: str, action_id: str | None = None) -> Receipt:
        return run_command(
            ["systemctl", verb, *args],
            adapter=self.name,
            action_id=action_id or verb,
            timeout=self.timeout,
        )
