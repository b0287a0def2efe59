"""
OpenRC adapter — rc-service / rc-update, as found on Alpine.
"""

from __future__ import annotations

import shutil

from panelctl.adapters.base import ServiceManagerAdapter
from panelctl.adapters.shell.command import run_command
from panelctl.core.models.action import Receipt


class OpenRCAdapter(ServiceManagerAdapter):
    """Drive one unit through ``rc-service`` and ``rc-update``."""

    runlevel = "default"

    @property
    def name(self) -> str:
        return "openrc"

    def is_available(self) -> bool:
        return shutil.which("rc-service") is not None

    def default_unit_file(self) -> str:
        return f"/etc/init.d/{self.unit_name}"

    def start(self) -> Receipt:
        return self._rc_service("start")

    def stop(self) -> Receipt:
        return self._rc_service("stop")

    def restart(self) -> Receipt:
        return self._rc_service("restart")

    def probe(self) -> Receipt:
        # TODO: current OpenRC exits 3 for a cleanly stopped service, which
        # lands in ServiceState.UNKNOWN; fold 3 into the stopped code once
        # verified against Alpine 3.18+ rc-service.
        return self._rc_service("status")

    def enable_on_boot(self) -> Receipt:
        return self._rc_update("add")

    def disable_on_boot(self) -> Receipt:
        return self._rc_update("delete")

    def _rc_service(self, verb: str) -> Receipt:
        return run_command(
            ["rc-service", self.unit_name, verb],
            adapter=self.name,
            action_id=verb,
            timeout=self.timeout,
        )

    def _rc_update(self, verb: str) -> Receipt:
        return run_command(
            ["rc-update", verb, self.unit_name, self.runlevel],
            adapter=self.name,
            action_id=f"rc-update-{verb}",
            timeout=self.timeout,
        )
