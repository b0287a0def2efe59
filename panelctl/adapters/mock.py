"""
Mock adapter — scripted stand-in for a real service manager.

Used by the test suite to drive the lifecycle controller without
touching rc-service or systemctl. Every call is recorded, and status
probes replay a configurable sequence of exit codes.
"""

from __future__ import annotations

from collections.abc import Iterable

from panelctl.adapters.base import ServiceManagerAdapter
from panelctl.core.models.action import Receipt


class MockServiceAdapter(ServiceManagerAdapter):
    """Service manager double.

    By default every verb succeeds and every probe reports running
    (exit 0). ``status_codes`` is consumed one per probe; the last
    value repeats once the sequence runs out.
    """

    def __init__(
        self,
        unit_name: str = "x-ui",
        status_codes: Iterable[int] = (0,),
        available: bool = True,
        call_log: list[str] | None = None,
    ):
        super().__init__(unit_name=unit_name)
        self._status_codes = list(status_codes) or [0]
        self._available = available
        self._verb_codes: dict[str, int] = {}
        self.call_log: list[str] = call_log if call_log is not None else []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_count(self) -> int:
        """Number of calls this mock has received."""
        return len(self.call_log)

    def calls(self, verb: str) -> int:
        """How many times ``verb`` was called."""
        return self.call_log.count(verb)

    def is_available(self) -> bool:
        return self._available

    def default_unit_file(self) -> str:
        return f"/tmp/mock-units/{self.unit_name}"

    def set_exit_code(self, verb: str, code: int) -> None:
        """Make ``verb`` report the given exit code."""
        self._verb_codes[verb] = code

    def set_status_codes(self, codes: Iterable[int]) -> None:
        """Replace the probe sequence."""
        self._status_codes = list(codes) or [0]

    def start(self) -> Receipt:
        return self._record("start")

    def stop(self) -> Receipt:
        return self._record("stop")

    def restart(self) -> Receipt:
        return self._record("restart")

    def probe(self) -> Receipt:
        self.call_log.append("status")
        code = self._status_codes.pop(0) if len(self._status_codes) > 1 else self._status_codes[0]
        if code == 0:
            return Receipt.success(adapter=self.name, action_id="status", output="[mock] started")
        return Receipt.failure(
            adapter=self.name,
            action_id="status",
            error="[mock] not running",
            return_code=code,
        )

    def enable_on_boot(self) -> Receipt:
        return self._record("enable_on_boot")

    def disable_on_boot(self) -> Receipt:
        return self._record("disable_on_boot")

    def remove_unit_file(self) -> Receipt:
        return self._record("remove_unit_file")

    def reset(self) -> None:
        """Clear the call log and scripted exit codes."""
        self.call_log.clear()
        self._verb_codes.clear()

    def _record(self, verb: str) -> Receipt:
        self.call_log.append(verb)
        code = self._verb_codes.get(verb, 0)
        if code == 0:
            return Receipt.success(adapter=self.name, action_id=verb, output=f"[mock] {verb}")
        return Receipt.failure(
            adapter=self.name,
            action_id=verb,
            error=f"[mock] {verb} failed",
            return_code=code,
        )
