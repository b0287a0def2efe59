"""
Operation outcome — what the operator is told after an intent runs.

An outcome combines the exit code of whatever was triggered with the
state observed by the post-action probe. Exactly one outcome is
reported per intent.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

from panelctl.core.models.service import OperationIntent, ServiceState


class OperationOutcome(BaseModel):
    """Result of a single lifecycle operation."""

    intent: OperationIntent
    status: Literal["ok", "failed", "cancelled"] = "ok"
    message: str = ""
    state: ServiceState | None = None
    detail: str = ""                # relayed collaborator output, shown verbatim

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def cancelled(self) -> bool:
        return self.status == "cancelled"

    @classmethod
    def success(
        cls,
        intent: OperationIntent,
        message: str = "",
        **kwargs: Any,
    ) -> OperationOutcome:
        """Create a success outcome."""
        return cls(intent=intent, status="ok", message=message, **kwargs)

    @classmethod
    def failure(
        cls,
        intent: OperationIntent,
        reason: str,
        **kwargs: Any,
    ) -> OperationOutcome:
        """Create a failure outcome."""
        return cls(intent=intent, status="failed", message=reason, **kwargs)

    @classmethod
    def cancel(
        cls,
        intent: OperationIntent,
        message: str = "",
    ) -> OperationOutcome:
        """Create a cancellation outcome (a declined confirmation)."""
        return cls(intent=intent, status="cancelled", message=message or "Operation canceled.")
