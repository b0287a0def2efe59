"""
Domain models — Pydantic and enum types for panelctl.

All models are re-exported here for convenient access:

    from panelctl.core.models import PanelConfig, Receipt, ServiceState
"""

from panelctl.core.models.action import Receipt
from panelctl.core.models.config import PanelConfig
from panelctl.core.models.outcome import OperationOutcome
from panelctl.core.models.service import (
    ARGUMENT_INTENTS,
    OperationIntent,
    ServiceState,
)

__all__ = [
    # service.py
    "ARGUMENT_INTENTS",
    "OperationIntent",
    # outcome.py
    "OperationOutcome",
    # config.py
    "PanelConfig",
    # action.py
    "Receipt",
    "ServiceState",
]
