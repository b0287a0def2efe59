"""Adapters — bindings for the host service manager.

Public re-exports for convenient access.
"""

from panelctl.adapters.base import ServiceManagerAdapter
from panelctl.adapters.mock import MockServiceAdapter
from panelctl.adapters.registry import build_service_adapter, detect_init_system

__all__ = [
    "MockServiceAdapter",
    "ServiceManagerAdapter",
    "build_service_adapter",
    "detect_init_system",
]
