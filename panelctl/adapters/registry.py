"""
Adapter registry — pick the service manager adapter for this host.

An explicitly configured manager always wins. Otherwise the init
system is detected: systemd first (it owns /run/systemd/system when
it is PID 1), then OpenRC.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from panelctl.adapters.base import ServiceManagerAdapter
from panelctl.adapters.service.openrc import OpenRCAdapter
from panelctl.adapters.service.systemd import SystemdAdapter
from panelctl.core.models.config import PanelConfig
from panelctl.errors import PreconditionError

logger = logging.getLogger(__name__)

ADAPTERS: dict[str, type[ServiceManagerAdapter]] = {
    "openrc": OpenRCAdapter,
    "systemd": SystemdAdapter,
}

_SYSTEMD_RUNTIME_DIR = Path("/run/systemd/system")


def detect_init_system() -> str:
    """Detect the init system (systemd, openrc, or unknown)."""
    if _SYSTEMD_RUNTIME_DIR.exists():
        return "systemd"
    if shutil.which("rc-service"):
        return "openrc"
    return "unknown"


def build_service_adapter(config: PanelConfig) -> ServiceManagerAdapter:
    """Instantiate the adapter for the configured unit.

    Raises:
        PreconditionError: If no supported service manager is found.
    """
    manager = config.service_manager
    if manager == "auto":
        manager = detect_init_system()
        logger.debug("Detected init system: %s", manager)

    adapter_cls = ADAPTERS.get(manager)
    if adapter_cls is None:
        raise PreconditionError(
            "No supported service manager found (need OpenRC or systemd)."
        )

    adapter = adapter_cls(
        unit_name=config.unit_name,
        unit_file=config.unit_file,
        timeout=config.command_timeout,
    )
    logger.info("Using %r", adapter)
    return adapter
