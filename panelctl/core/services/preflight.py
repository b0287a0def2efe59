"""
Preflight — host prerequisites checked once at startup.

These are hard requirements, not part of the lifecycle state machine:
any failure raises PreconditionError and the CLI exits before a single
service-manager call is made.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from panelctl.core.models.config import PanelConfig
from panelctl.errors import PreconditionError

logger = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")
LSB_RELEASE = Path("/etc/lsb-release")


@dataclass(frozen=True)
class HostOS:
    """Identity of the running distribution."""

    id: str
    version: str

    @property
    def version_tuple(self) -> tuple[int, ...]:
        return _version_tuple(self.version)


def _version_tuple(version: str) -> tuple[int, ...]:
    parts: list[int] = []
    for piece in version.split("."):
        digits = "".join(ch for ch in piece if ch.isascii() and ch.isdigit())
        if not digits:
            break
        parts.append(int(digits))
    return tuple(parts)


def _read_key_values(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if sep:
            values[key] = value.strip().strip('"').strip("'")
    return values


def detect_host_os(
    os_release: Path = OS_RELEASE,
    lsb_release: Path = LSB_RELEASE,
) -> HostOS | None:
    """Read the distribution id and version, or None if unrecognizable."""
    try:
        if os_release.is_file():
            info = _read_key_values(os_release)
            return HostOS(id=info.get("ID", "").lower(), version=info.get("VERSION_ID", ""))
        if lsb_release.is_file():
            info = _read_key_values(lsb_release)
            return HostOS(
                id=info.get("DISTRIB_ID", "").lower(),
                version=info.get("DISTRIB_RELEASE", ""),
            )
    except OSError as e:
        logger.warning("Cannot read OS release info: %s", e)
    return None


def check_root(euid: int | None = None) -> None:
    """Require elevated privileges."""
    if euid is None:
        euid = os.geteuid()
    if euid != 0:
        raise PreconditionError("This script must be run as root!")


def check_commands(commands: list[str]) -> None:
    """Require every utility in ``commands`` to be on PATH."""
    for cmd in commands:
        if shutil.which(cmd) is None:
            raise PreconditionError(f"{cmd} is required but not installed. Aborting.")


def check_os(supported: dict[str, str], host: HostOS | None) -> HostOS:
    """Require a recognized distribution at or above its minimum version."""
    if host is None or host.id not in supported:
        raise PreconditionError(
            "Unsupported operating system. Please contact the script author!"
        )

    minimum = supported[host.id]
    required = _version_tuple(minimum)
    if host.version_tuple[: len(required)] < required:
        raise PreconditionError(
            f"Please use {host.id.capitalize()} {minimum} or a higher version!"
        )

    logger.info("Detected OS: %s %s", host.id, host.version)
    return host


def run_preflight(
    config: PanelConfig,
    euid: int | None = None,
    host: HostOS | None = None,
) -> HostOS:
    """Run every startup check in order: privileges, utilities, OS.

    Raises:
        PreconditionError: On the first unmet requirement.
    """
    check_root(euid)
    check_commands(config.required_commands)
    return check_os(config.supported_os, host or detect_host_os())
