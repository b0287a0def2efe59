"""
Panel configuration model — everything panelctl needs to know about the host.

Loaded from panelctl.yml. Every field has a default matching a stock
x-ui install on Alpine, so a missing config file is a valid setup.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_INSTALLER_URL = (
    "https://raw.githubusercontent.com/Lynn-Becky/Alpine-x-ui/master/install.sh"
)


class PanelConfig(BaseModel):
    """Validated panelctl configuration."""

    # ── Service unit ────────────────────────────────────────────
    unit_name: str = "x-ui"
    service_manager: Literal["auto", "openrc", "systemd"] = "auto"
    unit_file: str | None = None           # None = adapter default
    install_dirs: list[str] = Field(
        default_factory=lambda: ["/etc/x-ui", "/usr/local/x-ui"]
    )

    # ── External collaborators ──────────────────────────────────
    panel_binary: str = "/usr/local/x-ui/x-ui"
    installer_url: str = DEFAULT_INSTALLER_URL
    command_timeout: int = 60

    # ── Lifecycle tuning ────────────────────────────────────────
    settle_delay: float = 2.0

    # ── Reset values ────────────────────────────────────────────
    reset_username: str = "admin"
    reset_password: str = "admin"
    default_port: int = 54321

    # ── Host prerequisites ──────────────────────────────────────
    required_commands: list[str] = Field(
        default_factory=lambda: ["curl", "wget", "awk", "grep"]
    )
    supported_os: dict[str, str] = Field(default_factory=lambda: {"alpine": "3"})

    # ── Certificates ────────────────────────────────────────────
    cert_dir: str = "/root/cert"
    acme_script: str = "~/.acme.sh/acme.sh"
    acme_installer_url: str = "https://get.acme.sh"

    @field_validator("unit_name")
    @classmethod
    def _unit_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("unit_name must not be empty")
        return value.strip()

    @field_validator("settle_delay")
    @classmethod
    def _settle_delay_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("settle_delay must be >= 0")
        return value

    @field_validator("supported_os", mode="before")
    @classmethod
    def _stringify_versions(cls, value: object) -> object:
        # YAML reads `alpine: 3` as an int
        if isinstance(value, dict):
            return {str(k).lower(): str(v) for k, v in value.items()}
        return value
