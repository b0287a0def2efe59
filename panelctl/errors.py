"""
Exception hierarchy for panelctl.

Only fatal conditions are exceptions. External-process failures never
raise; they travel as Receipts and OperationOutcomes instead.
"""

from __future__ import annotations


class PanelctlError(Exception):
    """Base class for fatal panelctl errors."""


class ConfigError(PanelctlError):
    """Raised when the configuration file is invalid or unreadable."""


class PreconditionError(PanelctlError):
    """Raised when the host does not meet a startup prerequisite."""
