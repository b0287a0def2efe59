"""
Configuration loader — reads panelctl.yml into a PanelConfig.

Resolution order:
    --config option  >  PANELCTL_CONFIG env var  >  /etc/panelctl/panelctl.yml

If none of those exist, the built-in defaults are used. An explicitly
requested file that does not exist is an error.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from panelctl.core.models.config import PanelConfig
from panelctl.errors import ConfigError

logger = logging.getLogger(__name__)

# Default config location
SYSTEM_CONFIG_FILE = Path("/etc/panelctl/panelctl.yml")
CONFIG_ENV_VAR = "PANELCTL_CONFIG"

__all__ = ["ConfigError", "find_config_file", "load_config"]


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Resolve which config file to read.

    Args:
        explicit: Path given on the command line, if any.

    Returns:
        The path to read, or None to fall back to defaults.
    """
    if explicit is not None:
        return explicit

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    if SYSTEM_CONFIG_FILE.is_file():
        return SYSTEM_CONFIG_FILE

    return None


def load_config(path: Path | None = None) -> PanelConfig:
    """Load and validate panelctl configuration.

    Args:
        path: Explicit path to panelctl.yml. If None, the search
            order above is applied.

    Returns:
        Validated PanelConfig model.

    Raises:
        ConfigError: If a requested file is missing or invalid.
    """
    path = find_config_file(path)

    if path is None:
        logger.debug("No config file found, using defaults")
        return PanelConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "panel" key or be flat
    if "panel" in data and isinstance(data["panel"], dict):
        data = data["panel"]

    try:
        config = PanelConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid panelctl configuration: {e}") from e

    logger.info("Loaded config for unit '%s' from %s", config.unit_name, path)
    return config
