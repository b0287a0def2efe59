"""
Logging configuration for the panelctl entrypoint.

Operator-facing results are printed by the CLI Reporter as one
``[INFO]`` / ``[WARN]`` / ``[ERROR]`` line per operation. Logging is the
diagnostic channel next to it: what was executed, which exit code came
back, what the probe saw. Console log lines therefore carry the logger
name instead of a bracketed level tag, so they never read like a second
outcome line.

Only the ``panelctl`` logger tree is configured; the root logger and
other libraries are left alone.

Levels are resolved in precedence order:
    --debug  >  --verbose  >  --quiet  >  PANELCTL_LOG_LEVEL  >  WARNING

A persistent log (every command line and exit code, useful after an
unattended update) is written when PANELCTL_LOG_FILE is set, at
PANELCTL_LOG_FILE_LEVEL (default INFO).
"""

from __future__ import annotations

import logging
import sys

from panelctl.errors import ConfigError

LOGGER_NAME = "panelctl"

# ── Format strings ──────────────────────────────────────────────

# Default: only warnings, short and clearly a diagnostic
_FMT_CONSOLE = "panelctl: %(message)s"

# --verbose: which component said it
_FMT_VERBOSE = "%(asctime)s %(name)s: %(message)s"

# --debug: file:line for tracing a single run
_FMT_DEBUG = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d: %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"

# File: full timestamps, one run is usually minutes apart from the next
_FMT_FILE = "%(asctime)s %(levelname)-7s [%(process)d] %(name)s: %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_DEFAULT_FILE_LEVEL = "INFO"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Configure the ``panelctl`` logger for this process.

    Safe to call more than once; previous handlers are replaced.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a persistent log, appended to.
        log_file_level: Level for the log file. Defaults to INFO so the
            file records every executed command even when the console
            stays quiet.

    Returns:
        The configured ``panelctl`` logger.

    Raises:
        ConfigError: If ``log_file`` cannot be opened.
    """
    console_level = _parse_level(level)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    logger.addHandler(console)

    effective_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level or _DEFAULT_FILE_LEVEL)
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot open log file {log_file}: {e}") from e
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        logger.addHandler(fh)
        effective_level = min(effective_level, file_level)

    logger.setLevel(effective_level)
    return logger


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_CONSOLE)
    if level <= logging.INFO:
        return logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_CONSOLE)
    return logging.Formatter(_FMT_CONSOLE)


def resolve_level(debug: bool, verbose: bool, quiet: bool, env_level: str | None) -> str:
    """Pick the console level from CLI flags, falling back to the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
