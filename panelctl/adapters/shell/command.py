"""
Command runner — execute an external program and return a Receipt.

Every external collaborator (service manager, panel binary, installer
payload, acme.sh) goes through this one function, so exit-code handling,
timeouts and missing binaries behave the same everywhere.
"""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Sequence
from typing import Any

from panelctl.core.models.action import Receipt, utc_now_iso

logger = logging.getLogger(__name__)


def run_command(
    argv: Sequence[str],
    *,
    adapter: str,
    action_id: str,
    timeout: float | None = 60,
    capture: bool = True,
) -> Receipt:
    """Run ``argv`` synchronously and describe the result.

    Args:
        argv: Program and arguments. Never passed through a shell.
        adapter: Name recorded on the receipt.
        action_id: Operation name recorded on the receipt.
        timeout: Seconds before the process is killed. None waits forever.
        capture: Capture stdout/stderr. When False the child inherits the
            terminal, which interactive payloads need.

    Returns:
        A success receipt for exit code 0, a failure receipt otherwise.
        Never raises.
    """
    command = " ".join(argv)
    logger.debug("Executing: %s", command)
    started_at = utc_now_iso()
    start = time.monotonic()

    def timing() -> dict[str, Any]:
        return {
            "started_at": started_at,
            "ended_at": utc_now_iso(),
            "duration_ms": int((time.monotonic() - start) * 1000),
        }

    try:
        result = subprocess.run(
            list(argv),
            capture_output=capture,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("%s timed out after %ss", command, timeout)
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command timed out after {timeout}s",
            metadata={"command": command, "timeout": timeout},
            **timing(),
        )
    except OSError as e:
        # FileNotFoundError / PermissionError: the program never started
        logger.warning("Cannot execute %s: %s", argv[0], e)
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Cannot execute {argv[0]}: {e}",
            metadata={"command": command},
            **timing(),
        )

    output = (result.stdout or "").strip()
    stderr = (result.stderr or "").strip()

    logger.info("%s exited with %d", command, result.returncode)

    if result.returncode == 0:
        return Receipt.success(
            adapter=adapter,
            action_id=action_id,
            output=output,
            return_code=0,
            metadata={"command": command, "stderr": stderr},
            **timing(),
        )

    return Receipt.failure(
        adapter=adapter,
        action_id=action_id,
        error=stderr or f"Command exited with code {result.returncode}",
        output=output,
        return_code=result.returncode,
        metadata={"command": command},
        **timing(),
    )
