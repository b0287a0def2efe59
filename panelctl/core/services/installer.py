"""
Installer invoker — fetch a remote shell script and run it.

The payload is opaque: panelctl only cares about its exit code. It is
downloaded over HTTPS into a temporary file and executed with bash,
attached to the operator's terminal because install scripts prompt
for input.

Trust boundary: the script is authenticated by transport only.
"""

from __future__ import annotations

import logging
import tempfile
import urllib.request
from collections.abc import Sequence
from pathlib import Path

from panelctl.adapters.shell.command import run_command
from panelctl.core.models.action import Receipt

logger = logging.getLogger(__name__)

_USER_AGENT = "panelctl/1.0"


class InstallerInvoker:
    """Download-and-execute for remote install scripts."""

    name = "installer"

    def __init__(self, fetch_timeout: float = 30, shell: str = "bash"):
        self.fetch_timeout = fetch_timeout
        self.shell = shell

    def fetch(self, url: str) -> bytes:
        """Download the script body. Raises on network/HTTP errors."""
        req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
        with urllib.request.urlopen(req, timeout=self.fetch_timeout) as resp:
            return resp.read()

    def run(self, script_url: str, args: Sequence[str] = ()) -> Receipt:
        """Fetch ``script_url`` and execute it synchronously.

        Args:
            script_url: HTTPS location of the script.
            args: Extra arguments passed to the script.

        Returns:
            Receipt whose ``return_code`` is the script's exit code, or a
            failure receipt with no return code if the download failed.
        """
        logger.info("Fetching installer from %s", script_url)
        try:
            body = self.fetch(script_url)
        except Exception as e:
            logger.error("Installer download failed: %s", e)
            return Receipt.failure(
                adapter=self.name,
                action_id="fetch",
                error=f"Failed to download {script_url}: {e}",
                metadata={"url": script_url},
            )

        with tempfile.TemporaryDirectory(prefix="panelctl-") as tmp:
            script = Path(tmp) / "install.sh"
            script.write_bytes(body)
            receipt = run_command(
                [self.shell, str(script), *args],
                adapter=self.name,
                action_id="run",
                timeout=None,
                capture=False,
            )

        receipt.metadata["url"] = script_url
        if receipt.failed:
            logger.warning("Installer exited with %s", receipt.return_code)
        return receipt
