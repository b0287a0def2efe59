"""
Certificate issuer — standalone Let's Encrypt issuance through acme.sh.

acme.sh is an external collaborator: it is installed on demand with
the installer invoker, then driven step by step. Each step reports by
exit code, and the first failing step ends the flow.

Standalone mode binds port 80, so the panel's web port must not
already be using it.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from panelctl.adapters.shell.command import run_command
from panelctl.core.models.action import Receipt
from panelctl.core.services.installer import InstallerInvoker

logger = logging.getLogger(__name__)

_DOMAIN_RE = re.compile(
    r"^(?=.{1,253}$)(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.(?!-)[A-Za-z0-9-]{1,63}(?<!-))+$"
)


def is_valid_domain(domain: str) -> bool:
    """Whether ``domain`` looks like a fully qualified host name."""
    return bool(_DOMAIN_RE.match(domain))


class CertIssuer:
    """Issue and install a certificate for one domain."""

    name = "acme"

    def __init__(
        self,
        installer: InstallerInvoker,
        acme_script: str,
        acme_installer_url: str,
        cert_dir: str,
        timeout: float = 300,
    ):
        self.installer = installer
        self.acme_script = Path(acme_script).expanduser()
        self.acme_installer_url = acme_installer_url
        self.cert_dir = Path(cert_dir)
        self.timeout = timeout

    def cert_paths(self, domain: str) -> tuple[Path, Path]:
        """(private key, full chain) locations for ``domain``."""
        base = self.cert_dir / domain
        return base / "privkey.pem", base / "fullchain.pem"

    def ensure_installed(self) -> Receipt:
        """Install acme.sh unless it is already present."""
        if self.acme_script.is_file():
            return Receipt.skip(
                adapter=self.name,
                action_id="install",
                reason=f"acme.sh present at {self.acme_script}",
            )
        logger.info("acme.sh not found, installing")
        return self.installer.run(self.acme_installer_url)

    def issue(self, domain: str) -> Receipt:
        """Run the full issuance flow for ``domain``."""
        if not is_valid_domain(domain):
            return Receipt.failure(
                adapter=self.name,
                action_id="issue",
                error=f"Invalid domain name: {domain!r}",
            )

        installed = self.ensure_installed()
        if installed.failed:
            return installed

        key_file, chain_file = self.cert_paths(domain)
        try:
            key_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id="install-cert",
                error=f"Cannot create {key_file.parent}: {e}",
            )

        steps = [
            ("set-default-ca", ["--set-default-ca", "--server", "letsencrypt"]),
            ("issue", ["--issue", "-d", domain, "--standalone", "--force"]),
            (
                "install-cert",
                [
                    "--installcert", "-d", domain,
                    "--key-file", str(key_file),
                    "--fullchain-file", str(chain_file),
                ],
            ),
        ]
        receipt = installed
        for action_id, args in steps:
            receipt = run_command(
                [str(self.acme_script), *args],
                adapter=self.name,
                action_id=action_id,
                timeout=self.timeout,
            )
            if receipt.failed:
                logger.error("acme.sh %s failed for %s: %s", action_id, domain, receipt.error)
                return receipt

        receipt.metadata.update({"key_file": str(key_file), "fullchain_file": str(chain_file)})
        return receipt
