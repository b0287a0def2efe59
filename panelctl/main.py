"""
panelctl — CLI entrypoint.

Usage:
    panelctl                      interactive menu
    panelctl start|stop|restart|status
    python -m panelctl.main --help
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable
from pathlib import Path

import click

from panelctl import __version__
from panelctl.adapters.base import ServiceManagerAdapter
from panelctl.adapters.registry import build_service_adapter
from panelctl.core.config.loader import load_config
from panelctl.core.engine.controller import LifecycleController
from panelctl.core.models.config import PanelConfig
from panelctl.core.observability.logging_config import resolve_level, setup_logging
from panelctl.core.services.cert_issuer import CertIssuer
from panelctl.core.services.installer import InstallerInvoker
from panelctl.core.services.panel_binary import PanelBinary
from panelctl.core.services.preflight import run_preflight
from panelctl.errors import PanelctlError
from panelctl.ui.cli.menu import MenuLoop
from panelctl.ui.cli.output import Reporter
from panelctl.ui.cli.prompt import ConfirmationPrompt
from panelctl.ui.cli.router import CommandRouter


def build_controller(
    config: PanelConfig,
    service: ServiceManagerAdapter,
    prompt: ConfirmationPrompt,
    sleep: Callable[[float], None] = time.sleep,
) -> LifecycleController:
    """Wire the controller and its collaborators from config."""
    installer = InstallerInvoker()
    return LifecycleController(
        service=service,
        installer=installer,
        panel=PanelBinary(config.panel_binary, timeout=config.command_timeout),
        cert_issuer=CertIssuer(
            installer=installer,
            acme_script=config.acme_script,
            acme_installer_url=config.acme_installer_url,
            cert_dir=config.cert_dir,
        ),
        prompt=prompt,
        config=config,
        sleep=sleep,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="panelctl")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to panelctl.yml (default: $PANELCTL_CONFIG or /etc/panelctl/panelctl.yml).",
)
@click.argument("action", required=False)
def cli(
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    action: str | None,
) -> None:
    """panelctl — manage the x-ui panel service.

    With ACTION (start, stop, restart or status) run that one operation
    and exit. Without it, open the interactive menu.
    """
    reporter = Reporter()

    # ── Startup: logging, config, preconditions. All fatal ──────
    try:
        setup_logging(
            level=resolve_level(debug, verbose, quiet, os.environ.get("PANELCTL_LOG_LEVEL")),
            log_file=os.environ.get("PANELCTL_LOG_FILE"),
            log_file_level=os.environ.get("PANELCTL_LOG_FILE_LEVEL"),
        )
        config = load_config(Path(config_path) if config_path else None)
        run_preflight(config)
        service = build_service_adapter(config)
    except PanelctlError as e:
        reporter.error(str(e))
        sys.exit(1)

    prompt = ConfirmationPrompt()
    router = CommandRouter(build_controller(config, service, prompt), reporter)

    if action is not None:
        sys.exit(router.run_argument(action))

    sys.exit(MenuLoop(router, prompt, config.unit_name).run())


if __name__ == "__main__":
    cli()
