"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from panelctl.adapters.mock import MockServiceAdapter
from panelctl.core.engine.controller import LifecycleController
from panelctl.core.models.config import PanelConfig
from panelctl.ui.cli.prompt import ConfirmationPrompt
from tests.fakes import (
    FakeCertIssuer,
    FakeInstaller,
    FakePanel,
    Harness,
    RecordingFilesystem,
    ScriptedReader,
)


@pytest.fixture
def install_dirs(tmp_path: Path) -> list[Path]:
    """Two populated install directories, like /etc/x-ui and /usr/local/x-ui."""
    dirs = [tmp_path / "etc-x-ui", tmp_path / "usr-local-x-ui"]
    for d in dirs:
        d.mkdir()
        (d / "x-ui.db").write_text("data")
    return dirs


@pytest.fixture
def make_harness(install_dirs: list[Path]):
    """Build a controller wired to fakes.

    Keyword args: answers, status_codes, installer_code, panel_code,
    cert_code, and any PanelConfig field.
    """

    def _make(
        answers=(),
        status_codes=(0,),
        installer_code: int = 0,
        panel_code: int = 0,
        cert_code: int = 0,
        **config_overrides,
    ) -> Harness:
        call_log: list[str] = []
        sleeps: list[float] = []
        config_overrides.setdefault("install_dirs", [str(d) for d in install_dirs])
        config = PanelConfig(**config_overrides)
        service = MockServiceAdapter(
            unit_name=config.unit_name, status_codes=status_codes, call_log=call_log
        )
        installer = FakeInstaller(installer_code, call_log=call_log)
        panel = FakePanel(panel_code)
        cert_issuer = FakeCertIssuer(cert_code)
        reader = ScriptedReader(answers)
        controller = LifecycleController(
            service=service,
            installer=installer,
            panel=panel,
            cert_issuer=cert_issuer,
            prompt=ConfirmationPrompt(reader=reader),
            config=config,
            filesystem=RecordingFilesystem(call_log),
            sleep=sleeps.append,
        )
        return Harness(
            controller=controller,
            service=service,
            installer=installer,
            panel=panel,
            cert_issuer=cert_issuer,
            reader=reader,
            config=config,
            call_log=call_log,
            sleeps=sleeps,
        )

    return _make


@pytest.fixture(autouse=True)
def _reset_panelctl_logger():
    """CLI runs attach handlers to streams that close when the run ends."""
    logger = logging.getLogger("panelctl")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
