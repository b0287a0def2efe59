"""
Test doubles for the collaborators around the lifecycle controller.

No test touches a real service manager, panel binary or network:
the service manager is a MockServiceAdapter, collaborators are the
fakes below, and operator input comes from a ScriptedReader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import click

from panelctl.adapters.mock import MockServiceAdapter
from panelctl.adapters.shell.filesystem import FilesystemOps
from panelctl.core.engine.controller import LifecycleController
from panelctl.core.models.action import Receipt
from panelctl.core.models.config import PanelConfig


def _receipt(adapter: str, action_id: str, code: int, output: str = "") -> Receipt:
    if code == 0:
        return Receipt.success(adapter=adapter, action_id=action_id, output=output)
    return Receipt.failure(
        adapter=adapter,
        action_id=action_id,
        error=f"{action_id} failed",
        return_code=code,
        output=output,
    )


class ScriptedReader:
    """Feeds canned answers to ConfirmationPrompt and records the questions."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, text: str) -> str:
        self.prompts.append(text)
        if not self.answers:
            # Behaves like EOF on stdin
            raise click.Abort()
        return self.answers.pop(0)


class FakeInstaller:
    name = "installer"

    def __init__(self, return_code: int = 0, call_log: list[str] | None = None):
        self.return_code = return_code
        self.urls: list[str] = []
        self.call_log = call_log if call_log is not None else []

    def run(self, script_url: str, args=()) -> Receipt:
        self.urls.append(script_url)
        self.call_log.append("installer")
        return _receipt(self.name, "run", self.return_code)


class FakePanel:
    name = "panel"

    def __init__(self, return_code: int = 0, settings_output: str = "port: 54321"):
        self.return_code = return_code
        self.settings_output = settings_output
        self.calls: list[tuple] = []

    def set_credentials(self, username: str, password: str) -> Receipt:
        self.calls.append(("set_credentials", username, password))
        return _receipt(self.name, "set_credentials", self.return_code)

    def reset_settings(self) -> Receipt:
        self.calls.append(("reset_settings",))
        return _receipt(self.name, "reset_settings", self.return_code)

    def set_port(self, port: int) -> Receipt:
        self.calls.append(("set_port", port))
        return _receipt(self.name, "set_port", self.return_code)

    def show_settings(self) -> Receipt:
        self.calls.append(("show_settings",))
        return _receipt(self.name, "show_settings", self.return_code, self.settings_output)


class FakeCertIssuer:
    name = "acme"

    def __init__(self, return_code: int = 0, cert_dir: str = "/root/cert"):
        self.return_code = return_code
        self.cert_dir = Path(cert_dir)
        self.domains: list[str] = []

    def cert_paths(self, domain: str) -> tuple[Path, Path]:
        return self.cert_dir / domain / "privkey.pem", self.cert_dir / domain / "fullchain.pem"

    def issue(self, domain: str) -> Receipt:
        self.domains.append(domain)
        return _receipt(self.name, "issue", self.return_code)


class RecordingFilesystem(FilesystemOps):
    """Real removals, with each call appended to a shared log."""

    def __init__(self, call_log: list[str]):
        self.call_log = call_log

    def remove_tree(self, path):
        self.call_log.append(f"remove_tree:{Path(path).name}")
        return super().remove_tree(path)


@dataclass
class Harness:
    controller: LifecycleController
    service: MockServiceAdapter
    installer: FakeInstaller
    panel: FakePanel
    cert_issuer: FakeCertIssuer
    reader: ScriptedReader
    config: PanelConfig
    call_log: list[str] = field(default_factory=list)
    sleeps: list[float] = field(default_factory=list)

