"""
Tests for intent routing, the menu loop and outcome rendering.
"""

import click
import pytest

from panelctl.core.models.outcome import OperationOutcome
from panelctl.core.models.service import OperationIntent
from panelctl.ui.cli.menu import INVALID_CHOICE, MENU_ITEMS, MenuLoop, parse_choice
from panelctl.ui.cli.output import PLAIN, Reporter
from panelctl.ui.cli.prompt import ConfirmationPrompt
from panelctl.ui.cli.router import INVALID_ARGUMENT, CommandRouter, intent_from_argument
from tests.fakes import ScriptedReader


@pytest.fixture
def router(make_harness):
    def _make(**kwargs):
        h = make_harness(**kwargs)
        return CommandRouter(h.controller, Reporter(PLAIN)), h

    return _make


class TestIntentFromArgument:
    @pytest.mark.parametrize("token", ["start", "stop", "restart", "status"])
    def test_accepted(self, token):
        assert intent_from_argument(token) == OperationIntent(token)

    @pytest.mark.parametrize("token", ["Start", "install", "uninstall", " start", "", "0"])
    def test_rejected(self, token):
        assert intent_from_argument(token) is None


class TestDispatch:
    def test_reports_outcome(self, router, capsys):
        r, h = router(status_codes=[0])
        outcome = r.dispatch(OperationIntent.START)
        assert outcome.ok
        assert "[INFO] x-ui started successfully." in capsys.readouterr().out

    def test_exception_becomes_failure(self, router, capsys):
        r, h = router()

        def explode():
            raise RuntimeError("disk on fire")

        r._handlers[OperationIntent.STATUS] = explode
        outcome = r.dispatch(OperationIntent.STATUS)
        assert outcome.failed
        assert "Unexpected error: disk on fire" in capsys.readouterr().err

    def test_abort_propagates(self, router):
        r, h = router(answers=[])
        with pytest.raises(click.Abort):
            r.dispatch(OperationIntent.UNINSTALL)

    def test_exit_has_no_handler(self, router):
        r, h = router()
        assert r.dispatch(OperationIntent.EXIT).failed


class TestRunArgument:
    def test_invalid_token(self, router, capsys):
        r, h = router()
        assert r.run_argument("install") == 1
        assert INVALID_ARGUMENT in capsys.readouterr().err
        assert h.call_log == []

    def test_success_exit_code(self, router):
        r, h = router(status_codes=[0])
        assert r.run_argument("status") == 0

    def test_failure_exit_code(self, router):
        r, h = router(status_codes=[3])
        assert r.run_argument("start") == 1


class TestParseChoice:
    def test_every_item_reachable(self):
        for number, (intent, _) in enumerate(MENU_ITEMS):
            assert parse_choice(str(number)) is intent

    @pytest.mark.parametrize("raw", ["13", "-1", "abc", "", "1.5", "99"])
    def test_out_of_range(self, raw):
        assert parse_choice(raw) is None

    def test_whitespace_tolerated(self):
        assert parse_choice(" 11 ") is OperationIntent.STATUS

    @pytest.mark.parametrize("raw", ["²", "١", "9" * 5000, "0" * 5000])
    def test_non_ascii_and_huge_digits_rejected(self, raw):
        assert parse_choice(raw) is None


class TestMenuLoop:
    def _loop(self, router, answers, **kwargs):
        r, h = router(**kwargs)
        reader = ScriptedReader(answers)
        return MenuLoop(r, ConfirmationPrompt(reader=reader), "x-ui"), h, reader

    def test_zero_exits(self, router):
        loop, h, reader = self._loop(router, ["0"])
        assert loop.run() == 0
        assert h.call_log == []

    def test_invalid_choice_continues(self, router, capsys):
        loop, h, reader = self._loop(router, ["42", "0"])
        assert loop.run() == 0
        assert INVALID_CHOICE in capsys.readouterr().err
        assert len(reader.prompts) == 2

    def test_failed_operation_continues(self, router):
        loop, h, reader = self._loop(router, ["9", "10", "0"], status_codes=[3])
        assert loop.run() == 0
        assert h.call_log == ["stop", "status", "restart", "status"]

    def test_render_lists_items(self, router, capsys):
        loop, h, reader = self._loop(router, ["0"])
        loop.render()
        out = capsys.readouterr().out
        assert "x-ui Management Script" in out
        assert "1. Install x-ui" in out
        assert "11. View x-ui Status" in out


class TestReporter:
    def test_detail_printed_before_status(self, capsys):
        outcome = OperationOutcome.success(
            OperationIntent.STATUS, "x-ui status: running", detail="* status: started"
        )
        Reporter(PLAIN).outcome(outcome)
        assert capsys.readouterr().out == "* status: started\n[INFO] x-ui status: running\n"

    def test_cancelled_is_warning(self, capsys):
        Reporter(PLAIN).outcome(OperationOutcome.cancel(OperationIntent.UPDATE))
        assert capsys.readouterr().out == "[WARN] Operation canceled.\n"

    def test_failure_goes_to_stderr(self, capsys):
        Reporter(PLAIN).outcome(OperationOutcome.failure(OperationIntent.STOP, "nope"))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "[ERROR] nope\n"
