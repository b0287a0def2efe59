"""
Tests for the confirmation prompt — strict y/Y allow-list and defaults.
"""

import click
import pytest
from click.testing import CliRunner

from panelctl.ui.cli.prompt import ConfirmationPrompt
from tests.fakes import ScriptedReader


class TestAsk:
    @pytest.mark.parametrize("answer", ["y", "Y", " y "])
    def test_affirmative(self, answer):
        prompt = ConfirmationPrompt(reader=ScriptedReader([answer]))
        assert prompt.ask("Continue?") is True

    @pytest.mark.parametrize("answer", ["n", "yes", "yy", "1", "true", ""])
    def test_everything_else_is_no(self, answer):
        prompt = ConfirmationPrompt(reader=ScriptedReader([answer]))
        assert prompt.ask("Continue?") is False

    def test_no_default_shows_choices(self):
        reader = ScriptedReader(["n"])
        ConfirmationPrompt(reader=reader).ask("Continue?")
        assert reader.prompts == ["Continue? [y/n]"]

    def test_empty_uses_default(self):
        reader = ScriptedReader([""])
        assert ConfirmationPrompt(reader=reader).ask("Restart?", "y") is True
        assert reader.prompts == ["Restart? [default: y]"]

    def test_explicit_answer_beats_default(self):
        prompt = ConfirmationPrompt(reader=ScriptedReader(["n"]))
        assert prompt.ask("Restart?", "y") is False

    def test_bool_default(self):
        assert ConfirmationPrompt(reader=ScriptedReader([""])).ask("Go?", True) is True
        assert ConfirmationPrompt(reader=ScriptedReader([""])).ask("Go?", False) is False


class TestRead:
    def test_raw_passthrough(self):
        prompt = ConfirmationPrompt(reader=ScriptedReader(["  8080 "]))
        assert prompt.read("Port") == "  8080 "


class TestClickReader:
    def test_reads_from_stdin(self):
        @click.command()
        def probe():
            click.echo(f"answer={ConfirmationPrompt().ask('Continue?', 'n')}")

        result = CliRunner().invoke(probe, input="y\n")
        assert result.exit_code == 0
        assert "Continue? [default: n]: " in result.output
        assert "answer=True" in result.output

    def test_empty_line_takes_default(self):
        @click.command()
        def probe():
            click.echo(f"answer={ConfirmationPrompt().ask('Restart?', 'y')}")

        result = CliRunner().invoke(probe, input="\n")
        assert "answer=True" in result.output
