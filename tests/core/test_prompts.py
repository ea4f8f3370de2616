"""Tests for ConsolePrompter and ScriptedPrompter."""

import pytest

from nibras_shell.core.prompts import ConsolePrompter, Prompter, ScriptedPrompter


def feed(monkeypatch, *answers):
    replies = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


class TestConsolePrompter:
    """Test stdin parsing."""

    @pytest.mark.parametrize(
        ("answer", "default", "expected"),
        [
            ("y", False, True),
            ("YES", False, True),
            ("n", True, False),
            ("", True, True),
            ("", False, False),
            ("maybe", True, False),
        ],
    )
    def test_confirm(self, monkeypatch, answer, default, expected):
        feed(monkeypatch, answer)

        assert ConsolePrompter().confirm("Continue?", default=default) is expected

    def test_confirm_eof_is_no(self, monkeypatch):
        feed(monkeypatch)

        assert ConsolePrompter().confirm("Continue?", default=True) is False

    def test_ask_strips(self, monkeypatch):
        feed(monkeypatch, "  2 ")

        assert ConsolePrompter().ask("Select:") == "2"

    def test_show_prints(self, capsys):
        ConsolePrompter().show("hello")

        assert capsys.readouterr().out == "hello\n"


class TestScriptedPrompter:
    """Test replayed answers."""

    def test_replays_then_falls_back(self):
        prompter = ScriptedPrompter(confirms=[True], answers=["3"])

        assert prompter.confirm("a?") is True
        assert prompter.confirm("b?") is False
        assert prompter.ask("c?") == "3"
        assert prompter.ask("d?") == "0"
        assert prompter.questions == ["a?", "b?", "c?", "d?"]

    def test_always_yes(self):
        prompter = ScriptedPrompter.always_yes()

        assert prompter.confirm("Delete?") is True
        assert prompter.ask("Which backup?") == "1"

    def test_protocol(self):
        assert isinstance(ScriptedPrompter(), Prompter)
        assert isinstance(ConsolePrompter(), Prompter)
