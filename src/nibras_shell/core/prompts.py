"""User interaction protocol for workflows.

Workflows never call ``input()`` themselves. They receive a ``Prompter``
so the same flow runs interactively, with ``--yes``, or under test with
pre-programmed answers.

Usage::

    from nibras_shell.core.prompts import ConsolePrompter, ScriptedPrompter

    prompter = ConsolePrompter()
    if prompter.confirm("Install optional packages?"):
        ...

    scripted = ScriptedPrompter(confirms=[True, False], answers=["1"])

"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

_YES_ANSWERS = frozenset({"y", "yes"})
_NO_ANSWERS = frozenset({"n", "no"})


@runtime_checkable
class Prompter(Protocol):
    """Interface for asking the user questions."""

    def confirm(self, question: str, *, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...

    def ask(self, question: str) -> str:
        """Ask for a free-form answer."""
        ...

    def show(self, message: str) -> None:
        """Display a line of output to the user."""
        ...


class ConsolePrompter:
    """Prompter backed by ``input()`` and ``print()``."""

    def confirm(self, question: str, *, default: bool = False) -> bool:
        """Ask a yes/no question on stdin.

        An empty answer returns ``default``. EOF counts as "no".
        """
        suffix = "[Y/n]" if default else "[y/N]"
        try:
            answer = input(f"{question} {suffix} ").strip().lower()
        except EOFError:
            return False
        if not answer:
            return default
        if answer in _YES_ANSWERS:
            return True
        if answer not in _NO_ANSWERS:
            print(f"Unrecognized answer '{answer}', treating as no")
        return False

    def ask(self, question: str) -> str:
        """Read a line from stdin, empty on EOF."""
        try:
            return input(f"{question} ").strip()
        except EOFError:
            return ""

    def show(self, message: str) -> None:
        """Print a message."""
        print(message)


class ScriptedPrompter:
    """Prompter that replays pre-programmed answers.

    Used for ``--yes`` and in tests. When the scripted answers run out,
    ``confirm`` returns ``default`` (the constructor value, not the per-call
    one) and ``ask`` returns ``fallback_answer``.

    Attributes:
        questions: Every question asked, in order
        shown: Every message displayed, in order

    """

    def __init__(
        self,
        confirms: Iterable[bool] = (),
        answers: Iterable[str] = (),
        *,
        default: bool = False,
        fallback_answer: str = "0",
    ) -> None:
        """Initialize with the answers to replay."""
        self._confirms: deque[bool] = deque(confirms)
        self._answers: deque[str] = deque(answers)
        self.default = default
        self.fallback_answer = fallback_answer
        self.questions: list[str] = []
        self.shown: list[str] = []

    @classmethod
    def always_yes(cls) -> ScriptedPrompter:
        """Prompter that confirms everything and picks the newest backup."""
        return cls(default=True, fallback_answer="1")

    def confirm(self, question: str, *, default: bool = False) -> bool:  # noqa: ARG002
        """Return the next scripted confirmation."""
        self.questions.append(question)
        if self._confirms:
            return self._confirms.popleft()
        return self.default

    def ask(self, question: str) -> str:
        """Return the next scripted answer."""
        self.questions.append(question)
        if self._answers:
            return self._answers.popleft()
        return self.fallback_answer

    def show(self, message: str) -> None:
        """Record a message instead of printing it."""
        self.shown.append(message)
