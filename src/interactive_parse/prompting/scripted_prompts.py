"""Prompt gateway replaying a pre-recorded list of answers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from interactive_parse.navigation.walk_outcomes import NavigationSignal

BACKTRACK_TOKEN = "<back>"
CANCEL_TOKEN = "<cancel>"

_SIGNAL_TOKENS = {
    BACKTRACK_TOKEN: NavigationSignal.BACKTRACK,
    CANCEL_TOKEN: NavigationSignal.CANCEL,
}
_TRUE_WORDS = {"y", "yes", "true"}
_FALSE_WORDS = {"n", "no", "false"}


class ScriptedAnswerError(Exception):
    """Raised when a scripted answer does not fit the prompt it is replayed into."""


@dataclass(frozen=True)
class AskedPrompt:
    """One prompt issued to the scripted gateway."""

    kind: str
    message: str
    hint: str | None
    options: tuple[str, ...] = ()


class ScriptedPromptGateway:
    """Prompt gateway answering from a fixed script instead of the terminal."""

    def __init__(self, answers: Iterable[Any]):
        self._answers = list(answers)
        self._cursor = 0
        self.asked: list[AskedPrompt] = []
        self.notices: list[str] = []
        self.rewinds: list[int] = []

    @property
    def remaining(self) -> int:
        """Return how many scripted answers have not been consumed."""
        return len(self._answers) - self._cursor

    def ask_text(self, message: str, *, hint: str | None = None) -> str | NavigationSignal:
        answer = self._next(AskedPrompt(kind="text", message=message, hint=hint))
        if isinstance(answer, NavigationSignal):
            return answer
        if answer is None:
            raise ScriptedAnswerError(f"Missing text answer for '{message}'.")
        if isinstance(answer, bool):
            return "true" if answer else "false"
        return str(answer)

    def ask_confirm(
        self, message: str, *, hint: str | None = None, default: bool = False
    ) -> bool | NavigationSignal:
        answer = self._next(AskedPrompt(kind="confirm", message=message, hint=hint))
        if isinstance(answer, (bool, NavigationSignal)):
            return answer
        if answer is None or answer == "":
            return default
        word = str(answer).strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ScriptedAnswerError(f"Expected a yes/no answer for '{message}', got {answer!r}.")

    def ask_select(
        self, message: str, options: Sequence[str], *, hint: str | None = None
    ) -> int | NavigationSignal:
        answer = self._next(
            AskedPrompt(kind="select", message=message, hint=hint, options=tuple(options))
        )
        if isinstance(answer, NavigationSignal):
            return answer
        return _option_index(answer, options, message)

    def ask_checkbox(
        self, message: str, options: Sequence[str], *, hint: str | None = None
    ) -> tuple[int, ...] | NavigationSignal:
        answer = self._next(
            AskedPrompt(kind="checkbox", message=message, hint=hint, options=tuple(options))
        )
        if isinstance(answer, NavigationSignal):
            return answer
        if isinstance(answer, (str, int)) or not isinstance(answer, Iterable):
            raise ScriptedAnswerError(
                f"Expected a list of options for '{message}', got {answer!r}."
            )
        return tuple(sorted({_option_index(item, options, message) for item in answer}))

    def notify_invalid(self, message: str) -> None:
        self.notices.append(message)

    def transcript_mark(self) -> int:
        return len(self.asked)

    def rewind_to(self, mark: int) -> None:
        self.rewinds.append(mark)

    def _next(self, prompt: AskedPrompt) -> Any:
        if self._cursor >= len(self._answers):
            raise ScriptedAnswerError(f"Answer script exhausted at prompt '{prompt.message}'.")
        self.asked.append(prompt)
        answer = self._answers[self._cursor]
        self._cursor += 1
        if isinstance(answer, str) and answer in _SIGNAL_TOKENS:
            return _SIGNAL_TOKENS[answer]
        return answer


def _option_index(answer: Any, options: Sequence[str], message: str) -> int:
    if str(answer) in options:
        return list(options).index(str(answer))
    if isinstance(answer, int) and not isinstance(answer, bool) and 0 <= answer < len(options):
        return answer
    raise ScriptedAnswerError(
        f"Answer {answer!r} is not one of the options for '{message}': {', '.join(options)}"
    )
