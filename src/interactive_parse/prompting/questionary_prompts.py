"""Interactive terminal prompts backed by questionary."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import click
import questionary
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings
from prompt_toolkit.keys import Keys

from interactive_parse.navigation.walk_outcomes import NavigationSignal

_ERASE_LINES = "\x1b[{count}F\x1b[J"


def _backtrack_bindings() -> KeyBindings:
    bindings = KeyBindings()

    @bindings.add(Keys.Escape, eager=True)
    def _(event: Any) -> None:
        event.app.exit(result=NavigationSignal.BACKTRACK)

    return bindings


class QuestionaryPromptGateway:
    """Prompt gateway rendering questionary widgets with Escape bound to backtrack."""

    def __init__(self, *, erase_on_backtrack: bool = True, echo: Callable[..., None] | None = None):
        self._erase_on_backtrack = erase_on_backtrack
        self._echo = echo or click.echo
        self._lines_written = 0

    def ask_text(self, message: str, *, hint: str | None = None) -> str | NavigationSignal:
        return self._ask(questionary.text(message, instruction=_instruction(hint)))

    def ask_confirm(
        self, message: str, *, hint: str | None = None, default: bool = False
    ) -> bool | NavigationSignal:
        return self._ask(
            questionary.confirm(message, default=default, instruction=_instruction(hint))
        )

    def ask_select(
        self, message: str, options: Sequence[str], *, hint: str | None = None
    ) -> int | NavigationSignal:
        choices = _choices(options)
        return self._ask(
            questionary.select(message, choices=choices, instruction=_instruction(hint))
        )

    def ask_checkbox(
        self, message: str, options: Sequence[str], *, hint: str | None = None
    ) -> tuple[int, ...] | NavigationSignal:
        choices = _choices(options)
        answer = self._ask(
            questionary.checkbox(message, choices=choices, instruction=_instruction(hint))
        )
        if isinstance(answer, NavigationSignal):
            return answer
        return tuple(sorted(answer))

    def notify_invalid(self, message: str) -> None:
        self._echo(click.style(f"! {message}", fg="red"), err=True)
        self._lines_written += 1

    def transcript_mark(self) -> int:
        return self._lines_written

    def rewind_to(self, mark: int) -> None:
        count = self._lines_written - mark
        if count <= 0:
            return
        if self._erase_on_backtrack:
            self._echo(_ERASE_LINES.format(count=count), nl=False)
        self._lines_written = mark

    def _ask(self, question: questionary.Question) -> Any:
        application = question.application
        application.key_bindings = merge_key_bindings(
            [application.key_bindings or KeyBindings(), _backtrack_bindings()]
        )
        try:
            answer = question.unsafe_ask()
        except (KeyboardInterrupt, EOFError):
            return NavigationSignal.CANCEL
        self._lines_written += 1
        if answer is None:
            return NavigationSignal.CANCEL
        return answer


def _instruction(hint: str | None) -> str | None:
    return f"({hint})" if hint else None


def _choices(options: Sequence[str]) -> list[questionary.Choice]:
    return [questionary.Choice(title=option, value=index) for index, option in enumerate(options)]
