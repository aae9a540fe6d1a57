"""Prompting collaborator contract."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from interactive_parse.navigation.walk_outcomes import NavigationSignal


class PromptGateway(Protocol):
    """Terminal prompt primitives the schema walker drives.

    Every ``ask_*`` call returns either the answer or a ``NavigationSignal``:
    ``BACKTRACK`` for the Escape-style "go back" input and ``CANCEL`` for
    terminating the whole session.
    """

    def ask_text(self, message: str, *, hint: str | None = None) -> str | NavigationSignal: ...

    def ask_confirm(
        self, message: str, *, hint: str | None = None, default: bool = False
    ) -> bool | NavigationSignal: ...

    def ask_select(
        self, message: str, options: Sequence[str], *, hint: str | None = None
    ) -> int | NavigationSignal: ...

    def ask_checkbox(
        self, message: str, options: Sequence[str], *, hint: str | None = None
    ) -> tuple[int, ...] | NavigationSignal: ...

    def notify_invalid(self, message: str) -> None: ...

    def transcript_mark(self) -> int: ...

    def rewind_to(self, mark: int) -> None: ...
