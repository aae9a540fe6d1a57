"""Navigation stack recording resumable prompt decision points."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from interactive_parse.schema_management.schema_models import SchemaNode


class NavigationStackError(Exception):
    """Raised when push/pop stop being strictly nested."""


class FrameKind(str, Enum):
    """Schema node kind owning a frame."""

    LEAF = "leaf"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    TUPLE = "tuple"
    ENUM = "enum"
    STRUCT = "struct"


@dataclass
class PromptFrame:
    """One in-flight decision point.

    ``position`` is the struct field index, tuple index or sequence item count
    the owning handler will resume from; ``pending`` names the prompt that is
    currently shown for the frame.
    """

    kind: FrameKind
    label: str
    node: SchemaNode
    position: int = 0
    pending: str | None = None


class NavigationStack:
    """Plain LIFO storage of prompt frames."""

    def __init__(self) -> None:
        self._frames: list[PromptFrame] = []

    def push(self, frame: PromptFrame) -> PromptFrame:
        """Record a new decision point on top of the stack."""
        self._frames.append(frame)
        return frame

    def pop(self) -> PromptFrame:
        """Remove and return the most recent decision point."""
        if not self._frames:
            raise NavigationStackError("Cannot pop from an empty navigation stack.")
        return self._frames.pop()

    def peek(self) -> PromptFrame | None:
        """Return the most recent decision point without removing it."""
        return self._frames[-1] if self._frames else None

    def peek_depth(self) -> int:
        """Return the number of open decision points."""
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    @contextmanager
    def frame(self, kind: FrameKind, label: str, node: SchemaNode) -> Iterator[PromptFrame]:
        """Hold a frame open for the duration of one handler invocation."""
        frame = self.push(PromptFrame(kind=kind, label=label, node=node))
        try:
            yield frame
        finally:
            self._release(frame)

    def _release(self, frame: PromptFrame) -> None:
        top = self.peek()
        if top is not frame:
            raise NavigationStackError(
                f"Navigation frame '{frame.label}' released out of order "
                f"(top is '{top.label if top else None}')."
            )
        self.pop()

    def breadcrumb(self) -> str:
        """Return the dotted path of the open frames, e.g. ``subcommand.Clone.address[1]``."""
        path = ""
        for frame in self._frames:
            if not frame.label:
                continue
            if frame.label.startswith("[") or not path:
                path += frame.label
            else:
                path += f".{frame.label}"
        return path

    def display_name(self) -> str:
        """Return the innermost named segment of the breadcrumb with its indexes."""
        suffix = ""
        for frame in reversed(self._frames):
            if not frame.label:
                continue
            if frame.label.startswith("["):
                suffix = frame.label + suffix
                continue
            return frame.label + suffix
        return suffix or "value"
