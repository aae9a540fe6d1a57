"""Control signals and results threaded through a walk."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class NavigationSignal(str, Enum):
    """Non-answer outcomes of a prompt."""

    BACKTRACK = "backtrack"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Produced:
    """A fully assembled value for one schema node."""

    value: Any


WalkResult = Produced | NavigationSignal


@dataclass(frozen=True)
class ParseOutcome:
    """Terminal result of one parse session."""

    value: Any = None
    aborted: bool = False

    @classmethod
    def completed(cls, value: Any) -> ParseOutcome:
        """Build the outcome of a session that produced a value."""
        return cls(value=value, aborted=False)

    @classmethod
    def abort(cls) -> ParseOutcome:
        """Build the outcome of a cancelled session."""
        return cls(value=None, aborted=True)
