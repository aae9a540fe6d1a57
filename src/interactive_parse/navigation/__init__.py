"""Navigation domain exports."""

from .navigation_stack import FrameKind, NavigationStack, NavigationStackError, PromptFrame
from .walk_outcomes import NavigationSignal, ParseOutcome, Produced, WalkResult

__all__ = [
    "FrameKind",
    "NavigationSignal",
    "NavigationStack",
    "NavigationStackError",
    "ParseOutcome",
    "Produced",
    "PromptFrame",
    "WalkResult",
]
