"""Navigation stack tests."""

from __future__ import annotations

import pytest
from interactive_parse.navigation.navigation_stack import (
    FrameKind,
    NavigationStack,
    NavigationStackError,
    PromptFrame,
)
from interactive_parse.schema_management.schema_models import StringNode, StructNode


def test_push_pop_are_lifo() -> None:
    stack = NavigationStack()
    first = stack.push(PromptFrame(kind=FrameKind.STRUCT, label="", node=StructNode()))
    second = stack.push(PromptFrame(kind=FrameKind.LEAF, label="name", node=StringNode()))

    assert stack.peek_depth() == 2
    assert stack.peek() is second
    assert stack.pop() is second
    assert stack.pop() is first
    assert stack.peek_depth() == 0
    assert stack.peek() is None


def test_pop_on_empty_stack_raises() -> None:
    with pytest.raises(NavigationStackError):
        NavigationStack().pop()


def test_frame_context_pops_on_exit_and_on_error() -> None:
    stack = NavigationStack()

    with stack.frame(FrameKind.LEAF, "name", StringNode()) as frame:
        assert stack.peek() is frame
        assert frame.position == 0
    assert stack.peek_depth() == 0

    with pytest.raises(RuntimeError):
        with stack.frame(FrameKind.LEAF, "name", StringNode()):
            raise RuntimeError("boom")
    assert stack.peek_depth() == 0


def test_frame_released_out_of_order_raises() -> None:
    stack = NavigationStack()

    with pytest.raises(NavigationStackError, match="out of order"):
        with stack.frame(FrameKind.STRUCT, "outer", StructNode()):
            stack.push(PromptFrame(kind=FrameKind.LEAF, label="leaked", node=StringNode()))


def test_breadcrumb_and_display_name_follow_open_frames() -> None:
    stack = NavigationStack()
    for kind, label in (
        (FrameKind.STRUCT, ""),
        (FrameKind.ENUM, "subcommand"),
        (FrameKind.STRUCT, "Clone"),
        (FrameKind.SEQUENCE, "address"),
        (FrameKind.LEAF, "[1]"),
    ):
        stack.push(PromptFrame(kind=kind, label=label, node=StringNode()))

    assert stack.breadcrumb() == "subcommand.Clone.address[1]"
    assert stack.display_name() == "address[1]"


def test_display_name_defaults_for_unlabelled_root() -> None:
    stack = NavigationStack()
    stack.push(PromptFrame(kind=FrameKind.LEAF, label="", node=StringNode()))

    assert stack.breadcrumb() == ""
    assert stack.display_name() == "value"
