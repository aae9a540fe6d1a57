"""Recursive prompt-driving schema walker."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from interactive_parse.configuration.runtime_settings import PromptSettings
from interactive_parse.navigation.navigation_stack import (
    FrameKind,
    NavigationStack,
    PromptFrame,
)
from interactive_parse.navigation.walk_outcomes import NavigationSignal, Produced, WalkResult
from interactive_parse.prompting.prompt_gateway import PromptGateway
from interactive_parse.schema_management.schema_models import (
    BoolNode,
    EnumNode,
    FloatNode,
    IntegerNode,
    NullNode,
    OptionalNode,
    SchemaNode,
    SequenceNode,
    StringNode,
    StructNode,
    TupleNode,
)
from interactive_parse.schema_management.schema_projection import UnsupportedSchemaError

from .leaf_parsing import InputFormatError, parse_leaf
from .value_assembly import (
    PartialSequence,
    PartialStruct,
    PartialTuple,
    PartialValue,
    PartialVariant,
    accumulate,
    child_count,
    finish,
    retract,
)

_LOGGER = logging.getLogger(__name__)

_LEAF_KINDS = {
    BoolNode: "bool",
    IntegerNode: "int",
    FloatNode: "num",
    StringNode: "string",
}

# (label, schema, doc hint) of one positional child of a struct or tuple.
_Child = tuple[str, SchemaNode, str | None]


class SchemaWalker:
    """Walk a schema tree depth-first, prompting for every decision point.

    Each handler owns one frame on the navigation stack for as long as it runs
    and interprets ``BACKTRACK`` results from its children itself; only a
    backtrack at a handler's own first prompt is returned to the caller.
    """

    def __init__(
        self,
        prompts: PromptGateway,
        *,
        settings: PromptSettings | None = None,
        stack: NavigationStack | None = None,
    ) -> None:
        self._prompts = prompts
        self._settings = settings or PromptSettings()
        self._stack = stack or NavigationStack()

    @property
    def stack(self) -> NavigationStack:
        """Navigation stack shared by every handler of this walker."""
        return self._stack

    def walk(self, node: SchemaNode, label: str = "", doc_hint: str | None = None) -> WalkResult:
        """Resolve one schema node into a produced value or a navigation signal."""
        if isinstance(node, NullNode):
            return Produced(None)
        if isinstance(node, (BoolNode, IntegerNode, FloatNode, StringNode)):
            return self._walk_leaf(node, label, doc_hint)
        if isinstance(node, OptionalNode):
            return self._walk_optional(node, label, doc_hint)
        if isinstance(node, SequenceNode):
            return self._walk_sequence(node, label, doc_hint)
        if isinstance(node, TupleNode):
            return self._walk_tuple(node, label, doc_hint)
        if isinstance(node, EnumNode):
            return self._walk_enum(node, label, doc_hint)
        if isinstance(node, StructNode):
            return self._walk_struct(node, label, doc_hint)
        raise UnsupportedSchemaError(f"Cannot prompt for schema node: {node!r}")

    def _walk_leaf(
        self,
        node: BoolNode | IntegerNode | FloatNode | StringNode,
        label: str,
        doc_hint: str | None,
    ) -> WalkResult:
        _LOGGER.debug("Entered leaf '%s' (%s)", label, type(node).__name__)
        with self._stack.frame(FrameKind.LEAF, label, node) as frame:
            frame.pending = "value"
            message = self._stack.display_name()
            hint = self._hint(node, _LEAF_KINDS[type(node)], doc_hint)
            if isinstance(node, BoolNode):
                answer = self._prompts.ask_confirm(message, hint=hint, default=False)
                if isinstance(answer, NavigationSignal):
                    return self._signal(answer)
                return Produced(answer)

            while True:
                text = self._prompts.ask_text(message, hint=hint)
                if isinstance(text, NavigationSignal):
                    return self._signal(text)
                try:
                    return Produced(parse_leaf(node, text))
                except InputFormatError as exc:
                    self._prompts.notify_invalid(str(exc))

    def _walk_optional(self, node: OptionalNode, label: str, doc_hint: str | None) -> WalkResult:
        _LOGGER.debug("Entered optional '%s'", label)
        with self._stack.frame(FrameKind.OPTIONAL, label, node) as frame:
            hint = self._hint(node, "optional", doc_hint)
            while True:
                mark = self._prompts.transcript_mark()
                frame.pending = "provide_value"
                answer = self._prompts.ask_confirm("Add optional value?", hint=hint, default=False)
                if isinstance(answer, NavigationSignal):
                    return self._signal(answer)
                if not answer:
                    return Produced(None)

                frame.pending = None
                result = self.walk(node.inner, "", doc_hint)
                if result is NavigationSignal.BACKTRACK:
                    self._rewind(mark)
                    continue
                return result

    def _walk_sequence(self, node: SequenceNode, label: str, doc_hint: str | None) -> WalkResult:
        if self._settings.checkbox_for_unit_enums and _is_unit_enum(node.item):
            return self._walk_multi_select(node, label, doc_hint)

        _LOGGER.debug("Entered sequence '%s'", label)
        partial = PartialSequence()
        with self._stack.frame(FrameKind.SEQUENCE, label, node) as frame:
            hint = self._hint(node, "sequence", doc_hint)
            marks: list[int] = []
            while True:
                position = child_count(partial)
                frame.position = position
                if node.max_items is not None and position >= node.max_items:
                    return Produced(finish(partial))

                del marks[position:]
                marks.append(self._prompts.transcript_mark())
                if position >= node.min_items:
                    frame.pending = "add_item"
                    answer = self._prompts.ask_confirm("Add element?", hint=hint, default=False)
                    if answer is NavigationSignal.CANCEL:
                        return self._signal(answer)
                    if answer is NavigationSignal.BACKTRACK:
                        if not self._step_back(partial, marks, position):
                            return self._signal(answer)
                        continue
                    if not answer:
                        return Produced(finish(partial))

                frame.pending = None
                result = self.walk(node.item, f"[{position}]", doc_hint)
                if result is NavigationSignal.CANCEL:
                    return result
                if result is NavigationSignal.BACKTRACK:
                    if position >= node.min_items:
                        self._rewind(marks[position])
                        continue
                    if not self._step_back(partial, marks, position):
                        return result
                    continue
                accumulate(partial, _produced(result))

    def _walk_multi_select(
        self, node: SequenceNode, label: str, doc_hint: str | None
    ) -> WalkResult:
        _LOGGER.debug("Entered multi-select sequence '%s'", label)
        item = node.item
        assert isinstance(item, EnumNode)
        with self._stack.frame(FrameKind.SEQUENCE, label, node) as frame:
            frame.pending = "pick_items"
            message = self._stack.display_name()
            hint = self._hint(node, "sequence", doc_hint)
            options = [variant.name for variant in item.variants]
            while True:
                picked = self._prompts.ask_checkbox(message, options, hint=hint)
                if isinstance(picked, NavigationSignal):
                    return self._signal(picked)
                too_many = node.max_items is not None and len(picked) > node.max_items
                if len(picked) < node.min_items or too_many:
                    upper = "any" if node.max_items is None else str(node.max_items)
                    self._prompts.notify_invalid(
                        f"Select between {node.min_items} and {upper} items."
                    )
                    continue
                frame.position = len(picked)
                return Produced([item.variants[index].unit_value for index in picked])

    def _walk_tuple(self, node: TupleNode, label: str, doc_hint: str | None) -> WalkResult:
        _LOGGER.debug("Entered tuple '%s'", label)
        children = [(f"[{index}]", item, doc_hint) for index, item in enumerate(node.items)]
        with self._stack.frame(FrameKind.TUPLE, label, node) as frame:
            return self._walk_positional(frame, children, PartialTuple(), keyed=False)

    def _walk_struct(self, node: StructNode, label: str, doc_hint: str | None) -> WalkResult:
        _LOGGER.debug("Entered struct '%s' with %d fields", label, len(node.fields))
        children = [
            (struct_field.name, struct_field.schema, struct_field.doc_hint)
            for struct_field in node.fields
        ]
        with self._stack.frame(FrameKind.STRUCT, label, node) as frame:
            return self._walk_positional(frame, children, PartialStruct(), keyed=True)

    def _walk_positional(
        self,
        frame: PromptFrame,
        children: Sequence[_Child],
        partial: PartialValue,
        *,
        keyed: bool,
    ) -> WalkResult:
        marks: list[int] = []
        while (index := child_count(partial)) < len(children):
            frame.position = index
            child_label, child_schema, child_doc = children[index]
            del marks[index:]
            marks.append(self._prompts.transcript_mark())

            result = self.walk(child_schema, child_label, child_doc)
            if result is NavigationSignal.CANCEL:
                return result
            if result is NavigationSignal.BACKTRACK:
                if not self._step_back(partial, marks, index):
                    return result
                continue
            accumulate(partial, _produced(result), key=child_label if keyed else None)
        return Produced(finish(partial))

    def _walk_enum(self, node: EnumNode, label: str, doc_hint: str | None) -> WalkResult:
        if len(node.variants) == 1 and node.variants[0].is_unit:
            _LOGGER.debug("Resolved single-value enum '%s' without prompting", label)
            return Produced(node.variants[0].unit_value)
        _LOGGER.debug("Entered enum '%s' with %d variants", label, len(node.variants))
        with self._stack.frame(FrameKind.ENUM, label, node) as frame:
            hint = self._hint(node, "enum", doc_hint)
            options = [variant.name for variant in node.variants]
            while True:
                mark = self._prompts.transcript_mark()
                frame.pending = "variant_choice"
                choice = self._prompts.ask_select("Select one:", options, hint=hint)
                if isinstance(choice, NavigationSignal):
                    return self._signal(choice)

                variant = node.variants[choice]
                frame.position = choice
                frame.pending = None
                if variant.payload is None:
                    return Produced(variant.unit_value)

                partial = PartialVariant(name=variant.name, tagged=node.tagged)
                if isinstance(variant.payload, StructNode) and not variant.payload.fields:
                    accumulate(partial, {})
                    return Produced(finish(partial))

                result = self.walk(variant.payload, variant.name)
                if result is NavigationSignal.BACKTRACK:
                    self._rewind(mark)
                    continue
                if result is NavigationSignal.CANCEL:
                    return result
                accumulate(partial, _produced(result))
                return Produced(finish(partial))

    def _step_back(self, partial: PartialValue, marks: list[int], index: int) -> bool:
        """Retract children back to the closest earlier one that prompted.

        Returns False when no earlier child issued a prompt, meaning the
        backtrack belongs to the caller.
        """
        for candidate in range(index - 1, -1, -1):
            if marks[candidate + 1] != marks[candidate]:
                for _ in range(index - candidate):
                    retract(partial)
                self._rewind(marks[candidate])
                return True
        return False

    def _rewind(self, mark: int) -> None:
        _LOGGER.debug("Backtracking at depth %d", self._stack.peek_depth())
        self._prompts.rewind_to(mark)

    def _signal(self, signal: NavigationSignal) -> NavigationSignal:
        _LOGGER.debug(
            "%s at depth %d (%s)", signal.value, self._stack.peek_depth(), self._stack.breadcrumb()
        )
        return signal

    def _hint(self, node: SchemaNode, kind: str, doc_hint: str | None) -> str:
        if self._settings.show_breadcrumbs:
            location = self._stack.breadcrumb()
        else:
            location = self._stack.display_name()
        parts = [location] if location else []
        if node.title:
            parts.append(f"<{node.title}>")
        description = doc_hint or node.description
        if description:
            limit = self._settings.description_limit
            if len(description) > limit:
                description = description[:limit] + "..."
            parts.append(f"{kind}: {description}")
        else:
            parts.append(kind)
        return " ".join(parts)


def _produced(result: WalkResult) -> Any:
    assert isinstance(result, Produced)
    return result.value


def _is_unit_enum(node: SchemaNode) -> bool:
    return isinstance(node, EnumNode) and all(variant.is_unit for variant in node.variants)
