"""Human-readable outline of schema node trees."""

from __future__ import annotations

from .schema_models import (
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
from .schema_projection import UnsupportedSchemaError

_INDENT = "  "
_LEAF_LABELS = {
    NullNode: "null",
    BoolNode: "bool",
    IntegerNode: "int",
    FloatNode: "num",
    StringNode: "string",
}


def describe_schema(node: SchemaNode, *, name: str | None = None) -> str:
    """Render an indented outline showing the prompts a schema will produce."""
    lines: list[str] = []
    _describe(node, label=name or "root", depth=0, lines=lines)
    return "\n".join(lines)


def _describe(node: SchemaNode, *, label: str, depth: int, lines: list[str]) -> None:
    prefix = _INDENT * depth
    leaf_label = _LEAF_LABELS.get(type(node))
    if leaf_label is not None:
        lines.append(f"{prefix}{label}: {leaf_label}")
    elif isinstance(node, OptionalNode):
        lines.append(f"{prefix}{label}: optional")
        _describe(node.inner, label=label, depth=depth + 1, lines=lines)
    elif isinstance(node, SequenceNode):
        bounds = f"{node.min_items}..{'' if node.max_items is None else node.max_items}"
        lines.append(f"{prefix}{label}: sequence [{bounds}]")
        _describe(node.item, label=f"{label}[]", depth=depth + 1, lines=lines)
    elif isinstance(node, TupleNode):
        lines.append(f"{prefix}{label}: tuple ({len(node.items)})")
        for index, item in enumerate(node.items):
            _describe(item, label=f"{label}.{index}", depth=depth + 1, lines=lines)
    elif isinstance(node, EnumNode):
        style = "tagged" if node.tagged else "untagged"
        lines.append(f"{prefix}{label}: enum ({style})")
        for variant in node.variants:
            if variant.payload is None:
                lines.append(f"{prefix}{_INDENT}{variant.name}")
            else:
                _describe(variant.payload, label=variant.name, depth=depth + 1, lines=lines)
    elif isinstance(node, StructNode):
        title = f" <{node.title}>" if node.title else ""
        lines.append(f"{prefix}{label}: struct{title}")
        for struct_field in node.fields:
            _describe(struct_field.schema, label=struct_field.name, depth=depth + 1, lines=lines)
    else:
        raise UnsupportedSchemaError(f"Cannot describe schema node: {node!r}")
