"""Schema loading and projection into schema node trees."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import yaml

from .schema_models import (
    BoolNode,
    EnumNode,
    EnumVariant,
    FloatNode,
    IntegerNode,
    LeafNode,
    NullNode,
    OptionalNode,
    SchemaNode,
    SequenceNode,
    StringNode,
    StructField,
    StructNode,
    TupleNode,
)

_REF_PREFIXES = ("#/$defs/", "#/definitions/")
_SCALAR_TYPES: Mapping[str, type[LeafNode]] = {
    "null": NullNode,
    "boolean": BoolNode,
    "integer": IntegerNode,
    "number": FloatNode,
    "string": StringNode,
}


class SchemaError(Exception):
    """Raised for schema parsing or projection failures."""


class UnsupportedSchemaError(SchemaError):
    """Raised for schema shapes that cannot be turned into prompts."""


@dataclass(frozen=True)
class _ProjectionContext:
    """Read-only lookup state shared while projecting one document."""

    definitions: Mapping[str, Any]


def load_schema_document(text: str, *, schema_format: str = "json") -> Mapping[str, Any]:
    """Parse JSON or YAML schema text into a mapping."""
    if schema_format == "json":
        try:
            root = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Invalid JSON schema: {exc}") from exc
    elif schema_format == "yaml":
        try:
            root = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SchemaError(f"Invalid YAML schema: {exc}") from exc
    else:
        raise SchemaError(f"Unsupported schema format: {schema_format}")

    if not isinstance(root, Mapping):
        raise SchemaError("Schema root must be an object.")
    return root


def build_schema_tree(document: Mapping[str, Any]) -> SchemaNode:
    """Project a JSON Schema document into an immutable schema node tree."""
    definitions: dict[str, Any] = {}
    for key in ("definitions", "$defs"):
        section = document.get(key)
        if isinstance(section, Mapping):
            definitions.update(section)
    return _project(document, context=_ProjectionContext(definitions), resolving=())


def _project(
    node: Any, *, context: _ProjectionContext, resolving: tuple[str, ...]
) -> SchemaNode:
    if isinstance(node, bool):
        raise UnsupportedSchemaError("Boolean schemas cannot be parsed interactively.")
    if not isinstance(node, Mapping):
        raise SchemaError("Schema nodes must be objects.")

    if "$ref" in node:
        return _project_reference(node, context=context, resolving=resolving)

    all_of = node.get("allOf")
    if all_of is not None:
        if not isinstance(all_of, Sequence) or len(all_of) != 1:
            raise UnsupportedSchemaError("Only single-member allOf schemas are supported.")
        inner = _project(all_of[0], context=context, resolving=resolving)
        return _with_metadata(inner, node)

    for union_key in ("oneOf", "anyOf"):
        members = node.get(union_key)
        if members is not None:
            if not isinstance(members, Sequence) or isinstance(members, str) or not members:
                raise SchemaError(f"{union_key} must be a non-empty list of schemas.")
            return _project_union(node, members, context=context, resolving=resolving)

    if "const" in node:
        return _project_literals(node, [node["const"]])

    if "enum" in node:
        values = node["enum"]
        if not isinstance(values, Sequence) or isinstance(values, str) or not values:
            raise SchemaError("enum must be a non-empty list of values.")
        return _project_literals(node, list(values))

    node_types = _json_schema_types(node)
    if not node_types:
        if "properties" in node:
            return _project_object(node, context=context, resolving=resolving)
        if "items" in node or "prefixItems" in node:
            return _project_array(node, context=context, resolving=resolving)
        raise UnsupportedSchemaError(f"Schema node has no interpretable type: {dict(node)}")

    non_null = [node_type for node_type in node_types if node_type != "null"]
    if not non_null:
        return _with_metadata(NullNode(), node)
    if len(non_null) == 1:
        inner = _project_typed(non_null[0], node, context=context, resolving=resolving)
    else:
        inner = EnumNode(
            variants=tuple(
                EnumVariant(
                    name=node_type,
                    payload=_project_typed(
                        node_type, node, context=context, resolving=resolving
                    ),
                )
                for node_type in non_null
            ),
            tagged=False,
        )
    if len(non_null) < len(node_types):
        return _with_metadata(OptionalNode(inner=inner), node)
    return _with_metadata(inner, node)


def _project_reference(
    node: Mapping[str, Any], *, context: _ProjectionContext, resolving: tuple[str, ...]
) -> SchemaNode:
    reference = node["$ref"]
    if not isinstance(reference, str):
        raise SchemaError("$ref must be a string.")
    name = _definition_name(reference)
    if name in resolving:
        cycle = " -> ".join((*resolving, name))
        raise UnsupportedSchemaError(f"Cyclic schema reference detected: {cycle}")
    if name not in context.definitions:
        raise SchemaError(f"Unknown schema reference: {reference}")

    target = _project(context.definitions[name], context=context, resolving=(*resolving, name))
    if target.title is None:
        target = dataclasses.replace(target, title=name)
    return _with_metadata(target, node)


def _definition_name(reference: str) -> str:
    for prefix in _REF_PREFIXES:
        if reference.startswith(prefix):
            return reference.removeprefix(prefix)
    raise UnsupportedSchemaError(f"Only local definition references are supported: {reference}")


def _project_typed(
    node_type: str,
    node: Mapping[str, Any],
    *,
    context: _ProjectionContext,
    resolving: tuple[str, ...],
) -> SchemaNode:
    if node_type in _SCALAR_TYPES:
        return _SCALAR_TYPES[node_type]()
    if node_type == "array":
        return _project_array(node, context=context, resolving=resolving)
    if node_type == "object":
        return _project_object(node, context=context, resolving=resolving)
    raise UnsupportedSchemaError(f"Unsupported schema type: {node_type}")


def _project_object(
    node: Mapping[str, Any], *, context: _ProjectionContext, resolving: tuple[str, ...]
) -> SchemaNode:
    properties = node.get("properties")
    if properties is None:
        if isinstance(node.get("additionalProperties"), Mapping):
            raise UnsupportedSchemaError("Free-form map schemas cannot be parsed interactively.")
        return _with_metadata(StructNode(), node)
    if not isinstance(properties, Mapping):
        raise SchemaError("properties must be an object.")

    fields = []
    for name, child in properties.items():
        schema = _project(child, context=context, resolving=resolving)
        doc_hint = child.get("description") if isinstance(child, Mapping) else None
        fields.append(
            StructField(name=str(name), schema=schema, doc_hint=doc_hint or schema.description)
        )
    return _with_metadata(StructNode(fields=tuple(fields)), node)


def _project_array(
    node: Mapping[str, Any], *, context: _ProjectionContext, resolving: tuple[str, ...]
) -> SchemaNode:
    positional = node.get("prefixItems")
    items = node.get("items")
    if positional is None and isinstance(items, Sequence) and not isinstance(items, str):
        positional = items

    if positional is not None:
        if not isinstance(positional, Sequence) or isinstance(positional, str):
            raise SchemaError("prefixItems must be a list of schemas.")
        return _with_metadata(
            TupleNode(
                items=tuple(
                    _project(item, context=context, resolving=resolving) for item in positional
                )
            ),
            node,
        )

    if items is None:
        raise UnsupportedSchemaError("Array schemas must declare their items.")
    min_items = _bound(node.get("minItems"), "minItems") or 0
    max_items = _bound(node.get("maxItems"), "maxItems")
    if max_items is not None and max_items < min_items:
        raise SchemaError("maxItems must not be smaller than minItems.")
    return _with_metadata(
        SequenceNode(
            item=_project(items, context=context, resolving=resolving),
            min_items=min_items,
            max_items=max_items,
        ),
        node,
    )


def _project_union(
    node: Mapping[str, Any],
    members: Sequence[Any],
    *,
    context: _ProjectionContext,
    resolving: tuple[str, ...],
) -> SchemaNode:
    non_null = [member for member in members if not _is_null_schema(member)]
    if not non_null:
        return _with_metadata(NullNode(), node)

    if len(non_null) == 1:
        inner = _project(non_null[0], context=context, resolving=resolving)
    elif all(_is_externally_tagged(member) for member in non_null):
        inner = EnumNode(
            variants=tuple(
                _tagged_variant(member, context=context, resolving=resolving)
                for member in non_null
            ),
            tagged=True,
        )
    else:
        inner = EnumNode(
            variants=_untagged_variants(non_null, context=context, resolving=resolving),
            tagged=False,
        )

    if len(non_null) < len(members):
        return _with_metadata(OptionalNode(inner=inner), node)
    return _with_metadata(inner, node)


def _is_externally_tagged(member: Any) -> bool:
    if not isinstance(member, Mapping):
        return False
    literals = _member_literals(member)
    if literals is not None:
        return len(literals) == 1 and isinstance(literals[0], str)
    properties = member.get("properties")
    return (
        "$ref" not in member
        and isinstance(properties, Mapping)
        and len(properties) == 1
        and list(member.get("required", properties)) == list(properties)
    )


def _tagged_variant(
    member: Mapping[str, Any], *, context: _ProjectionContext, resolving: tuple[str, ...]
) -> EnumVariant:
    literals = _member_literals(member)
    if literals is not None:
        return EnumVariant(name=literals[0])
    ((name, payload),) = member["properties"].items()
    return EnumVariant(
        name=str(name), payload=_project(payload, context=context, resolving=resolving)
    )


def _untagged_variants(
    members: Sequence[Any], *, context: _ProjectionContext, resolving: tuple[str, ...]
) -> tuple[EnumVariant, ...]:
    variants: list[EnumVariant] = []
    seen: set[str] = set()
    for index, member in enumerate(members):
        payload = _project(member, context=context, resolving=resolving)
        if _is_single_literal(payload):
            literal_variant = payload.variants[0]  # type: ignore[union-attr]
            name, variant = literal_variant.name, literal_variant
        else:
            name = payload.title or _type_label(payload) or f"Variant {index + 1}"
            variant = EnumVariant(name=name, payload=payload)
        if name in seen:
            name = f"{name} ({index + 1})"
            variant = dataclasses.replace(variant, name=name)
        seen.add(name)
        variants.append(variant)
    return tuple(variants)


def _project_literals(node: Mapping[str, Any], values: list[Any]) -> SchemaNode:
    non_null = [value for value in values if value is not None]
    if not non_null:
        return _with_metadata(NullNode(), node)
    inner = EnumNode(
        variants=tuple(EnumVariant(name=_literal_name(value), literal=value) for value in non_null),
        tagged=False,
    )
    if len(non_null) < len(values):
        return _with_metadata(OptionalNode(inner=inner), node)
    return _with_metadata(inner, node)


def _member_literals(member: Mapping[str, Any]) -> list[Any] | None:
    if "const" in member:
        return [member["const"]]
    values = member.get("enum")
    if isinstance(values, Sequence) and not isinstance(values, str):
        return list(values)
    return None


def _literal_name(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _is_single_literal(node: SchemaNode) -> bool:
    return (
        isinstance(node, EnumNode)
        and len(node.variants) == 1
        and node.variants[0].is_unit
        and node.variants[0].literal is not None
    )


def _is_null_schema(member: Any) -> bool:
    if not isinstance(member, Mapping):
        return False
    if member.get("type") == "null":
        return True
    literals = _member_literals(member)
    return literals is not None and literals == [None]


def _json_schema_types(node: Mapping[str, Any]) -> tuple[str, ...]:
    node_type = node.get("type")
    if isinstance(node_type, list):
        return tuple(value for value in node_type if isinstance(value, str))
    if isinstance(node_type, str):
        return (node_type,)
    return ()


def _bound(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaError(f"{field_name} must be a non-negative integer.")
    return value


def _type_label(node: SchemaNode) -> str | None:
    return {
        NullNode: "null",
        BoolNode: "boolean",
        IntegerNode: "integer",
        FloatNode: "number",
        StringNode: "string",
        SequenceNode: "array",
        TupleNode: "tuple",
        StructNode: "object",
    }.get(type(node))


def _with_metadata(target: SchemaNode, node: Mapping[str, Any]) -> SchemaNode:
    title = node.get("title")
    description = node.get("description")
    changes: dict[str, Any] = {}
    if isinstance(title, str) and title:
        changes["title"] = title
    if isinstance(description, str) and description:
        changes["description"] = description
    if not changes:
        return target
    return dataclasses.replace(target, **changes)
