"""Schema node entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NullNode:
    """Schema node whose only value is null."""

    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class BoolNode:
    """Boolean leaf."""

    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class IntegerNode:
    """Integer leaf."""

    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class FloatNode:
    """Floating point leaf."""

    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class StringNode:
    """Free-text leaf."""

    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class OptionalNode:
    """Value that may be left out (null)."""

    inner: SchemaNode
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SequenceNode:
    """Homogeneous ordered collection with optional length bounds."""

    item: SchemaNode
    min_items: int = 0
    max_items: int | None = None
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class TupleNode:
    """Fixed-length positional collection."""

    items: tuple[SchemaNode, ...]
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class EnumVariant:
    """One selectable variant of an enum.

    A variant without payload is a unit variant and resolves to ``literal``
    (its name when no literal is given).
    """

    name: str
    payload: SchemaNode | None = None
    literal: Any = None

    @property
    def is_unit(self) -> bool:
        """Return True when selecting the variant needs no further input."""
        return self.payload is None

    @property
    def unit_value(self) -> Any:
        """Return the value a unit variant resolves to."""
        return self.name if self.literal is None else self.literal


@dataclass(frozen=True)
class EnumNode:
    """Choice between named variants.

    Tagged variants assemble as ``{name: payload}``; untagged variants
    assemble as the bare payload.
    """

    variants: tuple[EnumVariant, ...]
    tagged: bool = True
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class StructField:
    """Named field of a struct."""

    name: str
    schema: SchemaNode
    doc_hint: str | None = None


@dataclass(frozen=True)
class StructNode:
    """Record with fields in declared order."""

    fields: tuple[StructField, ...] = ()
    title: str | None = None
    description: str | None = None


LeafNode = NullNode | BoolNode | IntegerNode | FloatNode | StringNode

SchemaNode = (
    NullNode
    | BoolNode
    | IntegerNode
    | FloatNode
    | StringNode
    | OptionalNode
    | SequenceNode
    | TupleNode
    | EnumNode
    | StructNode
)
