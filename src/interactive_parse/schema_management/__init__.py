"""Schema management exports."""

from .schema_models import (
    BoolNode,
    EnumNode,
    EnumVariant,
    FloatNode,
    IntegerNode,
    NullNode,
    OptionalNode,
    SchemaNode,
    SequenceNode,
    StringNode,
    StructField,
    StructNode,
    TupleNode,
)
from .schema_outline import describe_schema
from .schema_projection import (
    SchemaError,
    UnsupportedSchemaError,
    build_schema_tree,
    load_schema_document,
)

__all__ = [
    "BoolNode",
    "EnumNode",
    "EnumVariant",
    "FloatNode",
    "IntegerNode",
    "NullNode",
    "OptionalNode",
    "SchemaNode",
    "SequenceNode",
    "StringNode",
    "StructField",
    "StructNode",
    "TupleNode",
    "SchemaError",
    "UnsupportedSchemaError",
    "build_schema_tree",
    "describe_schema",
    "load_schema_document",
]
