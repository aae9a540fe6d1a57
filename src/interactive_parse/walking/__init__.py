"""Schema walking domain exports."""

from .leaf_parsing import InputFormatError, parse_leaf
from .schema_walker import SchemaWalker
from .value_assembly import (
    PartialSequence,
    PartialStruct,
    PartialTuple,
    PartialValue,
    PartialVariant,
    ValueAssemblyError,
    accumulate,
    child_count,
    finish,
    retract,
)

__all__ = [
    "InputFormatError",
    "PartialSequence",
    "PartialStruct",
    "PartialTuple",
    "PartialValue",
    "PartialVariant",
    "SchemaWalker",
    "ValueAssemblyError",
    "accumulate",
    "child_count",
    "finish",
    "parse_leaf",
    "retract",
]
