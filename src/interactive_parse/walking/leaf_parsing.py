"""Conversion of free-text answers into leaf values."""

from __future__ import annotations

import math
from typing import Any

from interactive_parse.schema_management.schema_models import (
    FloatNode,
    IntegerNode,
    SchemaNode,
    StringNode,
)
from interactive_parse.schema_management.schema_projection import UnsupportedSchemaError


class InputFormatError(ValueError):
    """Raised when typed text does not parse as the leaf's declared type."""


def parse_leaf(node: SchemaNode, text: str) -> Any:
    """Parse one free-text answer against a string, integer or float leaf."""
    if isinstance(node, StringNode):
        return text
    if isinstance(node, IntegerNode):
        try:
            return int(text.strip())
        except ValueError as exc:
            raise InputFormatError(f"'{text}' is not a valid integer.") from exc
    if isinstance(node, FloatNode):
        try:
            value = float(text.strip())
        except ValueError as exc:
            raise InputFormatError(f"'{text}' is not a valid number.") from exc
        if not math.isfinite(value):
            raise InputFormatError(f"'{text}' is not a finite number.")
        return value
    raise UnsupportedSchemaError(f"Free-text answers cannot produce {type(node).__name__}.")
