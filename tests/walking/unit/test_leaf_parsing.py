"""Leaf text parsing tests."""

from __future__ import annotations

import pytest
from interactive_parse.schema_management.schema_models import (
    BoolNode,
    FloatNode,
    IntegerNode,
    StringNode,
)
from interactive_parse.schema_management.schema_projection import UnsupportedSchemaError
from interactive_parse.walking.leaf_parsing import InputFormatError, parse_leaf


def test_string_text_is_kept_verbatim() -> None:
    assert parse_leaf(StringNode(), "  spaced  ") == "  spaced  "


def test_integer_text_is_parsed() -> None:
    assert parse_leaf(IntegerNode(), "-12") == -12


@pytest.mark.parametrize("text", ["", "1.0", "twelve"])
def test_invalid_integer_text_raises_input_format_error(text: str) -> None:
    with pytest.raises(InputFormatError):
        parse_leaf(IntegerNode(), text)


def test_float_text_is_parsed() -> None:
    assert parse_leaf(FloatNode(), "2.5e1") == 25.0


@pytest.mark.parametrize("text", ["abc", "nan", "-inf"])
def test_invalid_float_text_raises_input_format_error(text: str) -> None:
    with pytest.raises(InputFormatError):
        parse_leaf(FloatNode(), text)


def test_input_format_error_is_a_value_error() -> None:
    assert issubclass(InputFormatError, ValueError)


def test_booleans_are_not_free_text_leaves() -> None:
    with pytest.raises(UnsupportedSchemaError):
        parse_leaf(BoolNode(), "true")
