"""Schema outline rendering tests."""

from __future__ import annotations

from interactive_parse.schema_management.schema_models import (
    EnumNode,
    EnumVariant,
    IntegerNode,
    OptionalNode,
    SequenceNode,
    StringNode,
    StructField,
    StructNode,
    TupleNode,
)
from interactive_parse.schema_management.schema_outline import describe_schema


def test_outline_lists_every_prompt_source_with_indentation() -> None:
    root = StructNode(
        title="Command",
        fields=(
            StructField(
                "subcommand",
                EnumNode(
                    variants=(
                        EnumVariant("Stop"),
                        EnumVariant(
                            "Clone",
                            StructNode(
                                fields=(StructField("address", SequenceNode(StringNode())),)
                            ),
                        ),
                    )
                ),
            ),
            StructField("retries", OptionalNode(IntegerNode())),
            StructField("pair", TupleNode(items=(IntegerNode(), StringNode()))),
        ),
    )

    assert describe_schema(root).splitlines() == [
        "root: struct <Command>",
        "  subcommand: enum (tagged)",
        "    Stop",
        "    Clone: struct",
        "      address: sequence [0..]",
        "        address[]: string",
        "  retries: optional",
        "    retries: int",
        "  pair: tuple (2)",
        "    pair.0: int",
        "    pair.1: string",
    ]
