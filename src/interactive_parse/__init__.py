"""Interactive terminal prompts driven by JSON Schema shaped type descriptions."""

from .navigation import NavigationSignal, ParseOutcome
from .parse_api import parse_to_generic, parse_to_object
from .schema_management import SchemaError, UnsupportedSchemaError
from .walking import ValueAssemblyError

__all__ = [
    "NavigationSignal",
    "ParseOutcome",
    "SchemaError",
    "UnsupportedSchemaError",
    "ValueAssemblyError",
    "parse_to_generic",
    "parse_to_object",
]
