"""Partial values assembled bottom-up while walking a schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ValueAssemblyError(Exception):
    """Raised when answers cannot be folded into the requested value."""


@dataclass
class PartialStruct:
    """Named field values collected so far, in declared order."""

    values: dict[str, Any] = field(default_factory=dict)


@dataclass
class PartialSequence:
    """Sequence items collected so far."""

    items: list[Any] = field(default_factory=list)


@dataclass
class PartialTuple:
    """Positional tuple items collected so far."""

    items: list[Any] = field(default_factory=list)


@dataclass
class PartialVariant:
    """Selected enum variant and, once answered, its payload value."""

    name: str
    tagged: bool
    value: Any = None
    filled: bool = False


PartialValue = PartialStruct | PartialSequence | PartialTuple | PartialVariant


def accumulate(partial: PartialValue, child: Any, *, key: str | None = None) -> None:
    """Fold one child answer into its parent container."""
    if isinstance(partial, PartialStruct):
        if key is None:
            raise ValueAssemblyError("Struct fields must be accumulated by name.")
        if key in partial.values:
            raise ValueAssemblyError(f"Struct field '{key}' was already collected.")
        partial.values[key] = child
    elif isinstance(partial, (PartialSequence, PartialTuple)):
        partial.items.append(child)
    elif isinstance(partial, PartialVariant):
        if partial.filled:
            raise ValueAssemblyError(f"Variant '{partial.name}' already holds a value.")
        partial.value = child
        partial.filled = True
    else:
        raise ValueAssemblyError(f"Unknown partial value: {partial!r}")


def retract(partial: PartialValue) -> None:
    """Remove the most recently accumulated child."""
    if child_count(partial) == 0:
        raise ValueAssemblyError("Nothing has been collected yet.")
    if isinstance(partial, PartialStruct):
        partial.values.popitem()
    elif isinstance(partial, (PartialSequence, PartialTuple)):
        partial.items.pop()
    else:
        partial.value = None
        partial.filled = False


def child_count(partial: PartialValue) -> int:
    """Return how many children have been folded in."""
    if isinstance(partial, PartialStruct):
        return len(partial.values)
    if isinstance(partial, (PartialSequence, PartialTuple)):
        return len(partial.items)
    return 1 if partial.filled else 0


def finish(partial: PartialValue) -> Any:
    """Turn a partial value into its final generic form."""
    if isinstance(partial, PartialStruct):
        return dict(partial.values)
    if isinstance(partial, (PartialSequence, PartialTuple)):
        return list(partial.items)
    if not partial.filled:
        raise ValueAssemblyError(f"Variant '{partial.name}' has no value yet.")
    if partial.tagged:
        return {partial.name: partial.value}
    return partial.value
