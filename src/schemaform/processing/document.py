"""Tagged representation of a parsed schema document."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, cast

import json5

from schemaform.exceptions import SchemaParseError

if TYPE_CHECKING:
    from collections.abc import Iterator

_EXPONENT_PADDING = re.compile(r"e([+-])0*(\d)")
_PLAIN_NOTATION_MIN = 1e-6
_PLAIN_NOTATION_MAX = 1e21


@dataclass(frozen=True, slots=True)
class NullNode:
    """JSON null."""


@dataclass(frozen=True, slots=True)
class BoolNode:
    """JSON boolean."""

    value: bool


@dataclass(frozen=True, slots=True)
class NumberNode:
    """JSON number."""

    value: int | float


@dataclass(frozen=True, slots=True)
class StringNode:
    """JSON string."""

    value: str


@dataclass(frozen=True, slots=True)
class ArrayNode:
    """JSON array."""

    items: tuple[Node, ...]

    def all_strings(self) -> bool:
        """Return whether every item is a string (vacuously true when empty)."""
        return all(isinstance(item, StringNode) for item in self.items)

    def all_objects(self) -> bool:
        """Return whether every item is an object (vacuously true when empty)."""
        return all(isinstance(item, ObjectNode) for item in self.items)

    def strings(self) -> list[str]:
        """Return item values of a string array."""
        return [item.value for item in self.items if isinstance(item, StringNode)]


@dataclass(frozen=True, slots=True)
class ObjectNode:
    """JSON object with keys kept in source order."""

    entries: tuple[tuple[str, Node], ...]

    def __iter__(self) -> Iterator[tuple[str, Node]]:
        return iter(self.entries)

    def keys(self) -> list[str]:
        """Return keys in source order."""
        return [key for key, _ in self.entries]


type Node = NullNode | BoolNode | NumberNode | StringNode | ArrayNode | ObjectNode


def to_node(value: object) -> Node:
    """Convert a decoded JSON5 value into its tagged node.

    Args:
        value (object): Value produced by the JSON5 decoder.

    Raises:
        TypeError: If the value is not a JSON data type.

    Returns:
        Node: Tagged node.
    """
    match value:
        case None:
            return NullNode()
        case bool():
            return BoolNode(value)
        case int() | float():
            return NumberNode(value)
        case str():
            return StringNode(value)
        case list() | tuple():
            return ArrayNode(tuple(to_node(item) for item in value))
        case dict():
            return ObjectNode(tuple((str(key), to_node(item)) for key, item in value.items()))
        case _:
            message = f"Unsupported JSON value type: {type(value).__name__}"
            raise TypeError(message)


def to_python(node: Node) -> object:
    """Convert a node back into plain JSON-serializable Python values.

    Integral floats become ints and non-finite numbers become None so the
    serialized text matches what a browser `JSON.stringify` would produce.
    """
    match node:
        case NullNode():
            return None
        case BoolNode(value) | StringNode(value):
            return value
        case NumberNode(value):
            if isinstance(value, float):
                if not math.isfinite(value):
                    return None
                if value.is_integer():
                    return int(value)
            return value
        case ArrayNode(items):
            return [to_python(item) for item in items]
        case ObjectNode(entries):
            return {key: to_python(item) for key, item in entries}


def format_number(value: int | float) -> str:
    """Render a number the way a JavaScript `String(number)` call does.

    Args:
        value (int | float): Number to render.

    Returns:
        str: Decimal string representation.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < _PLAIN_NOTATION_MAX:
        return str(int(value))
    if _PLAIN_NOTATION_MIN <= abs(value) < _PLAIN_NOTATION_MAX:
        return format(Decimal(repr(value)), "f")
    return _EXPONENT_PADDING.sub(r"e\1\2", repr(value))


def parse_document(text: str) -> ObjectNode:
    """Parse pre-cleaned JSON/JSON5 text into an object node.

    Args:
        text (str): Pre-cleaned schema text.

    Raises:
        SchemaParseError: If the text is not valid JSON5 or its root is not an object.

    Returns:
        ObjectNode: Root of the document.
    """
    try:
        decoded = json5.loads(text)
        if not isinstance(decoded, dict):
            raise SchemaParseError(detail=f"root must be an object, got {type(decoded).__name__}")
        return cast("ObjectNode", to_node(decoded))
    except RecursionError as exc:
        raise SchemaParseError(detail="document nesting is too deep") from exc
    except ValueError as exc:
        raise SchemaParseError(detail=str(exc)) from exc
