"""Dot-path initial values for a schema document."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from schemaform.processing.classifier import FORCED_CHECKBOX_OPTIONS, join_path
from schemaform.processing.document import (
    ArrayNode,
    BoolNode,
    NullNode,
    NumberNode,
    ObjectNode,
    StringNode,
    format_number,
    to_python,
)

if TYPE_CHECKING:
    from schemaform.processing.document import Node
    from schemaform.typing.models import FieldValue, FlatValueMap


def serialize_rows(node: ArrayNode) -> str:
    """Serialize an array the way object-array values are stored (2-space JSON)."""
    return json.dumps(to_python(node), indent=2, ensure_ascii=False)


def _forced_checkbox_value(node: Node) -> list[str]:
    match node:
        case ArrayNode() if node.all_strings():
            return node.strings()
        case StringNode(value) if value:
            return [value]
        case _:
            return []


def flat_value(node: Node) -> FieldValue:
    """Return the stored value of a non-object node.

    Args:
        node (Node): Leaf or array node.

    Returns:
        FieldValue: String list for string arrays, JSON text for other arrays,
        the string form of scalars, or None for null.
    """
    match node:
        case ArrayNode() if node.all_strings():
            return node.strings()
        case ArrayNode():
            return serialize_rows(node)
        case BoolNode(value):
            return "true" if value else "false"
        case NumberNode(value):
            return format_number(value)
        case StringNode(value):
            return value
        case NullNode():
            return None
        case _:
            return None


def _flatten_into(out: FlatValueMap, node: ObjectNode, parent: str | None) -> None:
    for key, child in node:
        field_id = join_path(parent, key)
        if field_id in FORCED_CHECKBOX_OPTIONS:
            out.setdefault(field_id, _forced_checkbox_value(child))
        elif isinstance(child, ObjectNode):
            _flatten_into(out, child, field_id)
        else:
            out.setdefault(field_id, flat_value(child))


def flatten(document: ObjectNode) -> FlatValueMap:
    """Flatten a document into a dot-path to initial-value map.

    Traverses the document the same way `build_steps` does: nested objects
    contribute their children and never an entry of their own, arrays are
    stored whole, and the first occurrence of a repeated id is kept.

    Args:
        document (ObjectNode): Parsed schema document.

    Returns:
        FlatValueMap: Initial values keyed by field id, in document order.
    """
    out: FlatValueMap = {}
    _flatten_into(out, document, None)
    return out
