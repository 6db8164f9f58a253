"""Row editing for object-array fields stored as JSON text."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from schemaform.processing.classifier import LEADING_ROW_FIELDS
from schemaform.processing.patterns import is_row_field_hidden

if TYPE_CHECKING:
    from collections.abc import Iterable

    from schemaform.typing.models import FieldDescriptor, FieldValue

type Row = dict[str, Any]


def load_rows(value: FieldValue) -> list[Row]:
    """Decode stored rows; blank, invalid or non-array JSON reads as no rows."""
    if not isinstance(value, str) or not value.strip():
        return []
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError:
        return []
    if not isinstance(decoded, list):
        return []
    return [row if isinstance(row, dict) else {} for row in decoded]


def export_rows(value: FieldValue) -> Any:
    """Decode stored rows for export, keeping whatever JSON the text holds.

    Blank or unparseable text exports as no rows.
    """
    if not isinstance(value, str) or not value.strip():
        return []
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return []


def dump_rows(rows: list[Row]) -> str:
    """Encode rows back into the stored JSON text."""
    return json.dumps(rows, indent=2, ensure_ascii=False)


def row_fields(step: FieldDescriptor) -> tuple[str, ...]:
    """Return the keys edited per row, leading fields first."""
    fields = step.fields or LEADING_ROW_FIELDS
    return tuple(name for name in LEADING_ROW_FIELDS if name in fields) + tuple(
        name for name in fields if name not in LEADING_ROW_FIELDS
    )


def add_row(step: FieldDescriptor, value: FieldValue, hidden_rules: Iterable[str] = ()) -> str:
    """Append an empty row whose visible keys are blank strings.

    Args:
        step (FieldDescriptor): Object-array descriptor.
        value (FieldValue): Current stored rows.
        hidden_rules (Iterable[str]): Hiding patterns; hidden keys are left out of the new row.

    Returns:
        str: Updated stored rows.
    """
    rules = tuple(hidden_rules)
    rows = load_rows(value)
    rows.append({name: "" for name in row_fields(step) if not is_row_field_hidden(step.id, name, rules)})
    return dump_rows(rows)


def set_cell(value: FieldValue, row: int, key: str, cell: str) -> str:
    """Set one cell, creating the row when the index is one past the end."""
    rows = [dict(item) for item in load_rows(value)]
    while len(rows) <= row:
        rows.append({})
    rows[row][key] = cell
    return dump_rows(rows)


def remove_row(value: FieldValue, row: int) -> str:
    """Drop one row; an out-of-range index leaves the rows unchanged."""
    rows = load_rows(value)
    if 0 <= row < len(rows):
        del rows[row]
    return dump_rows(rows)
