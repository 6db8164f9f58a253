"""Per-field required-value rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemaform.typing.enums import FieldKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from schemaform.typing.models import FieldDescriptor, FieldValue

TEXT_REQUIRED = "This field is required"
SELECT_REQUIRED = "Please select an option"
CHECKBOX_REQUIRED = "Please select at least one option"
SELECT_INVALID = "Please select a valid option"

CUSTOM_SUFFIX = "__custom"


def custom_key(field_id: str) -> str:
    """Return the value-map key holding a select field's free-text override."""
    return f"{field_id}{CUSTOM_SUFFIX}"


def custom_value(values: Mapping[str, FieldValue], field_id: str) -> str | None:
    """Return the non-blank free-text override for a field, if any."""
    value = values.get(custom_key(field_id))
    if isinstance(value, str) and value.strip():
        return value
    return None


def validate_field(value: FieldValue, kind: FieldKind | str, required: bool) -> str | None:  # noqa: FBT001
    """Apply the required-value rule of a field kind.

    Args:
        value (FieldValue): Current value.
        kind (FieldKind | str): Field kind.
        required (bool): Whether the field is required; optional fields always pass.

    Returns:
        str | None: Error message, or None when the value is acceptable.
    """
    if not required:
        return None

    match FieldKind(kind):
        case FieldKind.TEXT:
            if not value or (isinstance(value, str) and not value.strip()):
                return TEXT_REQUIRED
        case FieldKind.SELECT:
            if not value:
                return SELECT_REQUIRED
        case FieldKind.CHECKBOX:
            if not value:
                return CHECKBOX_REQUIRED
        case FieldKind.OBJECT_ARRAY:
            return None
    return None


def validate_descriptor(step: FieldDescriptor, values: Mapping[str, FieldValue]) -> str | None:
    """Validate one descriptor against the current values.

    Select fields must also hold one of their options; a non-blank custom
    override on an `allow_custom` select skips both checks.

    Args:
        step (FieldDescriptor): Field to validate.
        values (Mapping[str, FieldValue]): Current value map.

    Returns:
        str | None: Error message, or None when the field passes.
    """
    if step.kind is FieldKind.SELECT and step.allow_custom and custom_value(values, step.id):
        return None

    value = values.get(step.id)
    error = validate_field(value, step.kind, step.required)
    if error is None and step.kind is FieldKind.SELECT and step.options is not None and value:
        if value not in step.options:
            return SELECT_INVALID
    return error
