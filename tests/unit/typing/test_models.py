from __future__ import annotations

import pytest
from pydantic import ValidationError

from schemaform.typing.enums import FieldKind
from schemaform.typing.models import (
    FieldDescriptor,
    FieldHints,
    FormState,
    ParsedSchema,
    SubmissionReceipt,
    VisibleIf,
)


def test_field_descriptor_dumps_camel_case() -> None:
    descriptor = FieldDescriptor(
        id="status",
        title="Status",
        kind=FieldKind.SELECT,
        options=("A",),
        allow_custom=True,
        visible_if=VisibleIf(id="communicationType", equals="CCP"),
        help_text="Edit / add your response",
    )

    dumped = descriptor.model_dump(mode="json", by_alias=True, exclude_none=True)

    assert dumped["kind"] == "select"
    assert dumped["allowCustom"] is True
    assert dumped["readOnly"] is False
    assert dumped["visibleIf"] == {"id": "communicationType", "equals": "CCP"}
    assert dumped["helpText"] == "Edit / add your response"
    assert "fields" not in dumped


def test_field_descriptor_accepts_aliases() -> None:
    descriptor = FieldDescriptor.model_validate({"id": "a", "title": "A", "kind": "text", "readOnly": True})

    assert descriptor.read_only is True
    assert descriptor.is_editable is False


def test_field_descriptor_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        FieldDescriptor.model_validate({"id": "a", "title": "A", "kind": "text", "colour": "red"})


def test_field_hints_default_to_unset() -> None:
    hints = FieldHints()

    assert hints.model_dump(exclude_none=True) == {}


def test_parsed_schema_step_ids() -> None:
    parsed = ParsedSchema(
        steps=(
            FieldDescriptor(id="a", title="A", kind=FieldKind.TEXT),
            FieldDescriptor(id="b.c", title="B - C", kind=FieldKind.TEXT),
        ),
    )

    assert parsed.step_ids() == ["a", "b.c"]
    assert parsed.initial_values == {}


def test_form_state_rejects_negative_step() -> None:
    with pytest.raises(ValidationError):
        FormState(step_index=-1)


def test_submission_receipt_ignores_unknown_fields() -> None:
    receipt = SubmissionReceipt.model_validate(
        {"status_code": 201, "status": "queued", "receivedAt": "2024-05-01T10:00:00Z", "id": 9},
    )

    assert receipt.status == "queued"
    assert receipt.received_at is not None
    assert receipt.received_at.year == 2024
