from __future__ import annotations

from schemaform.processing.classifier import (
    EDIT_PROMPT,
    FORCED_CHECKBOX_OPTIONS,
    build_steps,
    hints_for,
    order_row_fields,
)
from schemaform.processing.document import parse_document
from schemaform.typing.enums import FieldKind
from schemaform.typing.models import FieldHints, VisibleIf


def _steps_by_id(text: str, comments: dict[str, str] | None = None) -> dict:
    return {step.id: step for step in build_steps(parse_document(text), comments)}


def test_string_array_becomes_checkbox_with_its_values_as_options() -> None:
    step = _steps_by_id('{"channels": ["EMAIL", "SMS"]}')["channels"]

    assert step.kind is FieldKind.CHECKBOX
    assert step.options == ("EMAIL", "SMS")
    assert step.required is True
    assert step.help_text == EDIT_PROMPT


def test_string_array_hint_overrides_component_and_options() -> None:
    steps = _steps_by_id(
        '{"channels": ["EMAIL"]}',
        {"channels": "dropdown values: EMAIL, SMS, PUSH"},
    )

    assert steps["channels"].kind is FieldKind.SELECT
    assert steps["channels"].options == ("EMAIL", "SMS", "PUSH")


def test_object_array_is_one_descriptor_with_ordered_fields() -> None:
    steps = _steps_by_id(
        '{"params": [{"extra": 1, "description": "d"}, {"mappingSource": "m", "parameterName": "p"}]}',
        {"params": "not for user"},
    )

    step = steps["params"]
    assert list(steps) == ["params"]
    assert step.kind is FieldKind.OBJECT_ARRAY
    assert step.fields == ("parameterName", "description", "mappingSource", "extra")
    assert step.required is False
    assert step.read_only is False
    assert step.help_text is None


def test_mixed_array_is_read_only_text() -> None:
    step = _steps_by_id('{"mixed": [1, "two", {"a": 1}]}')["mixed"]

    assert step.kind is FieldKind.TEXT
    assert step.read_only is True
    assert step.help_text is None


def test_nested_objects_are_flattened_into_dot_paths() -> None:
    steps = _steps_by_id('{"recipient": {"schema": "v2", "address": {"line1": "x"}}, "empty": {}}')

    assert list(steps) == ["recipient.schema", "recipient.address.line1"]
    assert steps["recipient.schema"].title == "Recipient - Schema"
    assert steps["recipient.address.line1"].title == "Recipient Address - Line1"


def test_boolean_becomes_select_with_true_false() -> None:
    step = _steps_by_id('{"isActive": false}')["isActive"]

    assert step.kind is FieldKind.SELECT
    assert step.options == ("true", "false")


def test_scalar_hints_apply() -> None:
    steps = _steps_by_id(
        '{"status": "A", "notes": null, "count": 4}',
        {"status": "dropdown values: A, B add your own input option", "notes": "optional", "count": "ignore"},
    )

    assert steps["status"].kind is FieldKind.SELECT
    assert steps["status"].options == ("A", "B add your own input option")
    assert steps["status"].allow_custom is True
    assert steps["notes"].required is False
    assert steps["notes"].help_text is None
    assert steps["count"].kind is FieldKind.TEXT
    assert steps["count"].read_only is True


def test_allow_custom_is_select_only() -> None:
    step = _steps_by_id('{"name": "x"}', {"name": "add your own input option"})["name"]

    assert step.kind is FieldKind.TEXT
    assert step.allow_custom is False


def test_user_roles_forced_to_checkbox_regardless_of_shape() -> None:
    for value in ('"PRIMARY_APPLICANT"', "[]", '{"a": 1}', '[{"a": 1}]', "true"):
        step = _steps_by_id(f'{{"userRoles": {value}}}', {"userRoles": "dropdown values: X"})["userRoles"]

        assert step.kind is FieldKind.CHECKBOX
        assert step.options == FORCED_CHECKBOX_OPTIONS["userRoles"]
        assert step.required is False


def test_category_and_communication_target_are_gated_on_communication_type() -> None:
    steps = _steps_by_id(
        '{"communicationType": "CCP", "category": "c", "communicationTarget": "t"}',
        {"category": "only visible if other = X"},
    )

    gate = VisibleIf(id="communicationType", equals="CCP")
    assert steps["category"].visible_if == gate
    assert steps["communicationTarget"].visible_if == gate
    assert steps["communicationType"].visible_if is None


def test_hint_visible_if_is_applied() -> None:
    step = _steps_by_id('{"extra": "x"}', {"extra": "only visible if mode = ADVANCED"})["extra"]

    assert step.visible_if == VisibleIf(id="mode", equals="ADVANCED")


def test_parent_comment_applies_to_children() -> None:
    comments = {"recipient": "optional", "other.name": "not for user"}

    assert hints_for(comments, "recipient", "schema") == FieldHints(required=False)
    assert hints_for(comments, "other", "name") == FieldHints(read_only=True)
    assert hints_for(comments, None, "missing") == FieldHints()


def test_duplicate_ids_keep_first_descriptor() -> None:
    steps = build_steps(parse_document('{"a": {"b": "nested"}, "a.b": true}'))

    assert [step.id for step in steps] == ["a.b"]
    assert steps[0].kind is FieldKind.TEXT


def test_order_row_fields_only_lists_present_leading_fields() -> None:
    document = parse_document('{"rows": [{"z": 1, "description": "d"}, {"y": 2}]}')
    _, rows = document.entries[0]

    assert order_row_fields(rows) == ("description", "z", "y")


def test_descriptor_defaults() -> None:
    step = _steps_by_id('{"name": "x"}')["name"]

    assert step.visible is True
    assert step.read_only is False
    assert step.allow_custom is False
    assert step.options is None
    assert step.fields is None
