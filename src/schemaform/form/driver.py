"""Form driver: visibility gating, navigation, validation and export."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from schemaform import logger
from schemaform.exceptions import FormValidationError
from schemaform.form import rows
from schemaform.form.state import (
    ClearError,
    NextStep,
    PreviousStep,
    Reset,
    SetError,
    SetStep,
    SetValue,
    apply_action,
)
from schemaform.form.validation import CUSTOM_SUFFIX, custom_key, custom_value, validate_descriptor
from schemaform.processing.document import to_node
from schemaform.processing.flattener import flat_value
from schemaform.processing.patterns import is_hidden
from schemaform.typing.enums import FieldKind
from schemaform.typing.models import FormState

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from schemaform.form.state import FormAction
    from schemaform.typing.models import FieldDescriptor, FieldValue, ParsedSchema


class FormDriver:
    """Drive one compiled form over a replace-on-write state snapshot.

    Two filters apply to the descriptors. Flow visibility (`visible` and
    `visible_if`) decides which fields take part in the form at all.
    UI hiding (the injected hiding rules) only keeps a field off screen: a
    hidden field stays in the flow and in the export.
    """

    def __init__(
        self,
        steps: Iterable[FieldDescriptor],
        initial_values: Mapping[str, FieldValue] | None = None,
        *,
        hidden_rules: Iterable[str] = (),
    ) -> None:
        """Initialize the driver and seed the initial values.

        Args:
            steps (Iterable[FieldDescriptor]): Compiled descriptors, in form order.
            initial_values (Mapping[str, FieldValue] | None): Flattened initial values.
            hidden_rules (Iterable[str]): Hiding patterns applied to descriptor ids.
        """
        self.steps: tuple[FieldDescriptor, ...] = tuple(steps)
        self.initial_values: dict[str, FieldValue] = dict(initial_values or {})
        self.hidden_rules: tuple[str, ...] = tuple(hidden_rules)
        self._steps_by_id = {step.id: step for step in self.steps}
        self.state = FormState()
        self._seed()

    @classmethod
    def from_schema(cls, parsed: ParsedSchema, *, hidden_rules: Iterable[str] = ()) -> FormDriver:
        """Build a driver from compiler output."""
        return cls(parsed.steps, parsed.initial_values, hidden_rules=hidden_rules)

    def dispatch(self, action: FormAction) -> FormState:
        """Apply one transition and return the new snapshot."""
        self.state = apply_action(self.state, action)
        return self.state

    def _seed(self) -> None:
        for field_id, value in self.initial_values.items():
            self.dispatch(SetValue(field_id, value))

    @property
    def values(self) -> dict[str, FieldValue]:
        """Return the current value map."""
        return self.state.values

    @property
    def errors(self) -> dict[str, str]:
        """Return the current per-field errors."""
        return self.state.errors

    def step(self, field_id: str) -> FieldDescriptor:
        """Return the descriptor with the given id.

        Raises:
            KeyError: If no descriptor has this id.
        """
        return self._steps_by_id[field_id]

    def is_flow_visible(self, step: FieldDescriptor) -> bool:
        """Return whether a descriptor currently takes part in the flow."""
        if not step.visible:
            return False
        if step.visible_if is None:
            return True
        return self.values.get(step.visible_if.id) == step.visible_if.equals

    def is_hidden_in_ui(self, field_id: str) -> bool:
        """Return whether the hiding rules keep a field off screen."""
        return is_hidden(field_id, self.hidden_rules)

    @property
    def flow_steps(self) -> list[FieldDescriptor]:
        """Return flow-visible descriptors in form order."""
        return [step for step in self.steps if self.is_flow_visible(step)]

    @property
    def rendered_steps(self) -> list[FieldDescriptor]:
        """Return flow-visible descriptors that are not hidden in the UI."""
        return [step for step in self.flow_steps if not self.is_hidden_in_ui(step.id)]

    @property
    def review_steps(self) -> list[FieldDescriptor]:
        """Return the descriptors listed for review: editable required fields and object arrays."""
        return [
            step
            for step in self.rendered_steps
            if step.is_editable or step.kind is FieldKind.OBJECT_ARRAY
        ]

    def _displayable_index(self, flow: list[FieldDescriptor], *, backward: bool = False) -> int | None:
        """Clamp the step pointer to the flow and move it off UI-hidden steps.

        Searches forward first, then backward; `backward` reverses the order so
        stepping back over a hidden step reaches the one before it. None when
        nothing is displayable.
        """
        if not flow:
            return None
        index = min(self.state.step_index, len(flow) - 1)
        after = range(index + 1, len(flow))
        before = range(index - 1, -1, -1)
        candidates = [index, *before, *after] if backward else [index, *after, *before]
        return next((candidate for candidate in candidates if not self.is_hidden_in_ui(flow[candidate].id)), None)

    @property
    def current_step(self) -> FieldDescriptor | None:
        """Return the descriptor displayed for the current pointer, without moving it."""
        flow = self.flow_steps
        index = self._displayable_index(flow)
        return None if index is None else flow[index]

    def sync_step(self, *, backward: bool = False) -> FieldDescriptor | None:
        """Move the pointer onto the displayed descriptor and return it.

        Args:
            backward (bool): Prefer earlier steps when the pointer sits on a hidden one.

        Returns:
            FieldDescriptor | None: Displayed descriptor, or None when every flow step is hidden.
        """
        flow = self.flow_steps
        index = self._displayable_index(flow, backward=backward)
        if index is None:
            return None
        if index != self.state.step_index:
            self.dispatch(SetStep(index))
        return flow[index]

    def next_step(self) -> FieldDescriptor | None:
        """Advance the pointer and return the displayed descriptor."""
        self.sync_step()
        self.dispatch(NextStep())
        return self.sync_step()

    def previous_step(self) -> FieldDescriptor | None:
        """Move the pointer back, clamped at the first step, and return the displayed descriptor."""
        self.sync_step()
        self.dispatch(PreviousStep())
        return self.sync_step(backward=True)

    def go_to(self, index: int) -> FieldDescriptor | None:
        """Point at a flow index and return the displayed descriptor."""
        self.dispatch(SetStep(index))
        return self.sync_step()

    def set_value(self, field_id: str, value: FieldValue) -> None:
        """Store an edited value and clear the field's error."""
        self.dispatch(SetValue(field_id, value))
        self.dispatch(ClearError(field_id))

    def set_custom_value(self, field_id: str, value: str | None) -> None:
        """Store the free-text override of a select field."""
        self.dispatch(SetValue(custom_key(field_id), value))
        self.dispatch(ClearError(field_id))

    def apply_edits(self, edits: Mapping[str, Any]) -> None:
        """Apply a batch of edited values keyed by field id.

        Keys ending in `__custom` set select overrides. Plain JSON values are
        stored the way the flattener stores them, so booleans become `"true"`/`"false"`
        and a list of rows becomes object-array JSON text.

        Args:
            edits (Mapping[str, Any]): Edited values.

        Raises:
            ValueError: If a value is a JSON object, or an object-array edit is not a list of objects.
        """
        for key, value in edits.items():
            field_id = key.removesuffix(CUSTOM_SUFFIX)
            if field_id not in self._steps_by_id:
                logger.warning("Edit for unknown field id", extra={"field_id": field_id})
            if key.endswith(CUSTOM_SUFFIX):
                self.set_custom_value(field_id, value)
                continue
            self.set_value(key, self._edited_value(key, value))

    def _edited_value(self, field_id: str, value: Any) -> FieldValue:
        if isinstance(value, dict):
            message = f"Edit for '{field_id}' is an object; edit its nested fields by dot-path"
            raise ValueError(message)
        step = self._steps_by_id.get(field_id)
        is_rows = isinstance(value, list) and all(isinstance(row, dict) for row in value)
        if step is not None and step.kind is FieldKind.OBJECT_ARRAY and not is_rows:
            message = f"Edit for '{field_id}' must be a list of row objects"
            raise ValueError(message)
        return flat_value(to_node(value))

    def add_row(self, field_id: str) -> str:
        """Append a blank row to an object-array field and return the stored rows.

        Raises:
            ValueError: If the field is not an object array.
        """
        step = self.step(field_id)
        if step.kind is not FieldKind.OBJECT_ARRAY:
            message = f"Field '{field_id}' is not an object array"
            raise ValueError(message)
        updated = rows.add_row(step, self.values.get(field_id), self.hidden_rules)
        self.set_value(field_id, updated)
        return updated

    def set_cell(self, field_id: str, row: int, key: str, cell: str) -> str:
        """Edit one cell of an object-array field and return the stored rows."""
        updated = rows.set_cell(self.values.get(field_id), row, key, cell)
        self.set_value(field_id, updated)
        return updated

    def remove_row(self, field_id: str, row: int) -> str:
        """Remove one row of an object-array field and return the stored rows."""
        updated = rows.remove_row(self.values.get(field_id), row)
        self.set_value(field_id, updated)
        return updated

    def reset(self) -> None:
        """Discard edits and errors, rewind to the first step and re-seed initial values."""
        self.dispatch(Reset())
        self._seed()

    def blocking_steps(self) -> list[FieldDescriptor]:
        """Return descriptors that can block export.

        UI-hidden fields are exempt even when required, so hidden data is exported as-is.
        """
        return [step for step in self.flow_steps if step.is_editable and not self.is_hidden_in_ui(step.id)]

    def validate(self) -> dict[str, str]:
        """Validate every blocking field, recording or clearing its error.

        Returns:
            dict[str, str]: Error message by field id; empty when the form is complete.
        """
        errors: dict[str, str] = {}
        for step in self.blocking_steps():
            error = validate_descriptor(step, self.values)
            if error is None:
                self.dispatch(ClearError(step.id))
                continue
            errors[step.id] = error
            self.dispatch(SetError(step.id, error))
        if errors:
            logger.info("Form validation failed", extra={"error_count": len(errors), "field_ids": list(errors)})
        return errors

    def export_value(self, step: FieldDescriptor) -> Any:
        """Return the exported value of one descriptor."""
        if step.kind is FieldKind.OBJECT_ARRAY:
            return rows.export_rows(self.values.get(step.id))
        override = custom_value(self.values, step.id)
        if override is not None:
            return override
        return self.values.get(step.id)

    def build_payload(self) -> dict[str, Any]:
        """Assemble the flat export payload over every descriptor, flow-visible or not."""
        return {step.id: self.export_value(step) for step in self.steps}

    def export(self) -> dict[str, Any]:
        """Validate and return the export payload.

        Raises:
            FormValidationError: If a blocking field fails validation; errors are recorded first.

        Returns:
            dict[str, Any]: Flat payload keyed by descriptor id.
        """
        errors = self.validate()
        if errors:
            raise FormValidationError(errors=errors)
        payload = self.build_payload()
        logger.info("Form exported", extra={"field_count": len(payload)})
        return payload

    def export_json(self) -> str:
        """Return the export payload as indented JSON text."""
        return json.dumps(self.export(), indent=2, ensure_ascii=False)
