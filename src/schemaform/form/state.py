"""Form store transitions.

Every transition is a pure function from one `FormState` snapshot to the
next; the driver only ever replaces its snapshot, so a recorded action list
replays to the same state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from schemaform.typing.models import FormState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from schemaform.typing.models import FieldValue


@dataclass(frozen=True)
class SetValue:
    field_id: str
    value: FieldValue


@dataclass(frozen=True)
class SetError:
    field_id: str
    message: str


@dataclass(frozen=True)
class ClearError:
    field_id: str


@dataclass(frozen=True)
class SetStep:
    index: int


@dataclass(frozen=True)
class NextStep:
    pass


@dataclass(frozen=True)
class PreviousStep:
    pass


@dataclass(frozen=True)
class Reset:
    pass


type FormAction = SetValue | SetError | ClearError | SetStep | NextStep | PreviousStep | Reset


def apply_action(state: FormState, action: FormAction) -> FormState:
    """Return the snapshot produced by applying one action.

    Args:
        state (FormState): Current snapshot, left untouched.
        action (FormAction): Transition to apply.

    Returns:
        FormState: New snapshot.
    """
    match action:
        case SetValue(field_id, value):
            return state.model_copy(update={"values": {**state.values, field_id: value}})
        case SetError(field_id, message):
            return state.model_copy(update={"errors": {**state.errors, field_id: message}})
        case ClearError(field_id):
            errors = {key: message for key, message in state.errors.items() if key != field_id}
            return state.model_copy(update={"errors": errors})
        case SetStep(index):
            return state.model_copy(update={"step_index": max(0, index)})
        case NextStep():
            return state.model_copy(update={"step_index": state.step_index + 1})
        case PreviousStep():
            return state.model_copy(update={"step_index": max(0, state.step_index - 1)})
        case Reset():
            return FormState()
        case _:
            message = f"Unsupported form action: {action!r}"
            raise TypeError(message)


def replay(actions: Iterable[FormAction], state: FormState | None = None) -> FormState:
    """Apply actions in order, starting from `state` or an empty form."""
    current = state or FormState()
    for action in actions:
        current = apply_action(current, action)
    return current
