"""Form driver and its state machine."""

from schemaform.form.driver import FormDriver
from schemaform.form.state import (
    ClearError,
    FormAction,
    NextStep,
    PreviousStep,
    Reset,
    SetError,
    SetStep,
    SetValue,
    apply_action,
    replay,
)
from schemaform.form.validation import validate_descriptor, validate_field

__all__ = [
    "ClearError",
    "FormAction",
    "FormDriver",
    "NextStep",
    "PreviousStep",
    "Reset",
    "SetError",
    "SetStep",
    "SetValue",
    "apply_action",
    "replay",
    "validate_descriptor",
    "validate_field",
]
