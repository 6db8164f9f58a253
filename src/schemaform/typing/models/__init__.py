"""Core domain model exports."""

from schemaform.typing.models.form import FormState, SubmissionReceipt
from schemaform.typing.models.schema import (
    FieldDescriptor,
    FieldHints,
    FieldValue,
    FlatValueMap,
    ParsedSchema,
    VisibleIf,
)

__all__ = [
    "FieldDescriptor",
    "FieldHints",
    "FieldValue",
    "FlatValueMap",
    "FormState",
    "ParsedSchema",
    "SubmissionReceipt",
    "VisibleIf",
]
