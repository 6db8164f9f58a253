"""Typing-centric domain modules."""

from schemaform.typing.enums import FieldKind
from schemaform.typing.models import (
    FieldDescriptor,
    FieldHints,
    FieldValue,
    FlatValueMap,
    FormState,
    ParsedSchema,
    SubmissionReceipt,
    VisibleIf,
)

__all__ = [
    "FieldDescriptor",
    "FieldHints",
    "FieldKind",
    "FieldValue",
    "FlatValueMap",
    "FormState",
    "ParsedSchema",
    "SubmissionReceipt",
    "VisibleIf",
]
