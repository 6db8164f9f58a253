"""Schema-centric domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from schemaform.typing.enums import FieldKind

type FieldValue = str | list[str] | None
type FlatValueMap = dict[str, FieldValue]


class VisibleIf(BaseModel):
    """Condition gating a field on another field's current value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    equals: str


class FieldHints(BaseModel):
    """Directives parsed from the trailing comment of a schema key.

    Every attribute left as `None` means the comment said nothing about it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    component: FieldKind | None = None
    options: tuple[str, ...] | None = None
    read_only: bool | None = None
    required: bool | None = None
    allow_custom: bool | None = None
    visible_if: VisibleIf | None = None


class FieldDescriptor(BaseModel):
    """One renderable form field compiled from a schema document."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    title: str
    kind: FieldKind
    options: tuple[str, ...] | None = None
    required: bool = True
    read_only: bool = False
    visible: bool = True
    allow_custom: bool = False
    visible_if: VisibleIf | None = None
    fields: tuple[str, ...] | None = None
    help_text: str | None = None

    @property
    def is_editable(self) -> bool:
        """Return whether the field takes part in required-field validation."""
        return self.required and not self.read_only


class ParsedSchema(BaseModel):
    """Compiler output: ordered descriptors and their dot-path initial values."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    steps: tuple[FieldDescriptor, ...]
    initial_values: dict[str, FieldValue] = Field(default_factory=dict)

    def step_ids(self) -> list[str]:
        """Return descriptor ids in form order."""
        return [step.id for step in self.steps]
