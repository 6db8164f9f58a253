"""Form-state and submission models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from schemaform.typing.models.schema import FieldValue


class FormState(BaseModel):
    """Snapshot of the form store; transitions always build a new snapshot."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    values: dict[str, FieldValue] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    step_index: int = Field(default=0, ge=0)


class SubmissionReceipt(BaseModel):
    """Acknowledgement returned by the submission endpoint."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    status_code: int
    status: str = "ok"
    message: str | None = None
    received_at: datetime | None = Field(default=None, alias="receivedAt")
