from __future__ import annotations

import pytest

from schemaform.exceptions import (
    AsyncExecutionError,
    DependencyError,
    FormValidationError,
    PackageError,
    SchemaLoadError,
    SchemaParseError,
    SettingsError,
    SubmissionError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        SettingsError,
        AsyncExecutionError,
        DependencyError,
        SchemaLoadError,
        SchemaParseError,
        FormValidationError,
        SubmissionError,
    ],
)
def test_root_exception_hierarchy(error_type: type[Exception]) -> None:
    assert issubclass(error_type, PackageError)


def test_error_messages() -> None:
    assert str(SchemaParseError(detail="bad token")) == "Failed to parse schema: bad token"
    assert str(SchemaLoadError(source="s.json", detail="missing")) == "Failed to load schema from 's.json': missing"
    assert str(SubmissionError(message="Failed to submit form")) == "Failed to submit form"
    assert str(SubmissionError(message="Failed to submit form", status_code=502)) == "Failed to submit form (HTTP 502)"
    assert str(DependencyError(missing_package=["json5"], message="compile")) == (
        "Missing runtime dependencies for 'compile': json5"
    )
    assert str(SettingsError()) == "Failed to load settings"


def test_form_validation_error_lists_fields() -> None:
    error = FormValidationError(errors={"a": "This field is required", "b": "Please select an option"})

    assert str(error) == "Missing required fields (a: This field is required, b: Please select an option)"
