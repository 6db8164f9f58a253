"""Pytest marker auto-assignment by folder and shared schema fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from schemaform import logger

SAMPLE_SCHEMA = """{
  // Communication template mapping
  "_id": "abc123", // ignore
  "mappingID": "M-1",
  "communicationType": "CCP", // dropdown values: CCP, EMAIL, SMS
  "category": "billing",
  "communicationTarget": "customer",
  "userRoles": ["PRIMARY_APPLICANT"],
  "channels": ["EMAIL", "SMS"],
  "isActive": true,
  "priority": 3,
  "notes": null, // optional
  "recipient": {
    "schema": "v2",
    "address": {"line1": "1 Main St"}
  },
  "params": [
    {"description": "First name", "parameterName": "firstName", "extra": 1},
    {"parameterName": "lastName", "mappingSource": "profile.last"}
  ],
  "mixed": [1, "two"],
  "status": "ACTIVE", // dropdown, add your own input option
}
"""


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


@pytest.fixture
def sample_schema_text() -> str:
    """Annotated JSON5 schema exercising every field kind."""
    return SAMPLE_SCHEMA


@pytest.fixture
def sample_schema_path(tmp_path: Path, sample_schema_text: str) -> Path:
    """Sample schema written to a temporary file."""
    path = tmp_path / "schema.json"
    path.write_text(sample_schema_text, encoding="utf-8")
    return path
