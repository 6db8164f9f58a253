from __future__ import annotations

import pytest

from schemaform.processing.humanize import humanize_path_title, humanize_segment


@pytest.mark.parametrize(
    ("segment", "expected"),
    [
        ("communicationType", "Communication Type"),
        ("enable_c360_demographics", "Enable C360 Demographics"),
        ("kebab-case-name", "Kebab Case Name"),
        ("recipient.address", "Recipient Address"),
        ("_id", "Id"),
        ("mappingID", "Mapping Id"),
        ("", ""),
    ],
)
def test_humanize_segment(segment: str, expected: str) -> None:
    assert humanize_segment(segment) == expected


def test_humanize_path_title_with_parent() -> None:
    assert humanize_path_title("recipient", "schema") == "Recipient - Schema"


def test_humanize_path_title_single_part() -> None:
    assert humanize_path_title(None, "userRoles") == "User Roles"
    assert humanize_path_title("recipient", None) == "Recipient"
    assert humanize_path_title(None, None) == ""
