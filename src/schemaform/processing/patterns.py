"""Glob-style dot-path matching used by hiding rules."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def _wildcard_regex(pattern: str) -> re.Pattern[str]:
    """Compile a `*` wildcard pattern into an anchored regex.

    Args:
        pattern (str): Pattern where `*` spans any run of characters, dots included.

    Returns:
        re.Pattern[str]: Compiled regex.
    """
    escaped = re.escape(pattern).replace(r"\*", ".*")
    return re.compile(rf"^{escaped}$")


def matches(pattern: str, candidate: str) -> bool:
    """Return whether a hiding pattern covers a dot-path.

    Forms, tried in order: exact id, prefix (`foo` covers `foo.bar`),
    `*` wildcard, and the row shorthand where `a.b` covers `a.<row>.b`.

    Args:
        pattern (str): Hiding pattern.
        candidate (str): Dot-path to test.

    Returns:
        bool: True when the pattern hides the candidate.
    """
    if not pattern:
        return False
    if candidate == pattern or candidate.startswith(f"{pattern}."):
        return True
    if "*" in pattern:
        return _wildcard_regex(pattern).match(candidate) is not None

    segments = pattern.split(".")
    if len(segments) == 2:  # noqa: PLR2004
        parent, child = segments
        return _wildcard_regex(f"{parent}.*.{child}").match(candidate) is not None
    return False


def is_hidden(field_id: str, rules: Iterable[str]) -> bool:
    """Return whether any hiding rule matches the field id."""
    return any(matches(pattern, field_id) for pattern in rules)


def is_row_field_hidden(array_id: str, field_key: str, rules: Iterable[str]) -> bool:
    """Return whether a per-row key of an object-array field is hidden.

    Both the row-scoped path `<array>.X.<key>` and the plain `<array>.<key>`
    are checked so either spelling of a rule suppresses the column.

    Args:
        array_id (str): Object-array descriptor id.
        field_key (str): Key rendered in each row.
        rules (Iterable[str]): Hiding patterns.

    Returns:
        bool: True when the key must not be offered in new rows.
    """
    row_path = f"{array_id}.X.{field_key}"
    plain_path = f"{array_id}.{field_key}"
    return any(matches(pattern, row_path) or matches(pattern, plain_path) for pattern in rules)
