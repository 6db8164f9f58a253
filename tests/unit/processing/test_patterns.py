from __future__ import annotations

import pytest

from schemaform.processing.patterns import is_hidden, is_row_field_hidden, matches


@pytest.mark.parametrize(
    ("pattern", "candidate", "expected"),
    [
        ("mappingID", "mappingID", True),
        ("recipient", "recipient.schema", True),
        ("params.mappingSource", "params.0.mappingSource", True),
        ("foo.*", "foo.bar.baz", True),
        ("*.line1", "recipient.address.line1", True),
        ("foo", "foobar", False),
        ("params.mappingSource", "params.mappingSourceX", False),
        ("a.b.c", "a.x.b.c", False),
        ("", "anything", False),
    ],
)
def test_matches(pattern: str, candidate: str, expected: bool) -> None:
    assert matches(pattern, candidate) is expected


def test_wildcard_escapes_regex_metacharacters() -> None:
    assert matches("price(usd)*", "price(usd).total")
    assert not matches("a+b*", "aab")


def test_is_hidden_checks_every_rule() -> None:
    rules = ("_id", "params.mappingSource")

    assert is_hidden("_id", rules)
    assert is_hidden("params.3.mappingSource", rules)
    assert not is_hidden("category", rules)
    assert not is_hidden("category", ())


def test_is_row_field_hidden_accepts_shorthand_and_plain_rules() -> None:
    assert is_row_field_hidden("params", "mappingSource", ("params.mappingSource",))
    assert is_row_field_hidden("params", "extra", ("params.*.extra",))
    assert not is_row_field_hidden("params", "description", ("params.mappingSource",))
