from __future__ import annotations

import json

from schemaform.processing.document import parse_document
from schemaform.processing.flattener import flat_value, flatten, serialize_rows
from schemaform.processing.document import to_node


def test_flatten_scalar_rules() -> None:
    values = flatten(parse_document('{"s": "x", "n": 2.50, "i": 7, "t": true, "f": false, "z": null}'))

    assert values == {"s": "x", "n": "2.5", "i": "7", "t": "true", "f": "false", "z": None}


def test_flatten_nested_objects_produce_only_leaf_entries() -> None:
    values = flatten(parse_document('{"recipient": {"schema": "v2", "address": {"line1": "x"}}, "empty": {}}'))

    assert values == {"recipient.schema": "v2", "recipient.address.line1": "x"}


def test_flatten_string_array_keeps_order() -> None:
    assert flatten(parse_document('{"c": ["b", "a"]}')) == {"c": ["b", "a"]}


def test_object_array_round_trips_through_json() -> None:
    rows = [{"parameterName": "a", "description": "b"}]

    values = flatten(parse_document(json.dumps({"params": rows})))

    assert json.loads(values["params"]) == rows
    assert values["params"] == json.dumps(rows, indent=2)


def test_mixed_array_is_serialized() -> None:
    values = flatten(parse_document('{"mixed": [1, "two", null]}'))

    assert values["mixed"] == '[\n  1,\n  "two",\n  null\n]'


def test_forced_checkbox_value_is_always_a_string_list() -> None:
    assert flatten(parse_document('{"userRoles": ["A"]}')) == {"userRoles": ["A"]}
    assert flatten(parse_document('{"userRoles": "A"}')) == {"userRoles": ["A"]}
    assert flatten(parse_document('{"userRoles": {"x": 1}}')) == {"userRoles": []}
    assert flatten(parse_document('{"userRoles": null}')) == {"userRoles": []}


def test_duplicate_ids_keep_first_value() -> None:
    values = flatten(parse_document('{"a": {"b": "nested"}, "a.b": true}'))

    assert values == {"a.b": "nested"}


def test_flat_value_and_serialize_rows() -> None:
    assert flat_value(to_node([])) == []
    assert serialize_rows(to_node([{"k": "é"}])) == '[\n  {\n    "k": "é"\n  }\n]'
