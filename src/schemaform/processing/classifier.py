"""Field classification: schema document to ordered field descriptors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemaform import logger
from schemaform.processing.document import ArrayNode, BoolNode, NullNode, NumberNode, ObjectNode, StringNode
from schemaform.processing.hints import parse_hints
from schemaform.processing.humanize import humanize_path_title
from schemaform.typing.enums import FieldKind
from schemaform.typing.models import FieldDescriptor, FieldHints, VisibleIf

if TYPE_CHECKING:
    from collections.abc import Mapping

    from schemaform.processing.document import Node

EDIT_PROMPT = "Edit / add your response"
BOOLEAN_OPTIONS: tuple[str, ...] = ("true", "false")
LEADING_ROW_FIELDS: tuple[str, ...] = ("parameterName", "description", "mappingSource")

FORCED_CHECKBOX_OPTIONS: dict[str, tuple[str, ...]] = {
    "userRoles": (
        "PRIMARY_APPLICANT",
        "SECONDARY_APPLICANT",
        "JOINT_APPLICANT",
        "AUTHORIZED_USER",
    ),
}

_COMMUNICATION_TYPE_GATE = VisibleIf(id="communicationType", equals="CCP")
FORCED_VISIBILITY: dict[str, VisibleIf] = {
    "category": _COMMUNICATION_TYPE_GATE,
    "communicationTarget": _COMMUNICATION_TYPE_GATE,
}


def join_path(parent: str | None, key: str) -> str:
    """Return the dot-path of `key` under `parent`."""
    return f"{parent}.{key}" if parent else key


def order_row_fields(rows: ArrayNode) -> tuple[str, ...]:
    """Collect the keys rendered per row of an object array.

    Args:
        rows (ArrayNode): Array whose items are all objects.

    Returns:
        tuple[str, ...]: Leading row fields present in any row, then the other keys in first-seen order.
    """
    seen: dict[str, None] = {}
    for row in rows.items:
        if isinstance(row, ObjectNode):
            seen.update(dict.fromkeys(row.keys()))
    leading = tuple(name for name in LEADING_ROW_FIELDS if name in seen)
    return leading + tuple(name for name in seen if name not in LEADING_ROW_FIELDS)


def hints_for(comments: Mapping[str, str], parent: str | None, key: str) -> FieldHints:
    """Resolve the hints for one key.

    The comment on the enclosing path wins over a comment keyed by the full
    dot-path, so an annotated parent object passes its hints to every child.

    Args:
        comments (Mapping[str, str]): Comment text by annotated key.
        parent (str | None): Enclosing dot-path.
        key (str): Leaf key.

    Returns:
        FieldHints: Parsed hints, empty when no comment applies.
    """
    comment = comments.get(parent or key) or comments.get(join_path(parent, key)) or ""
    return parse_hints(comment)


def _classify_leaf(node: Node, hints: FieldHints) -> tuple[FieldKind, tuple[str, ...] | None, bool]:
    """Infer kind, options and structural read-only flag for a non-container node."""
    match node:
        case ArrayNode() if node.all_strings():
            options = hints.options if hints.options is not None else tuple(node.strings())
            return hints.component or FieldKind.CHECKBOX, options, False
        case ArrayNode():
            return FieldKind.TEXT, None, True
        case BoolNode():
            options = hints.options if hints.options is not None else BOOLEAN_OPTIONS
            return FieldKind.SELECT, options, False
        case StringNode() | NumberNode() | NullNode():
            return hints.component or FieldKind.TEXT, hints.options, False
        case _:
            return FieldKind.TEXT, None, True


class _StepCollector:
    """Accumulates descriptors while walking the document, keeping ids unique."""

    def __init__(self, comments: Mapping[str, str]) -> None:
        self._comments = comments
        self.steps: list[FieldDescriptor] = []
        self._ids: set[str] = set()

    def add(self, step: FieldDescriptor) -> None:
        if step.id in self._ids:
            logger.warning("Duplicate field id skipped", extra={"field_id": step.id})
            return
        self._ids.add(step.id)
        self.steps.append(step)

    def visit(self, key: str, node: Node, parent: str | None = None) -> None:
        field_id = join_path(parent, key)
        title = humanize_path_title(parent, key)
        hints = hints_for(self._comments, parent, key)

        if field_id in FORCED_CHECKBOX_OPTIONS:
            self.add(self._forced_checkbox(field_id, title, hints))
            return

        match node:
            case ObjectNode():
                for child_key, child in node:
                    self.visit(child_key, child, field_id)
            case ArrayNode() if node.items and node.all_objects():
                self.add(
                    FieldDescriptor(
                        id=field_id,
                        title=title,
                        kind=FieldKind.OBJECT_ARRAY,
                        required=False,
                        read_only=False,
                        visible_if=FORCED_VISIBILITY.get(field_id),
                        fields=order_row_fields(node),
                    ),
                )
            case _:
                self.add(self._leaf(field_id, title, node, hints))

    @staticmethod
    def _leaf(field_id: str, title: str, node: Node, hints: FieldHints) -> FieldDescriptor:
        kind, options, structurally_read_only = _classify_leaf(node, hints)
        read_only = structurally_read_only or hints.read_only is True
        required = hints.required is not False
        return FieldDescriptor(
            id=field_id,
            title=title,
            kind=kind,
            options=options,
            required=required,
            read_only=read_only,
            allow_custom=kind is FieldKind.SELECT and hints.allow_custom is True,
            visible_if=FORCED_VISIBILITY.get(field_id, hints.visible_if),
            help_text=EDIT_PROMPT if required and not read_only else None,
        )

    @staticmethod
    def _forced_checkbox(field_id: str, title: str, hints: FieldHints) -> FieldDescriptor:
        return FieldDescriptor(
            id=field_id,
            title=title,
            kind=FieldKind.CHECKBOX,
            options=FORCED_CHECKBOX_OPTIONS[field_id],
            required=False,
            read_only=hints.read_only is True,
            visible_if=FORCED_VISIBILITY.get(field_id, hints.visible_if),
        )


def build_steps(document: ObjectNode, comments: Mapping[str, str] | None = None) -> list[FieldDescriptor]:
    """Compile a parsed document into ordered field descriptors.

    Nested objects are flattened into dot-path ids; arrays are never entered.

    Args:
        document (ObjectNode): Parsed schema document.
        comments (Mapping[str, str] | None): Inline comments by annotated key.

    Returns:
        list[FieldDescriptor]: Descriptors in document order, ids unique.
    """
    collector = _StepCollector(comments or {})
    for key, node in document:
        collector.visit(key, node)
    return collector.steps
