"""Inline `//` comment extraction and hint parsing.

Schema authors annotate keys with free-text trailing comments such as
``"status": "ACTIVE", // dropdown values: ACTIVE, INACTIVE``. This module
collects those comments per key and turns each one into a `FieldHints`.

Hint rules are independent regex matches applied in a fixed order. When two
rules set the same attribute the later one wins:

- component: ``dropdown`` (select) wins over ``checkbox``;
- options: ``checkbox values:`` wins over ``dropdown values:``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from schemaform.typing.enums import FieldKind
from schemaform.typing.models import FieldHints, VisibleIf

if TYPE_CHECKING:
    from collections.abc import Callable

_KEY_BEFORE_COMMENT = re.compile(r"""^[\s,]*["']?([A-Za-z0-9_.]+)["']?\s*:""")
_QUOTE_EDGES = re.compile(r"""^["']|["']$""")


@dataclass(frozen=True)
class HintRule:
    """One keyword rule: a regex and the hint attributes it sets when it fires."""

    name: str
    pattern: re.Pattern[str]
    effect: Callable[[re.Match[str]], dict[str, Any]]

    def apply(self, comment: str) -> dict[str, Any]:
        """Return the attribute updates for a comment, empty when the rule does not fire."""
        match = self.pattern.search(comment)
        if match is None:
            return {}
        return self.effect(match)


def parse_options(raw: str) -> tuple[str, ...]:
    """Split an inline option list into clean option strings.

    Args:
        raw (str): Text after `values:`; anything after a further `//` is discarded.

    Returns:
        tuple[str, ...]: Trimmed, unquoted, non-empty options in source order.
    """
    cleaned = raw.split("//", 1)[0]
    options = (_QUOTE_EDGES.sub("", part.strip()) for part in cleaned.split(","))
    return tuple(option for option in options if option)


HINT_RULES: tuple[HintRule, ...] = (
    HintRule(
        "checkbox",
        re.compile(r"checkbox", re.IGNORECASE),
        lambda match: {"component": FieldKind.from_str(match.group(0))},
    ),
    HintRule(
        "dropdown",
        re.compile(r"dropdown", re.IGNORECASE),
        lambda match: {"component": FieldKind.from_str(match.group(0))},
    ),
    HintRule(
        "dropdown_values",
        re.compile(r"dropdown\s*values\s*:\s*([^\n]+)", re.IGNORECASE),
        lambda match: {"options": parse_options(match.group(1))},
    ),
    HintRule(
        "checkbox_values",
        re.compile(r"checkbox\s*values\s*:\s*([^\n]+)", re.IGNORECASE),
        lambda match: {"options": parse_options(match.group(1))},
    ),
    HintRule(
        "not_for_user",
        re.compile(r"not\s*for\s*user|not\s*visible\s*to\s*the\s*user|ignore", re.IGNORECASE),
        lambda _: {"read_only": True},
    ),
    HintRule(
        "optional",
        re.compile(r"optional|not used", re.IGNORECASE),
        lambda _: {"required": False},
    ),
    HintRule(
        "add_your_own",
        re.compile(r"add\s*yo?ur\s*own\s*input\s*option", re.IGNORECASE),
        lambda _: {"allow_custom": True},
    ),
    HintRule(
        "visible_if",
        re.compile(r"only\s*visible\s*if\s*([\w.\-]+)\s*=\s*([A-Za-z0-9_\-]+)", re.IGNORECASE),
        lambda match: {"visible_if": VisibleIf(id=match.group(1), equals=match.group(2))},
    ),
)


def parse_hints(comment: str, rules: tuple[HintRule, ...] = HINT_RULES) -> FieldHints:
    """Parse one comment into structured hints.

    Args:
        comment (str): Comment text without the leading `//`.
        rules (tuple[HintRule, ...]): Rules applied in order.

    Returns:
        FieldHints: Parsed hints; empty for unrecognized text.
    """
    updates: dict[str, Any] = {}
    for rule in rules:
        updates.update(rule.apply(comment))
    return FieldHints(**updates)


def _comment_start(line: str) -> int:
    """Return the index of the first `//` outside a string literal, or -1."""
    quote: str | None = None
    escaped = False
    for index, char in enumerate(line):
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in {'"', "'"}:
            quote = char
        elif line.startswith("//", index):
            return index
    return -1


def extract_comments(text: str) -> dict[str, str]:
    """Map each annotated key to its trailing comment text.

    A line contributes when a `key:` token precedes its `//` comment. Comments
    for a key repeated on several lines are joined with a space.

    Args:
        text (str): Schema text, usually already pre-cleaned.

    Returns:
        dict[str, str]: Comment text by key, in first-seen order.
    """
    comments: dict[str, str] = {}
    for line in text.splitlines():
        start = _comment_start(line)
        if start == -1:
            continue
        key_match = _KEY_BEFORE_COMMENT.match(line[:start])
        if key_match is None:
            continue
        key = key_match.group(1)
        comment = line[start + 2 :].strip()
        comments[key] = f"{comments[key]} {comment}" if comments.get(key) else comment
    return comments
