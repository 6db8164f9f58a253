"""Readable field titles from dot-path segments."""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[_\-.]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def humanize_segment(segment: str) -> str:
    """Turn a camelCase, snake_case, kebab-case or dotted name into Title Case words.

    Args:
        segment (str): Raw key or dot-path.

    Returns:
        str: Space-separated capitalized words.

    Example:
        >>> humanize_segment("enable_c360_demographics")
        'Enable C360 Demographics'
    """
    words: list[str] = []
    for token in _SEPARATORS.sub(" ", segment).split():
        words.extend(_CAMEL_BOUNDARY.sub(r"\1 \2", token).split())
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def humanize_path_title(parent_key: str | None, key: str | None) -> str:
    """Build a field title from its parent path and leaf key.

    Args:
        parent_key (str | None): Dot-path of the enclosing object, if any.
        key (str | None): Leaf key.

    Returns:
        str: `"<Parent Words> - <Leaf Words>"` when both parts exist, else the one present.
    """
    if parent_key and key:
        return f"{humanize_segment(parent_key)} - {humanize_segment(key)}"
    return humanize_segment(key or parent_key or "")
