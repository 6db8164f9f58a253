"""Text normalization applied before JSON5 parsing."""

from __future__ import annotations

import re

_QUOTED_KEY = re.compile(r'"([A-Za-z0-9_.]+)"\s*:')
_HALF_QUOTED_KEY = re.compile(r'"([A-Za-z0-9_.]+)\s*:')
_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _render_key(name: str) -> str:
    # Dotted or digit-led names are not JSON5 identifiers and stay quoted.
    if _IDENTIFIER.fullmatch(name):
        return f"{name}:"
    return f'"{name}":'


def _string_end(text: str, start: int) -> int:
    """Return the index just past the string literal opening at `start`."""
    quote = text[start]
    index = start + 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        index += 1
    return len(text)


def _comment_end(text: str, start: int) -> int:
    """Return the index just past the `//` or `/* */` comment opening at `start`."""
    if text.startswith("//", start):
        newline = text.find("\n", start)
        return len(text) if newline == -1 else newline
    closing = text.find("*/", start + 2)
    return len(text) if closing == -1 else closing + 2


def _match_key(text: str, start: int) -> tuple[str, int] | None:
    """Rewrite a quoted or half-quoted key starting at `start`.

    Returns:
        tuple[str, int] | None: Replacement text and end index, or None when no key starts here.
    """
    match = _QUOTED_KEY.match(text, start) or _HALF_QUOTED_KEY.match(text, start)
    if match is None:
        return None
    return _render_key(match.group(1)), match.end()


def unquote_keys(text: str) -> str:
    """Turn `"key":` and the malformed `"key:` into JSON5 keys.

    Only tokens in key position of an object are rewritten; string values,
    array items and comments pass through untouched.

    Args:
        text (str): Schema text with normalized line endings.

    Returns:
        str: Text whose object keys are unquoted where JSON5 allows it.
    """
    out: list[str] = []
    containers: list[str] = []
    expect_key = False
    index = 0

    while index < len(text):
        char = text[index]

        if text.startswith(("//", "/*"), index):
            end = _comment_end(text, index)
            out.append(text[index:end])
            index = end
            continue

        if char in {'"', "'"}:
            rewritten = _match_key(text, index) if expect_key and char == '"' else None
            if rewritten is not None:
                replacement, end = rewritten
            else:
                end = _string_end(text, index)
                replacement = text[index:end]
            out.append(replacement)
            index = end
            expect_key = False
            continue

        if char in {"{", "["}:
            containers.append(char)
            expect_key = char == "{"
        elif char in {"}", "]"}:
            if containers:
                containers.pop()
            expect_key = False
        elif char == ",":
            expect_key = bool(containers) and containers[-1] == "{"
        elif not char.isspace():
            expect_key = False

        out.append(char)
        index += 1

    return "".join(out)


def preclean(text: str) -> str:
    """Normalize raw schema text so the JSON5 parser accepts it uniformly.

    Args:
        text (str): Raw schema text.

    Returns:
        str: Cleaned text.
    """
    return unquote_keys(normalize_line_endings(text))
