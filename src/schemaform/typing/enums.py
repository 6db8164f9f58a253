"""Project enums."""

from __future__ import annotations

from enum import StrEnum

# Component names accepted by `from_str` besides the canonical values.
_KIND_ALIASES: dict[str, str] = {
    "dropdown": "select",
    "input": "text",
    "object_array": "object-array",
    "table": "object-array",
}


class FieldKind(StrEnum):
    """Widget kind a field descriptor is rendered with."""

    TEXT = "text"
    SELECT = "select"
    CHECKBOX = "checkbox"
    OBJECT_ARRAY = "object-array"

    @classmethod
    def from_str(cls, value: str) -> FieldKind:
        """Parse a kind from its canonical name or a component alias.

        Args:
            value: Raw kind name, matched case-insensitively.

        Raises:
            ValueError: If the value names no kind.

        Returns:
            FieldKind: Parsed kind.
        """
        normalized = value.strip().lower()
        try:
            return cls(_KIND_ALIASES.get(normalized, normalized))
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        return self.value
