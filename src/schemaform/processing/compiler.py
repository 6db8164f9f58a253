"""Schema text to form compiler."""

from __future__ import annotations

from schemaform import logger
from schemaform.processing.classifier import build_steps
from schemaform.processing.document import parse_document
from schemaform.processing.flattener import flatten
from schemaform.processing.hints import extract_comments
from schemaform.processing.preclean import preclean
from schemaform.typing.models import ParsedSchema


def parse_schema_text(text: str) -> ParsedSchema:
    """Compile raw JSON/JSON5 schema text into descriptors and initial values.

    Args:
        text (str): Raw schema text, optionally annotated with `//` comments.

    Raises:
        SchemaParseError: If the cleaned text is not a JSON5 object document.

    Returns:
        ParsedSchema: Ordered field descriptors and the flattened initial values.
    """
    cleaned = preclean(text)
    comments = extract_comments(cleaned)
    document = parse_document(cleaned)

    parsed = ParsedSchema(steps=tuple(build_steps(document, comments)), initial_values=flatten(document))
    logger.debug(
        "Schema compiled",
        extra={
            "field_count": len(parsed.steps),
            "value_count": len(parsed.initial_values),
            "annotated_keys": len(comments),
        },
    )
    return parsed
