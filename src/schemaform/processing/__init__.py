"""Schema-to-form compiler."""

from schemaform.processing.classifier import build_steps
from schemaform.processing.compiler import parse_schema_text
from schemaform.processing.flattener import flatten
from schemaform.processing.hints import extract_comments, parse_hints
from schemaform.processing.humanize import humanize_path_title, humanize_segment
from schemaform.processing.patterns import is_hidden, is_row_field_hidden, matches
from schemaform.processing.preclean import preclean

__all__ = [
    "build_steps",
    "extract_comments",
    "flatten",
    "humanize_path_title",
    "humanize_segment",
    "is_hidden",
    "is_row_field_hidden",
    "matches",
    "parse_hints",
    "parse_schema_text",
    "preclean",
]
