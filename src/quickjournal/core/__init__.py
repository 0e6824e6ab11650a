"""Functional core - pure business logic with no I/O."""

from .dialect import Dialect
from .fields import (
    DEFAULT_ENTRY_TYPES,
    HEADER_MAPPING,
    RAW_INPUT_TITLE,
    EntryTypeConfig,
    FieldValue,
    ListValue,
    Scalar,
    header_for,
    to_field_values,
)
from .document import (
    Span,
    append_to_section,
    format_entry,
    format_section,
    locate_entry,
    merge_document,
)
from .summary import MalformedPayloadError, build_prompt, parse_analysis, strip_code_fence

__all__ = [
    # Dialect
    "Dialect",
    # Fields
    "DEFAULT_ENTRY_TYPES",
    "HEADER_MAPPING",
    "RAW_INPUT_TITLE",
    "EntryTypeConfig",
    "FieldValue",
    "ListValue",
    "Scalar",
    "header_for",
    "to_field_values",
    # Document
    "Span",
    "append_to_section",
    "format_entry",
    "format_section",
    "locate_entry",
    "merge_document",
    # Summary
    "MalformedPayloadError",
    "build_prompt",
    "parse_analysis",
    "strip_code_fence",
]
