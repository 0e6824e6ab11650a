"""
Merge engine for dated, sectioned documents - pure text transforms, no I/O.

A document is a flat sequence of entries, one per calendar day:

    * 2024-05-01 Wed            <- entry (date) header
    ** Things that made me happy  <- section header
    - sun                       <- body line

Structure is found by scanning lines for header prefixes. Headers only match
at the start of a line, and body lines that look like headers are escaped on
write, so content can never be mistaken for structure.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterator

from .dialect import Dialect
from .fields import RAW_INPUT_TITLE, EntryTypeConfig, FieldValue, ListValue, Scalar, header_for


@dataclass(frozen=True)
class Span:
    """Character range [start, end) of an entry block within a document."""

    start: int
    end: int


def _iter_lines(text: str, pos: int = 0) -> Iterator[tuple[int, str]]:
    """Yield (offset, line) for each newline-delimited line from pos onwards."""
    while pos < len(text):
        newline = text.find("\n", pos)
        end = len(text) if newline == -1 else newline
        yield pos, text[pos:end]
        if newline == -1:
            return
        pos = newline + 1


def _next_line_start(text: str, offset: int) -> int | None:
    """Offset of the line after the one at offset, or None if it is the last."""
    newline = text.find("\n", offset)
    return None if newline == -1 else newline + 1


def escape_body(dialect: Dialect, text: str) -> str:
    """Escape every line of a body that would otherwise parse as a header."""
    return "\n".join(dialect.escape_line(line) for line in text.split("\n"))


def render_lines(value: FieldValue) -> list[str]:
    """Body lines for a value: the text itself, or one bullet per item."""
    match value:
        case Scalar(text=text):
            return [text]
        case ListValue(items=items):
            return [f"- {item}" for item in items]
    return []


# ============== Section Formatter ==============


def format_section(dialect: Dialect, title: str, value: FieldValue) -> str:
    """Render one section: header line followed by the value's body."""
    if not isinstance(value, (Scalar, ListValue)):
        return ""

    parts = [f"{dialect.section_header(title)}\n"]
    if dialect.padded:
        parts.append("\n")
    for line in render_lines(value):
        parts.append(f"{escape_body(dialect, line)}\n")
    if dialect.padded:
        parts.append("\n")
    return "".join(parts)


def format_entry(
    dialect: Dialect,
    entry_type: EntryTypeConfig,
    values: dict[str, FieldValue],
    raw_input: str,
) -> str:
    """
    Render the sections of a new entry (without its date header).

    Configured fields come first in configured order, skipping fields with no
    value. The raw input section is always last.
    """
    parts = []
    for field_id in entry_type.fields:
        value = values.get(field_id)
        if value is None:
            continue
        parts.append(format_section(dialect, header_for(field_id), value))

    parts.append(format_section(dialect, RAW_INPUT_TITLE, Scalar(raw_input)))
    parts.append("\n")
    return "".join(parts)


# ============== Entry Locator ==============


def locate_entry(text: str, date_header: str, dialect: Dialect) -> Span | None:
    """
    Find the entry block that starts with date_header.

    The block runs up to the newline before the next entry header, or to the
    end of the document. The first matching header wins.
    """
    start = None
    for offset, line in _iter_lines(text):
        if line.startswith(date_header):
            start = offset
            break
    if start is None:
        return None

    body_start = _next_line_start(text, start)
    if body_start is not None:
        for offset, line in _iter_lines(text, body_start):
            if line.startswith(dialect.top_prefix):
                return Span(start, offset - 1)
    return Span(start, len(text))


# ============== Section Splicer ==============


def find_section(block: str, section_header: str) -> int | None:
    """Offset of the section header line within an entry block."""
    wanted = section_header.rstrip()
    for offset, line in _iter_lines(block):
        if line.rstrip() == wanted:
            return offset
    return None


def append_to_section(block: str, section_header: str, line: str, dialect: Dialect) -> str:
    """
    Add one line to a section of an entry block, creating the section if needed.

    An existing section gets the line as its new last line, just before the
    next section header. A missing section is created at the end of the block.
    """
    header_at = find_section(block, section_header)
    if header_at is None:
        if not block.endswith("\n"):
            block += "\n"
        separator = "\n\n" if dialect.padded else "\n"
        return f"{block}{section_header}{separator}{line}\n"

    body_start = _next_line_start(block, header_at)
    if body_start is not None:
        for offset, existing in _iter_lines(block, body_start):
            if existing.startswith(dialect.sub_prefix):
                return f"{block[:offset]}{line}\n{block[offset:]}"

    suffix = "" if block.endswith("\n") else "\n"
    return f"{block}{suffix}{line}\n"


# ============== Merge ==============


def merge_entry(
    block: str,
    dialect: Dialect,
    entry_type: EntryTypeConfig,
    values: dict[str, FieldValue],
    raw_input: str,
) -> str:
    """Splice new values into an existing entry block, field by field."""
    for field_id in entry_type.fields:
        value = values.get(field_id)
        if value is None:
            continue
        section_header = dialect.section_header(header_for(field_id))
        for line in render_lines(value):
            block = append_to_section(block, section_header, escape_body(dialect, line), dialect)

    raw_header = dialect.section_header(RAW_INPUT_TITLE)
    return append_to_section(block, raw_header, escape_body(dialect, raw_input), dialect)


def merge_document(
    text: str,
    dialect: Dialect,
    entry_type: EntryTypeConfig,
    values: dict[str, FieldValue],
    raw_input: str,
    as_of: date | None = None,
) -> str:
    """
    Produce the full new document text for one save.

    Opens a new dated entry at the end of the document, or merges into the
    existing entry for as_of (default: today). Bytes outside the merged entry
    are left untouched.
    """
    as_of = as_of or date.today()
    date_header = dialect.date_header(as_of)

    span = locate_entry(text, date_header, dialect)
    if span is None:
        prefix = "\n" if text and not text.endswith("\n") else ""
        entry = format_entry(dialect, entry_type, values, raw_input)
        return f"{text}{prefix}{date_header}\n{entry}"

    block = merge_entry(text[span.start:span.end], dialect, entry_type, values, raw_input)
    return text[:span.start] + block + text[span.end:]
