"""Summarizer contract - prompt compilation and response parsing, no I/O."""

import json

from .fields import FIELD_DESCRIPTIONS, EntryTypeConfig, FieldValue, to_field_values


class MalformedPayloadError(ValueError):
    """Raised when a summarizer response cannot be read as a field mapping."""

    def __init__(self, message: str, payload: str):
        super().__init__(message)
        self.payload = payload


def build_prompt(entry_type: EntryTypeConfig, content: str) -> str:
    """Compile the summarizer prompt for one entry type."""
    field_lines = "\n".join(
        f'- "{field_id}": {FIELD_DESCRIPTIONS.get(field_id, "A short value or a list of strings.")}'
        for field_id in entry_type.fields
    )
    instruction = entry_type.instruction or f"Analyze the following {entry_type.title.lower()} entry."

    return f"""{instruction} Provide a structured response in JSON format.
The JSON should have the following fields:
{field_lines}

Respond with the JSON object only.

{entry_type.title} Entry:
"{content}"
"""


def strip_code_fence(payload: str) -> str:
    """Remove a ```json ... ``` (or bare ```) fence around a payload."""
    text = payload.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_analysis(payload: str) -> dict[str, FieldValue]:
    """
    Parse a summarizer response into field values.

    Raises MalformedPayloadError if the (fence-stripped) payload is not a
    JSON object.
    """
    try:
        data = json.loads(strip_code_fence(payload))
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"Invalid JSON in summary: {e}", payload) from e

    if not isinstance(data, dict):
        raise MalformedPayloadError(
            f"Expected a JSON object, got {type(data).__name__}", payload
        )
    return to_field_values(data)
