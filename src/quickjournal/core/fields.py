"""Entry types, section titles and field values - pure domain model."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

RAW_INPUT_TITLE = "Raw Input"

# Section titles keyed by field identifier. Unknown fields use their identifier.
HEADER_MAPPING: dict[str, str] = {
    "emotional_checkin": "General Emotional Checkin",
    "happy_things": "Things that made me happy",
    "stressful_things": "Things that were stressful",
    "focus_items": "Things I want to focus on doing for next time",
    "summary": "Summary",
    "key_points": "Key Points",
    "action_items": "Action Items",
}

# Shown to the summarizer so it knows what each field should hold.
FIELD_DESCRIPTIONS: dict[str, str] = {
    "emotional_checkin": "A general assessment of the emotional state (string).",
    "happy_things": "A list of things that made the author happy.",
    "stressful_things": "A list of things that were stressful.",
    "focus_items": "A list of things the author wants to focus on for next time.",
    "summary": "A short summary of the note (string).",
    "key_points": "A list of the key points.",
    "action_items": "A list of concrete follow-up actions.",
}


def header_for(field_id: str) -> str:
    """Human-readable section title for a field."""
    return HEADER_MAPPING.get(field_id, field_id)


@dataclass(frozen=True)
class EntryTypeConfig:
    """Configuration for one category of document."""

    fields: tuple[str, ...]
    title: str
    target_file: str
    instruction: str = ""

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "EntryTypeConfig":
        """Build from a config-file mapping. Raises KeyError/TypeError/ValueError if malformed."""
        fields = data["fields"]
        if isinstance(fields, str) or not isinstance(fields, list):
            raise TypeError(f"Entry type '{name}': fields must be a list")

        field_ids = tuple(str(f).strip() for f in fields)
        for field_id in field_ids:
            # Section headers are matched line by line
            if not field_id or "\n" in field_id or "\r" in field_id:
                raise ValueError(f"Entry type '{name}': invalid field id {field_id!r}")

        return cls(
            fields=field_ids,
            title=str(data.get("title", name.title())),
            target_file=str(data.get("target_file", name)),
            instruction=str(data.get("instruction", "")),
        )


DEFAULT_ENTRY_TYPES: dict[str, EntryTypeConfig] = {
    "journal": EntryTypeConfig(
        fields=("emotional_checkin", "happy_things", "stressful_things", "focus_items"),
        title="Journal",
        target_file="journal",
        instruction="Analyze the following journal entry.",
    ),
    "notes": EntryTypeConfig(
        fields=("summary", "key_points", "action_items"),
        title="Notes",
        target_file="notes",
        instruction="Summarize the following note.",
    ),
}


# ============== Field Values ==============


@dataclass(frozen=True)
class Scalar:
    """A single line of text."""

    text: str


@dataclass(frozen=True)
class ListValue:
    """An ordered list of items, rendered as bullets."""

    items: tuple[str, ...] = field(default_factory=tuple)


FieldValue = Scalar | ListValue


def to_field_value(raw: Any) -> FieldValue | None:
    """
    Classify a decoded JSON value.

    Strings become Scalar, lists become ListValue (items stringified).
    Anything else returns None and is not rendered.
    """
    if isinstance(raw, str):
        return Scalar(raw)
    if isinstance(raw, list):
        return ListValue(tuple(str(item) for item in raw))
    return None


def to_field_values(data: dict[str, Any]) -> dict[str, FieldValue]:
    """Classify every value in a decoded mapping, dropping unsupported ones."""
    values: dict[str, FieldValue] = {}
    for key, raw in data.items():
        value = to_field_value(raw)
        if value is None:
            logger.debug(f"Ignoring field '{key}' with unsupported value type {type(raw).__name__}")
            continue
        values[key] = value
    return values
