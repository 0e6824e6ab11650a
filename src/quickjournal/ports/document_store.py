"""Document storage interface."""

from pathlib import Path
from typing import Protocol

from quickjournal.core.fields import EntryTypeConfig


class DocumentStore(Protocol):
    """Interface for reading and writing one document per entry type."""

    def read(self, entry_type: EntryTypeConfig) -> str:
        """Read the full document. Returns an empty string if it does not exist."""
        ...

    def write(self, entry_type: EntryTypeConfig, content: str) -> Path:
        """Replace the whole document with content."""
        ...

    def ensure_files(self, entry_types: dict[str, EntryTypeConfig]) -> list[Path]:
        """Create an empty document for every entry type that has none."""
        ...
