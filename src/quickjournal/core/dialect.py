"""Document dialects - header conventions for org-mode and Markdown."""

import logging
from datetime import date
from enum import Enum

logger = logging.getLogger(__name__)


class Dialect(Enum):
    """Textual convention used to delimit entries and sections."""

    ORG = "org"
    MARKDOWN = "markdown"

    @classmethod
    def from_name(cls, name: str | None) -> "Dialect":
        """Resolve a configured format name. Unknown names fall back to Markdown."""
        value = (name or "").strip().lower()
        if value in ("md", "markdown"):
            return cls.MARKDOWN
        if value in ("org", "outline"):
            return cls.ORG
        if value:
            logger.warning(f"Unknown journal format '{name}', using markdown")
        return cls.MARKDOWN

    @property
    def top_marker(self) -> str:
        return "*" if self is Dialect.ORG else "##"

    @property
    def sub_marker(self) -> str:
        return "**" if self is Dialect.ORG else "###"

    @property
    def top_prefix(self) -> str:
        """Prefix of an entry (date) header line."""
        return f"{self.top_marker} "

    @property
    def sub_prefix(self) -> str:
        """Prefix of a section header line."""
        return f"{self.sub_marker} "

    @property
    def padded(self) -> bool:
        """Whether headers and bodies are padded with blank lines."""
        return self is Dialect.MARKDOWN

    @property
    def extension(self) -> str:
        return ".org" if self is Dialect.ORG else ".md"

    @property
    def date_format(self) -> str:
        return f"{self.top_prefix}%Y-%m-%d %a"

    def date_header(self, as_of: date) -> str:
        """Entry header for a calendar day, e.g. '* 2024-05-01 Wed'."""
        return as_of.strftime(self.date_format)

    def section_header(self, title: str) -> str:
        return f"{self.sub_prefix}{title}"

    def file_name(self, base: str) -> str:
        return f"{base}{self.extension}"

    def is_structural(self, line: str) -> bool:
        """True if the line would be read back as an entry or section header."""
        return line.startswith(self.top_prefix) or line.startswith(self.sub_prefix)

    def escape_line(self, line: str) -> str:
        """Quote a body line so it cannot be mistaken for a header."""
        if not self.is_structural(line):
            return line
        if self is Dialect.ORG:
            return f",{line}"
        return f"\\{line}"
