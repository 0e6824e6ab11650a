"""File-based document storage adapter."""

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from quickjournal.core.dialect import Dialect
from quickjournal.core.fields import EntryTypeConfig

logger = logging.getLogger(__name__)


class StorageError(OSError):
    """Raised when a document cannot be read or written."""

    pass


class FileDocumentStore:
    """
    File-based document storage.

    Implements DocumentStore protocol. Each entry type gets one file in the
    root directory, named after its target file with the dialect's extension.
    """

    def __init__(self, root_dir: Path | str, dialect: Dialect):
        self.root_dir = Path(root_dir).expanduser()
        self.dialect = dialect

    def path_for(self, entry_type: EntryTypeConfig) -> Path:
        """Get the file path for an entry type."""
        return self.root_dir / self.dialect.file_name(entry_type.target_file)

    def read(self, entry_type: EntryTypeConfig) -> str:
        """Read the full document. Returns an empty string if not found."""
        path = self.path_for(entry_type)
        try:
            return path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Error reading {path}: {e}") from e

    def write(self, entry_type: EntryTypeConfig, content: str) -> Path:
        """Replace the whole document. The previous content survives a failed write."""
        path = self.path_for(entry_type)
        tmp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", encoding="utf-8", newline="", delete=False, dir=str(path.parent), suffix=".tmp"
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(content)
                tmp.flush()
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Error writing {path}: {e}") from e
        return path

    def exists(self, entry_type: EntryTypeConfig) -> bool:
        """Check if the document for an entry type exists."""
        return self.path_for(entry_type).exists()

    def ensure_files(self, entry_types: dict[str, EntryTypeConfig]) -> list[Path]:
        """Create an empty document for every entry type that has none."""
        created = []
        for entry_type in entry_types.values():
            if self.exists(entry_type):
                continue
            path = self.path_for(entry_type)
            logger.info(f"Creating {path.name}...")
            created.append(self.write(entry_type, ""))
        return created
