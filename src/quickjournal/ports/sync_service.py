"""Remote sync interface."""

from pathlib import Path
from typing import Iterable, Protocol


class SyncService(Protocol):
    """Interface for publishing changed documents to a remote."""

    def init_repo(self) -> None:
        """Prepare the local working copy (clone or pull)."""
        ...

    def sync(self, message: str | None = None, paths: Iterable[Path | str] | None = None) -> None:
        """Stage, commit and push the given paths, or all changes when paths is None."""
        ...
