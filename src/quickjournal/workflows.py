"""Shared workflow layer between the CLI and background processing.

JournalService turns raw input into field values via the summarizer, merges
them into today's entry of the category's document, persists the document and
publishes it through the sync collaborator.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import date, datetime
from pathlib import Path
from typing import Callable

from .adapters.file_document import FileDocumentStore, StorageError
from .adapters.gemini_api import GeminiService
from .adapters.git_sync import GitSync, SyncError
from .config import Config
from .core.document import merge_document
from .core.fields import EntryTypeConfig, FieldValue
from .core.summary import MalformedPayloadError, build_prompt, parse_analysis
from .ports import DocumentStore, LLMService, SyncService

logger = logging.getLogger(__name__)


def get_store(config: Config) -> FileDocumentStore:
    """Resolve the document store from config."""
    return FileDocumentStore(config.document_root, config.dialect)


def get_sync(config: Config) -> GitSync | None:
    """Git sync adapter, or None when sync is not configured."""
    if not config.git_enabled:
        return None
    return GitSync(
        repo_dir=config.repo_dir,
        username=config.git_username,
        repo_name=config.git_repo_name,
        token=config.github_token,
        branch=config.git_branch,
    )


def get_llm(config: Config) -> GeminiService | None:
    """Summarizer adapter, or None when no API token is configured."""
    if not config.gemini_api_token:
        return None
    return GeminiService(
        config.gemini_api_token,
        model=config.gemini_model,
        timeout=config.gemini_timeout,
    )


class JournalService:
    """
    Merge orchestrator.

    Every save re-reads the document, so nothing is cached between calls.
    Saves to the same document are serialized; saves to different documents
    run concurrently.
    """

    def __init__(
        self,
        config: Config,
        store: DocumentStore | None = None,
        llm: LLMService | None = None,
        sync: SyncService | None = None,
        clock: Callable[[], date] | None = None,
    ):
        self.config = config
        self.store = store or get_store(config)
        self.llm = llm
        self.sync = sync
        self.clock = clock or date.today
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        self._sync_lock = threading.Lock()
        self._executor: ThreadPoolExecutor | None = None
        self._executor_guard = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "JournalService":
        """Wire up the service with the adapters the config enables."""
        return cls(config, store=get_store(config), llm=get_llm(config), sync=get_sync(config))

    # ============== Entry Types ==============

    def categories(self) -> dict[str, EntryTypeConfig]:
        return dict(self.config.entry_types)

    def resolve(self, category: str | None) -> tuple[str, EntryTypeConfig]:
        """Look up an entry type, falling back to the default one."""
        entry_types = self.config.entry_types
        if category in entry_types:
            return category, entry_types[category]

        default = self.config.default_entry_type
        logger.warning(f"Unknown entry type '{category}', falling back to '{default}'")
        return default, entry_types[default]

    def _lock_for(self, entry_type: EntryTypeConfig) -> threading.Lock:
        # Keyed by file so two entry types sharing a document share a lock
        with self._locks_guard:
            return self._locks.setdefault(entry_type.target_file, threading.Lock())

    # ============== Read / Save ==============

    def read(self, category: str | None) -> str:
        """Full current text of a category's document."""
        _, entry_type = self.resolve(category)
        return self.store.read(entry_type)

    def save(self, category: str | None, values: dict[str, FieldValue], raw_input: str) -> Path:
        """
        Merge values and raw input into today's entry and persist the document.

        Raises StorageError if the document cannot be read or written; the
        document is left unchanged in that case. Sync failures are only logged.
        """
        name, entry_type = self.resolve(category)

        with self._lock_for(entry_type):
            existing = self.store.read(entry_type)
            updated = merge_document(
                existing,
                self.config.dialect,
                entry_type,
                values,
                raw_input,
                as_of=self.clock(),
            )
            path = self.store.write(entry_type, updated)

        logger.info(f"Saved {name} entry to {path}")
        self._publish(entry_type, path)
        return path

    def _publish(self, entry_type: EntryTypeConfig, path: Path) -> None:
        """Push the saved document to the remote. Never undoes the local write."""
        if self.sync is None:
            return
        message = f"{entry_type.title} entry {datetime.now().strftime('%Y-%m-%d %H:%M')}"
        with self._sync_lock:
            try:
                self.sync.sync(message, paths=[path])
            except SyncError as e:
                logger.error(f"Git sync failed: {e}")

    # ============== Summarize + Save ==============

    def summarize(self, category: str | None, content: str) -> dict[str, FieldValue]:
        """
        Ask the summarizer for field values.

        Raises RuntimeError on transport failure and MalformedPayloadError if
        the response is not a field mapping.
        """
        if self.llm is None:
            raise RuntimeError("No summarizer configured")
        name, entry_type = self.resolve(category)
        logger.debug(f"Summarizing {name} entry")
        payload = self.llm.generate(build_prompt(entry_type, content))
        logger.debug(f"Summary payload:\n{payload}")
        return parse_analysis(payload)

    def process_entry(self, category: str | None, content: str) -> Path | None:
        """
        Summarize raw input and save it. Returns the document path, or None
        if the entry was abandoned. Failures are logged, not raised.
        """
        logger.info(f"Processing entry: {content}")

        if self.llm is None:
            logger.warning("Skipping AI processing: GEMINI_API_TOKEN not set")
            return None

        category, _ = self.resolve(category)

        try:
            values = self.summarize(category, content)
        except MalformedPayloadError as e:
            logger.error(f"Error parsing summary: {e}\nRaw response: {e.payload}")
            return None
        except RuntimeError as e:
            logger.error(f"Error calling summarizer: {e}")
            return None

        try:
            return self.save(category, values, content)
        except StorageError as e:
            logger.error(f"Error saving entry: {e}")
            return None

    # ============== Background Processing ==============

    def submit(self, category: str | None, content: str) -> Future:
        """Process an entry in the background. Returns immediately."""
        with self._executor_guard:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=max(1, self.config.max_workers),
                    thread_name_prefix="quickjournal",
                )
            future = self._executor.submit(self.process_entry, category, content)
        future.add_done_callback(_log_unexpected_failure)
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background workers, optionally waiting for queued entries."""
        with self._executor_guard:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


def _log_unexpected_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error(f"Entry processing crashed: {exc!r}")
