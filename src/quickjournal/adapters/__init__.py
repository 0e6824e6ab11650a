"""Adapters - I/O implementations of ports."""

from .file_document import FileDocumentStore, StorageError
from .gemini_api import GeminiService, LLMError
from .git_sync import GitSync, SyncError

__all__ = [
    "FileDocumentStore",
    "StorageError",
    "GeminiService",
    "LLMError",
    "GitSync",
    "SyncError",
]
