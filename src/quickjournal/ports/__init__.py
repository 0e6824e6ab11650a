"""Ports - interfaces/protocols for external dependencies."""

from .document_store import DocumentStore
from .llm_service import LLMService
from .sync_service import SyncService

__all__ = [
    "DocumentStore",
    "LLMService",
    "SyncService",
]
