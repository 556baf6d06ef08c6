"""Versioned document stores the semaphore coordinates through."""

from .documentstore import DocumentStore, VersionedDocument, WriteResult
from .memory import InMemoryDocumentStore

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "VersionedDocument",
    "WriteResult",
]
