"""Counting semaphore coordinated through a shared versioned document."""

from document_semaphore.lock.acquire import acquire_lock
from document_semaphore.lock.context import hold_lock
from document_semaphore.lock.document import (
    LockData,
    LockDocumentManager,
    parse_document,
    serialize_document,
)
from document_semaphore.lock.models import LockParams, build_holder_id
from document_semaphore.lock.release import release_lock

__all__ = [
    "LockData",
    "LockDocumentManager",
    "LockParams",
    "acquire_lock",
    "build_holder_id",
    "hold_lock",
    "parse_document",
    "release_lock",
    "serialize_document",
]
