"""
document-semaphore: counting semaphore over a versioned document store.

Independent workers acquire and release named slots by racing version-checked
writes to one shared JSON document; the store's conflict detection is the only
coordination mechanism.
"""

from document_semaphore.common.exceptions import (
    DocumentNotFoundError,
    DocumentSemaphoreError,
    DocumentStoreError,
    ScopeNotFoundError,
)
from document_semaphore.lock import (
    LockDocumentManager,
    LockParams,
    acquire_lock,
    build_holder_id,
    hold_lock,
    release_lock,
)
from document_semaphore.services import (
    DocumentStore,
    InMemoryDocumentStore,
    VersionedDocument,
    WriteResult,
)

__version__ = "0.1.0"
__all__ = [
    "DocumentNotFoundError",
    "DocumentSemaphoreError",
    "DocumentStore",
    "DocumentStoreError",
    "InMemoryDocumentStore",
    "LockDocumentManager",
    "LockParams",
    "ScopeNotFoundError",
    "VersionedDocument",
    "WriteResult",
    "acquire_lock",
    "build_holder_id",
    "hold_lock",
    "release_lock",
]
