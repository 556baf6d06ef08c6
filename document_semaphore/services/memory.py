"""In-memory document store implementation."""

import threading
from typing import Dict, List, Optional, Set, Tuple

from document_semaphore.common.exceptions import DocumentNotFoundError
from document_semaphore.observability.logger_adaptor import get_logger
from document_semaphore.services.documentstore import (
    DocumentStore,
    VersionedDocument,
    WriteResult,
)

logger = get_logger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """In-memory document store for local development and testing.

    Versions are per-document counters rendered as strings. Operations are
    guarded by a thread lock so the store can be shared by concurrent
    coroutines and threads, but it offers no coordination across processes.

    Example:
        ```python
        store = InMemoryDocumentStore(scopes={"locks"})
        document = await store.read("locks", "lock.json")
        result = await store.write(
            "locks", "lock.json", b"{}", document.version, "update"
        )
        ```
    """

    def __init__(self, scopes: Optional[Set[str]] = None) -> None:
        self._scopes: Set[str] = set(scopes or ())
        self._documents: Dict[Tuple[str, str], VersionedDocument] = {}
        self._counter = 0
        self._lock = threading.Lock()
        self.messages: List[str] = []

    def create_scope(self, scope: str) -> None:
        """Provision a scope, the equivalent of creating the lock branch."""
        with self._lock:
            self._scopes.add(scope)

    def put(self, scope: str, path: str, content: bytes) -> str:
        """Replace a document unconditionally, as a third party would.

        Returns:
            str: The new version token.
        """
        with self._lock:
            return self._store(scope, path, content)

    def get(self, scope: str, path: str) -> Optional[VersionedDocument]:
        """Return the stored document without the not-found error path."""
        with self._lock:
            return self._documents.get((scope, path))

    async def scope_exists(self, scope: str) -> bool:
        with self._lock:
            return scope in self._scopes

    async def read(self, scope: str, path: str) -> VersionedDocument:
        with self._lock:
            document = self._documents.get((scope, path))
        if document is None:
            raise DocumentNotFoundError(scope, path)
        return document

    async def write(
        self,
        scope: str,
        path: str,
        content: bytes,
        version: Optional[str],
        message: str,
    ) -> WriteResult:
        with self._lock:
            current = self._documents.get((scope, path))
            current_version = current.version if current else None
            if current_version != version:
                logger.debug(
                    f"Version conflict on {scope}/{path}: "
                    f"expected {version}, found {current_version}"
                )
                return WriteResult.rejected()

            new_version = self._store(scope, path, content)
            self.messages.append(message)
            return WriteResult.applied(new_version)

    def _store(self, scope: str, path: str, content: bytes) -> str:
        self._counter += 1
        version = str(self._counter)
        self._documents[(scope, path)] = VersionedDocument(
            content=content, version=version
        )
        return version
