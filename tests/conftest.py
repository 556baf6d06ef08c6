"""Global test configuration and fixtures."""

import asyncio
from typing import List, Optional

import pytest

from document_semaphore.lock.document import LockDocumentManager, parse_document
from document_semaphore.lock.models import LockParams
from document_semaphore.services.documentstore import VersionedDocument, WriteResult
from document_semaphore.services.memory import InMemoryDocumentStore

SCOPE = "locks"
LOCK_FILE_PATH = "locks/lock.json"


class ConflictingDocumentStore(InMemoryDocumentStore):
    """In-memory store that rejects the next ``conflicts`` versioned writes."""

    def __init__(self, conflicts: int = 0) -> None:
        super().__init__(scopes={SCOPE})
        self.conflicts = conflicts
        self.reads = 0
        self.write_attempts = 0

    async def read(self, scope: str, path: str) -> VersionedDocument:
        self.reads += 1
        return await super().read(scope, path)

    async def write(
        self,
        scope: str,
        path: str,
        content: bytes,
        version: Optional[str],
        message: str,
    ) -> WriteResult:
        self.write_attempts += 1
        if version is not None and self.conflicts > 0:
            self.conflicts -= 1
            return WriteResult.rejected()
        return await super().write(scope, path, content, version, message)


class RacingDocumentStore(InMemoryDocumentStore):
    """In-memory store that yields to the event loop between read and write.

    Every successfully written document is recorded so tests can check
    invariants on each persisted state.
    """

    def __init__(self) -> None:
        super().__init__(scopes={SCOPE})
        self.written: List[dict] = []

    async def read(self, scope: str, path: str) -> VersionedDocument:
        document = await super().read(scope, path)
        await asyncio.sleep(0)
        return document

    async def write(
        self,
        scope: str,
        path: str,
        content: bytes,
        version: Optional[str],
        message: str,
    ) -> WriteResult:
        result = await super().write(scope, path, content, version, message)
        if result.success:
            self.written.append(parse_document(content))
        return result


def _make_params(holder_id: str = "r1", **overrides) -> LockParams:
    values = {
        "scope": SCOPE,
        "lock_key": "X",
        "holder_id": holder_id,
        "max_concurrent": 1,
        "polling_interval": 0,
        "release_retries": 5,
        "release_retry_delay": 0,
    }
    values.update(overrides)
    return LockParams(**values)


def _stored_document(store: InMemoryDocumentStore) -> Optional[dict]:
    document = store.get(SCOPE, LOCK_FILE_PATH)
    if document is None:
        return None
    return parse_document(document.content)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(scopes={SCOPE})


@pytest.fixture
def manager(store: InMemoryDocumentStore) -> LockDocumentManager:
    return LockDocumentManager(store, LOCK_FILE_PATH)


@pytest.fixture
def make_params():
    """Factory for ``LockParams`` with fast test defaults."""
    return _make_params


@pytest.fixture
def stored_document():
    """Return the parsed lock document currently held by a store."""
    return _stored_document


@pytest.fixture
def conflicting_store():
    """Factory for stores that reject the first ``conflicts`` versioned writes."""
    return ConflictingDocumentStore


@pytest.fixture
def racing_store() -> RacingDocumentStore:
    return RacingDocumentStore()
