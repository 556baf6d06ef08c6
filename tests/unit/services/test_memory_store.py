"""Unit tests for the in-memory document store."""

import pytest

from document_semaphore.common.exceptions import DocumentNotFoundError
from document_semaphore.services.memory import InMemoryDocumentStore


class TestInMemoryDocumentStore:
    @pytest.mark.asyncio
    async def test_scope_exists(self) -> None:
        store = InMemoryDocumentStore(scopes={"locks"})

        assert await store.scope_exists("locks")
        assert not await store.scope_exists("other")

        store.create_scope("other")
        assert await store.scope_exists("other")

    @pytest.mark.asyncio
    async def test_read_missing_document(self) -> None:
        store = InMemoryDocumentStore(scopes={"locks"})

        with pytest.raises(DocumentNotFoundError):
            await store.read("locks", "lock.json")

    @pytest.mark.asyncio
    async def test_create_then_conflicting_create(self) -> None:
        store = InMemoryDocumentStore(scopes={"locks"})

        created = await store.write("locks", "lock.json", b"{}", None, "init")
        again = await store.write("locks", "lock.json", b"{}", None, "init")

        assert created.success and created.version is not None
        assert not again.success and again.conflict
        assert store.messages == ["init"]

    @pytest.mark.asyncio
    async def test_versioned_write(self) -> None:
        store = InMemoryDocumentStore(scopes={"locks"})
        await store.write("locks", "lock.json", b"{}", None, "init")
        document = await store.read("locks", "lock.json")

        result = await store.write(
            "locks", "lock.json", b'{"X": ["r1"]}', document.version, "acquire"
        )
        stale = await store.write(
            "locks", "lock.json", b"{}", document.version, "stale"
        )

        assert result.success
        assert stale.conflict
        current = await store.read("locks", "lock.json")
        assert current.content == b'{"X": ["r1"]}'
        assert current.version == result.version

    @pytest.mark.asyncio
    async def test_put_invalidates_previous_version(self) -> None:
        store = InMemoryDocumentStore(scopes={"locks"})
        first = store.put("locks", "lock.json", b"{}")
        second = store.put("locks", "lock.json", b"{}")

        assert first != second
        result = await store.write("locks", "lock.json", b"{}", first, "stale")
        assert result.conflict
