"""Unit tests for the hold_lock context manager."""

import pytest

from document_semaphore.lock.context import hold_lock


class TestHoldLock:
    @pytest.mark.asyncio
    async def test_holds_slot_inside_block(
        self, store, manager, make_params, stored_document
    ) -> None:
        params = make_params("r1")

        async with hold_lock(manager, params) as held:
            assert held is params
            assert stored_document(store) == {"X": ["r1"]}

        assert stored_document(store) == {}

    @pytest.mark.asyncio
    async def test_releases_when_block_raises(
        self, store, manager, make_params, stored_document
    ) -> None:
        with pytest.raises(RuntimeError, match="deploy failed"):
            async with hold_lock(manager, make_params("r1")):
                raise RuntimeError("deploy failed")

        assert stored_document(store) == {}
