from contextlib import asynccontextmanager
from typing import AsyncIterator

from document_semaphore.lock.acquire import acquire_lock
from document_semaphore.lock.document import LockDocumentManager
from document_semaphore.lock.models import LockParams
from document_semaphore.lock.release import release_lock


@asynccontextmanager
async def hold_lock(
    manager: LockDocumentManager, params: LockParams
) -> AsyncIterator[LockParams]:
    """Hold a semaphore slot for the duration of the ``async with`` block.

    The slot is released when the block exits, including when it raises.

    Example:
        ```python
        async with hold_lock(manager, params):
            await deploy()
        ```
    """
    await acquire_lock(manager, params)
    try:
        yield params
    finally:
        await release_lock(manager, params)
