"""Acquire protocol.

Each cycle reads the lock document, checks the caller's slot and either
records the holder, waits for capacity, or starts over after losing a write
race. The loop has no attempt cap: acquisition blocks until a slot frees up or
the process is terminated. Waiters are not queued, so a worker that started
waiting earlier can lose a freed slot to a later one.
"""

import asyncio

from document_semaphore.common.error_codes import LOCK_ERRORS
from document_semaphore.lock.document import LockDocumentManager
from document_semaphore.lock.models import LockParams
from document_semaphore.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


async def acquire_lock(manager: LockDocumentManager, params: LockParams) -> None:
    """Block until ``params.holder_id`` holds a slot of ``params.lock_key``.

    Acquiring again with a holder that is already recorded returns at once
    without touching the document.

    Args:
        manager: Lock document manager for the target document.
        params: Scope, key, holder identity, capacity and polling interval.

    Raises:
        ScopeNotFoundError: If the coordination scope does not exist.
        DocumentStoreError: On any unexpected store failure.
    """
    holder_id = params.holder_id
    while True:
        try:
            lock_data, version = await manager.fetch_or_initialize(params.scope)
        except Exception as e:
            logger.error(f"{LOCK_ERRORS['LOCK_ACQUIRE_ERROR']}: {e}")
            raise

        entries = lock_data.setdefault(params.lock_key, [])

        if holder_id in entries:
            logger.info(f"Lock already acquired by this run ({holder_id}).")
            return

        if len(entries) < params.max_concurrent:
            entries.append(holder_id)
            try:
                updated = await manager.try_write(
                    params.scope, lock_data, version, f"Acquire lock by {holder_id}"
                )
            except Exception as e:
                logger.error(f"{LOCK_ERRORS['LOCK_ACQUIRE_ERROR']}: {e}")
                raise

            if updated:
                logger.info(f"Lock acquired by {holder_id}")
                return
            logger.info("Conflict detected, retrying...")
            continue

        logger.info(
            f"Max concurrency reached ({params.max_concurrent}) for {params.lock_key}, "
            f"waiting {params.polling_interval}s..."
        )
        await asyncio.sleep(params.polling_interval)
