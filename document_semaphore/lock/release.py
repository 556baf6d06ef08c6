"""Release protocol.

Removes the caller from the key's holder list and writes the document back,
re-reading after every lost write race. Unlike acquisition, release must not
hang: the whole cycle runs under a bounded retry, and running out of attempts
raises the last error to the caller.
"""

from document_semaphore.common.error_codes import LOCK_ERRORS
from document_semaphore.common.exceptions import ScopeNotFoundError
from document_semaphore.common.retry import retry
from document_semaphore.lock.document import LockDocumentManager
from document_semaphore.lock.models import LockParams
from document_semaphore.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


async def release_lock(manager: LockDocumentManager, params: LockParams) -> None:
    """Give up the slot ``params.holder_id`` holds on ``params.lock_key``.

    Releasing a key or holder that is not recorded is a no-op that only logs
    a warning.

    Args:
        manager: Lock document manager for the target document.
        params: Scope, key, holder identity and release retry budget.

    Raises:
        ScopeNotFoundError: If the coordination scope does not exist.
        Exception: The last failure once ``params.release_retries`` is spent.
    """
    try:
        await retry(
            lambda: _release_cycle(manager, params),
            retries=params.release_retries,
            initial_delay=params.release_retry_delay,
            no_retry_on=(ScopeNotFoundError,),
        )
    except Exception as e:
        logger.error(f"{LOCK_ERRORS['LOCK_RELEASE_ERROR']}: {e}")
        raise


async def _release_cycle(manager: LockDocumentManager, params: LockParams) -> None:
    holder_id = params.holder_id
    while True:
        lock_data, version = await retry(
            lambda: manager.fetch_or_initialize(params.scope),
            retries=params.release_retries,
            initial_delay=params.release_retry_delay,
            no_retry_on=(ScopeNotFoundError,),
        )

        entries = lock_data.get(params.lock_key)
        if not entries:
            logger.warning("Lock key not found during release.")
            return

        if holder_id not in entries:
            logger.warning("Run ID not found in lock entries during release.")
            return

        entries.remove(holder_id)
        if not entries:
            del lock_data[params.lock_key]

        if await manager.try_write(
            params.scope, lock_data, version, f"Release lock by {holder_id}"
        ):
            logger.info(f"Lock released by {holder_id}")
            return
        logger.info("Conflict detected during release, retrying...")
