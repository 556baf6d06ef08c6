"""Lock document manager.

Owns the read-modify-write cycle against the document store: fetching (and
lazily creating) the shared lock document, and writing it back with a version
check. A version conflict is turned into ``False`` here so the protocols above
can restart their loop instead of handling an exception.
"""

from typing import Dict, List, Optional, Tuple

import orjson
from pydantic import TypeAdapter, ValidationError

from document_semaphore.common.exceptions import (
    DocumentNotFoundError,
    ScopeNotFoundError,
)
from document_semaphore.observability.logger_adaptor import get_logger
from document_semaphore.services.documentstore import DocumentStore

logger = get_logger(__name__)

LockData = Dict[str, List[str]]

_lock_data_adapter = TypeAdapter(LockData)


def parse_document(content: bytes) -> LockData:
    """Decode a lock document.

    Raises:
        ValueError: If the content is not a JSON object of string arrays.
    """
    try:
        return _lock_data_adapter.validate_python(orjson.loads(content), strict=True)
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise ValueError(f"Malformed lock document: {e}") from e


def serialize_document(lock_data: LockData) -> bytes:
    """Encode a lock document, leaving out keys without holders."""
    return orjson.dumps(
        {key: entries for key, entries in lock_data.items() if entries},
        option=orjson.OPT_INDENT_2,
    )


class LockDocumentManager:
    """Reads and writes the shared lock document of one coordination scope.

    Attributes:
        store: Versioned document store holding the lock document.
        document_path: Location of the lock document inside the scope.
    """

    def __init__(self, store: DocumentStore, document_path: str) -> None:
        self.store = store
        self.document_path = document_path

    async def fetch_or_initialize(self, scope: str) -> Tuple[LockData, Optional[str]]:
        """Fetch the lock document, creating an empty one if it is missing.

        Args:
            scope: Coordination scope holding the document.

        Returns:
            Tuple[LockData, Optional[str]]: The document and its version token.

        Raises:
            ScopeNotFoundError: If the scope was never provisioned.
            DocumentStoreError: On any unexpected store failure.
        """
        if not await self.store.scope_exists(scope):
            error = ScopeNotFoundError(scope)
            logger.error(error.message)
            raise error

        while True:
            try:
                document = await self.store.read(scope, self.document_path)
            except DocumentNotFoundError:
                logger.info(
                    f"Lock file not found at {self.document_path} on branch {scope}. "
                    "Creating new lock file."
                )
                await self._initialize(scope)
                continue
            except Exception as e:
                logger.error(f"Error fetching lock file: {e}")
                raise

            try:
                lock_data = parse_document(document.content)
            except ValueError:
                logger.warning("Failed to parse lock file. Reinitializing.")
                lock_data = {}
            return lock_data, document.version

    async def _initialize(self, scope: str) -> None:
        result = await self.store.write(
            scope,
            self.document_path,
            serialize_document({}),
            None,
            f"Initialize lock file at {self.document_path}",
        )
        if result.success:
            logger.info(f"Lock file {self.document_path} created on branch {scope}.")
        else:
            logger.info("Lock file created by another process, retrying...")

    async def try_write(
        self,
        scope: str,
        lock_data: LockData,
        expected_version: Optional[str],
        description: str,
    ) -> bool:
        """Write the lock document if nobody changed it since it was read.

        Args:
            scope: Coordination scope holding the document.
            lock_data: Document to persist.
            expected_version: Version token returned by the last fetch.
            description: Change description (commit message).

        Returns:
            bool: True if written, False if the version check lost a race.

        Raises:
            DocumentStoreError: On any failure other than a version conflict.
        """
        result = await self.store.write(
            scope,
            self.document_path,
            serialize_document(lock_data),
            expected_version,
            description,
        )
        return result.success
