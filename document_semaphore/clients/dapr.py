"""Dapr state store backed document store.

The scope is the name of a Dapr state store component and the path is the
state key. Optimistic concurrency comes from Dapr ETags with first-write-wins
concurrency: a stale ETag, or an absent one for a key that already exists,
is rejected with an ``ABORTED`` or ``FAILED_PRECONDITION`` gRPC status.
"""

from typing import Optional

import grpc
from dapr.clients import DaprClient
from dapr.clients.grpc._state import Concurrency, StateOptions

from document_semaphore.common.exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
)
from document_semaphore.observability.logger_adaptor import get_logger
from document_semaphore.services.documentstore import (
    DocumentStore,
    VersionedDocument,
    WriteResult,
)

logger = get_logger(__name__)

CONFLICT_STATUS_CODES = (grpc.StatusCode.ABORTED, grpc.StatusCode.FAILED_PRECONDITION)


class DaprStateDocumentStore(DocumentStore):
    """Document store on top of a Dapr state store component.

    Example:
        >>> store = DaprStateDocumentStore()
        >>> document = await store.read("statestore", "deploy-lock")
    """

    def __init__(self, dapr_address: Optional[str] = None) -> None:
        self.dapr_address = dapr_address

    def _client(self) -> DaprClient:
        if self.dapr_address:
            return DaprClient(address=self.dapr_address)
        return DaprClient()

    async def scope_exists(self, scope: str) -> bool:
        try:
            with self._client() as client:
                metadata = client.get_metadata()
        except Exception as e:
            logger.error(f"Failed to read Dapr metadata: {e}")
            raise DocumentStoreError(f"Failed to read Dapr metadata: {e}") from e

        for component in getattr(metadata, "registered_components", []):
            if component.name == scope and component.type.startswith("state."):
                return True
        return False

    async def read(self, scope: str, path: str) -> VersionedDocument:
        try:
            with self._client() as client:
                state = client.get_state(store_name=scope, key=path)
        except Exception as e:
            logger.error(f"Failed to get state {path} from {scope}: {e}")
            raise DocumentStoreError(
                f"Failed to get state {path} from {scope}: {e}"
            ) from e

        if not state.data:
            raise DocumentNotFoundError(scope, path)
        return VersionedDocument(content=state.data, version=state.etag)

    async def write(
        self,
        scope: str,
        path: str,
        content: bytes,
        version: Optional[str],
        message: str,
    ) -> WriteResult:
        logger.debug(f"Saving state {path} in {scope}: {message}")
        try:
            with self._client() as client:
                client.save_state(
                    store_name=scope,
                    key=path,
                    value=content,
                    etag=version,
                    options=StateOptions(concurrency=Concurrency.first_write),
                )
        except grpc.RpcError as e:
            if e.code() in CONFLICT_STATUS_CODES:
                return WriteResult.rejected()
            logger.error(f"Failed to save state {path} in {scope}: {e}")
            raise DocumentStoreError(
                f"Failed to save state {path} in {scope}: {e}"
            ) from e

        # save_state does not report the new ETag; the next read picks it up
        return WriteResult.applied()
