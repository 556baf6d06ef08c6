"""GitHub-backed document store.

The lock document is a file on a dedicated branch. The contents API hands out
the blob SHA on every read and refuses a write whose SHA is stale with
``409 Conflict``, which is all the optimistic concurrency control needed.
"""

import base64
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from document_semaphore.common.exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
)
from document_semaphore.constants import (
    GITHUB_API_URL,
    GITHUB_REQUEST_TIMEOUT_SECONDS,
)
from document_semaphore.observability.logger_adaptor import get_logger
from document_semaphore.services.documentstore import (
    DocumentStore,
    VersionedDocument,
    WriteResult,
)

logger = get_logger(__name__)


class GitHubDocumentStore(DocumentStore):
    """Document store on top of the GitHub repository contents API.

    The scope is a branch name and the path is a file path in the repository.

    Attributes:
        owner: Repository owner (user or organisation).
        repo: Repository name.

    Example:
        >>> async with GitHubDocumentStore("octo", "infra", token) as store:
        ...     document = await store.read("locks", "locks/deploy.json")
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        token: Optional[str] = None,
        api_url: str = GITHUB_API_URL,
        timeout: float = GITHUB_REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.owner = owner
        self.repo = repo

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubDocumentStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _repo_url(self, suffix: str) -> str:
        return f"/repos/{quote(self.owner)}/{quote(self.repo)}/{suffix}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"GitHub request {method} {url} failed: {e}")
            raise DocumentStoreError(
                f"GitHub request {method} {url} failed: {e}"
            ) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        try:
            detail = response.json().get("message", response.text)
        except ValueError:
            detail = response.text
        raise DocumentStoreError(
            f"GitHub API error while {action}: {response.status_code} {detail}",
            status_code=response.status_code,
        )

    async def scope_exists(self, scope: str) -> bool:
        response = await self._request(
            "GET", self._repo_url(f"branches/{quote(scope, safe='')}")
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        self._raise_for_status(response, f"checking branch {scope}")
        return True

    async def read(self, scope: str, path: str) -> VersionedDocument:
        response = await self._request(
            "GET",
            self._repo_url(f"contents/{quote(path)}"),
            params={"ref": scope},
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            raise DocumentNotFoundError(scope, path)
        self._raise_for_status(response, f"fetching {path}")

        data = response.json()
        if not isinstance(data, dict) or "content" not in data:
            raise DocumentStoreError(
                "Unexpected response from GitHub API: content not found."
            )

        return VersionedDocument(
            content=base64.b64decode(data["content"]), version=data["sha"]
        )

    async def write(
        self,
        scope: str,
        path: str,
        content: bytes,
        version: Optional[str],
        message: str,
    ) -> WriteResult:
        payload: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": scope,
        }
        if version is not None:
            payload["sha"] = version

        response = await self._request(
            "PUT", self._repo_url(f"contents/{quote(path)}"), json=payload
        )

        if response.status_code == httpx.codes.CONFLICT:
            return WriteResult.rejected()
        # Creating over an existing file is reported as 422 "sha wasn't supplied"
        if version is None and response.status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            return WriteResult.rejected()
        self._raise_for_status(response, f"writing {path}")

        new_version = (response.json().get("content") or {}).get("sha")
        return WriteResult.applied(new_version)
