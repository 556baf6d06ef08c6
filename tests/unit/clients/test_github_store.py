"""Unit tests for the GitHub contents API document store."""

import base64
import json
from typing import Callable, List

import httpx
import pytest

from document_semaphore.clients.github import GitHubDocumentStore
from document_semaphore.common.exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
)

API_URL = "https://api.github.test"


def make_store(
    handler: Callable[[httpx.Request], httpx.Response], token: str = "secret"
) -> GitHubDocumentStore:
    return GitHubDocumentStore(
        owner="octo",
        repo="infra",
        token=token,
        api_url=API_URL,
        transport=httpx.MockTransport(handler),
    )


def content_response(content: bytes, sha: str) -> httpx.Response:
    # the contents API wraps base64 at 60 characters
    encoded = base64.b64encode(content).decode("ascii")
    wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
    return httpx.Response(200, json={"type": "file", "content": wrapped, "sha": sha})


class TestScopeExists:
    @pytest.mark.asyncio
    async def test_existing_branch(self) -> None:
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"name": "locks"})

        async with make_store(handler) as store:
            assert await store.scope_exists("locks")

        assert requests[0].method == "GET"
        assert requests[0].url.path == "/repos/octo/infra/branches/locks"
        assert requests[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_missing_branch(self) -> None:
        async with make_store(lambda request: httpx.Response(404)) as store:
            assert not await store.scope_exists("locks")

    @pytest.mark.asyncio
    async def test_unexpected_status_raises(self) -> None:
        async with make_store(
            lambda request: httpx.Response(500, json={"message": "oops"})
        ) as store:
            with pytest.raises(DocumentStoreError, match="oops") as exc_info:
                await store.scope_exists("locks")

        assert exc_info.value.status_code == 500


class TestRead:
    @pytest.mark.asyncio
    async def test_decodes_content_and_sha(self) -> None:
        payload = json.dumps({"X": ["workflow:1:job" * 10]}).encode()
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return content_response(payload, "abc123")

        async with make_store(handler) as store:
            document = await store.read("locks", "locks/deploy.json")

        assert document.content == payload
        assert document.version == "abc123"
        assert requests[0].url.path == "/repos/octo/infra/contents/locks/deploy.json"
        assert requests[0].url.params["ref"] == "locks"

    @pytest.mark.asyncio
    async def test_missing_file(self) -> None:
        async with make_store(lambda request: httpx.Response(404)) as store:
            with pytest.raises(DocumentNotFoundError):
                await store.read("locks", "lock.json")

    @pytest.mark.asyncio
    async def test_directory_listing_is_rejected(self) -> None:
        async with make_store(lambda request: httpx.Response(200, json=[])) as store:
            with pytest.raises(DocumentStoreError, match="content not found"):
                await store.read("locks", "locks")

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_store(handler) as store:
            with pytest.raises(DocumentStoreError, match="connection refused"):
                await store.read("locks", "lock.json")


class TestWrite:
    @pytest.mark.asyncio
    async def test_versioned_write(self) -> None:
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"content": {"sha": "def456"}})

        async with make_store(handler) as store:
            result = await store.write(
                "locks", "lock.json", b'{"X": ["r1"]}', "abc123", "Acquire lock by r1"
            )

        assert result.success
        assert result.version == "def456"
        body = json.loads(requests[0].content)
        assert requests[0].method == "PUT"
        assert body["sha"] == "abc123"
        assert body["branch"] == "locks"
        assert body["message"] == "Acquire lock by r1"
        assert base64.b64decode(body["content"]) == b'{"X": ["r1"]}'

    @pytest.mark.asyncio
    async def test_create_omits_sha(self) -> None:
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json={"content": {"sha": "new"}})

        async with make_store(handler) as store:
            result = await store.write("locks", "lock.json", b"{}", None, "init")

        assert result.success
        assert "sha" not in json.loads(requests[0].content)

    @pytest.mark.asyncio
    async def test_stale_sha_is_a_conflict(self) -> None:
        async with make_store(lambda request: httpx.Response(409)) as store:
            result = await store.write("locks", "lock.json", b"{}", "stale", "update")

        assert not result.success
        assert result.conflict

    @pytest.mark.asyncio
    async def test_create_over_existing_file_is_a_conflict(self) -> None:
        async with make_store(
            lambda request: httpx.Response(
                422, json={"message": "Invalid request. \"sha\" wasn't supplied."}
            )
        ) as store:
            result = await store.write("locks", "lock.json", b"{}", None, "init")

        assert result.conflict

    @pytest.mark.asyncio
    async def test_validation_error_with_sha_raises(self) -> None:
        async with make_store(
            lambda request: httpx.Response(422, json={"message": "Invalid request."})
        ) as store:
            with pytest.raises(DocumentStoreError, match="Invalid request"):
                await store.write("locks", "lock.json", b"{}", "abc", "update")

    @pytest.mark.asyncio
    async def test_forbidden_raises(self) -> None:
        async with make_store(
            lambda request: httpx.Response(403, json={"message": "Resource not accessible"})
        ) as store:
            with pytest.raises(DocumentStoreError) as exc_info:
                await store.write("locks", "lock.json", b"{}", "abc", "update")

        assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_no_authorization_header_without_token() -> None:
    requests: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={})

    async with make_store(handler, token="") as store:
        await store.scope_exists("locks")

    assert "Authorization" not in requests[0].headers
