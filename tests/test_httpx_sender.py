"""End-to-end tests through a real httpx client with a mock transport."""

from __future__ import annotations

import base64
import hashlib
import hmac

import httpx
import pytest

from blobauth.config import Settings
from blobauth.connectors import HttpxSender
from blobauth.credentials import SharedKeyCredential, TokenCredential
from blobauth.pipeline import new_pipeline
from blobauth.policies import RequestPolicyOptions
from blobauth.request import StorageRequest

from conftest import ACCOUNT_KEY


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpxSender:

    @pytest.mark.asyncio
    async def test_shared_key_signature_verifies_on_the_wire(self):
        credential = SharedKeyCredential("myacct", ACCOUNT_KEY)
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(201)

        async with _client(handler) as client:
            pipeline = new_pipeline(credential, HttpxSender(client), config=Settings(_env_file=None))
            response = await pipeline.send(
                StorageRequest(
                    "PUT",
                    "https://myacct.blob.core.windows.net/c/b.txt",
                    headers={"x-ms-blob-type": "BlockBlob", "Content-Type": "text/plain; charset=utf-8"},
                    body="grüße",
                )
            )

        assert response.status_code == 201
        wire = captured[0]
        assert wire.content == "grüße".encode("utf-8")
        assert wire.headers["content-length"] == str(len(wire.content))

        # Recompute the signature from what actually went over the wire.
        replay = StorageRequest(wire.method, wire.url, headers=wire.headers)
        policy = credential.create(None, RequestPolicyOptions())
        digest = hmac.new(
            base64.b64decode(ACCOUNT_KEY),
            policy.string_to_sign(replay).encode("utf-8"),
            hashlib.sha256,
        ).digest()
        assert wire.headers["authorization"] == f"SharedKey myacct:{base64.b64encode(digest).decode()}"

    @pytest.mark.asyncio
    async def test_bearer_token_on_the_wire(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["authorization"])
            return httpx.Response(200)

        credential = TokenCredential("first")
        async with _client(handler) as client:
            pipeline = new_pipeline(credential, HttpxSender(client), config=Settings(_env_file=None))
            request = StorageRequest("GET", "https://myacct.blob.core.windows.net/c?restype=container")
            await pipeline.send(request)
            credential.token = "second"
            await pipeline.send(request)

        assert seen == ["Bearer first", "Bearer second"]

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            pipeline = new_pipeline(TokenCredential("t"), HttpxSender(client), config=Settings(_env_file=None))
            with pytest.raises(httpx.ConnectError):
                await pipeline.send(StorageRequest("GET", "https://myacct.blob.core.windows.net/c"))
