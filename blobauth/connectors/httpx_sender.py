"""Terminal link of a pipeline: hands the signed request to httpx."""

from __future__ import annotations

import logging

import httpx

from blobauth.request import StorageRequest

logger = logging.getLogger("blobauth.connectors.httpx")


class HttpxSender:
    """
    Sends a ``StorageRequest`` through an existing ``httpx.AsyncClient``.

    Timeouts, TLS, pooling and proxies are whatever the injected client was
    built with; the sender adds nothing and retries nothing. Transport errors
    (``httpx.RequestError`` and friends) propagate to the caller as raised.
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def send(self, request: StorageRequest) -> httpx.Response:
        http_request = httpx.Request(
            request.method.upper(),
            request.url,
            headers=request.headers,
            content=request.body,
        )
        logger.debug("Dispatching %s %s", http_request.method, http_request.url.path)
        return await self._client.send(http_request)

    async def close(self) -> None:
        await self._client.aclose()
