"""Background bearer token rotation.

The refresher is the external actor that keeps a ``TokenCredential`` fresh.
It runs as its own asyncio.Task and does one thing every ``interval``
seconds: call ``fetch_token`` and assign the result to ``credential.token``.
In-flight requests are never blocked; whichever of them reads the token after
the assignment picks up the new value.

Usage:
    refresher = TokenRefresher(credential, fetch_token, interval=45 * 60)
    refresher.start()
    try:
        ...send requests...
    finally:
        await refresher.stop()

or ``async with TokenRefresher(...):``.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from contextlib import suppress
from typing import Awaitable, Callable, Union

from blobauth.credentials.token import TokenCredential
from blobauth.errors import TokenRefreshError

logger = logging.getLogger("blobauth.credentials.refresher")

TokenFetcher = Callable[[], Union[str, Awaitable[str]]]


class TokenRefresher:
    def __init__(self, credential: TokenCredential, fetch_token: TokenFetcher, interval: float):
        if interval <= 0:
            raise ValueError("Token refresh interval must be positive")
        self.credential = credential
        self.fetch_token = fetch_token
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> str:
        """Fetch a token and install it on the credential.

        On failure the credential keeps its current token and
        ``TokenRefreshError`` is raised.
        """
        try:
            token = self.fetch_token()
            if inspect.isawaitable(token):
                token = await token
        except Exception as exc:
            logger.error("Failed to fetch bearer token: %s", exc)
            raise TokenRefreshError(str(exc)) from exc

        if not isinstance(token, str) or not token:
            raise TokenRefreshError("token fetcher returned an empty value")

        self.credential.token = token
        logger.info("Bearer token refreshed")
        return token

    async def _loop(self) -> None:
        logger.debug("Token refresher started (interval=%ss)", self.interval)
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("Token refresh error (will retry next interval)", exc_info=True)

    def start(self) -> None:
        """Launch the refresh loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.debug("Token refresher stopped")

    async def __aenter__(self) -> "TokenRefresher":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
