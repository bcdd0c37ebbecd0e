"""Shared fixtures for blobauth tests."""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timedelta, timezone

import pytest

from blobauth.request import StorageRequest
from blobauth.utils.logger import LIBRARY_LOGGER
from blobauth.utils.metrics import metrics


ACCOUNT_NAME = "myacct"
# 64 raw bytes, base64-encoded the way the portal shows account keys.
ACCOUNT_KEY = base64.b64encode(bytes(range(64))).decode("ascii")


class FakeResponse:
    def __init__(self, status_code: int = 200):
        self.status_code = status_code


class RecordingSender:
    """Terminal link that records what reached it instead of hitting the network."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response if response is not None else FakeResponse()
        self.error = error
        self.requests: list[StorageRequest] = []
        # Snapshot of the headers at the moment each request arrived.
        self.headers_seen: list[dict[str, str]] = []

    async def send(self, request: StorageRequest):
        self.requests.append(request)
        self.headers_seen.append(dict(request.headers.items()))
        if self.error is not None:
            raise self.error
        return self.response


class SteppingClock:
    """Returns a new instant, one second later, on every call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.snapshot(reset=True)
    yield
    metrics.snapshot(reset=True)


@pytest.fixture
def library_logger():
    """The ``blobauth`` logger, restored to its prior state after the test."""
    logger = logging.getLogger(LIBRARY_LOGGER)
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def account_name() -> str:
    return ACCOUNT_NAME


@pytest.fixture
def account_key() -> str:
    return ACCOUNT_KEY


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def list_request() -> StorageRequest:
    return StorageRequest(
        "GET",
        "https://myacct.blob.core.windows.net/mycontainer?restype=container&comp=list",
    )
