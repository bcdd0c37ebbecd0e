"""Request/response logging.

Placed ahead of the credential policy, so each attempt is logged once and the
logged headers never include a signature (the credential policy has not run
yet when the outgoing line is written).
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any

from blobauth.policies.base import BaseRequestPolicy, RequestPolicy, RequestPolicyOptions
from blobauth.request import StorageRequest
from blobauth.utils.logger import bind_request_fields
from blobauth.utils.metrics import metrics
from blobauth.utils.redaction import build_patterns, redact_headers, redact_url

DEFAULT_SLOW_REQUEST_THRESHOLD_MS = 3000

# Error statuses the service returns for ordinary conditional/lease outcomes.
_EXPECTED_ERROR_STATUSES = frozenset({404, 409, 412, 416})


class LoggingPolicy(BaseRequestPolicy):
    def __init__(
        self,
        next_policy: RequestPolicy,
        options: RequestPolicyOptions,
        slow_request_threshold_ms: int = DEFAULT_SLOW_REQUEST_THRESHOLD_MS,
        redaction_patterns: list[re.Pattern] | None = None,
    ):
        super().__init__(next_policy, options)
        self.slow_request_threshold_ms = slow_request_threshold_ms
        self._redaction_patterns = redaction_patterns

    async def send(self, request: StorageRequest) -> Any:
        method = request.method.upper()
        url = redact_url(request.url)
        with bind_request_fields(method=method):
            return await self._send_logged(request, method, url)

    async def _send_logged(self, request: StorageRequest, method: str, url: str) -> Any:
        self._options.log(logging.INFO, "Outgoing request: %s %s", method, url)
        if self._options.should_log(logging.DEBUG):
            self._options.log(
                logging.DEBUG,
                "Request headers: %s",
                redact_headers(request.headers, self._redaction_patterns),
            )

        started = time.monotonic()
        try:
            response = await self._next_policy.send(request)
        except Exception as exc:
            elapsed_ms = (time.monotonic() - started) * 1000
            metrics.request_failed(method, type(exc).__name__)
            self._options.log(
                logging.ERROR,
                "Request failed: %s %s after %.0fms: %s",
                method, url, elapsed_ms, exc,
            )
            raise

        elapsed_ms = (time.monotonic() - started) * 1000
        status = getattr(response, "status_code", None)
        metrics.request_completed(method, status if status is not None else "unknown", elapsed_ms / 1000)

        if status is not None and status >= 400 and status not in _EXPECTED_ERROR_STATUSES:
            level = logging.ERROR
        elif elapsed_ms > self.slow_request_threshold_ms:
            level = logging.WARNING
        else:
            level = logging.INFO
        self._options.log(
            level,
            "Request completed: %s %s status=%s elapsed=%.0fms",
            method, url, status, elapsed_ms,
        )
        return response


class LoggingPolicyFactory:
    def __init__(
        self,
        slow_request_threshold_ms: int = DEFAULT_SLOW_REQUEST_THRESHOLD_MS,
        redacted_headers: list[str] | None = None,
    ):
        self.slow_request_threshold_ms = slow_request_threshold_ms
        self.redaction_patterns = build_patterns(redacted_headers)

    def create(self, next_policy: RequestPolicy, options: RequestPolicyOptions) -> LoggingPolicy:
        return LoggingPolicy(
            next_policy,
            options,
            slow_request_threshold_ms=self.slow_request_threshold_ms,
            redaction_patterns=self.redaction_patterns,
        )
