"""User-Agent telemetry."""

from __future__ import annotations

import platform
from typing import Any

from blobauth.policies.base import BaseRequestPolicy, RequestPolicy, RequestPolicyOptions
from blobauth.request import StorageRequest
from blobauth.utils.constants import LIBRARY_NAME, LIBRARY_VERSION, HeaderConstants


def build_user_agent(prefix: str | None = None) -> str:
    """E.g. ``myapp/1.2 blobauth/0.1.0 Python/3.12.1 (Linux 6.1.0)``."""
    parts = [
        f"{LIBRARY_NAME}/{LIBRARY_VERSION}",
        f"Python/{platform.python_version()}",
        f"({platform.system()} {platform.release()})",
    ]
    if prefix:
        parts.insert(0, prefix.strip())
    return " ".join(parts)


class TelemetryPolicy(BaseRequestPolicy):
    """Sets the ``User-Agent`` header when the caller has not set one."""

    def __init__(self, next_policy: RequestPolicy, options: RequestPolicyOptions, user_agent: str):
        super().__init__(next_policy, options)
        self.user_agent = user_agent

    async def send(self, request: StorageRequest) -> Any:
        if HeaderConstants.USER_AGENT not in request.headers:
            request.headers[HeaderConstants.USER_AGENT] = self.user_agent
        return await self._next_policy.send(request)


class TelemetryPolicyFactory:
    """Builds ``TelemetryPolicy`` links; the user agent is computed once."""

    def __init__(self, user_agent_prefix: str | None = None):
        self.user_agent = build_user_agent(user_agent_prefix)

    def create(self, next_policy: RequestPolicy, options: RequestPolicyOptions) -> TelemetryPolicy:
        return TelemetryPolicy(next_policy, options, self.user_agent)
