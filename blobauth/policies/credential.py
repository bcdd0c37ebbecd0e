"""Base class for policies that attach credentials to a request."""

from __future__ import annotations

from typing import Any

from blobauth.policies.base import BaseRequestPolicy
from blobauth.request import StorageRequest
from blobauth.utils.logger import bind_request_fields


class CredentialPolicy(BaseRequestPolicy):
    """Signs the request, then forwards it exactly once.

    Subclasses override ``sign_request``. The default implementation returns
    the request unchanged, so this class can be used directly wherever a
    pass-through link is needed.
    """

    async def send(self, request: StorageRequest) -> Any:
        with bind_request_fields(**self.log_fields()):
            signed = self.sign_request(request)
            return await self._next_policy.send(signed)

    def sign_request(self, request: StorageRequest) -> StorageRequest:
        return request

    def log_fields(self) -> dict[str, str]:
        """Fields bound to the request log context while this policy runs."""
        return {}
