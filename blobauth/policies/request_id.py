"""Stamps every request with a client request id."""

from __future__ import annotations

import uuid
from typing import Any

from blobauth.policies.base import BaseRequestPolicy, RequestPolicy, RequestPolicyOptions
from blobauth.request import StorageRequest
from blobauth.utils.constants import HeaderConstants
from blobauth.utils.logger import bind_request_fields


class UniqueRequestIdPolicy(BaseRequestPolicy):
    """Sets ``x-ms-client-request-id`` unless the caller already did.

    The id is also bound to the request log context for as long as the rest
    of the chain runs, so every log line about the request carries it.
    """

    async def send(self, request: StorageRequest) -> Any:
        request_id = request.headers.get(HeaderConstants.X_MS_CLIENT_REQUEST_ID)
        if not request_id:
            request_id = str(uuid.uuid4())
            request.headers[HeaderConstants.X_MS_CLIENT_REQUEST_ID] = request_id

        with bind_request_fields(client_request_id=request_id):
            return await self._next_policy.send(request)


class UniqueRequestIdPolicyFactory:
    def create(self, next_policy: RequestPolicy, options: RequestPolicyOptions) -> UniqueRequestIdPolicy:
        return UniqueRequestIdPolicy(next_policy, options)
