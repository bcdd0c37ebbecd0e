"""Bearer token signing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from blobauth.policies.base import RequestPolicy, RequestPolicyOptions
from blobauth.policies.credential import CredentialPolicy
from blobauth.request import StorageRequest
from blobauth.utils.constants import BEARER_SCHEME, HeaderConstants
from blobauth.utils.metrics import metrics

if TYPE_CHECKING:
    from blobauth.credentials.token import TokenCredential


class TokenCredentialPolicy(CredentialPolicy):
    """Sets ``Authorization: Bearer <token>`` from a ``TokenCredential``.

    The token is read from the credential on every call and never cached here,
    so a rotation is picked up by the next request that reaches this policy.
    """

    def __init__(
        self,
        next_policy: RequestPolicy,
        options: RequestPolicyOptions,
        factory: "TokenCredential",
    ):
        super().__init__(next_policy, options)
        self.factory = factory

    def sign_request(self, request: StorageRequest) -> StorageRequest:
        token = self.factory.token
        request.headers[HeaderConstants.AUTHORIZATION] = f"{BEARER_SCHEME} {token}"
        metrics.request_signed(BEARER_SCHEME, request.method)
        return request

    def log_fields(self) -> dict[str, str]:
        return {"auth_scheme": BEARER_SCHEME}
