"""Credential for requests that need no ``Authorization`` header."""

from __future__ import annotations

from blobauth.credentials.base import Credential
from blobauth.policies.anonymous import AnonymousCredentialPolicy
from blobauth.policies.base import RequestPolicy, RequestPolicyOptions


class AnonymousCredential(Credential):
    """Use with SAS-signed URLs or containers that allow public read access."""

    def create(
        self, next_policy: RequestPolicy, options: RequestPolicyOptions
    ) -> AnonymousCredentialPolicy:
        return AnonymousCredentialPolicy(next_policy, options)
