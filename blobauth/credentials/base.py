"""Credential capability: a factory for credential policies."""

from __future__ import annotations

from abc import ABC, abstractmethod

from blobauth.policies.base import RequestPolicy, RequestPolicyOptions
from blobauth.policies.credential import CredentialPolicy


class Credential(ABC):
    """Abstract credential.

    A credential is a ``RequestPolicyFactory``: ``create`` has no side
    effects and may be called any number of times. Every policy it returns is
    independent but reads the same secret or token source, so one credential
    can back several pipelines.
    """

    @abstractmethod
    def create(self, next_policy: RequestPolicy, options: RequestPolicyOptions) -> CredentialPolicy:
        """Build the credential policy that forwards to *next_policy*."""
