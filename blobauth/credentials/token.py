"""Rotatable bearer token credential."""

from __future__ import annotations

from threading import Lock

from blobauth.credentials.base import Credential
from blobauth.errors import ConfigurationError
from blobauth.policies.base import RequestPolicy, RequestPolicyOptions
from blobauth.policies.token import TokenCredentialPolicy


class TokenCredential(Credential):
    """Holds an OAuth bearer token that the owner may replace at any time.

    Assign a renewed value to ``token`` (directly, or through a
    ``TokenRefresher``) before the old one expires. Policies read the property
    on every request and never keep a copy, so the next request signed after
    the assignment uses the new value. A request that already read the old
    value is sent with it.

    Reads are lock-free; writes replace the whole string reference under a
    lock, so a reader sees either the previous or the new token.

    Example::

        credential = TokenCredential("initial-token")
        pipeline = new_pipeline(credential, HttpxSender(client))
        ...
        credential.token = "renewed-token"
    """

    def __init__(self, token: str):
        self._lock = Lock()
        self._token = _validate_token(token)

    @property
    def token(self) -> str:
        return self._token

    @token.setter
    def token(self, value: str) -> None:
        value = _validate_token(value)
        with self._lock:
            self._token = value

    def create(self, next_policy: RequestPolicy, options: RequestPolicyOptions) -> TokenCredentialPolicy:
        return TokenCredentialPolicy(next_policy, options, self)

    def __repr__(self) -> str:
        return "TokenCredential(token=***)"


def _validate_token(token: str) -> str:
    if not isinstance(token, str) or not token:
        raise ConfigurationError("Bearer token must be a non-empty string")
    return token
