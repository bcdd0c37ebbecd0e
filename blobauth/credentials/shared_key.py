"""Account name + account key credential."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging

from blobauth.credentials.base import Credential
from blobauth.errors import ConfigurationError, SigningError
from blobauth.policies.base import RequestPolicy, RequestPolicyOptions
from blobauth.policies.shared_key import SharedKeyCredentialPolicy

logger = logging.getLogger("blobauth.credentials.shared_key")


class SharedKeyCredential(Credential):
    """Signs requests with a storage account's shared key.

    Parameters
    ----------
    account_name : str
        Storage account name; it becomes part of every canonicalized resource.
    account_key : str
        The account key exactly as the portal shows it (base64). It is decoded
        once here; a malformed value raises ``ConfigurationError``.
    """

    def __init__(self, account_name: str, account_key: str):
        if not account_name:
            raise ConfigurationError("Storage account name must not be empty")
        if not account_key:
            raise ConfigurationError("Storage account key must not be empty")

        try:
            self._account_key = base64.b64decode(account_key, validate=True)
        except (binascii.Error, ValueError, TypeError) as exc:
            raise ConfigurationError(
                f"Account key for '{account_name}' is not valid base64: {exc}"
            ) from exc

        self._account_name = account_name
        logger.debug("SharedKeyCredential created for account %s", account_name)

    @property
    def account_name(self) -> str:
        return self._account_name

    def create(
        self, next_policy: RequestPolicy, options: RequestPolicyOptions
    ) -> SharedKeyCredentialPolicy:
        return SharedKeyCredentialPolicy(next_policy, options, self)

    def compute_hmac_sha256(self, string_to_sign: str) -> str:
        """Return base64(HMAC-SHA256(account_key, string_to_sign))."""
        try:
            digest = hmac.new(
                self._account_key, string_to_sign.encode("utf-8"), hashlib.sha256
            ).digest()
        except Exception as exc:
            raise SigningError(f"HMAC-SHA256 computation failed: {exc}") from exc
        return base64.b64encode(digest).decode("ascii")

    def __repr__(self) -> str:
        return f"SharedKeyCredential(account_name={self._account_name!r})"
