"""Exception types raised by the authentication layer."""

from __future__ import annotations


class BlobAuthError(Exception):
    """Base class for every error raised by blobauth."""


class ConfigurationError(BlobAuthError):
    """Invalid credential material or request target.

    Raised synchronously, at construction time or before the first signing
    attempt. Never retried.
    """


class SigningError(BlobAuthError):
    """The HMAC primitive failed while signing a request."""


class TokenRefreshError(BlobAuthError):
    def __init__(self, message: str):
        super().__init__(f"Token refresh failed: {message}")
