"""Credentials: factories for the policy that authenticates requests."""

from blobauth.credentials.anonymous import AnonymousCredential
from blobauth.credentials.base import Credential
from blobauth.credentials.refresher import TokenRefresher
from blobauth.credentials.shared_key import SharedKeyCredential
from blobauth.credentials.token import TokenCredential

__all__ = [
    "AnonymousCredential",
    "Credential",
    "SharedKeyCredential",
    "TokenCredential",
    "TokenRefresher",
]
