"""Request authentication pipeline for object storage clients.

Build a pipeline from a credential and a sender, then push requests through it:

    credential = SharedKeyCredential("myaccount", account_key)
    async with httpx.AsyncClient() as client:
        pipeline = new_pipeline(credential, HttpxSender(client))
        response = await pipeline.send(
            StorageRequest("GET", "https://myaccount.blob.core.windows.net/c?restype=container")
        )
"""

from blobauth.config import (
    Settings,
    credential_from_settings,
    logger_from_settings,
    refresher_from_settings,
    settings,
)
from blobauth.connectors import HttpxSender
from blobauth.credentials import (
    AnonymousCredential,
    Credential,
    SharedKeyCredential,
    TokenCredential,
    TokenRefresher,
)
from blobauth.errors import BlobAuthError, ConfigurationError, SigningError, TokenRefreshError
from blobauth.pipeline import Pipeline, new_pipeline
from blobauth.policies import CredentialPolicy, RequestPolicyOptions
from blobauth.request import StorageRequest
from blobauth.utils.constants import LIBRARY_VERSION
from blobauth.utils.logger import setup_logger
from blobauth.utils.metrics import metrics

__version__ = LIBRARY_VERSION

__all__ = [
    "AnonymousCredential",
    "BlobAuthError",
    "ConfigurationError",
    "Credential",
    "CredentialPolicy",
    "HttpxSender",
    "Pipeline",
    "RequestPolicyOptions",
    "Settings",
    "SharedKeyCredential",
    "SigningError",
    "StorageRequest",
    "TokenCredential",
    "TokenRefreshError",
    "TokenRefresher",
    "credential_from_settings",
    "logger_from_settings",
    "metrics",
    "new_pipeline",
    "refresher_from_settings",
    "settings",
    "setup_logger",
]
