"""Request policies: the links of a request pipeline."""

from blobauth.policies.anonymous import AnonymousCredentialPolicy
from blobauth.policies.base import (
    BaseRequestPolicy,
    RequestPolicy,
    RequestPolicyFactory,
    RequestPolicyOptions,
)
from blobauth.policies.credential import CredentialPolicy
from blobauth.policies.logging_policy import LoggingPolicy, LoggingPolicyFactory
from blobauth.policies.request_id import UniqueRequestIdPolicy, UniqueRequestIdPolicyFactory
from blobauth.policies.shared_key import SharedKeyCredentialPolicy
from blobauth.policies.telemetry import TelemetryPolicy, TelemetryPolicyFactory
from blobauth.policies.token import TokenCredentialPolicy

__all__ = [
    "AnonymousCredentialPolicy",
    "BaseRequestPolicy",
    "CredentialPolicy",
    "LoggingPolicy",
    "LoggingPolicyFactory",
    "RequestPolicy",
    "RequestPolicyFactory",
    "RequestPolicyOptions",
    "SharedKeyCredentialPolicy",
    "TelemetryPolicy",
    "TelemetryPolicyFactory",
    "TokenCredentialPolicy",
    "UniqueRequestIdPolicy",
    "UniqueRequestIdPolicyFactory",
]
