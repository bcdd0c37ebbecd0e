"""SharedKey request signing.

Implements the canonicalization used by the storage service to verify a
SharedKey ``Authorization`` header:

    StringToSign = VERB + "\\n" +
                   Content-Language + "\\n" + ... + Range + "\\n" +
                   CanonicalizedHeaders +
                   CanonicalizedResource

See https://learn.microsoft.com/rest/api/storageservices/authorize-with-shared-key
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable

from blobauth.policies.base import RequestPolicy, RequestPolicyOptions
from blobauth.policies.credential import CredentialPolicy
from blobauth.request import StorageRequest
from blobauth.utils.common import decode_query_value, format_rfc1123, utc_now
from blobauth.utils.constants import (
    SHARED_KEY_SCHEME,
    SHARED_KEY_SIGNED_HEADERS,
    HeaderConstants,
)
from blobauth.utils.metrics import metrics

if TYPE_CHECKING:
    from blobauth.credentials.shared_key import SharedKeyCredential


class SharedKeyCredentialPolicy(CredentialPolicy):
    """Signs each request with the account key of a ``SharedKeyCredential``."""

    def __init__(
        self,
        next_policy: RequestPolicy,
        options: RequestPolicyOptions,
        factory: "SharedKeyCredential",
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__(next_policy, options)
        self.factory = factory
        self._clock = clock

    def sign_request(self, request: StorageRequest) -> StorageRequest:
        request.headers[HeaderConstants.X_MS_DATE] = format_rfc1123(self._clock())

        content_length = _body_length(request.body)
        if content_length is not None:
            request.headers[HeaderConstants.CONTENT_LENGTH] = str(content_length)

        string_to_sign = self.string_to_sign(request)
        signature = self.factory.compute_hmac_sha256(string_to_sign)
        request.headers[HeaderConstants.AUTHORIZATION] = (
            f"{SHARED_KEY_SCHEME} {self.factory.account_name}:{signature}"
        )

        self._options.log(logging.DEBUG, "SharedKey string to sign: %r", string_to_sign)
        metrics.request_signed(SHARED_KEY_SCHEME, request.method)
        return request

    def log_fields(self) -> dict[str, str]:
        return {"auth_scheme": SHARED_KEY_SCHEME, "account_name": self.factory.account_name}

    def string_to_sign(self, request: StorageRequest) -> str:
        lines = [request.method.upper()]
        lines.extend(self.get_header_value_to_sign(request, name) for name in SHARED_KEY_SIGNED_HEADERS)
        return (
            "\n".join(lines)
            + "\n"
            + self.get_canonicalized_headers_string(request)
            + self.get_canonicalized_resource_string(request)
        )

    @staticmethod
    def get_header_value_to_sign(request: StorageRequest, header_name: str) -> str:
        value = request.headers.get(header_name)
        if not value:
            return ""

        # Since service version 2015-02-21 a zero Content-Length is signed as empty.
        if header_name == HeaderConstants.CONTENT_LENGTH and value == "0":
            return ""

        return value

    @staticmethod
    def get_canonicalized_headers_string(request: StorageRequest) -> str:
        """
        Build the CanonicalizedHeaders section.

        Every ``x-ms-`` header, name lower-cased, sorted by name, one entry per
        name (the first after sorting wins), each line ``name:value\\n``.
        """
        prefix = HeaderConstants.PREFIX_FOR_STORAGE
        encoding = request.headers.encoding
        storage_headers = []
        for raw_name, raw_value in request.headers.raw:
            name = raw_name.decode(encoding).lower()
            if name.startswith(prefix):
                storage_headers.append((name, raw_value.decode(encoding)))
        # Stable sort: equal names keep their insertion order.
        storage_headers.sort(key=lambda item: item[0])

        canonicalized = []
        previous_name = None
        for name, value in storage_headers:
            if name == previous_name:
                continue
            previous_name = name
            canonicalized.append(f"{name.rstrip()}:{value.lstrip()}\n")

        return "".join(canonicalized)

    def get_canonicalized_resource_string(self, request: StorageRequest) -> str:
        path = request.url_path or "/"
        canonicalized = f"/{self.factory.account_name}{path}"

        queries = request.url_queries
        for key in sorted(queries):
            canonicalized += f"\n{key}:{decode_query_value(queries[key])}"

        return canonicalized


def _body_length(body: str | bytes | None) -> int | None:
    """Length in bytes of a non-empty body, ``None`` otherwise."""
    if not body:
        return None
    if isinstance(body, str):
        return len(body.encode("utf-8"))
    return len(body)
