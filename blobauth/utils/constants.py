"""Header names and other wire-level constants shared by the policies."""

from __future__ import annotations

LIBRARY_NAME = "blobauth"
LIBRARY_VERSION = "0.1.0"


class HeaderConstants:
    AUTHORIZATION = "Authorization"
    CONTENT_ENCODING = "Content-Encoding"
    CONTENT_LANGUAGE = "Content-Language"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_MD5 = "Content-MD5"
    CONTENT_TYPE = "Content-Type"
    DATE = "Date"
    IF_MATCH = "If-Match"
    IF_MODIFIED_SINCE = "If-Modified-Since"
    IF_NONE_MATCH = "If-None-Match"
    IF_UNMODIFIED_SINCE = "If-Unmodified-Since"
    RANGE = "Range"
    USER_AGENT = "User-Agent"

    PREFIX_FOR_STORAGE = "x-ms-"
    X_MS_CLIENT_REQUEST_ID = "x-ms-client-request-id"
    X_MS_DATE = "x-ms-date"


# Order matters: this is the fixed header section of the SharedKey string-to-sign.
SHARED_KEY_SIGNED_HEADERS: tuple[str, ...] = (
    HeaderConstants.CONTENT_LANGUAGE,
    HeaderConstants.CONTENT_ENCODING,
    HeaderConstants.CONTENT_LENGTH,
    HeaderConstants.CONTENT_MD5,
    HeaderConstants.CONTENT_TYPE,
    HeaderConstants.DATE,
    HeaderConstants.IF_MODIFIED_SINCE,
    HeaderConstants.IF_MATCH,
    HeaderConstants.IF_NONE_MATCH,
    HeaderConstants.IF_UNMODIFIED_SINCE,
    HeaderConstants.RANGE,
)

SHARED_KEY_SCHEME = "SharedKey"
BEARER_SCHEME = "Bearer"
