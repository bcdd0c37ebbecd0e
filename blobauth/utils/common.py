"""URL and date helpers used while canonicalizing requests."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from urllib.parse import unquote

import httpx

from blobauth.errors import ConfigurationError


def parse_url(url: str | httpx.URL) -> httpx.URL:
    """Parse *url* into an absolute ``httpx.URL``.

    Raises ``ConfigurationError`` when the value cannot be parsed or is not
    absolute (missing scheme or host).
    """
    try:
        parsed = url if isinstance(url, httpx.URL) else httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigurationError(f"Invalid request URL {url!r}: {exc}") from exc

    if not parsed.scheme or not parsed.host:
        raise ConfigurationError(f"Request URL must be absolute, got {url!r}")
    return parsed


def get_url_path(url: httpx.URL) -> str:
    """Return the percent-encoded path of *url* (``""`` when empty)."""
    return url.raw_path.split(b"?", 1)[0].decode("ascii")


def get_url_queries(url: httpx.URL) -> dict[str, str]:
    """Split the raw query string into ``{key: raw_value}``.

    Keys and values are left encoded. A key given more than once keeps its
    last value.
    """
    query = url.query.decode("ascii")
    queries: dict[str, str] = {}
    if not query:
        return queries

    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        queries[key] = value
    return queries


def build_headers(headers) -> httpx.Headers:
    """Wrap *headers* in a case-insensitive ``httpx.Headers`` multimap.

    Names and values must be ASCII; anything else raises ``ConfigurationError``.
    """
    try:
        return httpx.Headers(headers)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid request headers: {exc}") from exc


def decode_query_value(value: str) -> str:
    """Percent-decode a query value. ``+`` is kept literally.

    Escapes that do not decode as UTF-8 raise ``ConfigurationError``. A lone
    ``%`` never gets here: ``httpx.URL`` has already re-encoded it as ``%25``.
    """
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as exc:
        raise ConfigurationError("Percent-encoded query value is not valid UTF-8") from exc


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_rfc1123(dt: datetime) -> str:
    """Format *dt* as an RFC-1123 HTTP date, e.g. ``Sun, 06 Nov 1994 08:49:37 GMT``."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)
