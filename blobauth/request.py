"""Outgoing request model consumed and mutated by the policy pipeline."""

from __future__ import annotations

from typing import Mapping, Sequence

import httpx

from blobauth.utils.common import build_headers, get_url_path, get_url_queries, parse_url

HeaderInput = Mapping[str, str] | Sequence[tuple[str, str]] | httpx.Headers


class StorageRequest:
    """
    An HTTP request on its way to the storage service.

    Attributes
    ----------
    method : str
        HTTP verb, stored as given.
    url : httpx.URL
        Absolute target URL. Parsed at construction; an unusable URL raises
        ``ConfigurationError``.
    headers : httpx.Headers
        Case-insensitive multimap of ASCII names and values; anything else
        raises ``ConfigurationError``. Assigning ``headers[name]`` replaces
        every existing entry with that name.
    body : str | bytes | None
        Optional payload.
    """

    def __init__(
        self,
        method: str,
        url: str | httpx.URL,
        headers: HeaderInput | None = None,
        body: str | bytes | None = None,
    ):
        self.method = method
        self.url = parse_url(url)
        self.headers = build_headers(headers)
        self.body = body

    @property
    def url_path(self) -> str:
        return get_url_path(self.url)

    @property
    def url_queries(self) -> dict[str, str]:
        return get_url_queries(self.url)

    def clone(self) -> "StorageRequest":
        """Return an independent copy; header mutations do not leak back."""
        return StorageRequest(
            self.method,
            self.url,
            headers=httpx.Headers(self.headers),
            body=self.body,
        )

    def __repr__(self) -> str:
        return f"<StorageRequest [{self.method.upper()} {self.url}]>"
