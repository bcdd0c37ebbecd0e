"""
Redaction utilities for keeping credentials out of request logs.

Header names are matched against case-insensitive patterns; extra names can be
supplied per pipeline (see ``LoggingPolicyFactory``). Shared access signature
query values (``sig``) are masked in logged URLs.
"""
import re
from typing import Any

import httpx


# Default sensitive header patterns (case-insensitive)
DEFAULT_SENSITIVE_PATTERNS = [
    re.compile(r"^.*authorization.*$", re.IGNORECASE),
    re.compile(r"^.*token.*$", re.IGNORECASE),
    re.compile(r"^.*api[_-]?key.*$", re.IGNORECASE),
    re.compile(r"^.*account[_-]?key.*$", re.IGNORECASE),
    re.compile(r"^.*secret.*$", re.IGNORECASE),
    re.compile(r"^.*credential.*$", re.IGNORECASE),
    re.compile(r"^.*cookie.*$", re.IGNORECASE),
    re.compile(r"^x-ms-encryption-key$", re.IGNORECASE),
]

SENSITIVE_QUERY_PARAMS = frozenset({"sig"})

REDACTION_PLACEHOLDER = "***REDACTED***"


def build_patterns(extra_fields: list[str] | None = None) -> list[re.Pattern]:
    """
    Build a combined list of redaction patterns from defaults and extra header names.

    Args:
        extra_fields: Additional header name patterns. Each entry is treated as a
                      regex pattern (case-insensitive). Plain strings are
                      auto-wrapped in .*<pattern>.* for substring matching.

    Returns:
        Combined list of compiled regex patterns.
    """
    patterns = list(DEFAULT_SENSITIVE_PATTERNS)
    if extra_fields:
        for field in extra_fields:
            try:
                # If it looks like a regex (has special chars), use as-is
                if any(c in field for c in r".*+?[](){}^$|\\"):
                    patterns.append(re.compile(field, re.IGNORECASE))
                else:
                    # Plain header name: match as substring
                    patterns.append(re.compile(rf"^.*{re.escape(field)}.*$", re.IGNORECASE))
            except re.error:
                # Invalid regex: skip this pattern
                continue
    return patterns


def _is_sensitive_key(key: str, patterns: list[re.Pattern] | None = None) -> bool:
    """Check if a header name matches any sensitive patterns."""
    check_patterns = patterns if patterns is not None else DEFAULT_SENSITIVE_PATTERNS
    return any(pattern.match(key) for pattern in check_patterns)


def redact_headers(
    headers: httpx.Headers | dict[str, str],
    patterns: list[re.Pattern] | None = None,
) -> dict[str, Any]:
    """
    Return a plain dict copy of *headers* with sensitive values masked.

    Duplicate header names are joined with ``", "`` the way ``httpx.Headers``
    reports them. The input is never mutated.
    """
    redacted: dict[str, Any] = {}
    for name, value in headers.items():
        if _is_sensitive_key(str(name), patterns):
            redacted[name] = REDACTION_PLACEHOLDER
        else:
            redacted[name] = value
    return redacted


def redact_url(url: httpx.URL | str) -> str:
    """Mask shared access signature values in the query string of *url*."""
    url = url if isinstance(url, httpx.URL) else httpx.URL(url)
    query = url.query.decode("ascii")
    if not query:
        return str(url)

    parts: list[str] = []
    for pair in query.split("&"):
        key, sep, _ = pair.partition("=")
        if sep and key.lower() in SENSITIVE_QUERY_PARAMS:
            parts.append(f"{key}={REDACTION_PLACEHOLDER}")
        else:
            parts.append(pair)

    base = str(url).split("?", 1)[0]
    return f"{base}?{'&'.join(parts)}"
