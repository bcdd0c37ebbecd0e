"""Library settings, loaded from environment variables."""

from __future__ import annotations

import logging

from pydantic import model_validator
from pydantic_settings import BaseSettings

from blobauth.credentials import (
    AnonymousCredential,
    Credential,
    SharedKeyCredential,
    TokenCredential,
    TokenRefresher,
)
from blobauth.credentials.refresher import TokenFetcher
from blobauth.errors import ConfigurationError
from blobauth.utils.logger import setup_logger


class Settings(BaseSettings):
    # ── Shared key credential ──────────────────────────────────
    # Both must be set to sign with the account key. The key is the base64
    # value shown in the portal under "Access keys".
    STORAGE_ACCOUNT_NAME: str | None = None
    STORAGE_ACCOUNT_KEY: str | None = None

    # ── Bearer token credential ────────────────────────────────
    # Used when no account key is configured. Rotate it at runtime through
    # TokenCredential.token or a TokenRefresher.
    STORAGE_TOKEN: str | None = None

    # Seconds between TokenRefresher ticks.
    TOKEN_REFRESH_INTERVAL_SECONDS: float = 45 * 60

    # ── Telemetry ───────────────────────────────────────────────
    # Prepended to the User-Agent, e.g. USER_AGENT_PREFIX="backup-job/2.1"
    USER_AGENT_PREFIX: str | None = None

    # ── Logging ─────────────────────────────────────────────────
    LOG_FORMAT: str = "text"  # text | json
    LOG_LEVEL: str = "INFO"

    # Requests slower than this are logged at WARNING by LoggingPolicy.
    SLOW_REQUEST_THRESHOLD_MS: int = 3000

    # Extra header names to mask in request logs (on top of the defaults).
    # Example: REDACTED_HEADERS='["x-ms-copy-source-authorization"]'
    REDACTED_HEADERS: list[str] = []

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _normalise(self) -> "Settings":
        log_format = self.LOG_FORMAT.lower()
        if log_format not in ("text", "json"):
            raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got {self.LOG_FORMAT!r}")
        object.__setattr__(self, "LOG_FORMAT", log_format)
        if self.TOKEN_REFRESH_INTERVAL_SECONDS <= 0:
            raise ValueError("TOKEN_REFRESH_INTERVAL_SECONDS must be positive")
        return self

    @property
    def has_shared_key(self) -> bool:
        return bool(self.STORAGE_ACCOUNT_NAME and self.STORAGE_ACCOUNT_KEY)


def credential_from_settings(config: Settings | None = None) -> Credential:
    """Pick the credential the settings describe.

    Shared key wins over a bearer token; with neither configured requests go
    out unauthenticated. Half a shared key configuration is an error.
    """
    config = config or settings
    if config.has_shared_key:
        return SharedKeyCredential(config.STORAGE_ACCOUNT_NAME, config.STORAGE_ACCOUNT_KEY)
    if config.STORAGE_ACCOUNT_KEY and not config.STORAGE_ACCOUNT_NAME:
        raise ConfigurationError("STORAGE_ACCOUNT_KEY is set but STORAGE_ACCOUNT_NAME is not")
    if config.STORAGE_TOKEN:
        return TokenCredential(config.STORAGE_TOKEN)
    return AnonymousCredential()


def logger_from_settings(config: Settings | None = None) -> logging.Logger:
    """Configure the ``blobauth`` logger from LOG_FORMAT and LOG_LEVEL."""
    config = config or settings
    return setup_logger(config.LOG_FORMAT, config.LOG_LEVEL)


def refresher_from_settings(
    credential: Credential,
    fetch_token: TokenFetcher,
    config: Settings | None = None,
) -> TokenRefresher:
    """Build a ``TokenRefresher`` ticking every TOKEN_REFRESH_INTERVAL_SECONDS.

    Only a ``TokenCredential`` can be rotated; any other credential is a
    ``ConfigurationError``.
    """
    config = config or settings
    if not isinstance(credential, TokenCredential):
        raise ConfigurationError(
            f"Token refresh needs a TokenCredential, got {type(credential).__name__}"
        )
    return TokenRefresher(credential, fetch_token, interval=config.TOKEN_REFRESH_INTERVAL_SECONDS)


settings = Settings()
