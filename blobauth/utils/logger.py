"""Logging setup for blobauth.

While a request travels through a pipeline, its policies bind fields that
describe it (client request id, verb, auth scheme, account) to a context var.
Records emitted inside that scope carry the fields: as trailing ``key=value``
pairs in text mode, as top-level keys in JSON mode.
"""

from __future__ import annotations

import contextvars
import logging
import sys
from contextlib import contextmanager
from typing import IO, Iterator

from pythonjsonlogger.json import JsonFormatter

LIBRARY_LOGGER = "blobauth"

# Order in which bound fields are rendered in text mode.
REQUEST_FIELDS = ("client_request_id", "method", "auth_scheme", "account_name")

ctx_request_fields: contextvars.ContextVar[dict[str, str] | None] = contextvars.ContextVar(
    "request_fields", default=None
)


def current_request_fields() -> dict[str, str]:
    return dict(ctx_request_fields.get() or {})


@contextmanager
def bind_request_fields(**fields: str | None) -> Iterator[None]:
    """Add *fields* to the request log context until the block exits.

    Fields already bound by an outer policy are kept; ``None`` values are
    skipped.
    """
    merged = current_request_fields()
    merged.update({key: value for key, value in fields.items() if value is not None})
    token = ctx_request_fields.set(merged)
    try:
        yield
    finally:
        ctx_request_fields.reset(token)


class RequestTextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = current_request_fields()
        suffix = " ".join(f"{name}={fields[name]}" for name in REQUEST_FIELDS if name in fields)
        return f"{line} [{suffix}]" if suffix else line


class RequestJsonFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        for name, value in current_request_fields().items():
            log_record.setdefault(name, value)


def setup_logger(
    log_format: str = "text",
    log_level: str = "INFO",
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach a stream handler to the ``blobauth`` logger.

    Only the library's own logger is touched. Records stop there instead of
    also reaching the application's root handlers.
    """
    logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    if log_format.lower() == "json":
        handler.setFormatter(
            RequestJsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"levelname": "level", "asctime": "timestamp"},
            )
        )
    else:
        handler.setFormatter(RequestTextFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False

    # Transport chatter stays at WARNING whatever the library level is.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logger
