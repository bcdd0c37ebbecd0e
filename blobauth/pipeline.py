"""Pipeline assembly.

A ``Pipeline`` is built once from an ordered list of policy factories and a
terminal sender. Composition happens in the constructor: factories are applied
back to front, each ``create(next_policy, options)`` wrapping the chain built
so far, so the first factory ends up as the head. Requests then flow head to
sender, and responses (or exceptions) flow back the same way.

The credential policy belongs last, right before the sender. Anything that
re-sends a request (an outer retry loop, for instance) must call
``Pipeline.send`` again so the request is signed afresh with a new date.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from blobauth.config import Settings, settings as default_settings
from blobauth.credentials.base import Credential
from blobauth.policies.base import RequestPolicy, RequestPolicyFactory, RequestPolicyOptions
from blobauth.policies.logging_policy import LoggingPolicyFactory
from blobauth.policies.request_id import UniqueRequestIdPolicyFactory
from blobauth.policies.telemetry import TelemetryPolicyFactory
from blobauth.request import StorageRequest

logger = logging.getLogger("blobauth.pipeline")


class Pipeline:
    """
    Ordered chain of request policies terminated by a sender.

    Parameters
    ----------
    factories : Sequence[RequestPolicyFactory]
        Policy factories in request order (first one sees the request first).
    sender : RequestPolicy
        Terminal link; anything with ``async send(request)``.
    options : RequestPolicyOptions | None
        Shared by every policy in the chain.
    """

    def __init__(
        self,
        factories: Sequence[RequestPolicyFactory],
        sender: RequestPolicy,
        options: RequestPolicyOptions | None = None,
    ):
        self.factories = list(factories)
        self.sender = sender
        self.options = options or RequestPolicyOptions()
        self.policies: list[RequestPolicy] = []

        head: RequestPolicy = sender
        for factory in reversed(self.factories):
            head = factory.create(head, self.options)
            self.policies.insert(0, head)
        self._head = head

        logger.debug(
            "Pipeline assembled: %s -> %s",
            " -> ".join(type(p).__name__ for p in self.policies) or "(no policies)",
            type(sender).__name__,
        )

    async def send(self, request: StorageRequest) -> Any:
        """Run a copy of *request* through the chain and return the sender's response."""
        return await self._head.send(request.clone())


def new_pipeline(
    credential: Credential,
    sender: RequestPolicy,
    *,
    config: Settings | None = None,
    options: RequestPolicyOptions | None = None,
) -> Pipeline:
    """Build the default pipeline for *credential*.

    Order: client request id, telemetry, logging, credential, sender.
    """
    config = config or default_settings
    factories: list[RequestPolicyFactory] = [
        UniqueRequestIdPolicyFactory(),
        TelemetryPolicyFactory(config.USER_AGENT_PREFIX),
        LoggingPolicyFactory(
            slow_request_threshold_ms=config.SLOW_REQUEST_THRESHOLD_MS,
            redacted_headers=config.REDACTED_HEADERS,
        ),
        credential,
    ]
    return Pipeline(factories, sender, options)
