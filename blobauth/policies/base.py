"""Request policy contracts.

A pipeline is a chain of policies. Each policy receives the request, may
transform it, and forwards it to the policy after it; the last link is the
sender that talks to the network. Responses and exceptions travel back through
the same ``await`` chain untouched unless a policy chooses otherwise.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from blobauth.request import StorageRequest


class RequestPolicyOptions:
    """Options shared by every policy of one pipeline.

    Carries the logger policies write to and the minimum level they should
    bother formatting messages for.
    """

    def __init__(self, logger: logging.Logger | None = None, log_level: int = logging.INFO):
        self.logger = logger or logging.getLogger("blobauth.pipeline")
        self.log_level = log_level

    def should_log(self, level: int) -> bool:
        return level >= self.log_level and self.logger.isEnabledFor(level)

    def log(self, level: int, message: str, *args: Any) -> None:
        if self.should_log(level):
            self.logger.log(level, message, *args)


@runtime_checkable
class RequestPolicy(Protocol):
    async def send(self, request: "StorageRequest") -> Any:
        ...


@runtime_checkable
class RequestPolicyFactory(Protocol):
    def create(self, next_policy: RequestPolicy, options: RequestPolicyOptions) -> RequestPolicy:
        ...


class BaseRequestPolicy(ABC):
    """Holds the successor policy and the shared pipeline options."""

    def __init__(self, next_policy: RequestPolicy, options: RequestPolicyOptions):
        self._next_policy = next_policy
        self._options = options

    @property
    def next_policy(self) -> RequestPolicy:
        return self._next_policy

    @property
    def options(self) -> RequestPolicyOptions:
        return self._options

    @abstractmethod
    async def send(self, request: "StorageRequest") -> Any:
        """Process *request* and return whatever the rest of the chain returns."""
