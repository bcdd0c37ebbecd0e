"""
In-memory request metrics shared by every pipeline in the process.

Credential policies count what they sign, by auth scheme and verb.
``LoggingPolicy`` counts what comes back, by verb and status, counts
requests that raised instead, by verb and exception type, and samples
round-trip latency per verb.

Read everything with ``metrics.snapshot()``; pass ``reset=True`` to clear the
counters in the same step (scrape-and-clear).
"""
from __future__ import annotations

import threading
from collections import Counter, defaultdict
from typing import Any


class RequestMetrics:
    """Counters keyed by the request's own dimensions.

    Pipelines may run on several threads or event loops at once, so every
    update and read takes the lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._signed: Counter[tuple[str, str]] = Counter()
        self._completed: Counter[tuple[str, str]] = Counter()
        self._failed: Counter[tuple[str, str]] = Counter()
        self._latencies: dict[str, list[float]] = defaultdict(list)

    def request_signed(self, scheme: str, method: str) -> None:
        with self._lock:
            self._signed[(scheme, method.upper())] += 1

    def request_completed(self, method: str, status: int | str, duration_seconds: float) -> None:
        """Record a response. *status* is ``"unknown"`` for senders whose result has no status code."""
        method = method.upper()
        with self._lock:
            self._completed[(method, str(status))] += 1
            self._latencies[method].append(duration_seconds)

    def request_failed(self, method: str, error_type: str) -> None:
        with self._lock:
            self._failed[(method.upper(), error_type)] += 1

    def snapshot(self, reset: bool = False) -> dict[str, Any]:
        """
        Return the current values as plain nested dicts::

            {
                "signed":    {scheme: {method: count}},
                "completed": {method: {status: count}},
                "failed":    {method: {error_type: count}},
                "latency":   {method: {"count", "avg", "max", "p95"}},
            }
        """
        with self._lock:
            summary = {
                "signed": _nest(self._signed),
                "completed": _nest(self._completed),
                "failed": _nest(self._failed),
                "latency": {method: _latency_stats(values) for method, values in self._latencies.items()},
            }
            if reset:
                self._signed.clear()
                self._completed.clear()
                self._failed.clear()
                self._latencies.clear()
        return summary


def _nest(counter: Counter[tuple[str, str]]) -> dict[str, dict[str, int]]:
    nested: dict[str, dict[str, int]] = {}
    for (outer, inner), count in counter.items():
        nested.setdefault(outer, {})[inner] = count
    return nested


def _latency_stats(values: list[float]) -> dict[str, float]:
    ordered = sorted(values)
    n = len(ordered)
    return {
        "count": n,
        "avg": sum(ordered) / n,
        "max": ordered[-1],
        "p95": ordered[max(0, int(n * 0.95) - 1)],
    }


metrics = RequestMetrics()
