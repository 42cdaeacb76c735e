"""Retry, rate-limit and timeout settings for remote inventory services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

IDEMPOTENT_METHODS: frozenset[str] = frozenset({"GET", "HEAD"})
RETRYABLE_STATUS: frozenset[int] = frozenset({429, 500, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Transport-level retries applied below the reconciliation engine.

    Only idempotent methods are retried here. Writes carry a base revision and
    are retried by the engine, which re-plans after a conflict.
    """

    total: int = 2
    backoff_factor: float = 0.25
    max_backoff_wait: float = 4.0
    backoff_jitter: float = 0.5
    respect_retry_after_header: bool = True
    methods: frozenset[str] = IDEMPOTENT_METHODS
    status_codes: frozenset[int] = RETRYABLE_STATUS
    exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Connection settings of one remote service, keyed by ``name`` in logs."""

    name: str
    base_url: str | None = None
    timeout_seconds: float = 10.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = None
