"""Reconciliation engine settings."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from .env import env_float, env_int
from .errors import ConfigurationError

DEFAULT_MAX_WORKERS: Final[int] = 8
DEFAULT_TIMEOUT_SECONDS: Final[float] = 15.0
DEFAULT_ATTEMPTS: Final[int] = 3


@dataclass(frozen=True, slots=True, kw_only=True)
class EngineConfig:
    """Concurrency, timeout and policy knobs of one reconciliation run.

    ``attempts`` bounds every collaborator call (the first try included); the
    wait between tries grows as ``backoff_factor * 2 ** (try - 1)`` and never
    exceeds ``max_backoff_seconds``.
    """

    max_workers: int = DEFAULT_MAX_WORKERS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    attempts: int = DEFAULT_ATTEMPTS
    backoff_factor: float = 0.5
    max_backoff_seconds: float = 8.0
    anomaly_ratio: Decimal = Decimal(2)
    default_group: str = "Z"

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        if self.attempts < 1:
            raise ConfigurationError("attempts must be at least 1")
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")
        if self.anomaly_ratio <= 1:
            raise ConfigurationError("anomaly_ratio must be greater than 1")
        if not self.default_group.strip():
            raise ConfigurationError("default_group must not be blank")

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after the failed try number ``attempt`` (1-based)."""

        return min(self.max_backoff_seconds, self.backoff_factor * 2 ** (attempt - 1))


def get_engine_config() -> EngineConfig:
    return EngineConfig(
        max_workers=env_int("VENDORRECON_MAX_WORKERS", DEFAULT_MAX_WORKERS, minimum=1),
        timeout_seconds=env_float("VENDORRECON_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        attempts=env_int("VENDORRECON_ATTEMPTS", DEFAULT_ATTEMPTS, minimum=1),
    )
