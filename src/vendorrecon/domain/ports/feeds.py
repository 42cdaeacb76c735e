"""Ports for reading vendor catalog feeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vendorrecon.domain.model import VendorRecord


@dataclass(frozen=True, slots=True)
class RejectedRow:
    """A feed row that could not become a vendor record."""

    line: int
    reason: str


@dataclass(slots=True)
class FeedBatch:
    """Records read from one pass over a vendor feed."""

    records: list[VendorRecord] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)


@runtime_checkable
class VendorFeed(Protocol):
    """Callable port producing one batch; every call re-reads the source.

    Raises ``FeedError`` when the source cannot be read at all.
    """

    def __call__(self) -> FeedBatch: ...


__all__ = ["FeedBatch", "RejectedRow", "VendorFeed"]
