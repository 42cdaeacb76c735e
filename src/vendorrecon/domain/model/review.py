"""Review queue entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import ReviewReason
    from .records import InventoryRecord, VendorRecord


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReviewEntry:
    """A vendor record that needs a human decision before anything is written.

    ``context`` holds the matched inventory snapshot when there was one.
    """

    record: VendorRecord
    reason: ReviewReason
    context: InventoryRecord | None = None
    detail: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
