"""Decisions and outcomes shared by the planner, the engine and reports.

This module intentionally holds only:
- the pure planner's decision types
- the per-record terminal outcomes reported for a batch
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from vendorrecon.domain.model import (
        InventoryRecord,
        Patch,
        ReviewEntry,
        ReviewReason,
        VendorRecord,
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class PlannedUpdate:
    """Patch computed for a matched, anomaly-cleared record; not yet written."""

    record: VendorRecord
    target: InventoryRecord
    patch: Patch


type Decision = PlannedUpdate | ReviewEntry


class OutcomeKind(StrEnum):
    APPLIED = "applied"
    QUEUED = "queued"


@dataclass(frozen=True, slots=True, kw_only=True)
class Applied:
    """The patch was written (or was empty and nothing needed writing)."""

    record: VendorRecord
    item_number: str
    patch: Patch
    kind: Literal[OutcomeKind.APPLIED] = OutcomeKind.APPLIED


@dataclass(frozen=True, slots=True, kw_only=True)
class Queued:
    """The record went to the review queue."""

    entry: ReviewEntry
    kind: Literal[OutcomeKind.QUEUED] = OutcomeKind.QUEUED

    @property
    def record(self) -> VendorRecord:
        return self.entry.record

    @property
    def reason(self) -> ReviewReason:
        return self.entry.reason


type Outcome = Applied | Queued
