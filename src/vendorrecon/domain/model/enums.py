"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ReviewReason(StrEnum):
    """Why a vendor record was routed to human review instead of being applied."""

    NEW = "new"
    DUPLICATE = "duplicate"
    COST_ANOMALY = "cost_anomaly"
    PRICE_ANOMALY = "price_anomaly"
    SLOT_EXHAUSTED = "slot_exhausted"

    # Input and infrastructure tags
    INVALID_INPUT = "invalid_input"
    UNAVAILABLE = "unavailable"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"

    @property
    def is_anomaly(self) -> bool:
        return self in {ReviewReason.COST_ANOMALY, ReviewReason.PRICE_ANOMALY}


class PatchField(StrEnum):
    """Inventory fields the engine is allowed to update."""

    WEIGHT = "weight"
    GROUP = "group"
    COST = "cost"
    LIST_PRICE = "list_price"
    ALT_SKUS = "alt_skus"
    BARCODES = "barcodes"
