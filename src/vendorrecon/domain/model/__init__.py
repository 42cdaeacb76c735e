"""Domain model for vendor catalog reconciliation."""

from __future__ import annotations

from .enums import PatchField, ReviewReason
from .patch import Patch, PatchValue
from .records import (
    DEFAULT_ALT_SKU_CAPACITY,
    AltSkuSlots,
    InventoryRecord,
    VendorRecord,
    empty_alt_skus,
    is_free_slot,
)
from .review import ReviewEntry

__all__ = [
    "DEFAULT_ALT_SKU_CAPACITY",
    "AltSkuSlots",
    "InventoryRecord",
    "Patch",
    "PatchField",
    "PatchValue",
    "ReviewEntry",
    "ReviewReason",
    "VendorRecord",
    "empty_alt_skus",
    "is_free_slot",
]
