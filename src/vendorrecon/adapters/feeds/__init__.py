"""File-based vendor feeds and inventory snapshot readers."""

from __future__ import annotations

from .csv_feed import CsvVendorFeed, read_csv_rows
from .inventory_snapshot import InventorySnapshot, read_inventory_snapshot
from .schema import InventoryRowPayload, VendorRowPayload

__all__ = [
    "CsvVendorFeed",
    "InventoryRowPayload",
    "InventorySnapshot",
    "VendorRowPayload",
    "read_csv_rows",
    "read_inventory_snapshot",
]
