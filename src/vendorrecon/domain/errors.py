"""Exception hierarchy for the reconciliation domain.

Input errors reject a single vendor record. Inventory errors describe how the
external inventory collaborator failed a lookup or a write; the engine turns
them into review outcomes so that no failure crosses record boundaries.
"""

from __future__ import annotations


class ReconciliationError(Exception):
    """Base class for all reconciliation errors."""


class InputError(ReconciliationError, ValueError):
    """Raised when a vendor record cannot be processed as given."""


class InvalidUpcError(InputError):
    """Raised when a UPC cannot be turned into a lookup key."""

    def __init__(self, upc: str, reason: str) -> None:
        self.upc = upc
        self.reason = reason
        super().__init__(f"Invalid UPC {upc!r}: {reason}")


class InvalidVendorRecordError(InputError):
    """Raised when a vendor record violates its field constraints."""

    def __init__(self, message: str, *, field: str) -> None:
        self.field = field
        super().__init__(message)


class AnomalyCheckError(ReconciliationError):
    """Raised when a change ratio is undefined because a magnitude is not positive."""

    def __init__(self, field: str, vendor_value: object, inventory_value: object) -> None:
        self.field = field
        self.vendor_value = vendor_value
        self.inventory_value = inventory_value
        super().__init__(
            f"Cannot compare {field}: vendor={vendor_value}, inventory={inventory_value}"
        )


class SlotExhaustedError(ReconciliationError):
    """Raised when every alternate SKU slot of an inventory record is taken."""

    def __init__(self, *, item_number: str, capacity: int) -> None:
        self.item_number = item_number
        self.capacity = capacity
        super().__init__(f"All {capacity} alternate SKU slots of {item_number} are in use")


class InventoryError(ReconciliationError):
    """Base class for failures reported by the inventory collaborator."""


class InventoryUnavailableError(InventoryError):
    """Transient failure: the inventory system could not be reached in time."""


class InventoryWriteError(InventoryError):
    """A patch could not be applied to an inventory record."""

    def __init__(self, message: str, *, item_number: str) -> None:
        self.item_number = item_number
        super().__init__(message)


class WriteConflictError(InventoryWriteError):
    """The record changed since the snapshot the patch was computed from."""


class ItemNotFoundError(InventoryWriteError):
    """The inventory record no longer exists."""


class FeedError(ReconciliationError):
    """Raised when a vendor feed cannot be read at all."""
