"""Vendor and inventory record types.

``VendorRecord`` is the immutable input produced by a vendor feed.
``InventoryRecord`` is a read-only snapshot of a record owned by the inventory
system; the engine never creates or destroys those, it only proposes patches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Final

from vendorrecon.domain.errors import InvalidVendorRecordError

DEFAULT_ALT_SKU_CAPACITY: Final[int] = 3

type AltSkuSlots = tuple[str | None, ...]


def empty_alt_skus(capacity: int = DEFAULT_ALT_SKU_CAPACITY) -> AltSkuSlots:
    return (None,) * capacity


def is_free_slot(value: str | None) -> bool:
    return value is None or not value.strip()


def _require_positive(name: str, value: object) -> None:
    if not isinstance(value, Decimal) or not value.is_finite() or value <= 0:
        raise InvalidVendorRecordError(
            f"{name} must be a positive decimal, got {value!r}",
            field=name,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class VendorRecord:
    """One product line of a vendor catalog feed."""

    vendor_sku: str
    upc: str
    cost: Decimal
    suggested_retail: Decimal
    weight: Decimal
    description: str = ""

    def __post_init__(self) -> None:
        if not self.vendor_sku.strip():
            raise InvalidVendorRecordError("vendor_sku must not be blank", field="vendor_sku")
        _require_positive("cost", self.cost)
        _require_positive("suggested_retail", self.suggested_retail)
        _require_positive("weight", self.weight)


@dataclass(frozen=True, slots=True, kw_only=True)
class InventoryRecord:
    """Snapshot of an inventory record as returned by the collaborator.

    ``alt_skus`` has a fixed capacity decided by the inventory system; free
    slots are ``None`` or blank. ``revision`` is an opaque token identifying
    the snapshot so that writes can be rejected when the record changed.

    ``upc`` is the barcode this snapshot was found under. ``barcodes`` lists
    every barcode stored for the item, primary first, and stays empty when the
    collaborator does not report them.
    """

    item_number: str
    upc: str
    cost: Decimal | None = None
    list_price: Decimal | None = None
    weight: Decimal | None = None
    group: str | None = None
    alt_skus: AltSkuSlots = field(default_factory=empty_alt_skus)
    barcodes: tuple[str, ...] = ()
    revision: str | None = None

    @property
    def capacity(self) -> int:
        return len(self.alt_skus)

    @property
    def free_slots(self) -> tuple[int, ...]:
        return tuple(index for index, value in enumerate(self.alt_skus) if is_free_slot(value))

    def represents(self, sku: str) -> bool:
        """Return whether ``sku`` is the item number or one of the alternate SKUs."""

        candidate = sku.strip()
        if candidate == self.item_number.strip():
            return True
        return any(
            value is not None and value.strip() == candidate for value in self.alt_skus
        )
