"""First-fit allocation of the vendor SKU into alternate SKU slots.

The slot sequence is a fixed-capacity arena owned by the inventory system:
allocation fills the lowest free index and never grows or reorders it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vendorrecon.domain.errors import SlotExhaustedError
from vendorrecon.domain.model import is_free_slot

if TYPE_CHECKING:
    from vendorrecon.domain.model import AltSkuSlots, InventoryRecord


@dataclass(frozen=True, slots=True)
class AltSkuAllocation:
    slot: int
    alt_skus: AltSkuSlots


def allocate_alt_sku(vendor_sku: str, inventory: InventoryRecord) -> AltSkuAllocation | None:
    """Stage ``vendor_sku`` into the first free slot of ``inventory``.

    Returns ``None`` when the SKU is already the item number or one of the
    alternate SKUs.
    """

    sku = vendor_sku.strip()
    if inventory.represents(sku):
        return None

    slots = inventory.alt_skus
    for index, value in enumerate(slots):
        if is_free_slot(value):
            return AltSkuAllocation(slot=index, alt_skus=(*slots[:index], sku, *slots[index + 1 :]))
    raise SlotExhaustedError(item_number=inventory.item_number, capacity=len(slots))
