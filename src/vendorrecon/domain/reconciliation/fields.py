"""Field-level reconciliation rules.

Each rule is a pure function of the vendor value and the inventory value and
returns the new value, or ``None`` when the field stays untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from vendorrecon.domain.model import PatchField

if TYPE_CHECKING:
    from decimal import Decimal

    from vendorrecon.domain.model import InventoryRecord, PatchValue, VendorRecord

DEFAULT_GROUP: Final[str] = "Z"


def weight_change(vendor_weight: Decimal, inventory_weight: Decimal | None) -> Decimal | None:
    if inventory_weight is not None and vendor_weight == inventory_weight:
        return None
    return vendor_weight


def group_change(inventory_group: str | None, *, default: str = DEFAULT_GROUP) -> str | None:
    # vendors carry no group; only fill the gap
    if inventory_group is not None and inventory_group.strip():
        return None
    return default


def cost_change(vendor_cost: Decimal, inventory_cost: Decimal | None) -> Decimal | None:
    if inventory_cost is not None and vendor_cost == inventory_cost:
        return None
    return vendor_cost


def list_price_change(
    vendor_retail: Decimal,
    inventory_list_price: Decimal | None,
    *,
    vendor_cost: Decimal,
    inventory_cost: Decimal | None,
) -> Decimal | None:
    """Only a strict cost increase may move the list price."""

    if inventory_cost is None or vendor_cost <= inventory_cost:
        return None
    if vendor_retail == inventory_list_price:
        return None
    return vendor_retail


def barcode_order_change(vendor_upc: str, barcodes: tuple[str, ...]) -> tuple[str, ...] | None:
    """Put the vendor UPC first so it becomes the primary barcode; keep the others in order.

    Items whose barcodes are not reported are left alone.
    """

    upc = vendor_upc.strip()
    if not barcodes or barcodes[0] == upc:
        return None
    return (upc, *(code for code in barcodes if code != upc))


def reconcile_fields(
    vendor: VendorRecord,
    inventory: InventoryRecord,
    *,
    default_group: str = DEFAULT_GROUP,
) -> dict[PatchField, PatchValue]:
    """Compute the independent field updates for an anomaly-cleared pair."""

    candidates: dict[PatchField, PatchValue | None] = {
        PatchField.WEIGHT: weight_change(vendor.weight, inventory.weight),
        PatchField.GROUP: group_change(inventory.group, default=default_group),
        PatchField.COST: cost_change(vendor.cost, inventory.cost),
        PatchField.LIST_PRICE: list_price_change(
            vendor.suggested_retail,
            inventory.list_price,
            vendor_cost=vendor.cost,
            inventory_cost=inventory.cost,
        ),
        PatchField.BARCODES: barcode_order_change(vendor.upc, inventory.barcodes),
    }
    return {name: value for name, value in candidates.items() if value is not None}
