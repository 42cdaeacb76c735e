"""Translate inventory gateway payloads to and from domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vendorrecon.domain.model import InventoryRecord, empty_alt_skus

from .schema import ItemPayload, PatchRequest

if TYPE_CHECKING:
    from vendorrecon.domain.model import Patch

    from .schema import ItemPayloadInput


def parse_inventory_record(payload: ItemPayloadInput) -> InventoryRecord:
    """Build an inventory snapshot from a gateway item payload.

    Items reported without slot information get the default slot capacity.
    """

    item = payload if isinstance(payload, ItemPayload) else ItemPayload.model_validate(payload)
    alt_skus = tuple(item.alt_skus) if item.alt_skus else empty_alt_skus()
    return InventoryRecord(
        item_number=item.item_number,
        upc=item.upc,
        cost=item.cost,
        list_price=item.list_price,
        weight=item.weight,
        group=item.group,
        alt_skus=alt_skus,
        barcodes=tuple(code.strip() for code in item.barcodes if code.strip()),
        revision=item.revision,
    )


def build_patch_request(patch: Patch) -> PatchRequest:
    return PatchRequest(changes=patch.as_dict(), base_revision=patch.base_revision)
