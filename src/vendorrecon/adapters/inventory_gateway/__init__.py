"""Public interface for the inventory gateway adapter."""

from __future__ import annotations

from .client import InventoryGatewayClient, InventoryGatewayError
from .schema import ItemPayload, ItemPayloadInput, ItemsResponse, PatchRequest
from .translator import build_patch_request, parse_inventory_record

__all__ = [
    "InventoryGatewayClient",
    "InventoryGatewayError",
    "ItemPayload",
    "ItemPayloadInput",
    "ItemsResponse",
    "PatchRequest",
    "build_patch_request",
    "parse_inventory_record",
]
