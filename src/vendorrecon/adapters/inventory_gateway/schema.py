"""Pydantic models describing the inventory gateway payloads."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class GatewayBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ItemPayload(GatewayBaseModel):
    item_number: str = Field(alias="itemNumber")
    upc: str
    cost: Decimal | None = None
    list_price: Decimal | None = Field(default=None, alias="listPrice")
    weight: Decimal | None = None
    group: str | None = None
    alt_skus: list[str | None] = Field(default_factory=list, alias="altSkus")
    barcodes: list[str] = Field(default_factory=list)
    revision: str | None = None

    _normalize_group = field_validator("group", mode="before")(_blank_to_none)

    @field_validator("alt_skus", mode="before")
    @classmethod
    def _normalize_slots(cls, value: object) -> object:
        if isinstance(value, list):
            return [_blank_to_none(slot) for slot in value]
        return value

    @field_validator("revision", mode="before")
    @classmethod
    def _stringify_revision(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


class ItemsResponse(GatewayBaseModel):
    items: list[ItemPayload]


class PatchRequest(GatewayBaseModel):
    changes: dict[str, object]
    base_revision: str | None = Field(default=None, alias="baseRevision")


class ErrorResponse(GatewayBaseModel):
    error: str
    message: str = ""


ItemPayloadInput = ItemPayload | Mapping[str, object]
