"""Pydantic models describing rows of vendor feeds and inventory exports."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class CsvRowModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, str_strip_whitespace=True)


class VendorRowPayload(CsvRowModel):
    """One line of a vendor catalog export (``sku,upc,desc,weight,cost,retail``)."""

    sku: str = Field(min_length=1)
    upc: str = Field(min_length=1, pattern=r"^\d+$")
    desc: str = ""
    weight: Decimal = Field(gt=0, allow_inf_nan=False)
    cost: Decimal = Field(gt=0, allow_inf_nan=False)
    retail: Decimal = Field(gt=0, allow_inf_nan=False)

    @field_validator("weight", "retail", mode="before")
    @classmethod
    def _require_value(cls, value: object, info: ValidationInfo) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"{info.field_name} is required to reconcile a vendor row")
        return value


VENDOR_COLUMNS: tuple[str, ...] = ("sku", "upc", "weight", "cost", "retail")


class InventoryRowPayload(CsvRowModel):
    """One line of an inventory snapshot export.

    An item listed on several lines (one per stored barcode) shares its
    ``item_number`` across them.
    """

    item_number: str = Field(min_length=1)
    upc: str = Field(min_length=1, pattern=r"^\d+$")
    cost: Decimal | None = None
    list_price: Decimal | None = None
    weight: Decimal | None = None
    group: str | None = None
    alt_sku_1: str | None = None
    alt_sku_2: str | None = None
    alt_sku_3: str | None = None
    revision: str | None = None

    _normalize_optional = field_validator(
        "cost",
        "list_price",
        "weight",
        "group",
        "alt_sku_1",
        "alt_sku_2",
        "alt_sku_3",
        "revision",
        mode="before",
    )(_blank_to_none)

    @property
    def alt_skus(self) -> tuple[str | None, ...]:
        return (self.alt_sku_1, self.alt_sku_2, self.alt_sku_3)


INVENTORY_COLUMNS: tuple[str, ...] = ("item_number", "upc")
