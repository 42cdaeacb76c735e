from __future__ import annotations

from decimal import Decimal

import pytest

from vendorrecon.domain.errors import InputError, InvalidVendorRecordError
from vendorrecon.domain.model import (
    DEFAULT_ALT_SKU_CAPACITY,
    InventoryRecord,
    ReviewReason,
    VendorRecord,
    empty_alt_skus,
    is_free_slot,
)
from tests.helpers.records import make_inventory_record, make_vendor_record


def test_vendor_record_rejects_blank_sku() -> None:
    with pytest.raises(InvalidVendorRecordError) as exc:
        make_vendor_record("   ")

    assert exc.value.field == "vendor_sku"


@pytest.mark.parametrize("field", ["cost", "retail", "weight"])
def test_vendor_record_requires_positive_magnitudes(field: str) -> None:
    with pytest.raises(InputError):
        make_vendor_record(**{field: "0"})


def test_vendor_record_rejects_non_finite_decimal() -> None:
    with pytest.raises(InvalidVendorRecordError):
        VendorRecord(
            vendor_sku="V-1",
            upc="123",
            cost=Decimal("NaN"),
            suggested_retail=Decimal(1),
            weight=Decimal(1),
        )


def test_input_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        make_vendor_record(weight="-1")


def test_inventory_record_defaults_to_empty_slots() -> None:
    record = InventoryRecord(item_number="A1", upc="0123")

    assert record.capacity == DEFAULT_ALT_SKU_CAPACITY
    assert record.alt_skus == empty_alt_skus()
    assert record.free_slots == (0, 1, 2)


def test_free_slots_treat_blank_values_as_free() -> None:
    record = make_inventory_record(alt_skus=("X-1", "  ", None))

    assert record.free_slots == (1, 2)
    assert is_free_slot("")
    assert not is_free_slot("X-1")


def test_represents_matches_item_number_and_alt_skus() -> None:
    record = make_inventory_record("A1", alt_skus=("X-1", None, None))

    assert record.represents("A1")
    assert record.represents(" X-1 ")
    assert not record.represents("X-2")


def test_inventory_records_are_hashable_snapshots() -> None:
    first = make_inventory_record("A1")
    second = make_inventory_record("A1")

    assert {first, second} == {first}


def test_anomaly_reasons() -> None:
    assert ReviewReason.COST_ANOMALY.is_anomaly
    assert ReviewReason.PRICE_ANOMALY.is_anomaly
    assert not ReviewReason.NEW.is_anomaly
