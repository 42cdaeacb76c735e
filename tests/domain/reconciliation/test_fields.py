from __future__ import annotations

from decimal import Decimal

from vendorrecon.domain.model import PatchField
from vendorrecon.domain.reconciliation import reconcile_fields
from vendorrecon.domain.reconciliation.fields import (
    barcode_order_change,
    group_change,
    list_price_change,
    weight_change,
)
from tests.helpers.records import make_inventory_record, make_vendor_record


def test_up_to_date_record_yields_no_changes() -> None:
    assert reconcile_fields(make_vendor_record(), make_inventory_record()) == {}


def test_weight_is_taken_from_vendor_when_different() -> None:
    assert weight_change(Decimal("2.5"), Decimal("2.0")) == Decimal("2.5")
    assert weight_change(Decimal("2.5"), None) == Decimal("2.5")
    assert weight_change(Decimal("2.0"), Decimal("2.00")) is None


def test_group_is_only_filled_when_missing() -> None:
    assert group_change(None) == "Z"
    assert group_change("  ") == "Z"
    assert group_change("H") is None
    assert group_change(None, default="Q") == "Q"


def test_cost_increase_moves_list_price() -> None:
    vendor = make_vendor_record(cost="6.00", retail="12.00")
    inventory = make_inventory_record(cost="5.00", list_price="10.00")

    changes = reconcile_fields(vendor, inventory)

    assert changes == {
        PatchField.COST: Decimal("6.00"),
        PatchField.LIST_PRICE: Decimal("12.00"),
    }


def test_cost_decrease_keeps_list_price() -> None:
    vendor = make_vendor_record(cost="4.50", retail="9.00")
    inventory = make_inventory_record(cost="5.00", list_price="10.00")

    changes = reconcile_fields(vendor, inventory)

    assert changes == {PatchField.COST: Decimal("4.50")}


def test_equal_cost_keeps_list_price() -> None:
    assert (
        list_price_change(
            Decimal("12.00"),
            Decimal("10.00"),
            vendor_cost=Decimal("5.00"),
            inventory_cost=Decimal("5.00"),
        )
        is None
    )


def test_unchanged_retail_is_not_patched_on_cost_increase() -> None:
    vendor = make_vendor_record(cost="6.00", retail="10.00")
    inventory = make_inventory_record(cost="5.00", list_price="10.00")

    assert PatchField.LIST_PRICE not in reconcile_fields(vendor, inventory)


def test_vendor_upc_becomes_primary_barcode() -> None:
    barcodes = ("01234567890", "012345678905", "01234567899")

    assert barcode_order_change("012345678905", barcodes) == (
        "012345678905",
        "01234567890",
        "01234567899",
    )


def test_unknown_vendor_upc_is_added_in_front() -> None:
    assert barcode_order_change(" 012345678905 ", ("01234567890",)) == (
        "012345678905",
        "01234567890",
    )


def test_barcode_order_is_left_alone_when_primary_or_unreported() -> None:
    assert barcode_order_change("012345678905", ("012345678905", "01234567890")) is None
    assert barcode_order_change("012345678905", ()) is None


def test_barcode_order_is_part_of_the_field_updates() -> None:
    inventory = make_inventory_record(barcodes=("01234567890",))

    assert reconcile_fields(make_vendor_record(), inventory) == {
        PatchField.BARCODES: ("012345678905", "01234567890"),
    }
