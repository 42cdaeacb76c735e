from __future__ import annotations

from decimal import Decimal

import pytest

from vendorrecon.domain.errors import AnomalyCheckError
from vendorrecon.domain.model import ReviewReason
from vendorrecon.domain.reconciliation import detect_anomaly, exceeds_ratio, ratio
from vendorrecon.domain.reconciliation.anomalies import reason_for_undefined_ratio
from tests.helpers.records import make_inventory_record, make_vendor_record


def test_ratio_is_symmetric() -> None:
    assert ratio(Decimal(10), Decimal(4)) == Decimal("2.5")
    assert ratio(Decimal(4), Decimal(10)) == Decimal("2.5")


@pytest.mark.parametrize(
    ("a", "b"),
    [(Decimal(0), Decimal(1)), (Decimal(1), Decimal(-2)), (None, Decimal(1))],
)
def test_ratio_is_undefined_for_non_positive_values(a: Decimal | None, b: Decimal | None) -> None:
    with pytest.raises(AnomalyCheckError):
        ratio(a, b, field="cost")


def test_threshold_is_inclusive() -> None:
    assert exceeds_ratio(Decimal("10.00"), Decimal("5.00"))
    assert exceeds_ratio(Decimal("5.00"), Decimal("10.00"))
    assert not exceeds_ratio(Decimal("9.99"), Decimal("5.00"))


def test_inclusive_threshold_survives_inexact_division() -> None:
    assert exceeds_ratio(Decimal(2), Decimal(3), threshold=Decimal("1.5"))


def test_cost_swing_is_flagged_before_price() -> None:
    vendor = make_vendor_record(cost="10.00", retail="100.00")
    inventory = make_inventory_record(cost="4.00", list_price="10.00")

    assert detect_anomaly(vendor, inventory) is ReviewReason.COST_ANOMALY


def test_price_swing_is_flagged() -> None:
    vendor = make_vendor_record(cost="5.00", retail="20.00")
    inventory = make_inventory_record(cost="5.00", list_price="10.00")

    assert detect_anomaly(vendor, inventory) is ReviewReason.PRICE_ANOMALY


def test_clean_pair_has_no_anomaly() -> None:
    vendor = make_vendor_record(cost="6.00", retail="12.00")
    inventory = make_inventory_record(cost="5.00", list_price="10.00")

    assert detect_anomaly(vendor, inventory) is None


def test_missing_inventory_price_maps_to_price_anomaly() -> None:
    vendor = make_vendor_record()
    inventory = make_inventory_record(list_price=None)

    with pytest.raises(AnomalyCheckError) as exc:
        detect_anomaly(vendor, inventory)

    assert reason_for_undefined_ratio(exc.value) is ReviewReason.PRICE_ANOMALY


def test_zero_inventory_cost_maps_to_cost_anomaly() -> None:
    vendor = make_vendor_record()
    inventory = make_inventory_record(cost="0")

    with pytest.raises(AnomalyCheckError) as exc:
        detect_anomaly(vendor, inventory)

    assert reason_for_undefined_ratio(exc.value) is ReviewReason.COST_ANOMALY
