from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy.orm import Session  # noqa: TC002

from vendorrecon.adapters.sqlalchemy import (
    SqlAlchemyInventoryRepository,
    SqlAlchemyReviewEntryRepository,
)
from vendorrecon.domain.errors import ItemNotFoundError, WriteConflictError
from vendorrecon.domain.model import Patch, PatchField, ReviewEntry, ReviewReason
from tests.helpers.records import make_inventory_record, make_vendor_record


@pytest.fixture
def inventory_repo(sqlite_session: Session) -> SqlAlchemyInventoryRepository:
    repo = SqlAlchemyInventoryRepository(sqlite_session)
    repo.add(
        make_inventory_record("A1", upc="01234567890", alt_skus=("X-1", None, None)),
        barcodes=["01234567890", "01234567899"],
    )
    repo.add(make_inventory_record("B1", upc="99999999999", group=None))
    sqlite_session.commit()
    return repo


def test_prefix_lookup_includes_extra_barcodes(
    inventory_repo: SqlAlchemyInventoryRepository,
) -> None:
    records = inventory_repo.find_by_upc_prefix("0123456789")

    assert [(record.item_number, record.upc) for record in records] == [
        ("A1", "01234567890"),
        ("A1", "01234567899"),
    ]
    assert all(record.alt_skus == ("X-1", None, None) for record in records)
    assert all(record.barcodes == ("01234567890", "01234567899") for record in records)


def test_prefix_lookup_treats_wildcards_literally(
    inventory_repo: SqlAlchemyInventoryRepository,
) -> None:
    assert inventory_repo.find_by_upc_prefix("0123%") == []


def test_round_trip_preserves_decimals_and_revision(
    inventory_repo: SqlAlchemyInventoryRepository,
) -> None:
    record = inventory_repo.get("B1")

    assert record is not None
    assert record.cost == Decimal("5.00")
    assert record.group is None
    assert record.revision == "1"
    assert inventory_repo.get("missing") is None


def test_update_bumps_revision(
    inventory_repo: SqlAlchemyInventoryRepository, sqlite_session: Session
) -> None:
    patch = Patch(
        {PatchField.GROUP: "Z", PatchField.ALT_SKUS: ("X-1", "V-1", None)},
        base_revision="1",
    )

    revision = inventory_repo.update("A1", patch)
    sqlite_session.commit()

    stored = inventory_repo.get("A1")
    assert revision == "2"
    assert stored is not None
    assert stored.group == "Z"
    assert stored.alt_skus == ("X-1", "V-1", None)
    assert stored.revision == "2"


def test_barcode_patch_moves_the_primary_barcode(
    inventory_repo: SqlAlchemyInventoryRepository, sqlite_session: Session
) -> None:
    reordered = ("012345678905", "01234567890", "01234567899")

    inventory_repo.update("A1", Patch({PatchField.BARCODES: reordered}, base_revision="1"))
    sqlite_session.commit()

    stored = inventory_repo.get("A1")
    assert stored is not None
    assert stored.upc == "012345678905"
    assert stored.barcodes == reordered
    assert [record.upc for record in inventory_repo.find_by_upc_prefix("0123456789")] == [
        "01234567890",
        "012345678905",
        "01234567899",
    ]


def test_update_with_stale_revision_conflicts(
    inventory_repo: SqlAlchemyInventoryRepository,
) -> None:
    with pytest.raises(WriteConflictError):
        inventory_repo.update("A1", Patch({PatchField.GROUP: "Z"}, base_revision="7"))

    stored = inventory_repo.get("A1")
    assert stored is not None
    assert stored.group == "H"


def test_update_of_unknown_item_is_not_found(
    inventory_repo: SqlAlchemyInventoryRepository,
) -> None:
    with pytest.raises(ItemNotFoundError):
        inventory_repo.update("Z9", Patch({PatchField.GROUP: "Z"}, base_revision="1"))


def test_update_rejects_slot_capacity_change(
    inventory_repo: SqlAlchemyInventoryRepository,
) -> None:
    with pytest.raises(ValueError, match="capacity"):
        inventory_repo.update("A1", Patch({PatchField.ALT_SKUS: ("X-1",)}, base_revision="1"))


def test_review_entries_filter_by_reason(sqlite_session: Session) -> None:
    repo = SqlAlchemyReviewEntryRepository(sqlite_session)
    context = make_inventory_record("A1", cost="4.00")
    repo.add(ReviewEntry(record=make_vendor_record("V-1"), reason=ReviewReason.NEW))
    repo.add(
        ReviewEntry(
            record=make_vendor_record("V-2", cost="10.00"),
            reason=ReviewReason.COST_ANOMALY,
            context=context,
            detail="cost ratio 2.5",
        )
    )
    sqlite_session.commit()

    anomalies = repo.list_entries(reason=ReviewReason.COST_ANOMALY)

    assert len(anomalies) == 1
    (entry,) = anomalies
    assert entry.reason is ReviewReason.COST_ANOMALY
    assert entry.record.vendor_sku == "V-2"
    assert entry.record.cost == Decimal("10.00")
    assert entry.context == context
    assert entry.detail == "cost ratio 2.5"
    assert [item.record.vendor_sku for item in repo.list_entries(limit=1)] == ["V-1"]
