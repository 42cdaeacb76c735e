"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update

from vendorrecon.adapters.sqlalchemy.mappings import (
    inventory_barcode_table,
    inventory_item_table,
    inventory_record_from_row,
    review_entry_table,
)
from vendorrecon.domain.errors import ItemNotFoundError, WriteConflictError
from vendorrecon.domain.model import PatchField, ReviewEntry, VendorRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.engine import RowMapping
    from sqlalchemy.orm import Session

    from vendorrecon.domain.model import InventoryRecord, Patch, ReviewReason

_COLUMN_BY_FIELD: dict[PatchField, str] = {
    PatchField.WEIGHT: "weight",
    PatchField.GROUP: "item_group",
    PatchField.COST: "cost",
    PatchField.LIST_PRICE: "list_price",
    PatchField.ALT_SKUS: "alt_skus",
}


def _parse_revision(revision: str | None) -> int | None:
    if revision is None:
        return None
    try:
        return int(revision)
    except ValueError:
        return None


class SqlAlchemyInventoryRepository:
    """Inventory mirror with one row per item and extra rows per stored barcode.

    The item row holds the primary barcode; ``inventory_barcode`` holds the
    others in the order they were stored.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_upc_prefix(self, prefix: str) -> list[InventoryRecord]:
        item = inventory_item_table.c
        barcode = inventory_barcode_table.c

        primary_stmt = select(inventory_item_table).where(
            item.upc.startswith(prefix, autoescape=True)
        )
        barcode_stmt = (
            select(inventory_item_table, barcode.upc.label("barcode_upc"))
            .join(inventory_barcode_table, barcode.item_number == item.item_number)
            .where(barcode.upc.startswith(prefix, autoescape=True))
        )
        primary_rows = list(self.session.execute(primary_stmt).mappings())
        barcode_rows = list(self.session.execute(barcode_stmt).mappings())
        stored = self._barcodes_of(
            {row["item_number"] for row in (*primary_rows, *barcode_rows)}
        )

        records = [
            inventory_record_from_row(row, stored[row["item_number"]]) for row in primary_rows
        ]
        # one snapshot per stored barcode, as the inventory export lists them
        records.extend(
            replace(
                inventory_record_from_row(row, stored[row["item_number"]]),
                upc=row["barcode_upc"],
            )
            for row in barcode_rows
        )
        return sorted(records, key=lambda record: (record.item_number, record.upc))

    def get(self, item_number: str) -> InventoryRecord | None:
        stmt = select(inventory_item_table).where(
            inventory_item_table.c.item_number == item_number
        )
        row = self.session.execute(stmt).mappings().one_or_none()
        if row is None:
            return None
        return inventory_record_from_row(row, self._barcodes_of({item_number})[item_number])

    def add(self, record: InventoryRecord, *, barcodes: Sequence[str] = ()) -> None:
        self.session.execute(
            insert(inventory_item_table).values(
                item_number=record.item_number,
                upc=record.upc,
                cost=record.cost,
                list_price=record.list_price,
                weight=record.weight,
                item_group=record.group,
                alt_skus=record.alt_skus,
                revision=_parse_revision(record.revision) or 1,
            )
        )
        self._store_extra_barcodes(record.item_number, record.upc, barcodes or record.barcodes)

    def update(self, item_number: str, patch: Patch) -> str:
        """Apply ``patch`` if the stored revision still matches; return the new revision."""

        current = self.get(item_number)
        if current is None:
            raise ItemNotFoundError(f"{item_number} does not exist", item_number=item_number)

        # validates slot capacity and barcodes before anything is written
        patched = patch.apply_to(current)

        item = inventory_item_table.c
        values: dict[str, object] = {
            _COLUMN_BY_FIELD[name]: value
            for name, value in patch.changes.items()
            if name is not PatchField.BARCODES
        }
        if PatchField.BARCODES in patch:
            values["upc"] = patched.barcodes[0]
        stmt = (
            update(inventory_item_table)
            .where(item.item_number == item_number)
            .values(**values, revision=item.revision + 1)
        )
        if patch.base_revision is not None:
            expected = _parse_revision(patch.base_revision)
            if expected is None:
                raise WriteConflictError(
                    f"{item_number}: unknown revision {patch.base_revision!r}",
                    item_number=item_number,
                )
            stmt = stmt.where(item.revision == expected)

        result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise WriteConflictError(
                f"{item_number} changed since revision {patch.base_revision}",
                item_number=item_number,
            )
        if PatchField.BARCODES in patch:
            self.session.execute(
                delete(inventory_barcode_table).where(
                    inventory_barcode_table.c.item_number == item_number
                )
            )
            self._store_extra_barcodes(item_number, patched.barcodes[0], patched.barcodes)
        revision = self.session.execute(
            select(item.revision).where(item.item_number == item_number)
        ).scalar_one()
        return str(revision)

    def _barcodes_of(self, item_numbers: set[str]) -> dict[str, tuple[str, ...]]:
        """Every barcode of each item, primary first."""

        if not item_numbers:
            return {}
        numbers = sorted(item_numbers)
        item = inventory_item_table.c
        barcode = inventory_barcode_table.c
        codes: dict[str, list[str]] = {
            row.item_number: [row.upc]
            for row in self.session.execute(
                select(item.item_number, item.upc).where(item.item_number.in_(numbers))
            )
        }
        extra_stmt = (
            select(barcode.item_number, barcode.upc)
            .where(barcode.item_number.in_(numbers))
            .order_by(barcode.id)
        )
        for row in self.session.execute(extra_stmt):
            codes.setdefault(row.item_number, []).append(row.upc)
        return {number: tuple(values) for number, values in codes.items()}

    def _store_extra_barcodes(
        self, item_number: str, primary: str, barcodes: Sequence[str]
    ) -> None:
        extra = [code for code in dict.fromkeys(barcodes) if code and code != primary]
        if extra:
            self.session.execute(
                insert(inventory_barcode_table),
                [{"item_number": item_number, "upc": code} for code in extra],
            )


def _review_entry_from_row(row: RowMapping) -> ReviewEntry:
    record = VendorRecord(
        vendor_sku=row["vendor_sku"],
        upc=row["upc"],
        cost=row["cost"],
        suggested_retail=row["suggested_retail"],
        weight=row["weight"],
        description=row["description"],
    )
    return ReviewEntry(
        record=record,
        reason=row["reason"],
        context=row["context"],
        detail=row["detail"],
        created_at=row["created_at"],
    )


class SqlAlchemyReviewEntryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entry: ReviewEntry) -> None:
        record = entry.record
        self.session.execute(
            insert(review_entry_table).values(
                created_at=entry.created_at,
                reason=entry.reason,
                vendor_sku=record.vendor_sku,
                upc=record.upc,
                cost=record.cost,
                suggested_retail=record.suggested_retail,
                weight=record.weight,
                description=record.description,
                item_number=None if entry.context is None else entry.context.item_number,
                context=entry.context,
                detail=entry.detail,
            )
        )

    def list_entries(
        self,
        *,
        reason: ReviewReason | None = None,
        limit: int | None = None,
    ) -> list[ReviewEntry]:
        stmt = select(review_entry_table).order_by(review_entry_table.c.id)
        if reason is not None:
            stmt = stmt.where(review_entry_table.c.reason == reason)
        if limit is not None:
            stmt = stmt.limit(limit)
        return [_review_entry_from_row(row) for row in self.session.execute(stmt).mappings()]


if TYPE_CHECKING:
    from vendorrecon.domain.ports import InventoryRepository, ReviewEntryRepository

    def _check_repositories(session: Session) -> None:
        _inventory: InventoryRepository = SqlAlchemyInventoryRepository(session)
        _reviews: ReviewEntryRepository = SqlAlchemyReviewEntryRepository(session)
