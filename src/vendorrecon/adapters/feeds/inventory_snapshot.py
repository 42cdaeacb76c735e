"""Reader for inventory snapshot exports."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from pathlib import Path

from pydantic import ValidationError

from vendorrecon.domain.model import InventoryRecord
from vendorrecon.domain.ports import RejectedRow

from .csv_feed import read_csv_rows
from .schema import INVENTORY_COLUMNS, InventoryRowPayload

log = getLogger(__name__)


@dataclass(slots=True)
class InventorySnapshot:
    """Rows of an inventory export, in file order, duplicates included."""

    rows: list[InventoryRecord] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)

    def barcodes_by_item(self) -> dict[str, list[str]]:
        barcodes: dict[str, list[str]] = {}
        for row in self.rows:
            codes = barcodes.setdefault(row.item_number, [])
            if row.upc not in codes:
                codes.append(row.upc)
        return barcodes

    def items(self) -> list[InventoryRecord]:
        """First row of every item, the one carrying its primary UPC."""

        seen: dict[str, InventoryRecord] = {}
        for row in self.rows:
            seen.setdefault(row.item_number, row)
        return list(seen.values())


def read_inventory_snapshot(path: Path, *, encoding: str = "utf-8-sig") -> InventorySnapshot:
    snapshot = InventorySnapshot()
    for line, row in read_csv_rows(Path(path), required=INVENTORY_COLUMNS, encoding=encoding):
        try:
            payload = InventoryRowPayload.model_validate(row)
        except ValidationError as exc:
            snapshot.rejected.append(RejectedRow(line=line, reason=str(exc)))
            log.warning(f"Skipping {path} line {line}: {exc.error_count()} validation error(s)")
            continue
        snapshot.rows.append(
            InventoryRecord(
                item_number=payload.item_number,
                upc=payload.upc,
                cost=payload.cost,
                list_price=payload.list_price,
                weight=payload.weight,
                group=payload.group,
                alt_skus=payload.alt_skus,
                revision=payload.revision,
            )
        )
    barcodes = snapshot.barcodes_by_item()
    snapshot.rows = [
        replace(row, barcodes=tuple(barcodes[row.item_number])) for row in snapshot.rows
    ]
    return snapshot
