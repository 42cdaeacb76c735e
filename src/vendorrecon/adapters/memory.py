"""In-memory inventory and review queue.

``InMemoryInventory`` works from an exported inventory snapshot. The export
may list one item several times (once per stored barcode); every row is kept
and returned by lookups, and a patch updates all rows of its item together.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from vendorrecon.domain.errors import ItemNotFoundError, WriteConflictError
from vendorrecon.domain.model import PatchField

if TYPE_CHECKING:
    from collections.abc import Iterable

    from vendorrecon.domain.model import InventoryRecord, Patch, ReviewEntry, ReviewReason
    from vendorrecon.domain.ports import InventoryCollaborator, ReviewQueue


def _next_revision(revision: str | None) -> str:
    if revision is None:
        return "1"
    if revision.isdigit():
        return str(int(revision) + 1)
    return f"{revision}+1"


class InMemoryInventory:
    def __init__(self, rows: Iterable[InventoryRecord] = ()) -> None:
        self._rows: list[InventoryRecord] = [
            row if row.revision is not None else replace(row, revision="1") for row in rows
        ]
        self.writes: list[tuple[str, Patch]] = []

    @property
    def rows(self) -> tuple[InventoryRecord, ...]:
        return tuple(self._rows)

    def get(self, item_number: str) -> InventoryRecord | None:
        return next((row for row in self._rows if row.item_number == item_number), None)

    async def lookup_by_upc_prefix(self, key: str) -> frozenset[InventoryRecord]:
        return frozenset(row for row in self._rows if row.upc.startswith(key))

    async def apply_patch(self, item_number: str, patch: Patch) -> None:
        positions = [
            index for index, row in enumerate(self._rows) if row.item_number == item_number
        ]
        if not positions:
            raise ItemNotFoundError(f"{item_number} does not exist", item_number=item_number)

        current = self._rows[positions[0]].revision
        if patch.base_revision is not None and patch.base_revision != current:
            raise WriteConflictError(
                f"{item_number} is at revision {current}, patch expects {patch.base_revision}",
                item_number=item_number,
            )

        revision = _next_revision(current)
        updated = [
            replace(patch.apply_to(self._rows[index]), revision=revision) for index in positions
        ]
        if PatchField.BARCODES in patch:
            # one row per barcode, primary first, where the item's first row was
            template = updated[0]
            rows = [row for row in self._rows if row.item_number != item_number]
            rows[positions[0] : positions[0]] = [
                replace(template, upc=code) for code in template.barcodes
            ]
            self._rows = rows
        else:
            for index, row in zip(positions, updated, strict=True):
                self._rows[index] = row
        self.writes.append((item_number, patch))


@dataclass(slots=True)
class InMemoryReviewQueue:
    entries: list[ReviewEntry] = field(default_factory=list)

    def add(self, entry: ReviewEntry) -> None:
        self.entries.append(entry)

    def list_entries(
        self,
        *,
        reason: ReviewReason | None = None,
        limit: int | None = None,
    ) -> list[ReviewEntry]:
        selected = [entry for entry in self.entries if reason is None or entry.reason is reason]
        return selected if limit is None else selected[:limit]


if TYPE_CHECKING:
    _inventory_check: InventoryCollaborator = InMemoryInventory()
    _queue_check: ReviewQueue = InMemoryReviewQueue()
