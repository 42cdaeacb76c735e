"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from vendorrecon.adapters.feeds import CsvVendorFeed, read_inventory_snapshot
from vendorrecon.adapters.inventory_gateway import InventoryGatewayClient
from vendorrecon.adapters.memory import InMemoryReviewQueue
from vendorrecon.adapters.sqlalchemy import (
    SqlAlchemyInventory,
    SqlAlchemyReviewQueue,
    SqlAlchemyUnitOfWork,
    is_started,
    startup,
)
from vendorrecon.config import get_engine_config
from vendorrecon.domain.ports import ReconciliationUnitOfWork
from vendorrecon.domain.reconciliation import BatchReport, ReconciliationEngine

if TYPE_CHECKING:
    from vendorrecon.config import EngineConfig
    from vendorrecon.domain.model import InventoryRecord, Patch, ReviewEntry, ReviewReason
    from vendorrecon.domain.ports import InventoryCollaborator, ReviewQueue, VendorFeed

UnitOfWorkFactory = Callable[[], ReconciliationUnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class DryRunInventory:
    """Pass lookups through, log patches instead of writing them."""

    inventory: InventoryCollaborator

    async def lookup_by_upc_prefix(self, key: str) -> frozenset[InventoryRecord]:
        return await self.inventory.lookup_by_upc_prefix(key)

    async def apply_patch(self, item_number: str, patch: Patch) -> None:
        log.info(f"[dry-run] would patch {item_number}: {patch.as_dict()}")


@dataclass(frozen=True, slots=True)
class InventoryImportResult:
    imported: int
    skipped: int
    rejected: int


def _ensure_started(database_uri: str | None) -> None:
    if not is_started():
        startup(database_uri=database_uri)


def reconcile_vendor_feed(
    feed: VendorFeed | Path | str,
    *,
    inventory: InventoryCollaborator | None = None,
    review_queue: ReviewQueue | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    use_gateway: bool = False,
    dry_run: bool = False,
    config: EngineConfig | None = None,
    database_uri: str | None = None,
) -> BatchReport:
    """Reconcile one vendor feed against the configured inventory.

    Without an explicit ``inventory`` the SQLAlchemy mirror is used, or the
    inventory gateway when ``use_gateway`` is set. Review entries go to the
    SQLAlchemy review queue unless ``review_queue`` is given; a dry run keeps
    them in memory and writes nothing.
    """

    effective_feed = CsvVendorFeed(Path(feed)) if isinstance(feed, (str, Path)) else feed
    batch = effective_feed()

    needs_database = (inventory is None and not use_gateway) or (
        review_queue is None and not dry_run
    )
    if needs_database and unit_of_work_factory is None:
        _ensure_started(database_uri)
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork

    if review_queue is not None:
        effective_queue = review_queue
    elif dry_run:
        effective_queue = InMemoryReviewQueue()
    else:
        effective_queue = SqlAlchemyReviewQueue(uow_factory=effective_uow)

    effective_config = config or get_engine_config()
    log.info(
        "Starting reconciliation: records=%s, rejected_rows=%s, gateway=%s, dry_run=%s",
        len(batch.records),
        len(batch.rejected),
        use_gateway and inventory is None,
        dry_run,
    )

    def _engine_for(collaborator: InventoryCollaborator) -> ReconciliationEngine:
        return ReconciliationEngine(
            inventory=DryRunInventory(collaborator) if dry_run else collaborator,
            review_queue=effective_queue,
            config=effective_config,
        )

    if inventory is None and use_gateway:

        async def _run_with_gateway() -> BatchReport:
            async with InventoryGatewayClient() as client:
                return await _engine_for(client).run_async(batch.records)

        report = asyncio.run(_run_with_gateway())
    else:
        collaborator = inventory or SqlAlchemyInventory(uow_factory=effective_uow)
        report = _engine_for(collaborator).run(batch.records)

    report.rejected_rows.extend(batch.rejected)
    summary = report.summary()
    log.info(
        f"Finished reconciliation: processed={summary['processed']}, "
        f"matched={summary['matched']}, unchanged={summary['unchanged']}, "
        f"new={summary['new']}, duplicates={summary['duplicate']}, "
        f"double_check={summary['double_check']}, queued={summary['queued']}, "
        f"rejected_rows={summary['rejected_rows']}"
    )
    return report


def list_review_entries(
    *,
    reason: ReviewReason | None = None,
    limit: int | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    database_uri: str | None = None,
) -> list[ReviewEntry]:
    """Return queued review entries, oldest first."""

    if unit_of_work_factory is None:
        _ensure_started(database_uri)
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    with effective_uow() as uow:
        return uow.repositories.review_entries.list_entries(reason=reason, limit=limit)


def import_inventory_snapshot(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    database_uri: str | None = None,
) -> InventoryImportResult:
    """Load an exported inventory snapshot into the SQLAlchemy mirror.

    Items already present are left untouched; extra barcode lines of an item
    are stored as additional barcodes.
    """

    snapshot = read_inventory_snapshot(path)
    if unit_of_work_factory is None:
        _ensure_started(database_uri)
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork

    barcodes = snapshot.barcodes_by_item()
    imported = skipped = 0
    with effective_uow() as uow:
        repository = uow.repositories.inventory
        for item in snapshot.items():
            if repository.get(item.item_number) is not None:
                skipped += 1
                continue
            repository.add(item, barcodes=barcodes.get(item.item_number, ()))
            imported += 1
        uow.commit()

    log.info(
        f"Imported inventory snapshot {path}: imported={imported}, skipped={skipped}, "
        f"rejected={len(snapshot.rejected)}"
    )
    return InventoryImportResult(
        imported=imported, skipped=skipped, rejected=len(snapshot.rejected)
    )
