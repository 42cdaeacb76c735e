from __future__ import annotations

import asyncio
import time
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect

from vendorrecon.adapters.memory import InMemoryReviewQueue
from vendorrecon.adapters.sqlalchemy import (
    SqlAlchemyInventory,
    SqlAlchemyInventoryRepository,
    SqlAlchemyReviewQueue,
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    create_all_tables,
    is_started,
    shutdown,
    startup,
)
from vendorrecon.adapters.sqlalchemy.migrations import current_revision
from vendorrecon.config import EngineConfig
from vendorrecon.domain.errors import WriteConflictError
from vendorrecon.domain.model import Patch, PatchField, ReviewReason
from vendorrecon.domain.reconciliation import (
    Applied,
    BatchReport,
    Queued,
    ReconciliationEngine,
)
from tests.helpers.records import make_inventory_record, make_vendor_record

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    from vendorrecon.domain.model import InventoryRecord


def _seed(factory: Callable[[], SqlAlchemyUnitOfWork], *records: InventoryRecord) -> None:
    with factory() as uow:
        for record in records:
            uow.repositories.inventory.add(record)
        uow.commit()


def test_migrations_create_tables(sqlite_engine: Engine) -> None:
    tables = set(inspect(sqlite_engine).get_table_names())

    assert {"inventory_item", "inventory_barcode", "review_entry"} <= tables
    assert current_revision(sqlite_engine) == "0001_initial"


def test_metadata_matches_migrated_schema(sqlite_engine: Engine) -> None:
    fresh = create_engine("sqlite+pysqlite://")
    try:
        create_all_tables(fresh)
        migrated, created = inspect(sqlite_engine), inspect(fresh)
        for table in ("inventory_item", "inventory_barcode", "review_entry"):
            assert {column["name"] for column in created.get_columns(table)} == {
                column["name"] for column in migrated.get_columns(table)
            }
    finally:
        fresh.dispose()


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    assert not is_started()
    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_second_startup_requires_force(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    try:
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError, match="already initialised"):
            startup(engine=sqlite_engine)
    finally:
        shutdown()


def test_repositories_need_an_open_session(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_exception_rolls_back_pending_changes(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with pytest.raises(RuntimeError), sqlite_unit_of_work() as uow:
        uow.repositories.inventory.add(make_inventory_record("A1"))
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.inventory.get("A1") is None


def test_collaborator_patch_is_revision_checked(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    _seed(sqlite_unit_of_work, make_inventory_record("A1", weight="1.0"))
    inventory = SqlAlchemyInventory(uow_factory=sqlite_unit_of_work)
    patch = Patch({PatchField.WEIGHT: Decimal("2.0")}, base_revision="1")

    asyncio.run(inventory.apply_patch("A1", patch))
    with pytest.raises(WriteConflictError):
        asyncio.run(inventory.apply_patch("A1", patch))

    (record,) = asyncio.run(inventory.lookup_by_upc_prefix("01234567890"))
    assert record.weight == Decimal("2.0")
    assert record.revision == "2"


def test_engine_runs_against_database(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    _seed(
        sqlite_unit_of_work,
        make_inventory_record("A1", group=None),
        make_inventory_record("B1", upc="55555555555", cost="1.00"),
    )
    engine = ReconciliationEngine(
        inventory=SqlAlchemyInventory(uow_factory=sqlite_unit_of_work),
        review_queue=SqlAlchemyReviewQueue(uow_factory=sqlite_unit_of_work),
        config=EngineConfig(backoff_factor=0.0),
    )

    report = engine.run(
        [
            make_vendor_record("V-1", upc="012345678905"),
            make_vendor_record("V-2", upc="555555555550", cost="9.00"),
        ]
    )

    applied, queued = report.outcomes
    assert isinstance(applied, Applied)
    assert applied.patch.changes == {
        PatchField.ALT_SKUS: ("V-1", None, None),
        PatchField.GROUP: "Z",
        PatchField.BARCODES: ("012345678905", "01234567890"),
    }
    assert isinstance(queued, Queued)
    assert queued.reason is ReviewReason.COST_ANOMALY

    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.inventory.get("A1")
        entries = uow.repositories.review_entries.list_entries()
    assert stored is not None
    assert stored.alt_skus == ("V-1", None, None)
    assert stored.revision == "2"
    assert stored.upc == "012345678905"
    assert [entry.reason for entry in entries] == [ReviewReason.COST_ANOMALY]


def test_slow_database_lookup_times_out(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _seed(sqlite_unit_of_work, make_inventory_record("A1"))
    find = SqlAlchemyInventoryRepository.find_by_upc_prefix

    def slow_find(self: SqlAlchemyInventoryRepository, prefix: str) -> list[InventoryRecord]:
        time.sleep(0.5)
        return find(self, prefix)

    monkeypatch.setattr(SqlAlchemyInventoryRepository, "find_by_upc_prefix", slow_find)
    engine = ReconciliationEngine(
        inventory=SqlAlchemyInventory(uow_factory=sqlite_unit_of_work),
        review_queue=InMemoryReviewQueue(),
        config=EngineConfig(timeout_seconds=0.05, attempts=1),
    )

    async def run() -> tuple[BatchReport, float]:
        started = time.perf_counter()
        report = await engine.run_async([make_vendor_record("A1")])
        return report, time.perf_counter() - started

    report, elapsed = asyncio.run(run())

    (outcome,) = report.outcomes
    assert isinstance(outcome, Queued)
    assert outcome.reason is ReviewReason.UNAVAILABLE
    assert elapsed < 0.4
