"""Orchestrator for one reconciliation batch.

The engine wires the pure planner to the inventory collaborator and the review
queue. Records run concurrently (bounded by ``EngineConfig.max_workers``);
writes are serialised per inventory item number so two vendor records that
resolve to the same item never race for the same free alternate SKU slot.

Every collaborator call is bounded by a timeout and retried a fixed number of
times. A write conflict triggers one re-fetch and re-plan; a second conflict
goes to review instead of looping.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from vendorrecon.config.engine import EngineConfig
from vendorrecon.domain.errors import (
    InvalidUpcError,
    InventoryUnavailableError,
    ItemNotFoundError,
    WriteConflictError,
)
from vendorrecon.domain.model import ReviewEntry, ReviewReason

from .contracts import Applied, Queued
from .keys import normalize_upc
from .matching import CandidateMatcher, UniqueMatch, classify_candidates
from .plan import PlanPolicy, decide, plan_update
from .report import BatchReport

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from vendorrecon.domain.model import InventoryRecord, VendorRecord
    from vendorrecon.domain.ports import InventoryCollaborator, ReviewQueue

    from .contracts import Decision, Outcome, PlannedUpdate

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Reconcile vendor records against the inventory system."""

    inventory: InventoryCollaborator
    review_queue: ReviewQueue
    config: EngineConfig = field(default_factory=EngineConfig)

    @property
    def policy(self) -> PlanPolicy:
        return PlanPolicy(
            anomaly_ratio=self.config.anomaly_ratio,
            default_group=self.config.default_group,
        )

    def run(self, records: Iterable[VendorRecord]) -> BatchReport:
        """Process ``records`` and return one outcome per record."""

        return asyncio.run(self.run_async(records))

    def reconcile(self, record: VendorRecord) -> Outcome:
        """Process a single record outside of a batch."""

        return asyncio.run(_BatchRun(self).process(record))

    async def run_async(self, records: Iterable[VendorRecord]) -> BatchReport:
        batch = list(records)
        log.info(
            "Starting reconciliation batch: records=%s, workers=%s",
            len(batch),
            self.config.max_workers,
        )
        run = _BatchRun(self)
        outcomes = await asyncio.gather(*(run.process(record) for record in batch))
        report = BatchReport(outcomes=list(outcomes))
        counts = ", ".join(f"{name}={count}" for name, count in report.summary().items() if count)
        log.info(f"Finished reconciliation batch: {counts or 'nothing to do'}")
        return report


class _BatchRun:
    """Per-batch state: worker slots, item locks and items written so far."""

    def __init__(self, engine: ReconciliationEngine) -> None:
        self._inventory = engine.inventory
        self._review_queue = engine.review_queue
        self._config = engine.config
        self._policy = engine.policy
        self._slots = asyncio.Semaphore(engine.config.max_workers)
        self._locks: dict[str, asyncio.Lock] = {}
        self._written: set[str] = set()
        self._matcher = CandidateMatcher(lookup=self._lookup)

    async def process(self, record: VendorRecord) -> Outcome:
        async with self._slots:
            try:
                return await self._process(record)
            except InventoryUnavailableError as exc:
                log.warning("Inventory unavailable for %s: %s", record.vendor_sku, exc)
                return self._queue(
                    ReviewEntry(record=record, reason=ReviewReason.UNAVAILABLE, detail=str(exc))
                )
            except Exception as exc:  # noqa: BLE001
                log.exception("Unexpected failure while reconciling %s", record.vendor_sku)
                return self._queue(
                    ReviewEntry(
                        record=record,
                        reason=ReviewReason.UNAVAILABLE,
                        detail=f"{type(exc).__name__}: {exc}",
                    )
                )

    async def _process(self, record: VendorRecord) -> Outcome:
        try:
            key = normalize_upc(record.upc)
        except InvalidUpcError as exc:
            log.warning("Rejecting %s: %s", record.vendor_sku, exc)
            return self._queue(
                ReviewEntry(record=record, reason=ReviewReason.INVALID_INPUT, detail=str(exc))
            )

        match = await self._matcher(key)
        decision = decide(record, match, policy=self._policy)
        if isinstance(decision, ReviewEntry):
            return self._queue(decision)
        return await self._write(key, decision)

    async def _write(self, key: str, planned: PlannedUpdate) -> Outcome:
        item_number = planned.target.item_number
        async with self._lock_for(item_number):
            if item_number in self._written:
                # an earlier record of this batch changed the item after our lookup
                decision = await self._replan(key, planned)
                if isinstance(decision, ReviewEntry):
                    return self._queue(decision)
                planned = decision

            conflicts = 0
            while True:
                if not planned.patch:
                    return Applied(
                        record=planned.record, item_number=item_number, patch=planned.patch
                    )
                try:
                    await self._call(
                        f"apply_patch({item_number})",
                        partial(self._inventory.apply_patch, item_number, planned.patch),
                    )
                except WriteConflictError as exc:
                    conflicts += 1
                    if conflicts > 1:
                        return self._queue(
                            ReviewEntry(
                                record=planned.record,
                                reason=ReviewReason.CONFLICT,
                                context=planned.target,
                                detail=str(exc),
                            )
                        )
                    log.info(
                        "Write conflict on %s, re-planning %s",
                        item_number,
                        planned.record.vendor_sku,
                    )
                    decision = await self._replan(key, planned)
                    if isinstance(decision, ReviewEntry):
                        return self._queue(decision)
                    planned = decision
                    continue
                except ItemNotFoundError as exc:
                    return self._queue(
                        ReviewEntry(
                            record=planned.record,
                            reason=ReviewReason.NOT_FOUND,
                            context=planned.target,
                            detail=str(exc),
                        )
                    )
                except InventoryUnavailableError as exc:
                    log.warning("Giving up on %s: %s", item_number, exc)
                    return self._queue(
                        ReviewEntry(
                            record=planned.record,
                            reason=ReviewReason.UNAVAILABLE,
                            context=planned.target,
                            detail=str(exc),
                        )
                    )

                self._written.add(item_number)
                log.debug("Applied %s to %s", planned.patch.as_dict(), item_number)
                return Applied(record=planned.record, item_number=item_number, patch=planned.patch)

    async def _replan(self, key: str, planned: PlannedUpdate) -> Decision:
        item_number = planned.target.item_number
        candidates = await self._lookup(key)
        match = classify_candidates(
            key,
            (candidate for candidate in candidates if candidate.item_number == item_number),
        )
        if not isinstance(match, UniqueMatch):
            return ReviewEntry(
                record=planned.record,
                reason=ReviewReason.NOT_FOUND,
                context=planned.target,
                detail=f"{item_number} no longer matches key {key}",
            )
        return plan_update(planned.record, match.record, policy=self._policy)

    async def _lookup(self, key: str) -> frozenset[InventoryRecord]:
        return await self._call(
            f"lookup_by_upc_prefix({key})",
            partial(self._inventory.lookup_by_upc_prefix, key),
        )

    async def _call[T](self, description: str, operation: Callable[[], Awaitable[T]]) -> T:
        attempts = self._config.attempts
        attempt = 1
        while True:
            try:
                async with asyncio.timeout(self._config.timeout_seconds):
                    return await operation()
            except (InventoryUnavailableError, TimeoutError) as exc:
                reason = str(exc) or type(exc).__name__
                if attempt >= attempts:
                    raise InventoryUnavailableError(
                        f"{description} failed after {attempts} attempt(s): {reason}"
                    ) from exc
                delay = self._config.backoff_delay(attempt)
                log.warning(
                    "%s failed (attempt %s/%s), retrying in %.2fs: %s",
                    description,
                    attempt,
                    attempts,
                    delay,
                    reason,
                )
                await asyncio.sleep(delay)
                attempt += 1

    def _lock_for(self, item_number: str) -> asyncio.Lock:
        lock = self._locks.get(item_number)
        if lock is None:
            lock = self._locks[item_number] = asyncio.Lock()
        return lock

    def _queue(self, entry: ReviewEntry) -> Queued:
        try:
            self._review_queue.add(entry)
        except Exception:  # noqa: BLE001
            log.exception(
                "Could not store review entry for %s (%s); dropping it",
                entry.record.vendor_sku,
                entry.reason.value,
            )
        else:
            log.info("Queued %s for review: %s", entry.record.vendor_sku, entry.reason.value)
        return Queued(entry=entry)
