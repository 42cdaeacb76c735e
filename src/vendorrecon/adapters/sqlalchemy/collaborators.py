"""Inventory collaborator and review queue backed by the SQLAlchemy mirror.

Every call runs in its own unit of work. Inventory lookups and writes run on
a worker thread, so concurrent records overlap and the engine's timeout
applies to database calls too. A write is one transaction: if its caller
stops waiting it still commits or rolls back as a whole, and a retry against
the old revision then conflicts.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy.exc import OperationalError

from vendorrecon.domain.errors import InventoryUnavailableError

from .unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Callable

    from vendorrecon.domain.model import InventoryRecord, Patch, ReviewEntry
    from vendorrecon.domain.ports import (
        InventoryCollaborator,
        ReconciliationUnitOfWork,
        ReviewQueue,
    )

log = getLogger(__name__)

type UnitOfWorkFactory = Callable[[], ReconciliationUnitOfWork]


@dataclass(slots=True)
class SqlAlchemyInventory:
    """Collaborator over the ``inventory_item`` mirror with revision-checked writes."""

    uow_factory: UnitOfWorkFactory = SqlAlchemyUnitOfWork

    async def lookup_by_upc_prefix(self, key: str) -> frozenset[InventoryRecord]:
        return await asyncio.to_thread(self._lookup, key)

    async def apply_patch(self, item_number: str, patch: Patch) -> None:
        revision = await asyncio.to_thread(self._apply, item_number, patch)
        log.debug(f"{item_number} now at revision {revision}")

    def _lookup(self, key: str) -> frozenset[InventoryRecord]:
        try:
            with self.uow_factory() as uow:
                return frozenset(uow.repositories.inventory.find_by_upc_prefix(key))
        except OperationalError as exc:
            raise InventoryUnavailableError(f"Inventory database unavailable: {exc}") from exc

    def _apply(self, item_number: str, patch: Patch) -> str:
        try:
            with self.uow_factory() as uow:
                revision = uow.repositories.inventory.update(item_number, patch)
                uow.commit()
        except OperationalError as exc:
            raise InventoryUnavailableError(f"Inventory database unavailable: {exc}") from exc
        return revision


@dataclass(slots=True)
class SqlAlchemyReviewQueue:
    """Review queue persisted in the ``review_entry`` table."""

    uow_factory: UnitOfWorkFactory = SqlAlchemyUnitOfWork

    def add(self, entry: ReviewEntry) -> None:
        with self.uow_factory() as uow:
            uow.repositories.review_entries.add(entry)
            uow.commit()


if TYPE_CHECKING:
    _inventory_check: InventoryCollaborator = SqlAlchemyInventory()
    _queue_check: ReviewQueue = SqlAlchemyReviewQueue()
