"""SQLAlchemy adapter package for vendorrecon."""

from __future__ import annotations

from .collaborators import SqlAlchemyInventory, SqlAlchemyReviewQueue
from .mappings import (
    create_all_tables,
    inventory_barcode_table,
    inventory_item_table,
    metadata,
    review_entry_table,
)
from .repositories import SqlAlchemyInventoryRepository, SqlAlchemyReviewEntryRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyInventory",
    "SqlAlchemyInventoryRepository",
    "SqlAlchemyReviewEntryRepository",
    "SqlAlchemyReviewQueue",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "inventory_barcode_table",
    "inventory_item_table",
    "is_started",
    "metadata",
    "review_entry_table",
    "shutdown",
    "startup",
]
