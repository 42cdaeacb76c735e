"""Domain port definitions for adapters."""

from __future__ import annotations

from .feeds import FeedBatch, RejectedRow, VendorFeed
from .inventory import InventoryCollaborator
from .review import ReviewQueue
from .unit_of_work import (
    InventoryRepository,
    ReconciliationRepositories,
    ReconciliationUnitOfWork,
    RepositoryCollection,
    ReviewEntryRepository,
    UnitOfWork,
)

__all__ = [
    "FeedBatch",
    "InventoryCollaborator",
    "InventoryRepository",
    "ReconciliationRepositories",
    "ReconciliationUnitOfWork",
    "RejectedRow",
    "RepositoryCollection",
    "ReviewEntryRepository",
    "ReviewQueue",
    "UnitOfWork",
    "VendorFeed",
]
