"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from vendorrecon.domain.model import InventoryRecord, Patch, ReviewEntry, ReviewReason


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class InventoryRepository(Protocol):
    """Persistence contract for an inventory mirror."""

    def find_by_upc_prefix(self, prefix: str) -> list[InventoryRecord]: ...

    def get(self, item_number: str) -> InventoryRecord | None: ...

    def add(self, record: InventoryRecord, *, barcodes: Sequence[str] = ()) -> None: ...

    def update(self, item_number: str, patch: Patch) -> str: ...


@runtime_checkable
class ReviewEntryRepository(Protocol):
    """Persistence contract for review queue entries."""

    def add(self, entry: ReviewEntry) -> None: ...

    def list_entries(
        self,
        *,
        reason: ReviewReason | None = None,
        limit: int | None = None,
    ) -> list[ReviewEntry]: ...


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ReconciliationRepositories(RepositoryCollection):
    """Repositories backing the inventory mirror and the review queue."""

    inventory: InventoryRepository
    review_entries: ReviewEntryRepository


type ReconciliationUnitOfWork = UnitOfWork[ReconciliationRepositories]
