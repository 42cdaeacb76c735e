"""Port for the external inventory system."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vendorrecon.domain.model import InventoryRecord, Patch


@runtime_checkable
class InventoryCollaborator(Protocol):
    """Lookup-and-write access to the inventory system.

    ``apply_patch`` must be atomic per record. It raises
    ``WriteConflictError`` when the record changed since ``patch.base_revision``,
    ``ItemNotFoundError`` when the item is gone and
    ``InventoryUnavailableError`` on transient failures.
    """

    async def lookup_by_upc_prefix(self, key: str) -> frozenset[InventoryRecord]: ...

    async def apply_patch(self, item_number: str, patch: Patch) -> None: ...
