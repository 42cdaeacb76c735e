from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from vendorrecon.adapters.memory import InMemoryInventory

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from vendorrecon.domain.model import InventoryRecord, Patch


class ScriptedInventory:
    """Wrap an in-memory inventory and inject failures or delays in call order."""

    def __init__(
        self,
        inner: InMemoryInventory,
        *,
        lookup_failures: list[BaseException] | None = None,
        write_failures: list[BaseException] | None = None,
        lookup_delay: float = 0.0,
        before_write: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.inner = inner
        self.lookup_failures = list(lookup_failures or ())
        self.write_failures = list(write_failures or ())
        self.lookup_delay = lookup_delay
        self.before_write = before_write
        self.lookup_calls = 0
        self.write_calls = 0

    async def lookup_by_upc_prefix(self, key: str) -> frozenset[InventoryRecord]:
        self.lookup_calls += 1
        if self.lookup_delay:
            await asyncio.sleep(self.lookup_delay)
        if self.lookup_failures:
            raise self.lookup_failures.pop(0)
        return await self.inner.lookup_by_upc_prefix(key)

    async def apply_patch(self, item_number: str, patch: Patch) -> None:
        self.write_calls += 1
        if self.before_write is not None:
            hook, self.before_write = self.before_write, None
            await hook()
        if self.write_failures:
            raise self.write_failures.pop(0)
        await self.inner.apply_patch(item_number, patch)


def build_inventory(*rows: InventoryRecord) -> InMemoryInventory:
    return InMemoryInventory(rows)
