"""Classification of inventory lookup hits for one vendor record.

Several hits do not necessarily mean a duplicate: one inventory item can be
returned more than once under a shared truncated key (for example one row per
stored barcode). Only hits spanning several distinct item numbers are
ambiguous.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from vendorrecon.domain.model import InventoryRecord


class MatchKind(StrEnum):
    NONE = "none"
    AMBIGUOUS = "ambiguous"
    UNIQUE = "unique"


@dataclass(frozen=True, slots=True, kw_only=True)
class NoMatch:
    """No inventory record shares the lookup key."""

    key: str
    kind: Literal[MatchKind.NONE] = MatchKind.NONE


@dataclass(frozen=True, slots=True, kw_only=True)
class AmbiguousMatch:
    """The lookup key hits several distinct inventory items."""

    key: str
    candidates: frozenset[InventoryRecord]
    distinct_sku_count: int
    kind: Literal[MatchKind.AMBIGUOUS] = MatchKind.AMBIGUOUS

    def __post_init__(self) -> None:
        if self.distinct_sku_count < 2:
            raise ValueError("Ambiguous match must span at least two item numbers")

    @property
    def item_numbers(self) -> tuple[str, ...]:
        return tuple(sorted({candidate.item_number for candidate in self.candidates}))


@dataclass(frozen=True, slots=True, kw_only=True)
class UniqueMatch:
    """The lookup key resolves to exactly one inventory item."""

    key: str
    record: InventoryRecord
    hits: int = 1
    kind: Literal[MatchKind.UNIQUE] = MatchKind.UNIQUE


type MatchResult = NoMatch | AmbiguousMatch | UniqueMatch

type CandidateLookup = Callable[[str], Awaitable[Iterable[InventoryRecord]]]


def _representative(candidates: Iterable[InventoryRecord]) -> InventoryRecord:
    return min(candidates, key=lambda record: (record.upc, record.revision or ""))


def classify_candidates(key: str, candidates: Iterable[InventoryRecord]) -> MatchResult:
    """Classify the records found for ``key``."""

    hits = frozenset(candidates)
    if not hits:
        return NoMatch(key=key)
    if len(hits) == 1:
        (record,) = hits
        return UniqueMatch(key=key, record=record)

    item_numbers = {record.item_number for record in hits}
    if len(item_numbers) == 1:
        return UniqueMatch(key=key, record=_representative(hits), hits=len(hits))
    return AmbiguousMatch(key=key, candidates=hits, distinct_sku_count=len(item_numbers))


@dataclass(slots=True)
class CandidateMatcher:
    """Look the key up through the inventory collaborator and classify the hits."""

    lookup: CandidateLookup

    async def __call__(self, key: str) -> MatchResult:
        candidates = await self.lookup(key)
        return classify_candidates(key, candidates)
