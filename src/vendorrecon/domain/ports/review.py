"""Port for the review queue sink."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vendorrecon.domain.model import ReviewEntry


@runtime_checkable
class ReviewQueue(Protocol):
    """Append-only sink read by human review tooling, never by the engine."""

    def add(self, entry: ReviewEntry) -> None: ...
