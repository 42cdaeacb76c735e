"""Batch-level outcome summary."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vendorrecon.domain.model import ReviewReason

from .contracts import Applied, Queued

if TYPE_CHECKING:
    from vendorrecon.domain.ports.feeds import RejectedRow

    from .contracts import Outcome


@dataclass(slots=True)
class BatchReport:
    """One outcome per processed vendor record, in feed order."""

    outcomes: list[Outcome] = field(default_factory=list)
    rejected_rows: list[RejectedRow] = field(default_factory=list)

    @property
    def applied(self) -> list[Applied]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, Applied)]

    @property
    def queued(self) -> list[Queued]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, Queued)]

    def counts_by_reason(self) -> Counter[ReviewReason]:
        return Counter(outcome.reason for outcome in self.queued)

    def summary(self) -> dict[str, int]:
        """Counts grouped the way operators read them.

        ``matched`` covers every applied record, ``unchanged`` the subset whose
        patch was empty; ``double_check`` groups both anomaly reasons.
        """

        applied = self.applied
        reasons = self.counts_by_reason()
        summary = {
            "processed": len(self.outcomes),
            "matched": len(applied),
            "unchanged": sum(1 for outcome in applied if not outcome.patch),
            "queued": len(self.queued),
            "double_check": sum(count for reason, count in reasons.items() if reason.is_anomaly),
            "rejected_rows": len(self.rejected_rows),
        }
        for reason in ReviewReason:
            summary[reason.value] = reasons.get(reason, 0)
        return summary
