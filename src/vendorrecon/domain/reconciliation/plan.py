"""Pure per-record state machine.

``Normalize -> Match -> AnomalyCheck -> Allocate -> Reconcile``. Every branch
ends in exactly one decision: a planned patch or a review entry. Nothing here
performs I/O, so the planner is safe to run for many records in parallel.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from vendorrecon.domain.errors import AnomalyCheckError, SlotExhaustedError
from vendorrecon.domain.model import Patch, PatchField, ReviewEntry, ReviewReason

from .allocation import allocate_alt_sku
from .anomalies import DEFAULT_ANOMALY_RATIO, detect_anomaly, reason_for_undefined_ratio
from .contracts import PlannedUpdate
from .fields import DEFAULT_GROUP, reconcile_fields
from .matching import AmbiguousMatch, NoMatch

if TYPE_CHECKING:
    from vendorrecon.domain.model import InventoryRecord, PatchValue, VendorRecord

    from .contracts import Decision
    from .matching import MatchResult


@dataclass(frozen=True, slots=True, kw_only=True)
class PlanPolicy:
    anomaly_ratio: Decimal = DEFAULT_ANOMALY_RATIO
    default_group: str = DEFAULT_GROUP


def plan_update(
    record: VendorRecord,
    target: InventoryRecord,
    *,
    policy: PlanPolicy | None = None,
) -> Decision:
    """Run anomaly check, slot allocation and field reconciliation for a matched pair."""

    active = policy or PlanPolicy()

    try:
        anomaly = detect_anomaly(record, target, threshold=active.anomaly_ratio)
    except AnomalyCheckError as exc:
        return ReviewEntry(
            record=record,
            reason=reason_for_undefined_ratio(exc),
            context=target,
            detail=str(exc),
        )
    if anomaly is not None:
        return ReviewEntry(record=record, reason=anomaly, context=target)

    try:
        allocation = allocate_alt_sku(record.vendor_sku, target)
    except SlotExhaustedError as exc:
        return ReviewEntry(
            record=record,
            reason=ReviewReason.SLOT_EXHAUSTED,
            context=target,
            detail=str(exc),
        )

    changes: dict[PatchField, PatchValue] = {}
    if allocation is not None:
        changes[PatchField.ALT_SKUS] = allocation.alt_skus
    changes.update(reconcile_fields(record, target, default_group=active.default_group))
    return PlannedUpdate(
        record=record,
        target=target,
        patch=Patch(changes, base_revision=target.revision),
    )


def decide(
    record: VendorRecord,
    match: MatchResult,
    *,
    policy: PlanPolicy | None = None,
) -> Decision:
    """Turn a classified lookup into a decision for ``record``."""

    if isinstance(match, NoMatch):
        return ReviewEntry(record=record, reason=ReviewReason.NEW)
    if isinstance(match, AmbiguousMatch):
        return ReviewEntry(
            record=record,
            reason=ReviewReason.DUPLICATE,
            detail="Matching item numbers: " + ", ".join(match.item_numbers),
        )
    return plan_update(record, match.record, policy=policy)
