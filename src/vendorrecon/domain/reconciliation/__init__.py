"""Reconciliation core for vendor catalog records.

Layered flow per vendor record:
1) derive the lookup key from the vendor UPC
2) look candidates up and classify them (none / ambiguous / unique)
3) flag cost and price swings that need a human
4) allocate the vendor SKU into a free alternate SKU slot
5) compute the field patch under the asymmetric price rule
6) write the patch, or append a review entry
"""

from __future__ import annotations

from .allocation import AltSkuAllocation, allocate_alt_sku
from .anomalies import DEFAULT_ANOMALY_RATIO, detect_anomaly, exceeds_ratio, ratio
from .contracts import Applied, Decision, Outcome, OutcomeKind, PlannedUpdate, Queued
from .engine import ReconciliationEngine
from .fields import DEFAULT_GROUP, reconcile_fields
from .keys import normalize_upc
from .matching import (
    AmbiguousMatch,
    CandidateMatcher,
    MatchKind,
    MatchResult,
    NoMatch,
    UniqueMatch,
    classify_candidates,
)
from .plan import PlanPolicy, decide, plan_update
from .report import BatchReport

__all__ = [
    "DEFAULT_ANOMALY_RATIO",
    "DEFAULT_GROUP",
    "AltSkuAllocation",
    "AmbiguousMatch",
    "Applied",
    "BatchReport",
    "CandidateMatcher",
    "Decision",
    "MatchKind",
    "MatchResult",
    "NoMatch",
    "Outcome",
    "OutcomeKind",
    "PlanPolicy",
    "PlannedUpdate",
    "Queued",
    "ReconciliationEngine",
    "UniqueMatch",
    "allocate_alt_sku",
    "classify_candidates",
    "decide",
    "detect_anomaly",
    "exceeds_ratio",
    "normalize_upc",
    "plan_update",
    "ratio",
    "reconcile_fields",
]
