"""Detection of cost and price swings that need human adjudication."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Final

from vendorrecon.domain.errors import AnomalyCheckError
from vendorrecon.domain.model import PatchField, ReviewReason

if TYPE_CHECKING:
    from vendorrecon.domain.model import InventoryRecord, VendorRecord

DEFAULT_ANOMALY_RATIO: Final[Decimal] = Decimal(2)

_REASON_BY_FIELD: Final[dict[str, ReviewReason]] = {
    PatchField.COST: ReviewReason.COST_ANOMALY,
    PatchField.LIST_PRICE: ReviewReason.PRICE_ANOMALY,
}


def _checked(field: str, a: Decimal | None, b: Decimal | None) -> tuple[Decimal, Decimal]:
    if a is None or b is None or not a.is_finite() or not b.is_finite() or a <= 0 or b <= 0:
        raise AnomalyCheckError(field, a, b)
    return a, b


def ratio(a: Decimal | None, b: Decimal | None, *, field: str = "value") -> Decimal:
    """Return ``max(a, b) / min(a, b)`` for two positive magnitudes."""

    a, b = _checked(field, a, b)
    return max(a, b) / min(a, b)


def exceeds_ratio(
    a: Decimal | None,
    b: Decimal | None,
    *,
    threshold: Decimal = DEFAULT_ANOMALY_RATIO,
    field: str = "value",
) -> bool:
    """Return whether the swing between ``a`` and ``b`` is at least ``threshold``.

    Compared by multiplication so the inclusive boundary is exact.
    """

    a, b = _checked(field, a, b)
    return max(a, b) >= threshold * min(a, b)


def detect_anomaly(
    vendor: VendorRecord,
    inventory: InventoryRecord,
    *,
    threshold: Decimal = DEFAULT_ANOMALY_RATIO,
) -> ReviewReason | None:
    """Return the anomaly flag for a matched pair, or ``None`` when the pair is clean.

    Cost is checked before price. Raises :class:`AnomalyCheckError` when a
    ratio is undefined; see :func:`reason_for_undefined_ratio`.
    """

    if exceeds_ratio(vendor.cost, inventory.cost, threshold=threshold, field=PatchField.COST):
        return ReviewReason.COST_ANOMALY
    if exceeds_ratio(
        vendor.suggested_retail,
        inventory.list_price,
        threshold=threshold,
        field=PatchField.LIST_PRICE,
    ):
        return ReviewReason.PRICE_ANOMALY
    return None


def reason_for_undefined_ratio(error: AnomalyCheckError) -> ReviewReason:
    """An undefined ratio is an unbounded swing of the field it was computed for."""

    return _REASON_BY_FIELD.get(error.field, ReviewReason.COST_ANOMALY)
