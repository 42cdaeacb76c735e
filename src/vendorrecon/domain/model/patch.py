"""Field-level patches proposed for one inventory record."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import TYPE_CHECKING

from .enums import PatchField

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .records import AltSkuSlots, InventoryRecord

type PatchValue = Decimal | str | AltSkuSlots


@dataclass(frozen=True, slots=True)
class Patch:
    """Mapping from inventory field to its new value.

    A patch is applied atomically to exactly one inventory record. An empty
    patch is a valid outcome meaning the record is already up to date.
    """

    changes: dict[PatchField, PatchValue] = field(default_factory=dict)
    base_revision: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "changes",
            {PatchField(name): value for name, value in self.changes.items()},
        )

    def __bool__(self) -> bool:
        return bool(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __contains__(self, name: object) -> bool:
        return name in self.changes

    def __getitem__(self, name: PatchField | str) -> PatchValue:
        return self.changes[PatchField(name)]

    def __iter__(self) -> Iterator[PatchField]:
        return iter(self.changes)

    def get(self, name: PatchField | str) -> PatchValue | None:
        return self.changes.get(PatchField(name))

    def apply_to(self, record: InventoryRecord) -> InventoryRecord:
        """Return the snapshot ``record`` would become once this patch is written."""

        updates: dict[str, object] = {}
        for name, value in self.changes.items():
            if name is PatchField.ALT_SKUS:
                if not isinstance(value, tuple) or len(value) != record.capacity:
                    raise ValueError(
                        f"alt_skus patch for {record.item_number} must keep "
                        f"capacity {record.capacity}"
                    )
            elif name is PatchField.BARCODES:
                if not isinstance(value, tuple) or not value:
                    raise ValueError(f"barcodes patch for {record.item_number} must not be empty")
            updates[name.value] = value
        return replace(record, **updates)

    def as_dict(self) -> dict[str, object]:
        """JSON-friendly rendering (decimals as strings, slots as lists)."""

        rendered: dict[str, object] = {}
        for name, value in self.changes.items():
            if isinstance(value, Decimal):
                rendered[name.value] = str(value)
            elif isinstance(value, tuple):
                rendered[name.value] = list(value)
            else:
                rendered[name.value] = value
        return rendered
