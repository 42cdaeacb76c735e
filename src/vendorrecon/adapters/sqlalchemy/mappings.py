"""SQLAlchemy table metadata for the inventory mirror and the review queue.

Domain records are frozen value objects, so they are not mapped imperatively;
repositories translate rows explicitly with the helpers below.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
)

from vendorrecon.domain.model import InventoryRecord, ReviewReason

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine, RowMapping

    from vendorrecon.domain.model import AltSkuSlots

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class DecimalString(TypeDecorator[Decimal]):
    """Exact decimal storage; SQLite has no fixed-point numeric type."""

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Decimal | None:
        _ = dialect
        if value is None:
            return None
        return Decimal(value)


class AltSkuListType(TypeDecorator[tuple[str | None, ...]]):
    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: tuple[str | None, ...] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(
        self, value: str | None, dialect: Dialect
    ) -> tuple[str | None, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        items = cast(list[Any], loaded)
        return tuple(item if isinstance(item, str) and item.strip() else None for item in items)


class InventorySnapshotType(TypeDecorator[InventoryRecord]):
    """The matched inventory snapshot stored alongside a review entry."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: InventoryRecord | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(snapshot_to_json(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> InventoryRecord | None:
        _ = dialect
        if value is None:
            return None
        loaded = json.loads(value)
        if not isinstance(loaded, dict):
            return None
        return snapshot_from_json(cast(dict[str, Any], loaded))


def _optional_decimal(value: object) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def snapshot_to_json(record: InventoryRecord) -> dict[str, object]:
    return {
        "item_number": record.item_number,
        "upc": record.upc,
        "cost": None if record.cost is None else str(record.cost),
        "list_price": None if record.list_price is None else str(record.list_price),
        "weight": None if record.weight is None else str(record.weight),
        "group": record.group,
        "alt_skus": list(record.alt_skus),
        "barcodes": list(record.barcodes),
        "revision": record.revision,
    }


def snapshot_from_json(payload: dict[str, Any]) -> InventoryRecord:
    alt_skus: AltSkuSlots = tuple(payload.get("alt_skus") or ())
    return InventoryRecord(
        item_number=str(payload["item_number"]),
        upc=str(payload["upc"]),
        cost=_optional_decimal(payload.get("cost")),
        list_price=_optional_decimal(payload.get("list_price")),
        weight=_optional_decimal(payload.get("weight")),
        group=payload.get("group"),
        alt_skus=alt_skus,
        barcodes=tuple(payload.get("barcodes") or ()),
        revision=payload.get("revision"),
    )


def inventory_record_from_row(
    row: RowMapping, barcodes: tuple[str, ...] = ()
) -> InventoryRecord:
    return InventoryRecord(
        item_number=row["item_number"],
        upc=row["upc"],
        cost=row["cost"],
        list_price=row["list_price"],
        weight=row["weight"],
        group=row["item_group"],
        alt_skus=row["alt_skus"],
        barcodes=barcodes,
        revision=str(row["revision"]),
    )


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Inventory mirror ------------------------------------------------------------

inventory_item_table = Table(
    "inventory_item",
    metadata,
    Column("item_number", String(64), primary_key=True),
    Column("upc", String(32), nullable=False, index=True),
    Column("cost", DecimalString, nullable=True),
    Column("list_price", DecimalString, nullable=True),
    Column("weight", DecimalString, nullable=True),
    Column("item_group", String(16), nullable=True),
    Column("alt_skus", AltSkuListType, nullable=False),
    Column("revision", Integer, nullable=False, default=1),
)

inventory_barcode_table = Table(
    "inventory_barcode",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "item_number",
        String(64),
        ForeignKey("inventory_item.item_number", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("upc", String(32), nullable=False, index=True),
    UniqueConstraint("item_number", "upc"),
)

# Review queue ----------------------------------------------------------------

review_entry_table = Table(
    "review_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("created_at", UTCDateTime, nullable=False),
    Column(
        "reason",
        Enum(
            ReviewReason,
            native_enum=False,
            length=32,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        index=True,
    ),
    Column("vendor_sku", String(64), nullable=False),
    Column("upc", String(32), nullable=False),
    Column("cost", DecimalString, nullable=False),
    Column("suggested_retail", DecimalString, nullable=False),
    Column("weight", DecimalString, nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("item_number", String(64), nullable=True),
    Column("context", InventorySnapshotType, nullable=True),
    Column("detail", Text, nullable=True),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables without going through migrations."""

    log.info("Creating all tables")
    metadata.create_all(engine)
