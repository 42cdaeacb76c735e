"""Inventory mirror and review queue tables.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "inventory_item",
        sa.Column("item_number", sa.String(length=64), nullable=False),
        sa.Column("upc", sa.String(length=32), nullable=False),
        sa.Column("cost", sa.String(length=32), nullable=True),
        sa.Column("list_price", sa.String(length=32), nullable=True),
        sa.Column("weight", sa.String(length=32), nullable=True),
        sa.Column("item_group", sa.String(length=16), nullable=True),
        sa.Column("alt_skus", sa.Text(), nullable=False),
        sa.Column("revision", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("item_number", name=op.f("pk_inventory_item")),
    )
    op.create_index(op.f("ix_inventory_item_upc"), "inventory_item", ["upc"])

    op.create_table(
        "inventory_barcode",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("item_number", sa.String(length=64), nullable=False),
        sa.Column("upc", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(
            ["item_number"],
            ["inventory_item.item_number"],
            name=op.f("fk_inventory_barcode_inventory_barcode_item_number_inventory_item"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_inventory_barcode")),
        sa.UniqueConstraint(
            "item_number",
            "upc",
            name=op.f("uq_inventory_barcode_inventory_barcode_item_number"),
        ),
    )
    op.create_index(op.f("ix_inventory_barcode_upc"), "inventory_barcode", ["upc"])

    op.create_table(
        "review_entry",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reason", sa.String(length=32), nullable=False),
        sa.Column("vendor_sku", sa.String(length=64), nullable=False),
        sa.Column("upc", sa.String(length=32), nullable=False),
        sa.Column("cost", sa.String(length=32), nullable=False),
        sa.Column("suggested_retail", sa.String(length=32), nullable=False),
        sa.Column("weight", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("item_number", sa.String(length=64), nullable=True),
        sa.Column("context", sa.Text(), nullable=True),
        sa.Column("detail", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_review_entry")),
    )
    op.create_index(op.f("ix_review_entry_reason"), "review_entry", ["reason"])


def downgrade() -> None:
    op.drop_index(op.f("ix_review_entry_reason"), table_name="review_entry")
    op.drop_table("review_entry")
    op.drop_index(op.f("ix_inventory_barcode_upc"), table_name="inventory_barcode")
    op.drop_table("inventory_barcode")
    op.drop_index(op.f("ix_inventory_item_upc"), table_name="inventory_item")
    op.drop_table("inventory_item")
