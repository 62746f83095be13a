"""Catalog baseline: categories + products.

Revision ID: 5c1e7a9d2b40
Revises:
Create Date: 2026-10-19 11:30:00.000000
"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# --- Alembic identifiers ---
revision: str = "5c1e7a9d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

T_CAT = "categories"
T_PROD = "products"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        T_CAT,
        sa.Column("id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )
    op.create_index("ix_categories_created_at", T_CAT, ["created_at"])

    op.create_table(
        T_PROD,
        sa.Column("id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("img", sa.String(512), nullable=False),
        sa.Column("img_title", sa.String(255), nullable=False),
        sa.Column("alt", sa.String(255), nullable=False),
        sa.Column("category_id", sa.Integer, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_products"),
        # fără ON DELETE CASCADE: ștergerea categoriei e blocată din aplicație
        sa.ForeignKeyConstraint(
            ["category_id"],
            [f"{T_CAT}.id"],
            name="fk_products_category_id_categories",
        ),
        sa.CheckConstraint("price >= 0", name="ck_products_price_nonnegative"),
    )
    op.create_index("ix_products_created_at", T_PROD, ["created_at"])
    op.create_index("ix_products_category_id_created_at", T_PROD, ["category_id", "created_at"])


def downgrade() -> None:
    # Drop în ordinea inversă a dependențelor
    op.drop_index("ix_products_category_id_created_at", table_name=T_PROD)
    op.drop_index("ix_products_created_at", table_name=T_PROD)
    op.drop_table(T_PROD)
    op.drop_index("ix_categories_created_at", table_name=T_CAT)
    op.drop_table(T_CAT)
