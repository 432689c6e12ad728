"""Create grants, scholarships and resources tables.

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLES = ("grants", "scholarships", "resources")


def _listable_columns() -> list[sa.Column]:  # type: ignore[type-arg]
    return [
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("tags", postgresql.ARRAY(sa.String(length=60)), nullable=False),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("amount", sa.String(length=100), nullable=True),
        sa.Column("amount_min", sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column("amount_max", sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column("url", sa.String(length=500), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _amount_checks(table: str) -> list[sa.CheckConstraint]:
    return [
        sa.CheckConstraint(
            "amount_min IS NULL OR amount_min >= 0",
            name=op.f(f"ck_{table}_amount_min_non_negative"),
        ),
        sa.CheckConstraint(
            "amount_max IS NULL OR amount_max >= 0",
            name=op.f(f"ck_{table}_amount_max_non_negative"),
        ),
        sa.CheckConstraint(
            "amount_min IS NULL OR amount_max IS NULL OR amount_min <= amount_max",
            name=op.f(f"ck_{table}_amount_min_le_max"),
        ),
    ]


def _create_listable(table: str, *extra: sa.Column, category: str) -> None:  # type: ignore[type-arg]
    op.create_table(
        table,
        *_listable_columns(),
        *extra,
        *_amount_checks(table),
        sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{table}")),
    )
    for column in ("name", "deadline", "deleted_at", category):
        op.create_index(op.f(f"ix_{table}_{column}"), table, [column])


def upgrade() -> None:
    _create_listable(
        "grants",
        sa.Column("grant_type", sa.String(length=30), nullable=False),
        sa.Column("funding_agency", sa.String(length=200), nullable=True),
        sa.Column("matching_required", sa.Boolean(), nullable=False),
        category="grant_type",
    )
    _create_listable(
        "scholarships",
        sa.Column("category", sa.String(length=30), nullable=False),
        sa.Column("source", sa.String(length=200), nullable=True),
        sa.Column("eligibility", postgresql.ARRAY(sa.String(length=60)), nullable=False),
        category="category",
    )
    _create_listable(
        "resources",
        sa.Column("resource_type", sa.String(length=30), nullable=False),
        sa.Column("state", sa.String(length=2), nullable=True),
        category="resource_type",
    )


def downgrade() -> None:
    for table in reversed(TABLES):
        op.drop_table(table)
