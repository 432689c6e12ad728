"""SQLAlchemy models.

Define all ORM models here. They must inherit from Base so that
Alembic's autogenerate can detect them.

Grants, scholarships and resources share the listable columns through
``ListableMixin``; the listing engine only ever reads them.
"""

from datetime import date, datetime

from sqlalchemy import (
    ARRAY,
    JSON,
    CheckConstraint,
    Date,
    DateTime,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from resource_hub.db.session import Base

# Postgres stores tags as a native array; SQLite (tests) as a JSON list.
TagList = ARRAY(String(60)).with_variant(JSON(), "sqlite")
Amount = Numeric(14, 2, asdecimal=False)


class ListableMixin:
    @declared_attr.directive
    def __table_args__(cls) -> tuple[CheckConstraint, ...]:
        return (
            CheckConstraint(
                "amount_min IS NULL OR amount_min >= 0",
                name="amount_min_non_negative",
            ),
            CheckConstraint(
                "amount_max IS NULL OR amount_max >= 0",
                name="amount_max_non_negative",
            ),
            CheckConstraint(
                "amount_min IS NULL OR amount_max IS NULL OR amount_min <= amount_max",
                name="amount_min_le_max",
            ),
        )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str] = mapped_column(Text)
    tags: Mapped[list[str]] = mapped_column(TagList, default=list)
    deadline: Mapped[date | None] = mapped_column(Date, index=True)
    amount: Mapped[str | None] = mapped_column(String(100))  # display text, e.g. "$5,000 - $25,000"
    amount_min: Mapped[float | None] = mapped_column(Amount)
    amount_max: Mapped[float | None] = mapped_column(Amount)
    url: Mapped[str | None] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), index=True)


class Grant(ListableMixin, Base):
    __tablename__ = "grants"

    grant_type: Mapped[str] = mapped_column(String(30), index=True)
    funding_agency: Mapped[str | None] = mapped_column(String(200))
    matching_required: Mapped[bool] = mapped_column(default=False)


class Scholarship(ListableMixin, Base):
    __tablename__ = "scholarships"

    category: Mapped[str] = mapped_column(String(30), index=True)
    source: Mapped[str | None] = mapped_column(String(200))
    eligibility: Mapped[list[str]] = mapped_column(TagList, default=list)


class Resource(ListableMixin, Base):
    __tablename__ = "resources"

    resource_type: Mapped[str] = mapped_column(String(30), index=True)
    state: Mapped[str | None] = mapped_column(String(2))
