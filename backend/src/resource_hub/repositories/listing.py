"""Listing data-access layer.

Translates store-agnostic ``ItemFilter``/``SortTerm`` values into SQLAlchemy
statements. No business logic, no HTTP concerns. Every SQLAlchemy failure
is re-raised as ``QueryFailedError`` so services never see driver errors.
"""

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, exists, func, literal, literal_column, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import UnaryExpression

from resource_hub.exceptions import QueryFailedError, RankedSearchUnavailable
from resource_hub.listing.kinds import ListingKind
from resource_hub.listing.store import ItemFilter, ListableItem, SortTerm, TextField
from resource_hub.models import Grant, ListableMixin, Resource, Scholarship

MODELS: dict[ListingKind, type[ListableMixin]] = {
    ListingKind.GRANT: Grant,
    ListingKind.SCHOLARSHIP: Scholarship,
    ListingKind.RESOURCE: Resource,
}

TYPE_COLUMNS: dict[ListingKind, InstrumentedAttribute[str]] = {
    ListingKind.GRANT: Grant.grant_type,
    ListingKind.SCHOLARSHIP: Scholarship.category,
    ListingKind.RESOURCE: Resource.resource_type,
}

TEXT_SEARCH_CONFIG = literal_column("'english'::regconfig")


class SqlAlchemyListingStore:
    """``ListingStore`` backed by one request-scoped ``AsyncSession``.

    An AsyncSession cannot run two statements at once, so statements issued
    concurrently by the listing engine are serialized on ``_lock``.
    """

    def __init__(self, db: AsyncSession, *, ranked_search_enabled: bool = True) -> None:
        self._db = db
        self._lock = asyncio.Lock()
        self._ranked_search_enabled = ranked_search_enabled

    @property
    def dialect(self) -> str:
        return self._db.get_bind().dialect.name

    async def count(self, kind: ListingKind, where: ItemFilter) -> int:
        model = MODELS[kind]
        stmt = select(func.count(model.id)).where(*self._conditions(kind, where))
        async with self._lock:
            try:
                result = await self._db.execute(stmt)
                return int(result.scalar_one())
            except SQLAlchemyError as exc:
                raise QueryFailedError("count", kind, exc) from exc

    async def find(
        self,
        kind: ListingKind,
        where: ItemFilter,
        order_by: Sequence[SortTerm],
        skip: int,
        take: int,
    ) -> list[ListableItem]:
        model = MODELS[kind]
        stmt: Select[Any] = (
            select(model)
            .where(*self._conditions(kind, where))
            .order_by(*order_clauses(model, order_by))
            .offset(skip)
            .limit(take)
        )
        async with self._lock:
            try:
                result = await self._db.execute(stmt)
                return list(result.scalars().all())
            except SQLAlchemyError as exc:
                raise QueryFailedError("find", kind, exc) from exc

    async def ranked_text_search(self, kind: ListingKind, query: str, limit: int) -> list[int]:
        """Return ids ranked by PostgreSQL full text relevance.

        Runs inside a savepoint so a failed search leaves the request
        transaction usable for the substring fallback.
        """
        if not self._ranked_search_enabled:
            raise RankedSearchUnavailable("ranked search disabled by configuration")
        if self.dialect != "postgresql":
            raise RankedSearchUnavailable(f"ranked search not supported on {self.dialect}")

        model = MODELS[kind]
        document = func.to_tsvector(
            TEXT_SEARCH_CONFIG,
            func.concat_ws(
                " ", model.name, model.description, func.array_to_string(model.tags, " ")
            ),
        )
        ts_query = func.plainto_tsquery(TEXT_SEARCH_CONFIG, query)
        stmt = (
            select(model.id)
            .where(model.deleted_at.is_(None), document.op("@@")(ts_query))
            .order_by(func.ts_rank(document, ts_query).desc(), model.created_at.desc(), model.id)
            .limit(limit)
        )
        async with self._lock:
            try:
                async with self._db.begin_nested():
                    result = await self._db.execute(stmt)
                    return list(result.scalars().all())
            except SQLAlchemyError as exc:
                raise RankedSearchUnavailable(f"ranked search failed: {exc}") from exc

    def _conditions(self, kind: ListingKind, where: ItemFilter) -> list[ColumnElement[bool]]:
        model = MODELS[kind]
        conditions: list[ColumnElement[bool]] = [model.deleted_at.is_(None)]

        if where.item_type is not None:
            conditions.append(TYPE_COLUMNS[kind] == where.item_type)
        if where.tags:
            tags = list(where.tags)
            conditions.append(self._any_tag(model, lambda tag: tag.in_(tags)))
        if where.ids is not None:
            conditions.append(model.id.in_(where.ids))

        rule = where.deadline
        if rule is not None:
            if rule.is_null:
                conditions.append(model.deadline.is_(None))
            else:
                conditions.append(model.deadline.is_not(None))
                if rule.on_or_after is not None:
                    conditions.append(model.deadline >= rule.on_or_after)
                if rule.on_or_before is not None:
                    conditions.append(model.deadline <= rule.on_or_before)

        text = where.text
        if text is not None:
            if text.field is TextField.TAGS:
                term = text.term
                conditions.append(
                    self._any_tag(model, lambda tag: tag.icontains(term, autoescape=True))
                )
            else:
                column = model.name if text.field is TextField.NAME else model.description
                conditions.append(column.icontains(text.term, autoescape=True))

        return conditions

    def _any_tag(
        self,
        model: type[ListableMixin],
        predicate: Callable[[ColumnElement[Any]], ColumnElement[bool]],
    ) -> ColumnElement[bool]:
        """EXISTS over the elements of ``model.tags`` matching ``predicate``."""
        if self.dialect == "postgresql":
            elements = func.unnest(model.tags).table_valued("value").render_derived()
        else:
            elements = func.json_each(model.tags).table_valued("value")
        return exists(select(literal(1)).select_from(elements).where(predicate(elements.c.value)))


def order_clauses(
    model: type[ListableMixin], order_by: Sequence[SortTerm]
) -> list[UnaryExpression[Any]]:
    """ORDER BY clauses with NULLs last in both directions."""
    clauses = []
    for term in order_by:
        column = getattr(model, term.field.value)
        clause = column.desc() if term.descending else column.asc()
        clauses.append(clause.nulls_last())
    return clauses
