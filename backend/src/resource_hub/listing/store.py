"""Store-facing query types and the store protocol the listing engine consumes.

These types express a query in listing terms, independent of any
persistence mechanism. ``repositories.listing`` translates them into
SQLAlchemy statements; the test suite translates them into in-memory
predicates.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Protocol

from resource_hub.listing.kinds import ListingKind


class SortField(StrEnum):
    ID = "id"
    NAME = "name"
    DEADLINE = "deadline"
    AMOUNT_MIN = "amount_min"
    AMOUNT_MAX = "amount_max"
    CREATED_AT = "created_at"


class TextField(StrEnum):
    NAME = "name"
    DESCRIPTION = "description"
    TAGS = "tags"


@dataclass(frozen=True)
class SortTerm:
    """One ORDER BY term. Nulls always sort last."""

    field: SortField
    descending: bool = False


@dataclass(frozen=True)
class DeadlineRule:
    """Deadline predicate for one partition.

    ``is_null`` selects items without a deadline; otherwise the deadline must
    fall inside ``[on_or_after, on_or_before]`` (either end may be open).
    """

    is_null: bool = False
    on_or_after: date | None = None
    on_or_before: date | None = None


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive substring match on one text field.

    For ``TextField.TAGS`` the item matches when any of its tags contains ``term``.
    """

    field: TextField
    term: str


@dataclass(frozen=True)
class ItemFilter:
    """Store predicate. Soft-deleted rows are always excluded by the store."""

    item_type: str | None = None
    tags: tuple[str, ...] = ()
    deadline: DeadlineRule | None = None
    ids: tuple[int, ...] | None = None
    text: TextMatch | None = None


class ListableItem(Protocol):
    """Attributes every listable row exposes to the engine."""

    id: int
    name: str
    description: str
    tags: list[str]
    deadline: date | None
    amount_min: float | None
    amount_max: float | None
    created_at: datetime


class ListingStore(Protocol):
    """Queryable collection of listable items.

    Implementations raise ``QueryFailedError`` for I/O failures and
    ``RankedSearchUnavailable`` when ranked search cannot serve a query.
    """

    async def count(self, kind: ListingKind, where: ItemFilter) -> int: ...

    async def find(
        self,
        kind: ListingKind,
        where: ItemFilter,
        order_by: Sequence[SortTerm],
        skip: int,
        take: int,
    ) -> list[ListableItem]: ...

    async def ranked_text_search(self, kind: ListingKind, query: str, limit: int) -> list[int]: ...
