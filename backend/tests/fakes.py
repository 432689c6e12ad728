"""In-memory ListingStore for exercising the engine without a database."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from operator import attrgetter

from resource_hub.exceptions import QueryFailedError, RankedSearchUnavailable
from resource_hub.listing.kinds import ListingKind
from resource_hub.listing.store import ItemFilter, SortTerm, TextField


@dataclass
class FakeItem:
    id: int
    name: str
    created_at: datetime
    description: str = ""
    tags: list[str] = field(default_factory=list)
    deadline: date | None = None
    amount_min: float | None = None
    amount_max: float | None = None
    item_type: str = "federal"
    deleted_at: datetime | None = None


@dataclass
class Call:
    operation: str
    kind: ListingKind
    where: ItemFilter | None = None
    skip: int | None = None
    take: int | None = None


class FakeListingStore:
    """Evaluates ItemFilter/SortTerm in Python the way the SQL store does in SQL.

    ``fail`` names operations ("count", "find", "ranked") that raise; ``ranked``
    maps a kind to the ids its ranked search returns (missing kind: unavailable).
    """

    def __init__(
        self,
        items: dict[ListingKind, list[FakeItem]] | None = None,
        *,
        ranked: dict[ListingKind, list[int]] | None = None,
        fail: set[str] | None = None,
    ) -> None:
        self.items = items or {}
        self.ranked = ranked or {}
        self.fail = fail or set()
        self.calls: list[Call] = []

    async def count(self, kind: ListingKind, where: ItemFilter) -> int:
        self.calls.append(Call("count", kind, where))
        if "count" in self.fail:
            raise QueryFailedError("count", kind, ConnectionError("store down"))
        return len(self._select(kind, where))

    async def find(
        self,
        kind: ListingKind,
        where: ItemFilter,
        order_by: Sequence[SortTerm],
        skip: int,
        take: int,
    ) -> list[FakeItem]:
        self.calls.append(Call("find", kind, where, skip, take))
        if "find" in self.fail:
            raise QueryFailedError("find", kind, ConnectionError("store down"))
        rows = sort_items(self._select(kind, where), order_by)
        return rows[skip : skip + take]

    async def ranked_text_search(self, kind: ListingKind, query: str, limit: int) -> list[int]:
        self.calls.append(Call("ranked", kind))
        if "ranked" in self.fail or kind not in self.ranked:
            raise RankedSearchUnavailable("no full text index")
        return self.ranked[kind][:limit]

    def operations(self, operation: str) -> list[Call]:
        return [call for call in self.calls if call.operation == operation]

    def _select(self, kind: ListingKind, where: ItemFilter) -> list[FakeItem]:
        return [item for item in self.items.get(kind, []) if matches(item, where)]


def matches(item: FakeItem, where: ItemFilter) -> bool:
    if item.deleted_at is not None:
        return False
    if where.item_type is not None and item.item_type != where.item_type:
        return False
    if where.tags and not set(where.tags) & set(item.tags):
        return False
    if where.ids is not None and item.id not in where.ids:
        return False

    rule = where.deadline
    if rule is not None:
        if rule.is_null != (item.deadline is None):
            return False
        if item.deadline is not None:
            if rule.on_or_after is not None and item.deadline < rule.on_or_after:
                return False
            if rule.on_or_before is not None and item.deadline > rule.on_or_before:
                return False

    text = where.text
    if text is not None:
        term = text.term.lower()
        if text.field is TextField.TAGS:
            return any(term in tag.lower() for tag in item.tags)
        value = item.name if text.field is TextField.NAME else item.description
        return term in value.lower()
    return True


def sort_items(items: list[FakeItem], order_by: Sequence[SortTerm]) -> list[FakeItem]:
    """Stable multi-key sort, applied from the last term to the first; nulls last."""
    rows = list(items)
    for term in reversed(order_by):
        key = attrgetter(term.field.value)
        present = [row for row in rows if key(row) is not None]
        missing = [row for row in rows if key(row) is None]
        present.sort(key=key, reverse=term.descending)
        rows = present + missing
    return rows
