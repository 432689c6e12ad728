"""Free-text search across grants, scholarships and resources.

Each kind is searched with the store's ranked text search first. When that
is unavailable or fails, the kind degrades to three substring queries
(name, description, tags) merged newest-first. Both paths return the same
rows, so callers cannot tell which one ran. A failing fallback is surfaced
as ``QueryFailedError``.
"""

from dataclasses import dataclass

from resource_hub.exceptions import QueryFailedError, RankedSearchUnavailable
from resource_hub.listing.kinds import ListingKind
from resource_hub.listing.store import (
    ItemFilter,
    ListableItem,
    ListingStore,
    SortField,
    SortTerm,
    TextField,
    TextMatch,
)
from resource_hub.logging import get_logger
from resource_hub.services.concurrency import gather_store_calls

logger = get_logger(__name__)

NEWEST_FIRST = (SortTerm(SortField.CREATED_AT, descending=True), SortTerm(SortField.ID))
BY_NAME = (SortTerm(SortField.NAME), SortTerm(SortField.ID))

SUGGESTION_MIN_LENGTH = 2
SUGGESTION_LIMIT = 8
SUGGESTION_NAMES_PER_KIND = 3
SUGGESTION_TAG_SCAN = 10
SUGGESTION_TAGS = 4


@dataclass
class SearchResults:
    query: str
    grants: list[ListableItem]
    scholarships: list[ListableItem]
    resources: list[ListableItem]


@dataclass
class Suggestion:
    type: str
    text: str


async def search_listings(store: ListingStore, query: str, *, limit: int) -> SearchResults:
    """Search every listable kind concurrently; a blank query matches nothing."""
    term = " ".join(query.split())
    if not term:
        return SearchResults(query=term, grants=[], scholarships=[], resources=[])

    grants, scholarships, resources = await gather_store_calls(
        resolve_search(store, ListingKind.GRANT, term, limit),
        resolve_search(store, ListingKind.SCHOLARSHIP, term, limit),
        resolve_search(store, ListingKind.RESOURCE, term, limit),
    )
    return SearchResults(query=term, grants=grants, scholarships=scholarships, resources=resources)


async def resolve_search(
    store: ListingStore, kind: ListingKind, term: str, limit: int
) -> list[ListableItem]:
    """Ranked search for one kind, degrading to substring matching on failure."""
    try:
        return await _ranked_search(store, kind, term, limit)
    except (RankedSearchUnavailable, QueryFailedError) as exc:
        logger.warning("search_degraded", kind=kind.value, reason=exc.message)
    return await _substring_search(store, kind, term, limit)


async def get_suggestions(store: ListingStore, query: str) -> list[Suggestion]:
    """Typeahead suggestions: resource names, scholarship names, then resource tags."""
    term = query.strip()
    if len(term) < SUGGESTION_MIN_LENGTH:
        return []

    resources, scholarships, tagged = await gather_store_calls(
        store.find(
            ListingKind.RESOURCE,
            ItemFilter(text=TextMatch(TextField.NAME, term)),
            BY_NAME,
            0,
            SUGGESTION_NAMES_PER_KIND,
        ),
        store.find(
            ListingKind.SCHOLARSHIP,
            ItemFilter(text=TextMatch(TextField.NAME, term)),
            BY_NAME,
            0,
            SUGGESTION_NAMES_PER_KIND,
        ),
        store.find(
            ListingKind.RESOURCE,
            ItemFilter(text=TextMatch(TextField.TAGS, term)),
            NEWEST_FIRST,
            0,
            SUGGESTION_TAG_SCAN,
        ),
    )

    needle = term.lower()
    tags: list[str] = []
    for item in tagged:
        for tag in item.tags:
            if needle in tag.lower() and tag not in tags:
                tags.append(tag)

    suggestions = [
        *(Suggestion(type="resource", text=item.name) for item in resources),
        *(Suggestion(type="scholarship", text=item.name) for item in scholarships),
        *(Suggestion(type="tag", text=tag) for tag in tags[:SUGGESTION_TAGS]),
    ]
    return suggestions[:SUGGESTION_LIMIT]


async def _ranked_search(
    store: ListingStore, kind: ListingKind, term: str, limit: int
) -> list[ListableItem]:
    ids = await store.ranked_text_search(kind, term, limit)
    if not ids:
        return []
    rows = await store.find(kind, ItemFilter(ids=tuple(ids)), NEWEST_FIRST, 0, len(ids))
    rank = {item_id: position for position, item_id in enumerate(ids)}
    return sorted(rows, key=lambda item: rank[item.id])


async def _substring_search(
    store: ListingStore, kind: ListingKind, term: str, limit: int
) -> list[ListableItem]:
    matches = await gather_store_calls(
        *(
            store.find(kind, ItemFilter(text=TextMatch(field, term)), NEWEST_FIRST, 0, limit)
            for field in TextField
        )
    )

    merged: dict[int, ListableItem] = {}
    for rows in matches:
        for item in rows:
            merged.setdefault(item.id, item)

    ordered = sorted(merged.values(), key=lambda item: item.id)
    ordered.sort(key=lambda item: item.created_at, reverse=True)
    return ordered[:limit]
