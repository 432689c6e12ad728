"""Partitioned listing business logic.

A listing is the concatenation of two independently sorted partitions:
items with an upcoming deadline, then items without a deadline. Each
request runs two phases against the store:

1. Count both partitions (concurrently).
2. Fetch the slice of each partition that falls on the requested page
   (concurrently, skipping empty slices).

The amount range filter is applied to the fetched rows afterwards.
"""

from dataclasses import dataclass
from datetime import date

from resource_hub.exceptions import NotFoundError
from resource_hub.listing.amount_filter import filter_by_amount
from resource_hub.listing.criteria import FilterCriteria
from resource_hub.listing.kinds import ListingKind, get_profile
from resource_hub.listing.paginator import PartitionSlice, paginate, total_pages
from resource_hub.listing.partitions import PartitionDescriptor, build_partitions
from resource_hub.listing.store import ItemFilter, ListableItem, ListingStore
from resource_hub.logging import get_logger
from resource_hub.services.concurrency import gather_store_calls

logger = get_logger(__name__)

# Primary keys are 32-bit INTEGER columns
MAX_ITEM_ID = 2**31 - 1


@dataclass
class PartitionCounts:
    upcoming: int
    no_deadline: int

    @property
    def total(self) -> int:
        return self.upcoming + self.no_deadline


@dataclass
class PageResult:
    """One page of a partitioned listing.

    ``items`` holds upcoming-deadline items first, then no-deadline items.
    With an amount filter active it may be shorter than ``page_size`` even
    when more pages follow; ``total_count`` is counted before that filter.
    """

    items: list[ListableItem]
    total_count: int
    total_pages: int
    page: int
    page_size: int


async def list_items(
    store: ListingStore, criteria: FilterCriteria, *, today: date | None = None
) -> PageResult:
    """Return the requested page of ``criteria.kind`` listings."""
    today = today or date.today()
    partitions = build_partitions(criteria, today)

    counts = await count_partitions(
        store, criteria.kind, partitions.upcoming, partitions.no_deadline
    )
    window = paginate(counts.upcoming, counts.no_deadline, criteria.page, criteria.page_size)

    upcoming, no_deadline = await gather_store_calls(
        _fetch(store, criteria.kind, partitions.upcoming, window.first),
        _fetch(store, criteria.kind, partitions.no_deadline, window.second),
    )
    items = filter_by_amount([*upcoming, *no_deadline], criteria.amount_range)

    logger.debug(
        "listing_page_computed",
        kind=criteria.kind.value,
        page=criteria.page,
        upcoming_count=counts.upcoming,
        no_deadline_count=counts.no_deadline,
        upcoming_slice=(window.first.skip, window.first.take),
        no_deadline_slice=(window.second.skip, window.second.take),
        returned=len(items),
    )
    return PageResult(
        items=items,
        total_count=counts.total,
        total_pages=total_pages(counts.total, criteria.page_size),
        page=criteria.page,
        page_size=criteria.page_size,
    )


async def count_partitions(
    store: ListingStore,
    kind: ListingKind,
    upcoming: PartitionDescriptor,
    no_deadline: PartitionDescriptor,
) -> PartitionCounts:
    """Count both partitions under the same base filter.

    A partition without a store filter is empty by definition and is not queried.
    """
    upcoming_count, no_deadline_count = await gather_store_calls(
        _count(store, kind, upcoming),
        _count(store, kind, no_deadline),
    )
    return PartitionCounts(upcoming=upcoming_count, no_deadline=no_deadline_count)


async def get_item(store: ListingStore, kind: ListingKind, item_id: int) -> ListableItem:
    """Return one active item or raise NotFoundError.

    Ids outside the key range are not found without querying the store.
    """
    if not 1 <= item_id <= MAX_ITEM_ID:
        raise NotFoundError(get_profile(kind).label, item_id)
    rows = await store.find(kind, ItemFilter(ids=(item_id,)), (), skip=0, take=1)
    if not rows:
        raise NotFoundError(get_profile(kind).label, item_id)
    return rows[0]


async def _count(store: ListingStore, kind: ListingKind, partition: PartitionDescriptor) -> int:
    if partition.where is None:
        return 0
    return await store.count(kind, partition.where)


async def _fetch(
    store: ListingStore,
    kind: ListingKind,
    partition: PartitionDescriptor,
    window: PartitionSlice,
) -> list[ListableItem]:
    if partition.where is None or window.take == 0:
        return []
    return await store.find(kind, partition.where, partition.order_by, window.skip, window.take)
