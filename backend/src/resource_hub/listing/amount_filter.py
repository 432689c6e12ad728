"""In-memory amount range filter applied after both partitions are fetched.

The display ``amount`` is free text, so range matching uses the structured
``amount_min``/``amount_max`` columns only. Items with neither value are
excluded while a range is active. The page is not backfilled, so a filtered
page may hold fewer than ``page_size`` items.
"""

from collections.abc import Sequence

from resource_hub.listing.criteria import AmountRange
from resource_hub.listing.store import ListableItem


def matches_amount(item: ListableItem, amount_range: AmountRange) -> bool:
    """True when the item's [min, max] amount overlaps ``amount_range``."""
    item_max = item.amount_max if item.amount_max is not None else item.amount_min
    if item_max is None or item_max < amount_range.minimum:
        return False
    item_min = item.amount_min if item.amount_min is not None else 0
    return amount_range.maximum is None or item_min <= amount_range.maximum


def filter_by_amount[T: ListableItem](
    items: Sequence[T], amount_range: AmountRange | None
) -> list[T]:
    if amount_range is None:
        return list(items)
    return [item for item in items if matches_amount(item, amount_range)]
