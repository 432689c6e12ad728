"""Split filter criteria into the two listing partitions.

Every listing shows items with an upcoming deadline first, then items
without a deadline ("rolling"). Both partitions share the same base filter
(type, tags) and differ only in their deadline predicate and sort order.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from resource_hub.listing.criteria import DeadlineMode, FilterCriteria
from resource_hub.listing.kinds import SortKey
from resource_hub.listing.store import DeadlineRule, ItemFilter, SortField, SortTerm

TIE_BREAK = SortTerm(SortField.ID)

# Sort key -> (upcoming order, no-deadline order)
_SORT_ORDERS: dict[SortKey, tuple[SortTerm, SortTerm]] = {
    SortKey.DEADLINE_ASC: (SortTerm(SortField.DEADLINE), SortTerm(SortField.CREATED_AT, True)),
    SortKey.AMOUNT_DESC: (
        SortTerm(SortField.AMOUNT_MAX, True),
        SortTerm(SortField.AMOUNT_MAX, True),
    ),
    SortKey.AMOUNT_ASC: (SortTerm(SortField.AMOUNT_MIN), SortTerm(SortField.AMOUNT_MIN)),
    SortKey.NEWEST: (SortTerm(SortField.CREATED_AT, True), SortTerm(SortField.CREATED_AT, True)),
    SortKey.NAME_ASC: (SortTerm(SortField.NAME), SortTerm(SortField.NAME)),
    SortKey.NAME_DESC: (SortTerm(SortField.NAME, True), SortTerm(SortField.NAME, True)),
}


@dataclass(frozen=True)
class PartitionDescriptor:
    """Store filter and sort order for one partition.

    ``where`` is None when the partition is empty by definition (the upcoming
    partition of a rolling-only listing) and must not be queried.
    """

    name: str
    where: ItemFilter | None
    order_by: tuple[SortTerm, ...]


@dataclass(frozen=True)
class Partitions:
    upcoming: PartitionDescriptor
    no_deadline: PartitionDescriptor


def build_partitions(criteria: FilterCriteria, today: date) -> Partitions:
    """Derive both partition descriptors for ``criteria`` as of ``today``."""
    upcoming_order, no_deadline_order = _SORT_ORDERS[criteria.sort]

    return Partitions(
        upcoming=PartitionDescriptor(
            name="upcoming",
            where=_base_filter(criteria, upcoming_rule(criteria, today)),
            order_by=(upcoming_order, TIE_BREAK),
        ),
        no_deadline=PartitionDescriptor(
            name="no_deadline",
            where=_base_filter(criteria, DeadlineRule(is_null=True)),
            order_by=(no_deadline_order, TIE_BREAK),
        ),
    )


def upcoming_rule(criteria: FilterCriteria, today: date) -> DeadlineRule | None:
    """Deadline predicate of the upcoming partition, or None when it is empty."""
    window = criteria.deadline_window
    if window.mode is DeadlineMode.ROLLING:
        return None
    if window.mode is DeadlineMode.NEXT_DAYS and window.days is not None:
        try:
            window_end = today + timedelta(days=window.days)
        except OverflowError:
            # past date.max: no upper bound
            return DeadlineRule(on_or_after=today)
        return DeadlineRule(on_or_after=today, on_or_before=window_end)
    return DeadlineRule(on_or_after=today)


def _base_filter(criteria: FilterCriteria, rule: DeadlineRule | None) -> ItemFilter | None:
    if rule is None:
        return None
    return ItemFilter(item_type=criteria.item_type, tags=criteria.tags, deadline=rule)
