"""Query criteria builder.

Turns raw query-string values into a ``FilterCriteria``. Parsing is
forgiving: a malformed value is dropped and the listing falls back to the
unfiltered default for that parameter. Nothing here raises or performs I/O.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from resource_hub.config import settings
from resource_hub.listing.kinds import ListingKind, SortKey, get_profile

NEXT_DAYS_PREFIX = "next-"
ROLLING = "rolling"


class DeadlineMode(StrEnum):
    UPCOMING = "upcoming"  # deadline >= today, unbounded above
    NEXT_DAYS = "next-days"  # today <= deadline <= today + days; days may be 0
    ROLLING = "rolling"  # deadline is null


@dataclass(frozen=True)
class DeadlineWindow:
    mode: DeadlineMode = DeadlineMode.UPCOMING
    days: int | None = None


@dataclass(frozen=True)
class AmountRange:
    """Inclusive amount range. ``maximum`` of None means no upper bound."""

    minimum: float
    maximum: float | None = None


@dataclass(frozen=True)
class FilterCriteria:
    """Caller intent for one listing request."""

    kind: ListingKind
    sort: SortKey
    page_size: int
    page: int = 1
    item_type: str | None = None
    tags: tuple[str, ...] = ()
    amount_range: AmountRange | None = None
    deadline_window: DeadlineWindow = DeadlineWindow()


def parse_criteria(kind: ListingKind, params: Mapping[str, str | None]) -> FilterCriteria:
    """Build criteria for ``kind`` from raw query parameters.

    Recognised keys: ``page``, ``sort``, ``tags``, ``type``, ``amount``, ``deadline``.
    """
    profile = get_profile(kind)
    return FilterCriteria(
        kind=kind,
        sort=parse_sort(params.get("sort"), default=profile.default_sort),
        page_size=profile.page_size,
        page=parse_page(params.get("page")),
        item_type=parse_type(params.get("type"), profile.categories),
        tags=parse_tags(params.get("tags")),
        amount_range=parse_amount_range(params.get("amount")),
        deadline_window=parse_deadline_window(params.get("deadline")),
    )


def parse_page(raw: str | None) -> int:
    try:
        page = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    return max(page, 1)


def parse_sort(raw: str | None, *, default: SortKey) -> SortKey:
    try:
        return SortKey(raw)
    except ValueError:
        return default


def parse_type(raw: str | None, categories: type[StrEnum]) -> str | None:
    if not raw:
        return None
    try:
        return str(categories(raw))
    except ValueError:
        return None


def parse_tags(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    tags: list[str] = []
    for part in raw.split(","):
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def parse_amount_range(raw: str | None) -> AmountRange | None:
    """Parse ``"min-max"``; both halves must be non-negative numbers with min <= max."""
    if not raw:
        return None
    low_raw, sep, high_raw = raw.partition("-")
    if not sep:
        return None
    low = _non_negative_number(low_raw)
    high = _non_negative_number(high_raw)
    if low is None or high is None or low > high:
        return None
    if high == settings.amount_no_upper_bound:
        return AmountRange(minimum=low)
    return AmountRange(minimum=low, maximum=high)


def parse_deadline_window(raw: str | None) -> DeadlineWindow:
    if raw == ROLLING:
        return DeadlineWindow(DeadlineMode.ROLLING)
    if raw and raw.startswith(NEXT_DAYS_PREFIX):
        suffix = raw.removeprefix(NEXT_DAYS_PREFIX)
        if suffix.isdecimal():
            try:
                return DeadlineWindow(DeadlineMode.NEXT_DAYS, days=int(suffix))
            except ValueError:
                # longer than the int conversion digit limit
                return DeadlineWindow()
    return DeadlineWindow()


def _non_negative_number(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value
