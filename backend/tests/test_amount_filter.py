from datetime import UTC, datetime

import pytest

from resource_hub.listing.amount_filter import filter_by_amount, matches_amount
from resource_hub.listing.criteria import AmountRange
from tests.fakes import FakeItem

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _item(amount_min: float | None, amount_max: float | None, item_id: int = 1) -> FakeItem:
    return FakeItem(
        id=item_id, name="grant", created_at=NOW, amount_min=amount_min, amount_max=amount_max
    )


@pytest.mark.parametrize(
    "amount_min, amount_max, amount_range, expected",
    [
        (50_000, 250_000, AmountRange(0, 50_000), True),  # touches the upper edge
        (60_000, 250_000, AmountRange(0, 50_000), False),
        (10_000, 40_000, AmountRange(50_000, 250_000), False),
        (None, 75_000, AmountRange(50_000, 250_000), True),  # missing min counts as 0
        (75_000, None, AmountRange(50_000, 250_000), True),  # missing max falls back to min
        (75_000, None, AmountRange(100_000, 250_000), False),
        (2_000_000, 5_000_000, AmountRange(1_000_000, None), True),
        (None, None, AmountRange(0, None), False),  # no structured amount
    ],
)
def test_matches_amount(
    amount_min: float | None,
    amount_max: float | None,
    amount_range: AmountRange,
    expected: bool,
) -> None:
    assert matches_amount(_item(amount_min, amount_max), amount_range) is expected


def test_no_range_keeps_everything_in_order() -> None:
    items = [_item(None, None, 1), _item(5, 10, 2)]
    assert filter_by_amount(items, None) == items


def test_filter_preserves_order() -> None:
    items = [_item(1, 2, 1), _item(100, 200, 2), _item(150, 160, 3), _item(None, None, 4)]
    kept = filter_by_amount(items, AmountRange(100, 1000))
    assert [item.id for item in kept] == [2, 3]
