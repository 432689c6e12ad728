"""Cross-partition pagination.

Two partitions A and B, each sorted independently, are presented as one
sequence ``A ++ B``. A page of that sequence maps to a slice of A followed
by a slice of B. Everything here is a pure function of the counts and the
requested page, so nothing has to be remembered between requests.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PartitionSlice:
    skip: int
    take: int


@dataclass(frozen=True)
class PageWindow:
    first: PartitionSlice
    second: PartitionSlice

    @property
    def size(self) -> int:
        return self.first.take + self.second.take


def paginate(first_count: int, second_count: int, page: int, page_size: int) -> PageWindow:
    """Map a 1-based ``page`` of ``A ++ B`` onto per-partition skip/take.

    A page past the end yields two empty slices rather than an error.
    """
    if page < 1 or page_size < 1:
        raise ValueError(f"page and page_size must be positive, got {page=} {page_size=}")

    global_skip = (page - 1) * page_size

    first_skip = min(global_skip, first_count)
    first_take = max(0, min(page_size, first_count - first_skip))

    remaining = page_size - first_take
    second_skip = max(0, global_skip - first_count)
    second_take = max(0, min(remaining, second_count - second_skip))

    return PageWindow(
        first=PartitionSlice(skip=first_skip, take=first_take),
        second=PartitionSlice(skip=second_skip, take=second_take),
    )


def total_pages(total_count: int, page_size: int) -> int:
    """Number of pages; zero when there is nothing to list."""
    return math.ceil(total_count / page_size) if total_count > 0 else 0
