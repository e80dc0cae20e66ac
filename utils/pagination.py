"""Result table pagination."""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Sequence, TypeVar

from models.constants import PAGINATION_WINDOW

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of results plus the page links to render."""

    items: List[T]
    number: int
    total_pages: int
    window: List[int] = field(default_factory=list)

    @property
    def has_prev(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def total_pages(count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(count / page_size)


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice ``items`` for 1-indexed ``page``.

    Out-of-range pages are clamped. The link window covers the current page
    and PAGINATION_WINDOW pages on each side; it is empty when everything
    fits on a single page.
    """
    pages = total_pages(len(items), page_size)
    number = min(max(page, 1), max(pages, 1))

    start = (number - 1) * page_size
    window: List[int] = []
    if pages > 1:
        first = max(1, number - PAGINATION_WINDOW)
        last = min(pages, number + PAGINATION_WINDOW)
        window = list(range(first, last + 1))

    return Page(
        items=list(items[start:start + page_size]),
        number=number,
        total_pages=pages,
        window=window,
    )
