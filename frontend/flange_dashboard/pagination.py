"""Table pagination."""

import math
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field


class Page(BaseModel):
    """One page of table rows."""

    items: list[Any] = Field(default_factory=list)
    page: int = Field(default=0, description="Zero-based page index")
    page_count: int = Field(default=0)
    page_size: int = Field(default=5)
    total_items: int = Field(default=0)

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.page_count


def page_count(total_items: int, page_size: int) -> int:
    """Number of pages needed for ``total_items`` rows."""
    if page_size <= 0:
        raise ValueError("Page size must be positive")
    return math.ceil(total_items / page_size)


def paginate(items: Sequence[Any], page_size: int, page: int = 0) -> Page:
    """Slice one page out of ``items``; out-of-range pages are clamped."""
    count = page_count(len(items), page_size)
    page = min(max(page, 0), max(count - 1, 0))
    start = page * page_size

    return Page(
        items=list(items[start : start + page_size]),
        page=page,
        page_count=count,
        page_size=page_size,
        total_items=len(items),
    )
