from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from coupon_admin_sdk.config import ALLOWED_PAGE_SIZES

PAGE_SIZE_OPTIONS = ALLOWED_PAGE_SIZES
ALL_FILTER = "all"


@dataclass
class PaginationState:
    """Paging cursor of one list page.

    Changing the search text, the filter or the page size always puts the
    cursor back on page 1.
    """

    page: int = 1
    page_size: int = 10
    total: int = 0
    search: str = ""
    filter: str | None = None
    filter_param: str | None = None

    def __post_init__(self) -> None:
        if self.page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {list(PAGE_SIZE_OPTIONS)}, got {self.page_size}")

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def set_search(self, search: str) -> None:
        self.search = search
        self.page = 1

    def set_filter(self, value: str | None) -> None:
        self.filter = value
        self.page = 1

    def set_page_size(self, page_size: int) -> None:
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {list(PAGE_SIZE_OPTIONS)}, got {page_size}")
        self.page_size = page_size
        self.page = 1

    def next_page(self) -> bool:
        if not self.has_next:
            return False
        self.page += 1
        return True

    def previous_page(self) -> bool:
        if not self.has_previous:
            return False
        self.page -= 1
        return True

    def goto(self, page: int) -> None:
        self.page = min(max(1, page), self.page_count)

    def as_query(self) -> dict[str, Any]:
        query: dict[str, Any] = {"page": self.page, "limit": self.page_size, "search": self.search}
        if self.filter_param:
            query[self.filter_param] = self.filter if self.filter is not None else ALL_FILTER
        return query

    def render(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "page_size_options": list(PAGE_SIZE_OPTIONS),
            "total": self.total,
            "page_count": self.page_count,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
            "search": self.search,
            "filter": self.filter,
        }
