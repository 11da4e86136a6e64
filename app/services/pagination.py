"""Offset pagination of SQLAlchemy queries."""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Query

# Upper bound for the ?page= query parameter; keeps OFFSET inside a 64-bit integer.
MAX_PAGE = 1_000_000

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the metadata needed for the pagination block."""

    items: list[T]
    total: int
    per_page: int
    current_page: int

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def first_item(self) -> int | None:
        """1-based position of the first item on this page; None when the page is empty."""
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def last_item(self) -> int | None:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + len(self.items)

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        """Same page metadata with each item transformed (e.g. ORM row -> schema)."""
        return Page(
            items=[fn(item) for item in self.items],
            total=self.total,
            per_page=self.per_page,
            current_page=self.current_page,
        )


def paginate(query: Query[Any], page: int, per_page: int) -> Page[Any]:
    """Count the full result set, then fetch the requested page with OFFSET/LIMIT.

    A page past the end is returned empty without querying for rows.
    """
    page = max(page, 1)
    total = query.order_by(None).count()
    offset = (page - 1) * per_page
    if offset >= total:
        return Page(items=[], total=total, per_page=per_page, current_page=page)
    items = query.offset(offset).limit(per_page).all()
    return Page(items=items, total=total, per_page=per_page, current_page=page)
