"""Translate list state into the backend's query contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .period import Period

DEFAULT_PAGE_SIZE = 20
DEFAULT_SORT = "date,desc"
DEFAULT_CATEGORY_SORT = "name,asc"

# Sort keys understood by GET /expenses, with UI labels
SORT_OPTIONS: dict[str, str] = {
    "date,desc": "Newest first",
    "date,asc": "Oldest first",
    "amount,desc": "Highest amount",
    "amount,asc": "Lowest amount",
    "name,asc": "Name A-Z",
    "name,desc": "Name Z-A",
}


@dataclass(frozen=True)
class ExpenseCriteria:
    """Query for one page of ``GET /expenses``."""

    page: int
    size: int
    sort: str
    year_month: str
    category_ids: tuple[str, ...] = ()
    name: Optional[str] = None

    def to_params(self) -> list[tuple[str, str]]:
        """Ordered query parameters; ``categoryIds`` repeats once per id."""

        params = [
            ("page", str(self.page)),
            ("size", str(self.size)),
            ("sort", self.sort),
            ("yearMonth", self.year_month),
        ]
        if self.name:
            params.append(("name", self.name))
        params.extend(("categoryIds", category_id) for category_id in self.category_ids)
        return params


def build_expense_criteria(
    period: Period,
    page: int,
    *,
    sort: str = DEFAULT_SORT,
    page_size: int = DEFAULT_PAGE_SIZE,
    category_ids: Iterable[str] | None = None,
    name: str | None = None,
) -> ExpenseCriteria:
    """Combine period, paging and filters; values are passed through unvalidated."""

    search = (name or "").strip() or None
    return ExpenseCriteria(
        page=page,
        size=page_size,
        sort=sort,
        year_month=period.to_query_key(),
        category_ids=tuple(category_ids or ()),
        name=search,
    )


@dataclass(frozen=True)
class CategoryCriteria:
    """Query for ``GET /categories``."""

    sort: str = DEFAULT_CATEGORY_SORT
    name: Optional[str] = None

    def to_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.sort:
            params.append(("sort", self.sort))
        if self.name and self.name.strip():
            params.append(("name", self.name.strip()))
        return params


@dataclass
class ListFilters:
    """Mutable sort/filter state owned by a list controller."""

    sort: str = DEFAULT_SORT
    category_ids: tuple[str, ...] = field(default_factory=tuple)
    name: Optional[str] = None
