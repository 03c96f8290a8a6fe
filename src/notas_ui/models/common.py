"""
Shared view-state models for the Notas Fiscais dashboard.

These models describe what a list view is showing and what it last
produced, independently of Reflex:

- QueryState: search term, status filter, date range, sort and page
- PageResult: the visible slice plus pagination metadata
- Feedback: a toast-style message produced by an action
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from notas_ui.models.invoice import InvoiceStatus


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> "SortDirection":
        if isinstance(value, cls):
            return value
        text = str(getattr(value, "value", value)).strip().lower()
        return cls.DESC if text == cls.DESC.value else cls.ASC


@dataclass(frozen=True)
class QueryState:
    """
    Current parameters of a list view.

    Every change that can shrink the result set (search, status filter,
    date range, sort) returns a copy on page 1. `with_page` only moves the
    page; the pipeline clamps it to the valid range.

    Attributes:
        search_term: Free-text term as typed (trimmed by the filter).
        status: Active status filter, None for all.
        sort_field: Explicit sort field, None for the view's default.
        sort_direction: Direction applied to `sort_field`.
        page: Requested page, 1-indexed.
        page_size: Fixed page size of the view.
        start_date: Inclusive lower bound (YYYY-MM-DD) on the emission date.
        end_date: Inclusive upper bound (YYYY-MM-DD) on the emission date.
    """

    search_term: str = ""
    status: InvoiceStatus | None = None
    sort_field: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    page_size: int = 7
    start_date: str | None = None
    end_date: str | None = None

    def with_search(self, term: str) -> "QueryState":
        return replace(self, search_term=term or "", page=1)

    def with_status(self, status: InvoiceStatus | None) -> "QueryState":
        return replace(self, status=status, page=1)

    def with_date_range(
        self, start_date: str | None, end_date: str | None
    ) -> "QueryState":
        return replace(
            self, start_date=start_date or None, end_date=end_date or None, page=1
        )

    def with_sort(self, sort_field: str) -> "QueryState":
        """Toggle the sort: same field ascending becomes descending, else ascending."""
        if self.sort_field == sort_field and self.sort_direction is SortDirection.ASC:
            direction = SortDirection.DESC
        else:
            direction = SortDirection.ASC
        return replace(self, sort_field=sort_field, sort_direction=direction, page=1)

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=page)

    def cleared(self) -> "QueryState":
        """Drop search, filters and sort, keeping only the page size."""
        return QueryState(page_size=self.page_size)

    @property
    def has_filters(self) -> bool:
        return bool(
            self.search_term.strip()
            or self.status is not None
            or self.start_date
            or self.end_date
        )


@dataclass(frozen=True)
class PageResult:
    """
    One page of a processed list.

    Attributes:
        items: Records on the effective page.
        total_items: Number of records after filtering.
        total_pages: max(1, ceil(total_items / page_size)).
        effective_page: Requested page clamped to [1, total_pages].
        page_size: Page size used for slicing.
    """

    items: list = field(default_factory=list)
    total_items: int = 0
    total_pages: int = 1
    effective_page: int = 1
    page_size: int = 7

    @property
    def has_previous(self) -> bool:
        return self.effective_page > 1

    @property
    def has_next(self) -> bool:
        return self.effective_page < self.total_pages

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0

    @property
    def first_index(self) -> int:
        """1-based position of the first visible record, 0 when empty."""
        if not self.items:
            return 0
        return (self.effective_page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.items:
            return 0
        return self.first_index + len(self.items) - 1

    def page_numbers(self) -> list[int | None]:
        """
        Page buttons to render: first, last and the neighbours of the current
        page. None marks an ellipsis; a gap of a single page shows that page.
        """
        wanted = {1, self.total_pages}
        wanted.update(
            page
            for page in range(self.effective_page - 1, self.effective_page + 2)
            if 1 <= page <= self.total_pages
        )
        numbers: list[int | None] = []
        previous = 0
        for page in sorted(wanted):
            if page - previous == 2:
                numbers.append(page - 1)
            elif page - previous > 2:
                numbers.append(None)
            numbers.append(page)
            previous = page
        return numbers


@dataclass(frozen=True)
class Feedback:
    """A short user-visible message produced by an action."""

    kind: str
    message: str

    @classmethod
    def success(cls, message: str) -> "Feedback":
        return cls("success", message)

    @classmethod
    def error(cls, message: str) -> "Feedback":
        return cls("error", message)

    @property
    def ok(self) -> bool:
        return self.kind == "success"
