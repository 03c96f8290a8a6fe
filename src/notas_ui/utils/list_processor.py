"""
Client-side list processing: filter, sort and paginate.

Every list view (pending invoices, invoice history, team members) fetches
its whole collection once and runs it through `run_pipeline` on each change
of its `QueryState`. The functions here are pure: they never mutate their
input, never keep references between calls and never raise on unexpected
input. Anything that is not a list or tuple is treated as an empty
collection.

Which attributes are searched, sorted and filtered is described per view by
a `ListConfig` of field accessors.
"""

import math
import unicodedata
from dataclasses import dataclass, field
from decimal import Decimal
from functools import cmp_to_key
from typing import Any, Callable, Mapping, Sequence

from notas_ui.models.common import PageResult, QueryState, SortDirection
from notas_ui.utils.formatting import date_key, parse_date

Accessor = Callable[[Any], Any]
FieldRef = str | Accessor


def field_value(record: Any, name: str) -> Any:
    """Read `name` from a mapping or an object; missing fields are None."""
    if not isinstance(name, str):
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


@dataclass(frozen=True)
class ListConfig:
    """
    Field accessors for one list view.

    Attributes:
        search_fields: Fields scanned by the free-text search.
        sort_fields: Accessor per sortable field name. Names not listed are
            read with `field_value`.
        date_fields: Sort fields compared as dates instead of text.
        default_sort_field: Sort applied when the query has none.
        default_sort_direction: Direction of the default sort.
        status_accessor: Reads the status used by the status filter.
        date_accessor: Reads the date used by the date-range filter.
    """

    search_fields: tuple[FieldRef, ...] = ()
    sort_fields: Mapping[str, Accessor] = field(default_factory=dict)
    date_fields: frozenset[str] = frozenset()
    default_sort_field: str | None = "created_at"
    default_sort_direction: SortDirection = SortDirection.DESC
    status_accessor: Accessor | None = None
    date_accessor: Accessor | None = None

    def accessor(self, name: str) -> Accessor:
        return self.sort_fields.get(name) or (lambda record: field_value(record, name))


def as_records(records: Any) -> list:
    """Copy a list or tuple; any other value becomes an empty list."""
    if isinstance(records, (list, tuple)):
        return list(records)
    return []


def filter_by_search_term(
    records: Any, term: str | None, fields: Sequence[FieldRef]
) -> list:
    """
    Keep records where any searchable field contains the term.

    The term is trimmed and lowercased; an empty term returns the records
    unchanged. Fields that are None are skipped for that field only.
    """
    items = as_records(records)
    needle = term.strip().lower() if isinstance(term, str) else ""
    if not needle:
        return items
    accessors = [_as_accessor(ref) for ref in fields]
    return [item for item in items if _matches(item, needle, accessors)]


def filter_by_status(records: Any, status: Any, accessor: Accessor | None) -> list:
    """Keep records whose status equals `status`; None keeps everything."""
    items = as_records(records)
    if status is None or accessor is None:
        return items
    return [item for item in items if accessor(item) == status]


def filter_by_date_range(
    records: Any,
    start_date: str | None,
    end_date: str | None,
    accessor: Accessor | None,
) -> list:
    """
    Keep records whose date falls in the inclusive range.

    Only the `YYYY-MM-DD` part is compared. Records without a parseable date
    are dropped while either bound is set.
    """
    items = as_records(records)
    start, end = date_key(start_date), date_key(end_date)
    if accessor is None or (start is None and end is None):
        return items
    kept = []
    for item in items:
        day = date_key(accessor(item))
        if day is None:
            continue
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        kept.append(item)
    return kept


def sort_records(
    records: Any,
    sort_field: str,
    direction: SortDirection | str = SortDirection.ASC,
    config: ListConfig | None = None,
) -> list:
    """
    Return a new, stably sorted list.

    Numbers compare numerically, configured date fields as dates and
    everything else as case- and accent-insensitive text. Records whose
    value is None (or an unparseable date) come last in both directions;
    descending order reverses the comparison, not the list.
    """
    items = as_records(records)
    config = config or ListConfig()
    accessor = config.accessor(sort_field)
    is_date = sort_field in config.date_fields
    descending = SortDirection.parse(direction) is SortDirection.DESC

    def compare(left: tuple, right: tuple) -> int:
        a, b = left[0], right[0]
        if a is None or b is None:
            return (a is None) - (b is None)
        result = (a > b) - (a < b)
        return -result if descending else result

    keyed = [(_sort_key(accessor(item), is_date), item) for item in items]
    return [item for _, item in sorted(keyed, key=cmp_to_key(compare))]


def paginate(records: Any, page: Any, page_size: int) -> PageResult:
    """
    Slice one page out of `records`.

    `total_pages` is at least 1 and the requested page is clamped to
    `[1, total_pages]`, so a page past the end returns the final page.
    """
    items = as_records(records)
    size = max(_to_int(page_size, 1), 1)
    total_pages = max(1, math.ceil(len(items) / size))
    effective = min(max(_to_int(page, 1), 1), total_pages)
    start = (effective - 1) * size
    return PageResult(
        items=items[start : start + size],
        total_items=len(items),
        total_pages=total_pages,
        effective_page=effective,
        page_size=size,
    )


def run_pipeline(records: Any, query: QueryState, config: ListConfig) -> PageResult:
    """
    Status filter, date range, search, sort and paginate, in that order.

    Without an explicit sort field the view's default sort applies.
    """
    items = filter_by_status(records, query.status, config.status_accessor)
    items = filter_by_date_range(
        items, query.start_date, query.end_date, config.date_accessor
    )
    items = filter_by_search_term(items, query.search_term, config.search_fields)
    if query.sort_field:
        items = sort_records(items, query.sort_field, query.sort_direction, config)
    elif config.default_sort_field:
        items = sort_records(
            items, config.default_sort_field, config.default_sort_direction, config
        )
    return paginate(items, query.page, query.page_size)


def _as_accessor(ref: FieldRef) -> Accessor:
    if callable(ref):
        return ref
    return lambda record: field_value(record, ref)


def _matches(item: Any, needle: str, accessors: list[Accessor]) -> bool:
    for accessor in accessors:
        value = accessor(item)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def _sort_key(value: Any, is_date: bool) -> tuple | None:
    if value is None:
        return None
    if is_date:
        parsed = parse_date(value)
        return (0, parsed) if parsed is not None else None
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        if isinstance(value, float) and math.isnan(value):
            return None
        return (0, value)
    text = str(value).casefold()
    return (1, _strip_accents(text), text)


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _to_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


INVOICE_LIST_CONFIG = ListConfig(
    search_fields=("numero", "counterparty_cnpj", "branch_cnpj", "note"),
    sort_fields={
        "status": lambda invoice: invoice.display.label,
    },
    date_fields=frozenset({"emission_date", "created_at"}),
    default_sort_field="created_at",
    status_accessor=lambda invoice: invoice.status,
    date_accessor=lambda invoice: invoice.emission_date,
)

MEMBER_LIST_CONFIG = ListConfig(
    search_fields=("display_name", "email"),
    sort_fields={
        "role": lambda member: member.role.label,
        "status": lambda member: member.status.label,
    },
    date_fields=frozenset({"created_at", "last_sign_in_at"}),
    default_sort_field="created_at",
)
