"""Utility functions shared across the dashboard."""

from notas_ui.utils.formatting import (
    format_cnpj,
    format_currency,
    format_date,
    format_datetime,
    parse_date,
)
from notas_ui.utils.list_processor import (
    INVOICE_LIST_CONFIG,
    MEMBER_LIST_CONFIG,
    ListConfig,
    filter_by_date_range,
    filter_by_search_term,
    filter_by_status,
    paginate,
    run_pipeline,
    sort_records,
)

__all__ = [
    "INVOICE_LIST_CONFIG",
    "MEMBER_LIST_CONFIG",
    "ListConfig",
    "filter_by_date_range",
    "filter_by_search_term",
    "filter_by_status",
    "format_cnpj",
    "format_currency",
    "format_date",
    "format_datetime",
    "paginate",
    "parse_date",
    "run_pipeline",
    "sort_records",
]
