"""
Tests for the client-side list pipeline (filter, sort, paginate).
"""

import math
import random

import pytest

from notas_ui.data.demo_invoices import DEMO_PENDING_PAYLOAD
from notas_ui.models.common import QueryState, SortDirection
from notas_ui.models.invoice import InvoiceStatus, parse_invoices
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

FIELDS = ("name", "city")


def _records():
    return [
        {"id": 1, "name": "Alpha LTDA", "city": "São Paulo", "amount": 30},
        {"id": 2, "name": "beta", "city": None, "amount": None},
        {"id": 3, "name": None, "city": "Recife", "amount": 10},
        {"id": 4, "name": "Gamma ltda", "city": "Curitiba", "amount": 10},
        {"id": 5, "name": "Delta", "city": "Belém", "amount": 25},
    ]


# ============================================================================
# TESTS: filter_by_search_term
# ============================================================================

class TestSearchFilter:
    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_empty_term_returns_collection_unchanged(self, term):
        records = _records()
        result = filter_by_search_term(records, term, FIELDS)
        assert result == records
        assert result is not records

    def test_match_is_case_insensitive_substring(self):
        result = filter_by_search_term(_records(), "ltda", FIELDS)
        assert [r["id"] for r in result] == [1, 4]

    def test_term_is_trimmed(self):
        result = filter_by_search_term(_records(), "  recife ", FIELDS)
        assert [r["id"] for r in result] == [3]

    def test_none_fields_are_skipped_not_matched(self):
        result = filter_by_search_term(_records(), "none", FIELDS)
        assert result == []

    def test_soundness_and_completeness(self):
        records = _records()
        for term in ["a", "LT", "é", "x", "o"]:
            kept = filter_by_search_term(records, term, FIELDS)
            needle = term.lower()

            def hit(record):
                return any(
                    record[f] is not None and needle in str(record[f]).lower()
                    for f in FIELDS
                )

            assert all(hit(r) for r in kept)
            assert all(not hit(r) for r in records if r not in kept)

    def test_non_list_input_is_empty(self):
        assert filter_by_search_term(None, "a", FIELDS) == []
        assert filter_by_search_term("abc", "a", FIELDS) == []

    def test_input_is_not_mutated(self):
        records = _records()
        snapshot = [dict(r) for r in records]
        filter_by_search_term(records, "ltda", FIELDS)
        assert records == snapshot


# ============================================================================
# TESTS: sort_records
# ============================================================================

class TestSortRecords:
    def test_is_a_permutation(self):
        records = _records()
        for field in ("name", "city", "amount"):
            for direction in SortDirection:
                result = sort_records(records, field, direction)
                assert sorted(r["id"] for r in result) == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_nulls_last_in_both_directions(self, direction):
        result = sort_records(_records(), "amount", direction)
        assert result[-1]["id"] == 2
        result = sort_records(_records(), "name", direction)
        assert result[-1]["id"] == 3

    def test_numbers_compare_numerically(self):
        result = sort_records(_records(), "amount", "asc")
        assert [r["amount"] for r in result] == [10, 10, 25, 30, None]

    def test_descending_keeps_equal_keys_stable(self):
        result = sort_records(_records(), "amount", "desc")
        assert [r["id"] for r in result] == [1, 5, 3, 4, 2]

    def test_stable_for_equal_keys(self):
        records = [{"id": i, "group": i % 3} for i in range(30)]
        random.Random(7).shuffle(records)
        result = sort_records(records, "group", "asc")
        for group in range(3):
            expected = [r["id"] for r in records if r["group"] == group]
            assert [r["id"] for r in result if r["group"] == group] == expected

    def test_text_is_case_and_accent_insensitive(self):
        records = [{"name": "Ébano"}, {"name": "abacaxi"}, {"name": "Damasco"}, {"name": "caju"}]
        result = sort_records(records, "name", "asc")
        assert [r["name"] for r in result] == ["abacaxi", "caju", "Damasco", "Ébano"]

    def test_date_fields_compare_as_dates(self):
        config = ListConfig(date_fields=frozenset({"when"}))
        records = [
            {"id": 1, "when": "10/02/2025"},
            {"id": 2, "when": "2025-01-31"},
            {"id": 3, "when": "not a date"},
            {"id": 4, "when": "2025-02-01T10:00:00Z"},
        ]
        result = sort_records(records, "when", "asc", config)
        assert [r["id"] for r in result] == [2, 4, 1, 3]

    def test_configured_accessor_is_used(self):
        config = ListConfig(sort_fields={"size": lambda r: len(r["name"] or "")})
        result = sort_records(_records(), "size", "asc", config)
        assert result[0]["id"] == 3

    def test_enum_direction_sorts_descending(self):
        result = sort_records(_records(), "amount", SortDirection.DESC)
        assert [r["amount"] for r in result] == [30, 25, 10, 10, None]

    def test_missing_field_name_keeps_order(self, fifteen_invoices):
        result = sort_records(fifteen_invoices, None)
        assert [r.id for r in result] == [r.id for r in fifteen_invoices]


# ============================================================================
# TESTS: paginate
# ============================================================================

class TestPaginate:
    @pytest.mark.parametrize("count", [0, 1, 6, 7, 8, 14, 15, 100])
    @pytest.mark.parametrize("size", [1, 7, 9])
    def test_total_pages(self, count, size):
        page = paginate(list(range(count)), 1, size)
        assert page.total_pages == max(1, math.ceil(count / size))
        assert page.total_items == count

    def test_page_past_end_clamps_to_final_page(self):
        page = paginate(list(range(1, 16)), 10, 7)
        assert page.effective_page == 3
        assert page.items == [15]

    def test_page_below_one_clamps_to_first(self):
        page = paginate(list(range(1, 16)), 0, 7)
        assert page.effective_page == 1
        assert page.items == list(range(1, 8))

    def test_empty_collection_has_one_empty_page(self):
        page = paginate([], 3, 7)
        assert page.total_pages == 1
        assert page.effective_page == 1
        assert page.items == []
        assert page.first_index == 0


# ============================================================================
# TESTS: status and date filters
# ============================================================================

class TestStatusAndDateFilters:
    def test_status_filter(self, invoice_factory):
        records = [
            invoice_factory(1),
            invoice_factory(2, status=InvoiceStatus.PROCESSING),
            invoice_factory(3),
        ]
        kept = filter_by_status(records, InvoiceStatus.PENDING, INVOICE_LIST_CONFIG.status_accessor)
        assert [r.id for r in kept] == ["1", "3"]
        assert filter_by_status(records, None, INVOICE_LIST_CONFIG.status_accessor) == records

    def test_date_range_is_inclusive_and_mixes_formats(self, invoice_factory):
        records = [
            invoice_factory(1, emission_date="2025-02-01T23:59:00Z"),
            invoice_factory(2, emission_date="05/02/2025"),
            invoice_factory(3, emission_date="2025-02-10"),
            invoice_factory(4, emission_date=None),
        ]
        kept = filter_by_date_range(
            records, "2025-02-01", "2025-02-05", INVOICE_LIST_CONFIG.date_accessor
        )
        assert [r.id for r in kept] == ["1", "2"]

    def test_open_ended_range(self, invoice_factory):
        records = [invoice_factory(i) for i in range(1, 6)]
        kept = filter_by_date_range(records, "2025-02-04", None, INVOICE_LIST_CONFIG.date_accessor)
        assert [r.id for r in kept] == ["4", "5"]


# ============================================================================
# TESTS: run_pipeline
# ============================================================================

class TestPipeline:
    def test_fifteen_invoices_page_size_seven(self, fifteen_invoices):
        config = ListConfig(default_sort_field=None)
        query = QueryState(page_size=7)

        first = run_pipeline(fifteen_invoices, query, config)
        assert [r.id for r in first.items] == [str(i) for i in range(1, 8)]
        assert first.total_pages == 3

        clamped = run_pipeline(fifteen_invoices, query.with_page(4), config)
        assert clamped.effective_page == 3
        assert [r.id for r in clamped.items] == ["15"]

    def test_ltda_search_on_demo_notas(self):
        records = parse_invoices(DEMO_PENDING_PAYLOAD)
        assert len(records) == 15
        expected = [r.id for r in records if "ltda" in (r.counterparty_cnpj or "").lower()]
        assert len(expected) == 5

        kept = filter_by_search_term(records, "LTDA", INVOICE_LIST_CONFIG.search_fields)
        assert [r.id for r in kept] == expected

    def test_search_and_status_reset_page(self, fifteen_invoices):
        query = QueryState(page_size=7).with_page(3)
        assert query.with_search("Fornecedor").page == 1
        assert query.with_status(InvoiceStatus.PENDING).page == 1
        page = run_pipeline(fifteen_invoices, query.with_search("Fornecedor 1"), INVOICE_LIST_CONFIG)
        assert page.effective_page == 1

    def test_default_sort_is_newest_first(self, fifteen_invoices):
        page = run_pipeline(fifteen_invoices, QueryState(page_size=7), INVOICE_LIST_CONFIG)
        assert page.items[0].id == "15"

    def test_explicit_sort_overrides_default(self, fifteen_invoices):
        query = QueryState(page_size=7).with_sort("numero")
        page = run_pipeline(fifteen_invoices, query, INVOICE_LIST_CONFIG)
        assert page.items[0].numero == 1001

    def test_second_sort_click_reverses(self, fifteen_invoices):
        query = QueryState(page_size=7).with_sort("numero").with_sort("numero")
        page = run_pipeline(fifteen_invoices, query, INVOICE_LIST_CONFIG)
        assert page.items[0].numero == 1015

    def test_status_sorts_by_label(self, invoice_factory):
        records = [
            invoice_factory(1, status=InvoiceStatus.PENDING),
            invoice_factory(2, status=InvoiceStatus.PROCESSING),
        ]
        query = QueryState().with_sort("status")
        page = run_pipeline(records, query, INVOICE_LIST_CONFIG)
        # "Em processamento" < "Pendente"
        assert [r.id for r in page.items] == ["2", "1"]

    def test_members_search_by_name_or_email(self, admin_user, regular_user):
        page = run_pipeline(
            [admin_user, regular_user], QueryState().with_search("comum"), MEMBER_LIST_CONFIG
        )
        assert [m.id for m in page.items] == ["user-1"]
        page = run_pipeline(
            [admin_user, regular_user], QueryState().with_search("ADMIN@"), MEMBER_LIST_CONFIG
        )
        assert [m.id for m in page.items] == ["admin-1"]
