"""
Tests for currency, date and CNPJ formatting.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from notas_ui.utils.formatting import (
    date_key,
    format_cnpj,
    format_currency,
    format_date,
    format_datetime,
    parse_date,
)


class TestCurrency:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("1234.56"), "R$ 1.234,56"),
            (3293.29, "R$ 3.293,29"),
            (0, "R$ 0,00"),
            (None, "R$ 0,00"),
            (Decimal("NaN"), "R$ 0,00"),
            (1000000, "R$ 1.000.000,00"),
            (Decimal("-12.345"), "-R$ 12,35"),
        ],
    )
    def test_format(self, value, expected):
        assert format_currency(value) == expected


class TestDates:
    def test_parse_iso_with_zulu(self):
        assert parse_date("2025-03-03T18:00:00Z") == datetime(2025, 3, 3, 18, 0)

    def test_parse_brazilian_date(self):
        assert parse_date("28/02/2025") == datetime(2025, 2, 28)

    @pytest.mark.parametrize("value", [None, "", "amanhã", 123, "31/02/2025"])
    def test_unparseable(self, value):
        assert parse_date(value) is None

    def test_date_key_and_display(self):
        assert date_key("2025-02-01T23:59:59Z") == "2025-02-01"
        assert date_key("05/02/2025") == "2025-02-05"
        assert format_date("2025-02-01") == "01/02/2025"
        assert format_datetime("2025-02-01T09:05:00Z") == "01/02/2025 09:05"
        assert format_date(None) == ""


class TestCnpj:
    def test_masks_fourteen_digits(self):
        assert format_cnpj("11222333000181") == "11.222.333/0001-81"

    def test_other_text_is_kept(self):
        assert format_cnpj("Empresa LTDA") == "Empresa LTDA"
        assert format_cnpj(None) == ""
