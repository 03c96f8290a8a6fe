"""Display formatting for Brazilian currency, dates and tax ids."""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


def format_currency(value: Decimal | float | int | None) -> str:
    """Format an amount as BRL, e.g. `R$ 1.234,56`. Missing values show zero."""
    amount = Decimal(str(value)) if value is not None else Decimal(0)
    if not amount.is_finite():
        amount = Decimal(0)
    amount = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def parse_date(value: Any) -> datetime | None:
    """
    Parse an ISO date/datetime or a `dd/mm/yyyy` date.

    Timezone information is dropped so values from different sources compare
    against each other. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text[:10], fmt)
        except ValueError:
            continue
    return None


def date_key(value: Any) -> str | None:
    """Return the `YYYY-MM-DD` part of a date-like value for range filters."""
    parsed = parse_date(value)
    return parsed.strftime("%Y-%m-%d") if parsed else None


def format_date(value: Any) -> str:
    parsed = parse_date(value)
    return parsed.strftime("%d/%m/%Y") if parsed else ""


def format_datetime(value: Any) -> str:
    parsed = parse_date(value)
    return parsed.strftime("%d/%m/%Y %H:%M") if parsed else ""


def format_cnpj(value: str | None) -> str:
    """Mask a 14-digit CNPJ as `00.000.000/0000-00`; other text is returned as is."""
    if not value:
        return ""
    digits = "".join(ch for ch in value if ch.isdigit())
    if len(digits) != 14:
        return value
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
