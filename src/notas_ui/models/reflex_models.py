"""
Reflex-compatible models for the Notas Fiscais dashboard.

These models extend rx.Base so they can be used with rx.foreach and
other Reflex reactive components. Values are pre-formatted for display;
the domain dataclasses stay on the server inside the controllers.
"""

import reflex as rx

from notas_ui.models.common import PageResult
from notas_ui.models.invoice import (
    ConfigDocument,
    InvoiceRecord,
    InvoiceStatus,
    StatusCounters,
    status_display,
)
from notas_ui.models.member import MemberRecord
from notas_ui.utils.formatting import (
    format_cnpj,
    format_currency,
    format_date,
    format_datetime,
)


class InvoiceRow(rx.Base):
    """One table row of the pending or history view."""

    id: str = ""
    numero: str = ""
    emission_date: str = ""
    counterparty: str = ""
    branch: str = ""
    total: str = ""
    status_label: str = ""
    status_tone: str = "gray"
    note: str = ""
    has_pdf: bool = False
    reprocessing: bool = False


class MemberRow(rx.Base):
    """One table row of the members section."""

    id: str = ""
    email: str = ""
    display_name: str = ""
    role: str = "user"
    role_label: str = ""
    status_label: str = ""
    status_tone: str = "gray"
    is_pending: bool = False
    created_at: str = ""
    last_sign_in_at: str = ""
    is_self: bool = False


class ProjectAccountOption(rx.Base):
    code: str = ""
    name: str = ""


class ConfigDocOption(rx.Base):
    """A document configuration offered in the reprocess dialog."""

    code: str = ""
    label: str = ""
    accounts: list[ProjectAccountOption] = []


class CounterChip(rx.Base):
    """A status counter doubling as a status filter toggle."""

    status: str = ""
    label: str = ""
    count: int = 0
    tone: str = "gray"


class PageButton(rx.Base):
    """A pagination button; `number` is 0 for an ellipsis."""

    number: int = 0
    label: str = ""
    is_current: bool = False


def invoice_row(record: InvoiceRecord, reprocessing: set[str] | None = None) -> InvoiceRow:
    display = record.display
    return InvoiceRow(
        id=record.id,
        numero="" if record.numero is None else str(record.numero),
        emission_date=format_date(record.emission_date),
        counterparty=format_cnpj(record.counterparty_cnpj),
        branch=format_cnpj(record.branch_cnpj),
        total=format_currency(record.total),
        status_label=display.label,
        status_tone=display.tone,
        note=record.note or "-",
        has_pdf=record.has_pdf,
        reprocessing=record.id in (reprocessing or set()),
    )


def member_row(record: MemberRecord, current_user_id: str = "") -> MemberRow:
    return MemberRow(
        id=record.id,
        email=record.email,
        display_name=record.display_name,
        role=record.role.value,
        role_label=record.role.label,
        status_label=record.status.label,
        status_tone="green" if record.status.value == "confirmed" else "yellow",
        is_pending=record.status.value == "pending",
        created_at=format_datetime(record.created_at),
        last_sign_in_at=format_datetime(record.last_sign_in_at) or "Nunca",
        is_self=bool(current_user_id) and record.id == current_user_id,
    )


def config_doc_option(document: ConfigDocument) -> ConfigDocOption:
    return ConfigDocOption(
        code=str(document.code),
        label=document.label,
        accounts=[
            ProjectAccountOption(code=str(account.code), name=account.name)
            for account in document.project_accounts
        ],
    )


def counter_chips(counters: StatusCounters) -> list[CounterChip]:
    """Chips for each reported status, in backend order."""
    chips = []
    for key, count in counters.counts.items():
        status = InvoiceStatus.parse(key)
        display = status_display(status, key)
        chips.append(
            CounterChip(status=status.value, label=display.label, count=count, tone=display.tone)
        )
    return chips


def page_buttons(page: PageResult) -> list[PageButton]:
    return [
        PageButton(number=0, label="…")
        if number is None
        else PageButton(
            number=number,
            label=str(number),
            is_current=number == page.effective_page,
        )
        for number in page.page_numbers()
    ]
