"""
Invoice list page body for the pending and history views.

`invoice_panel` takes the state class, so both views render the same
search, filters, table and pagination against their own vars.
"""

import reflex as rx

from notas_ui.components.common import (
    empty_state,
    error_state,
    loading_state,
    pagination,
    search_bar,
    sortable_header,
    status_badge,
)
from notas_ui.models.reflex_models import InvoiceRow
from notas_ui.state import HistoricoState, NotasState

SEARCH_PLACEHOLDER = "Buscar por número, CNPJ ou motivo..."


def counters_bar() -> rx.Component:
    """Status counters; clicking one toggles the status filter."""
    return rx.hstack(
        rx.box(
            rx.text("Total", class_name="muted"),
            rx.heading(NotasState.counters_total, size="5"),
            class_name="card counter-card",
        ),
        rx.foreach(
            NotasState.counters,
            lambda chip: rx.box(
                rx.hstack(
                    status_badge(chip.label, chip.tone),
                    rx.heading(chip.count, size="5"),
                    justify="between",
                    align="center",
                ),
                on_click=NotasState.set_status_filter(chip.status),
                class_name=rx.cond(
                    NotasState.status_filter == chip.status,
                    "card counter-card selected",
                    "card counter-card",
                ),
            ),
        ),
        spacing="3",
        wrap="wrap",
        width="100%",
    )


def _filters(state) -> rx.Component:
    return rx.hstack(
        rx.box(
            search_bar(state.search_input, state.search, SEARCH_PLACEHOLDER),
            flex="1",
        ),
        rx.hstack(
            rx.text("De", class_name="muted"),
            rx.input(type="date", value=state.start_date, on_change=state.set_start_date),
            rx.text("até", class_name="muted"),
            rx.input(type="date", value=state.end_date, on_change=state.set_end_date),
            align="center",
            spacing="2",
        ),
        rx.cond(
            state.has_filters,
            rx.button(
                rx.icon("x", size=14),
                "Limpar filtros",
                on_click=state.clear_filters,
                variant="soft",
                color_scheme="gray",
            ),
        ),
        spacing="3",
        align="center",
        width="100%",
        class_name="card search-card",
    )


def _actions(state, row: InvoiceRow, history: bool) -> rx.Component:
    buttons = [
        rx.tooltip(
            rx.icon_button(
                rx.icon("file-down", size=16),
                on_click=state.download_pdf(row.id),
                disabled=~row.has_pdf,
                variant="ghost",
            ),
            content="Baixar PDF",
        ),
    ]
    if history:
        buttons.append(
            rx.tooltip(
                rx.icon_button(
                    rx.icon("file-code", size=16),
                    on_click=HistoricoState.download_xml(row.id),
                    variant="ghost",
                ),
                content="Baixar XML",
            )
        )
    else:
        buttons.append(
            rx.tooltip(
                rx.icon_button(
                    rx.cond(
                        row.reprocessing,
                        rx.spinner(size="1"),
                        rx.icon("refresh-cw", size=16),
                    ),
                    on_click=NotasState.open_reprocess(row.id),
                    disabled=row.reprocessing,
                    variant="ghost",
                ),
                content="Reprocessar",
            )
        )
    return rx.hstack(*buttons, spacing="2")


def _row(state, row: InvoiceRow, history: bool) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row.numero),
        rx.table.cell(row.emission_date),
        rx.table.cell(row.counterparty),
        rx.table.cell(row.branch),
        rx.table.cell(row.total),
        rx.table.cell(status_badge(row.status_label, row.status_tone)),
        rx.table.cell(rx.text(row.note, class_name="note-cell")),
        rx.table.cell(_actions(state, row, history)),
    )


def _table(state, history: bool) -> rx.Component:
    def header(label: str, field: str) -> rx.Component:
        return sortable_header(label, field, state.sort_field, state.sort_direction, state.sort_by)

    return rx.table.root(
        rx.table.header(
            rx.table.row(
                header("Número", "numero"),
                header("Emissão", "emission_date"),
                header("Prestador", "counterparty_cnpj"),
                header("Filial", "branch_cnpj"),
                header("Valor", "total"),
                header("Status", "status"),
                rx.table.column_header_cell("Observação" if history else "Motivo"),
                rx.table.column_header_cell("Ações"),
            )
        ),
        rx.table.body(rx.foreach(state.rows, lambda row: _row(state, row, history))),
        variant="surface",
        width="100%",
    )


def invoice_panel(state, history: bool = False) -> rx.Component:
    return rx.vstack(
        _filters(state),
        rx.cond(
            state.error != "",
            error_state(state.error, state.load_page),
            rx.cond(
                state.loading & (state.total_items == 0),
                loading_state("Carregando notas fiscais..."),
                rx.cond(
                    state.is_empty,
                    empty_state(state.empty_message),
                    rx.vstack(
                        _table(state, history),
                        pagination(
                            state.pages,
                            state.has_previous,
                            state.has_next,
                            state.go_to_page,
                            state.previous_page,
                            state.next_page,
                            summary=state.range_summary,
                        ),
                        width="100%",
                        spacing="3",
                    ),
                ),
            ),
        ),
        width="100%",
        spacing="4",
    )
