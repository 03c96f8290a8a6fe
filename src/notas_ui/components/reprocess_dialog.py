"""
Reprocess dialog for a pending nota.

The document configuration list is fetched when the dialog opens; the
project account select only shows the accounts of the chosen configuration.
"""

import reflex as rx

from notas_ui.state import NotasState


def _field(label: str, control: rx.Component) -> rx.Component:
    return rx.vstack(
        rx.text(label, size="2", weight="medium"),
        control,
        spacing="1",
        width="100%",
    )


def _config_doc_fields() -> rx.Component:
    return rx.cond(
        NotasState.reprocess_loading_docs,
        rx.hstack(
            rx.spinner(size="1"),
            rx.text("Carregando configurações...", class_name="muted"),
            align="center",
        ),
        rx.cond(
            NotasState.config_docs.length() > 0,
            rx.vstack(
                _field(
                    "Configuração de documento",
                    rx.select.root(
                        rx.select.trigger(
                            placeholder="Selecione a configuração de documento",
                            width="100%",
                        ),
                        rx.select.content(
                            rx.foreach(
                                NotasState.config_docs,
                                lambda doc: rx.select.item(doc.label, value=doc.code),
                            ),
                        ),
                        value=NotasState.selected_config_doc,
                        on_change=NotasState.set_selected_config_doc,
                    ),
                ),
                rx.cond(
                    NotasState.account_options.length() > 0,
                    _field(
                        "Conta de projeto",
                        rx.select.root(
                            rx.select.trigger(
                                placeholder="Selecione a conta de projeto",
                                width="100%",
                            ),
                            rx.select.content(
                                rx.foreach(
                                    NotasState.account_options,
                                    lambda account: rx.select.item(
                                        account.name, value=account.code
                                    ),
                                ),
                            ),
                            value=NotasState.selected_account,
                            on_change=NotasState.set_selected_account,
                        ),
                    ),
                ),
                width="100%",
            ),
            rx.text(
                "Nenhuma configuração de documento disponível para esta nota.",
                class_name="muted",
                size="2",
            ),
        ),
    )


def reprocess_dialog() -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(NotasState.reprocess_title),
            rx.dialog.description(
                "Informe o motivo e os dados para reprocessar a nota fiscal.",
                class_name="muted",
            ),
            rx.vstack(
                _field(
                    "Motivo",
                    rx.text_area(
                        value=NotasState.reprocess_reason,
                        on_change=NotasState.set_reprocess_reason,
                        placeholder="Descreva o motivo do reprocessamento",
                        width="100%",
                    ),
                ),
                _field(
                    "Processo",
                    rx.input(
                        value=NotasState.reprocess_process,
                        on_change=NotasState.set_reprocess_process,
                        placeholder="Informe o processo",
                        width="100%",
                    ),
                ),
                _field(
                    "Observações",
                    rx.text_area(
                        value=NotasState.reprocess_observations,
                        on_change=NotasState.set_reprocess_observations,
                        placeholder="Observações adicionais (opcional)",
                        width="100%",
                    ),
                ),
                _config_doc_fields(),
                spacing="3",
                width="100%",
                margin_top="1em",
            ),
            rx.hstack(
                rx.dialog.close(
                    rx.button("Cancelar", variant="soft", color_scheme="gray"),
                ),
                rx.button(
                    "Reprocessar",
                    on_click=NotasState.submit_reprocess,
                    loading=NotasState.reprocess_submitting,
                ),
                justify="end",
                spacing="3",
                margin_top="1.5em",
            ),
        ),
        open=NotasState.reprocess_open,
        on_open_change=NotasState.set_reprocess_open,
    )
