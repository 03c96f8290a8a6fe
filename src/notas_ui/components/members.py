"""
Settings page sections: profile card, members table and member dialogs.

Admin-only controls are hidden for regular users; the controller rejects
those actions as well.
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
from notas_ui.models.reflex_models import MemberRow
from notas_ui.state import ConfiguracoesState

State = ConfiguracoesState


def _role_select(value, on_change) -> rx.Component:
    return rx.select.root(
        rx.select.trigger(width="100%"),
        rx.select.content(
            rx.select.item("Usuário", value="user"),
            rx.select.item("Administrador", value="admin"),
        ),
        value=value,
        on_change=on_change,
    )


def _labeled(label: str, control: rx.Component) -> rx.Component:
    return rx.vstack(rx.text(label, size="2", weight="medium"), control, spacing="1", width="100%")


def profile_card() -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.avatar(fallback=State.user_initial, size="5", radius="full"),
            rx.vstack(
                rx.heading(State.user_name, size="4"),
                rx.text(State.user_email, class_name="muted"),
                rx.badge(State.role_label, variant="soft"),
                spacing="1",
            ),
            align="center",
            spacing="4",
        ),
        rx.hstack(
            rx.box(
                _labeled(
                    "Nome de exibição",
                    rx.input(value=State.profile_name, on_change=State.set_profile_name),
                ),
                flex="1",
            ),
            rx.button("Salvar", on_click=State.save_profile, loading=State.busy),
            align="end",
            spacing="3",
            width="100%",
            margin_top="1em",
        ),
        class_name="card",
    )


def _member_actions(member: MemberRow) -> rx.Component:
    return rx.hstack(
        rx.cond(
            State.is_admin,
            rx.tooltip(
                rx.icon_button(
                    rx.icon("pencil", size=16),
                    on_click=State.open_edit(member.id),
                    variant="ghost",
                ),
                content="Editar",
            ),
        ),
        rx.cond(
            State.is_admin | member.is_self,
            rx.tooltip(
                rx.icon_button(
                    rx.icon("mail", size=16),
                    on_click=State.resend(member.email),
                    variant="ghost",
                    disabled=State.busy,
                ),
                content=rx.cond(
                    member.is_pending, "Reenviar convite", "Enviar redefinição de senha"
                ),
            ),
        ),
        rx.cond(
            State.is_admin & ~member.is_self,
            rx.tooltip(
                rx.icon_button(
                    rx.icon("trash-2", size=16),
                    on_click=State.open_delete(member.id),
                    variant="ghost",
                    color_scheme="red",
                ),
                content="Remover",
            ),
        ),
        spacing="2",
    )


def _member_row(member: MemberRow) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.vstack(
                rx.text(member.display_name, weight="medium"),
                rx.text(member.email, class_name="muted", size="1"),
                spacing="0",
            )
        ),
        rx.table.cell(rx.badge(member.role_label, variant="outline")),
        rx.table.cell(status_badge(member.status_label, member.status_tone)),
        rx.table.cell(member.created_at),
        rx.table.cell(member.last_sign_in_at),
        rx.table.cell(_member_actions(member)),
    )


def _members_table() -> rx.Component:
    def header(label: str, field: str) -> rx.Component:
        return sortable_header(
            label, field, State.members_sort_field, State.members_sort_direction, State.sort_by
        )

    return rx.table.root(
        rx.table.header(
            rx.table.row(
                header("Nome", "display_name"),
                header("Perfil", "role"),
                header("Status", "status"),
                header("Criado em", "created_at"),
                header("Último acesso", "last_sign_in_at"),
                rx.table.column_header_cell("Ações"),
            )
        ),
        rx.table.body(rx.foreach(State.members, _member_row)),
        variant="surface",
        width="100%",
    )


def add_member_dialog() -> rx.Component:
    return rx.dialog.root(
        rx.dialog.trigger(
            rx.button(rx.icon("user-plus", size=16), "Adicionar membro"),
        ),
        rx.dialog.content(
            rx.dialog.title("Adicionar membro"),
            rx.dialog.description(
                "Um convite será enviado para o email informado.", class_name="muted"
            ),
            rx.vstack(
                _labeled("Nome", rx.input(value=State.new_name, on_change=State.set_new_name)),
                _labeled(
                    "Email",
                    rx.input(type="email", value=State.new_email, on_change=State.set_new_email),
                ),
                _labeled("Perfil", _role_select(State.new_role, State.set_new_role)),
                spacing="3",
                margin_top="1em",
            ),
            rx.hstack(
                rx.dialog.close(rx.button("Cancelar", variant="soft", color_scheme="gray")),
                rx.button("Enviar convite", on_click=State.submit_add, loading=State.busy),
                justify="end",
                spacing="3",
                margin_top="1.5em",
            ),
        ),
        open=State.add_open,
        on_open_change=State.set_add_open,
    )


def edit_member_dialog() -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title("Editar membro"),
            rx.vstack(
                _labeled(
                    "Nome de exibição",
                    rx.input(value=State.edit_name, on_change=State.set_edit_name),
                ),
                rx.cond(
                    State.is_admin,
                    _labeled("Perfil", _role_select(State.edit_role, State.set_edit_role)),
                ),
                spacing="3",
                margin_top="1em",
            ),
            rx.hstack(
                rx.dialog.close(rx.button("Cancelar", variant="soft", color_scheme="gray")),
                rx.button("Salvar", on_click=State.submit_edit, loading=State.busy),
                justify="end",
                spacing="3",
                margin_top="1.5em",
            ),
        ),
        open=State.edit_open,
        on_open_change=State.set_edit_open,
    )


def delete_member_dialog() -> rx.Component:
    return rx.alert_dialog.root(
        rx.alert_dialog.content(
            rx.alert_dialog.title("Remover membro"),
            rx.alert_dialog.description(
                rx.text(
                    "Tem certeza que deseja remover ",
                    rx.text.strong(State.delete_label),
                    "? Esta ação não pode ser desfeita.",
                )
            ),
            rx.hstack(
                rx.alert_dialog.cancel(
                    rx.button("Cancelar", variant="soft", color_scheme="gray")
                ),
                rx.button(
                    "Remover",
                    color_scheme="red",
                    on_click=State.confirm_delete,
                    loading=State.busy,
                ),
                justify="end",
                spacing="3",
                margin_top="1.5em",
            ),
        ),
        open=State.delete_open,
        on_open_change=State.set_delete_open,
    )


def members_section() -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.heading("Membros da equipe", size="4"),
            rx.cond(State.is_admin, add_member_dialog()),
            justify="between",
            align="center",
            width="100%",
        ),
        rx.box(
            search_bar(State.members_search, State.search, "Buscar por nome ou email..."),
            margin_y="1em",
        ),
        rx.cond(
            State.members_error != "",
            error_state(State.members_error, State.load_page),
            rx.cond(
                State.members_loading & (State.members_total == 0),
                loading_state("Carregando membros..."),
                rx.cond(
                    State.members_is_empty,
                    empty_state(State.members_empty_message, icon="users"),
                    rx.vstack(
                        _members_table(),
                        pagination(
                            State.members_pages,
                            State.members_has_previous,
                            State.members_has_next,
                            State.go_to_page,
                            State.previous_page,
                            State.next_page,
                        ),
                        width="100%",
                        spacing="3",
                    ),
                ),
            ),
        ),
        edit_member_dialog(),
        delete_member_dialog(),
        class_name="card",
    )
