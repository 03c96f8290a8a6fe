"""
Reflex application entry point for the Notas Fiscais dashboard.

This module initializes the Reflex app and registers its pages. Protected
pages run the session guard before their own load events.
"""

import reflex as rx

from notas_ui.components import (
    app_shell,
    counters_bar,
    invoice_panel,
    login_form,
    members_section,
    new_password_form,
    profile_card,
    reprocess_dialog,
    send_reset_form,
)
from notas_ui.controllers.permissions import is_protected_path
from notas_ui.lib import logs
from notas_ui.services import get_services
from notas_ui.state import (
    APP_TITLE,
    AuthState,
    ConfiguracoesState,
    HistoricoState,
    NotasState,
    PasswordState,
)

LOG = logs.logger(__file__)


def index() -> rx.Component:
    return login_form()


def notas() -> rx.Component:
    return app_shell(
        "/notas",
        "Notas pendentes",
        "Notas fiscais aguardando processamento.",
        counters_bar(),
        invoice_panel(NotasState),
        reprocess_dialog(),
    )


def historico() -> rx.Component:
    return app_shell(
        "/historico",
        "Histórico",
        "Notas fiscais já processadas.",
        invoice_panel(HistoricoState, history=True),
    )


def configuracoes() -> rx.Component:
    return app_shell(
        "/configuracoes",
        "Configurações",
        "Seu perfil e os membros da equipe.",
        rx.vstack(profile_card(), members_section(), spacing="4", width="100%"),
    )


def send_reset_password() -> rx.Component:
    return send_reset_form()


def reset_password() -> rx.Component:
    return new_password_form(
        "Nova senha",
        "Defina uma nova senha para sua conta.",
        PasswordState.submit_reset,
    )


def set_password() -> rx.Component:
    return new_password_form(
        "Definir senha",
        "Defina sua senha para concluir o cadastro.",
        PasswordState.submit_set_password,
    )


# route, component, title, page load events
PAGES = [
    ("/", index, f"Entrar | {APP_TITLE}", [AuthState.redirect_if_signed_in]),
    ("/notas", notas, f"Notas pendentes | {APP_TITLE}", [NotasState.load_page, NotasState.load_counters]),
    ("/historico", historico, f"Histórico | {APP_TITLE}", [HistoricoState.load_page]),
    ("/configuracoes", configuracoes, f"Configurações | {APP_TITLE}", [ConfiguracoesState.load_page]),
    ("/send-reset-password", send_reset_password, f"Redefinir senha | {APP_TITLE}", []),
    ("/reset-password", reset_password, f"Nova senha | {APP_TITLE}", [PasswordState.read_link]),
    ("/set-password", set_password, f"Definir senha | {APP_TITLE}", [PasswordState.read_link]),
]

# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=["/styles.css"],
)

for route, component, title, load_events in PAGES:
    if is_protected_path(route):
        load_events = [AuthState.require_session, *load_events]
    app.add_page(component, route=route, title=title, on_load=load_events or None)


def main() -> None:
    """Entrypoint used by `notas-ui`; production deployments use `reflex run`."""
    import subprocess
    import sys

    settings = get_services().settings
    LOG.info(
        "Starting Reflex - frontend:%s backend:%s", settings.app_port, settings.backend_port
    )
    subprocess.run([sys.executable, "-m", "reflex", *settings.run_args()])


if __name__ == "__main__":
    main()
