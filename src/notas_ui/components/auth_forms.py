"""
Sign-in and password pages.
"""

import reflex as rx

from notas_ui.state import APP_TITLE, AuthState, PasswordState


def _auth_card(title: str, subtitle: str, *children: rx.Component) -> rx.Component:
    return rx.center(
        rx.box(
            rx.vstack(
                rx.hstack(
                    rx.icon("receipt-text", size=28),
                    rx.heading(APP_TITLE, size="6", as_="h1"),
                    align="center",
                    spacing="2",
                ),
                rx.heading(title, size="4", as_="h2"),
                rx.text(subtitle, class_name="muted"),
                *children,
                spacing="3",
                width="100%",
            ),
            class_name="card auth-card",
        ),
        class_name="app-shell",
        min_height="100vh",
    )


def _message(text, color: str) -> rx.Component:
    return rx.cond(
        text != "",
        rx.callout(text, color_scheme=color, width="100%"),
    )


def login_form() -> rx.Component:
    return _auth_card(
        "Entrar",
        "Acesse com seu email e senha.",
        rx.form(
            rx.vstack(
                rx.input(
                    placeholder="Email",
                    type="email",
                    value=AuthState.login_email,
                    on_change=AuthState.set_login_email,
                    width="100%",
                ),
                rx.input(
                    placeholder="Senha",
                    type="password",
                    value=AuthState.login_password,
                    on_change=AuthState.set_login_password,
                    width="100%",
                ),
                _message(AuthState.login_error, "red"),
                rx.button(
                    "Entrar",
                    type="submit",
                    loading=AuthState.login_loading,
                    width="100%",
                ),
                spacing="3",
                width="100%",
            ),
            on_submit=AuthState.sign_in,
            width="100%",
        ),
        rx.link("Esqueceu sua senha?", href="/send-reset-password", size="2"),
    )


def send_reset_form() -> rx.Component:
    return _auth_card(
        "Redefinir senha",
        "Informe seu email para receber o link de redefinição.",
        rx.form(
            rx.vstack(
                rx.input(
                    placeholder="Email",
                    type="email",
                    value=PasswordState.reset_email,
                    on_change=PasswordState.set_reset_email,
                    width="100%",
                ),
                _message(PasswordState.error, "red"),
                _message(PasswordState.message, "green"),
                rx.button(
                    "Enviar link",
                    type="submit",
                    loading=PasswordState.submitting,
                    disabled=PasswordState.done,
                    width="100%",
                ),
                spacing="3",
                width="100%",
            ),
            on_submit=PasswordState.send_reset_email,
            width="100%",
        ),
        rx.link("Voltar para o login", href="/", size="2"),
    )


def new_password_form(title: str, subtitle: str, on_submit) -> rx.Component:
    """Form shared by the reset-password and set-password pages."""
    return _auth_card(
        title,
        subtitle,
        rx.cond(
            PasswordState.link_error != "",
            rx.vstack(
                _message(PasswordState.link_error, "red"),
                rx.link("Solicitar novo link", href="/send-reset-password", size="2"),
                width="100%",
            ),
            rx.form(
                rx.vstack(
                    rx.input(
                        placeholder="Nova senha",
                        type="password",
                        value=PasswordState.new_password,
                        on_change=PasswordState.set_new_password,
                        width="100%",
                    ),
                    rx.input(
                        placeholder="Confirmar senha",
                        type="password",
                        value=PasswordState.confirm_password,
                        on_change=PasswordState.set_confirm_password,
                        width="100%",
                    ),
                    _message(PasswordState.error, "red"),
                    _message(PasswordState.message, "green"),
                    rx.button(
                        "Salvar senha",
                        type="submit",
                        loading=PasswordState.submitting,
                        disabled=PasswordState.done,
                        width="100%",
                    ),
                    spacing="3",
                    width="100%",
                ),
                on_submit=on_submit,
                width="100%",
            ),
        ),
    )
