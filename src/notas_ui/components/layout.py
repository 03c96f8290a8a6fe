"""
Page shell for signed-in pages: navigation bar and content container.
"""

import reflex as rx

from notas_ui.state import APP_TITLE, AuthState

NAV_ITEMS = [
    ("/notas", "Notas pendentes", "file-clock"),
    ("/historico", "Histórico", "history"),
    ("/configuracoes", "Configurações", "settings"),
]


def _nav_link(href: str, label: str, icon: str, active: str) -> rx.Component:
    return rx.link(
        rx.hstack(rx.icon(icon, size=16), rx.text(label), align="center", spacing="2"),
        href=href,
        class_name="nav-link active" if href == active else "nav-link",
        underline="none",
    )


def _user_menu() -> rx.Component:
    return rx.menu.root(
        rx.menu.trigger(
            rx.button(
                rx.avatar(fallback=AuthState.user_initial, size="2", radius="full"),
                rx.text(AuthState.user_name),
                variant="ghost",
            ),
        ),
        rx.menu.content(
            rx.menu.item(AuthState.user_email, disabled=True),
            rx.menu.item(AuthState.role_label, disabled=True),
            rx.menu.separator(),
            rx.menu.item("Sair", on_click=AuthState.sign_out, color="red"),
        ),
    )


def navbar(active: str) -> rx.Component:
    return rx.hstack(
        rx.hstack(
            rx.icon("receipt-text", size=24),
            rx.heading(APP_TITLE, size="5", as_="h1"),
            align="center",
            spacing="2",
        ),
        rx.hstack(
            *[_nav_link(href, label, icon, active) for href, label, icon in NAV_ITEMS],
            spacing="4",
            align="center",
        ),
        _user_menu(),
        justify="between",
        align="center",
        width="100%",
        class_name="navbar",
    )


def app_shell(active: str, title: str, subtitle: str, *children: rx.Component) -> rx.Component:
    """Wrap a protected page; nothing renders until the session is resolved."""
    return rx.box(
        rx.cond(
            AuthState.is_authenticated,
            rx.box(
                navbar(active),
                rx.box(
                    rx.box(
                        rx.heading(title, size="6", as_="h2"),
                        rx.text(subtitle, class_name="muted"),
                        class_name="page-header",
                    ),
                    *children,
                    class_name="app-container",
                ),
            ),
            rx.center(rx.spinner(size="3"), height="100vh"),
        ),
        class_name="app-shell",
    )
