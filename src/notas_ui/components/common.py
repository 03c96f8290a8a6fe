"""
Small building blocks shared by the list pages.

All components are pure functions of the Vars and event handlers they are
given, so the pending, history and members views can reuse them with their
own state classes.
"""

import reflex as rx


def status_badge(label, tone) -> rx.Component:
    return rx.badge(label, color_scheme=tone, variant="soft", radius="full")


def search_bar(value, on_change, placeholder: str) -> rx.Component:
    """Search input; debouncing happens server side in the list controller."""
    return rx.box(
        rx.icon("search", class_name="input-icon"),
        rx.input(
            placeholder=placeholder,
            value=value,
            on_change=on_change,
            class_name="search-input",
        ),
        class_name="input-with-icon",
    )


def sortable_header(label: str, field: str, sort_field, sort_direction, on_sort) -> rx.Component:
    return rx.table.column_header_cell(
        rx.hstack(
            rx.text(label),
            rx.cond(
                sort_field == field,
                rx.cond(
                    sort_direction == "asc",
                    rx.icon("arrow-up", size=14),
                    rx.icon("arrow-down", size=14),
                ),
                rx.icon("arrow-up-down", size=14, class_name="muted"),
            ),
            align="center",
            spacing="1",
        ),
        on_click=on_sort(field),
        class_name="sortable-header",
    )


def pagination(
    pages,
    has_previous,
    has_next,
    on_page,
    on_previous,
    on_next,
    summary=None,
) -> rx.Component:
    """
    Page buttons with previous/next arrows.

    Args:
        pages: Var of `PageButton` items; number 0 renders an ellipsis.
        has_previous: Var enabling the previous arrow.
        has_next: Var enabling the next arrow.
        on_page: Event handler taking a page number.
        on_previous: Event handler for the previous arrow.
        on_next: Event handler for the next arrow.
        summary: Optional Var with a "showing x-y of n" text.
    """
    return rx.hstack(
        rx.text(summary, class_name="muted") if summary is not None else rx.box(),
        rx.hstack(
            rx.icon_button(
                rx.icon("chevron-left"),
                on_click=on_previous,
                disabled=~has_previous,
                variant="soft",
            ),
            rx.foreach(
                pages,
                lambda button: rx.cond(
                    button.number == 0,
                    rx.text(button.label, class_name="muted"),
                    rx.button(
                        button.label,
                        on_click=on_page(button.number),
                        variant=rx.cond(button.is_current, "solid", "soft"),
                    ),
                ),
            ),
            rx.icon_button(
                rx.icon("chevron-right"),
                on_click=on_next,
                disabled=~has_next,
                variant="soft",
            ),
            spacing="2",
            align="center",
        ),
        justify="between",
        align="center",
        width="100%",
        class_name="pagination",
    )


def loading_state(message: str) -> rx.Component:
    return rx.box(
        rx.spinner(size="3"),
        rx.text(message, class_name="muted"),
        class_name="card loading-state",
    )


def empty_state(message, icon: str = "file-x") -> rx.Component:
    return rx.box(
        rx.icon(icon, class_name="empty-icon", size=48),
        rx.text(message, class_name="muted"),
        class_name="card empty-state",
    )


def error_state(message, on_retry) -> rx.Component:
    return rx.callout(
        rx.hstack(
            rx.text(message),
            rx.button("Tentar novamente", on_click=on_retry, variant="soft", size="1"),
            justify="between",
            align="center",
            width="100%",
        ),
        icon="triangle-alert",
        color_scheme="red",
        width="100%",
    )
