"""Reflex configuration for the Notas Fiscais dashboard."""

import reflex as rx

config = rx.Config(
    app_name="notas_ui",
    # Use the src directory structure
    app_module_import="notas_ui.app",
)
