"""
Reflex UI components for the Notas Fiscais dashboard.

- common: badges, search bar, sortable headers, pagination, empty/error states
- layout: navigation bar and the signed-in page shell
- invoice_table: counters, filters and table for the pending and history views
- reprocess_dialog: reprocess form with document configurations
- members: profile card, members table and member dialogs
- auth_forms: sign-in and password pages
"""

from notas_ui.components.auth_forms import login_form, new_password_form, send_reset_form
from notas_ui.components.invoice_table import counters_bar, invoice_panel
from notas_ui.components.layout import app_shell
from notas_ui.components.members import members_section, profile_card
from notas_ui.components.reprocess_dialog import reprocess_dialog

__all__ = [
    "app_shell",
    "counters_bar",
    "invoice_panel",
    "login_form",
    "members_section",
    "new_password_form",
    "profile_card",
    "reprocess_dialog",
    "send_reset_form",
]
