"""
Data models for the Notas Fiscais dashboard.

This package provides:
- Invoice domain models and webhook payload parsing
- Team member models and form validation
- Query/page state shared by every list view

All domain models are plain dataclasses; `reflex_models` holds the
rx.Base mirrors rendered by the pages.
"""

from notas_ui.models.common import Feedback, PageResult, QueryState, SortDirection
from notas_ui.models.invoice import (
    ConfigDocument,
    InvoiceRecord,
    InvoiceStatus,
    ProjectAccount,
    ReprocessRequest,
    StatusCounters,
    StatusDisplay,
    parse_config_documents,
    parse_counters,
    parse_invoice,
    parse_invoices,
    status_display,
)
from notas_ui.models.member import (
    MemberRecord,
    MemberRole,
    MemberStatus,
    parse_member,
    parse_members,
    validate_member_update,
    validate_new_member,
    validate_new_password,
)

__all__ = [
    "ConfigDocument",
    "Feedback",
    "InvoiceRecord",
    "InvoiceStatus",
    "MemberRecord",
    "MemberRole",
    "MemberStatus",
    "PageResult",
    "ProjectAccount",
    "QueryState",
    "ReprocessRequest",
    "SortDirection",
    "StatusCounters",
    "StatusDisplay",
    "parse_config_documents",
    "parse_counters",
    "parse_invoice",
    "parse_invoices",
    "parse_member",
    "parse_members",
    "status_display",
    "validate_member_update",
    "validate_new_member",
    "validate_new_password",
]
