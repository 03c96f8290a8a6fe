"""
Service factory for the Notas Fiscais dashboard.

This module builds the invoice source, the member directory and the auth
service for a given `Settings`. Which implementations are used is decided
once, from `settings.use_demo_data`:

- demo: In-memory notas and accounts (no webhooks or auth service needed)
- live: n8n webhooks and the hosted GoTrue auth service

`get_services()` caches the set built from the environment, so every
Reflex session shares the same instances.
"""

from dataclasses import dataclass
from functools import cache
from typing import Callable, Dict

from notas_ui.config import Settings
from notas_ui.lib import logs
from notas_ui.services.auth_service import AuthService, AuthSession
from notas_ui.services.auth_service_demo import DemoAuthService
from notas_ui.services.auth_service_impl import GoTrueAuthService
from notas_ui.services.errors import (
    AuthError,
    InvoiceSourceError,
    MemberServiceError,
    ServiceError,
)
from notas_ui.services.invoice_service import InvoiceService
from notas_ui.services.invoice_service_demo import DemoInvoiceService
from notas_ui.services.invoice_service_impl import WebhookInvoiceService
from notas_ui.services.member_service import MemberService, ResendAction
from notas_ui.services.member_service_demo import DemoMemberService
from notas_ui.services.member_service_impl import AuthDirectoryMemberService

LOG = logs.logger(__file__)


@dataclass(frozen=True)
class Services:
    """The collaborators a session needs."""

    settings: Settings
    invoices: InvoiceService
    members: MemberService
    auth: AuthService


def _build_demo(settings: Settings) -> Services:
    members = DemoMemberService()
    return Services(
        settings=settings,
        invoices=DemoInvoiceService(),
        members=members,
        auth=DemoAuthService(members),
    )


def _build_live(settings: Settings) -> Services:
    return Services(
        settings=settings,
        invoices=WebhookInvoiceService(settings),
        members=AuthDirectoryMemberService(settings),
        auth=GoTrueAuthService(settings),
    )


_SERVICE_REGISTRY: Dict[str, Callable[[Settings], Services]] = {
    "demo": _build_demo,
    "live": _build_live,
}


def build_services(settings: Settings) -> Services:
    """Return the service set selected by the settings."""
    kind = "demo" if settings.use_demo_data else "live"
    LOG.info("build_services - kind:%s", kind)
    return _SERVICE_REGISTRY[kind](settings)


@cache
def get_services() -> Services:
    """Return the process-wide services built from the environment."""
    return build_services(Settings.from_env())


__all__ = [
    "AuthError",
    "AuthService",
    "AuthSession",
    "InvoiceService",
    "InvoiceSourceError",
    "MemberService",
    "MemberServiceError",
    "ResendAction",
    "ServiceError",
    "Services",
    "build_services",
    "get_services",
]
