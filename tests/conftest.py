"""
Pytest configuration and shared fixtures.

HTTP-backed services are exercised through `httpx.MockTransport`; the
`recorder` fixture collects every request so tests can assert on method,
path, query and body.
"""

import json
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Add src/ to the path so tests run without an editable install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from notas_ui.config import Settings  # noqa: E402
from notas_ui.lib.caches import DiskCache  # noqa: E402
from notas_ui.models.invoice import InvoiceRecord, InvoiceStatus  # noqa: E402
from notas_ui.models.member import MemberRecord, MemberRole  # noqa: E402


# ============================================================================
# HTTP HELPERS
# ============================================================================

class Recorder:
    """Collects requests seen by a MockTransport and answers via a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content) if request.content else {}


@pytest.fixture
def recorder() -> Callable[[Callable[[httpx.Request], httpx.Response]], Recorder]:
    """Factory: `recorder(handler)` returns a Recorder wrapping the handler."""
    return Recorder


# ============================================================================
# SETTINGS AND CACHE
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    return Settings(
        use_demo_data=False,
        invoices_url="https://hooks.test/nfs-pendentes",
        history_url="https://hooks.test/nfs-pendentes/historico",
        reprocess_url="https://hooks.test/reprocess",
        config_doc_url="https://hooks.test/config-doc",
        pdf_base_url="https://storage.test/nf/files",
        auth_url="https://auth.test",
        auth_anon_key="anon-key",
        auth_service_key="service-key",
        app_origin="https://app.test",
        http_timeout=5.0,
    )


@pytest.fixture
def disk_cache(tmp_path) -> DiskCache:
    cache = DiskCache(tmp_path / "cache")
    yield cache
    cache.close()


# ============================================================================
# SAMPLE DATA
# ============================================================================

@pytest.fixture
def admin_user() -> MemberRecord:
    return MemberRecord(
        id="admin-1",
        email="admin@empresa.com.br",
        display_name="Admin",
        role=MemberRole.ADMIN,
        email_confirmed_at="2025-01-01T00:00:00Z",
    )


@pytest.fixture
def regular_user() -> MemberRecord:
    return MemberRecord(
        id="user-1",
        email="user@empresa.com.br",
        display_name="Usuário Comum",
        role=MemberRole.USER,
        email_confirmed_at="2025-01-02T00:00:00Z",
    )


def make_invoice(index: int, **overrides) -> InvoiceRecord:
    values = dict(
        id=str(index),
        numero=1000 + index,
        emission_date=f"2025-02-{index:02d}",
        counterparty_cnpj=f"Fornecedor {index}",
        status=InvoiceStatus.PENDING,
        raw_status="pendente",
        created_at=f"2025-03-01T{index:02d}:00:00Z",
        qive_id=f"q-{index}",
    )
    values.update(overrides)
    return InvoiceRecord(**values)


@pytest.fixture
def invoice_factory() -> Callable[..., InvoiceRecord]:
    return make_invoice


@pytest.fixture
def fifteen_invoices() -> list[InvoiceRecord]:
    return [make_invoice(i) for i in range(1, 16)]
