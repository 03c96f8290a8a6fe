"""
Demo implementation of InvoiceService using static in-memory data.

This service is useful for:
- Local development without webhook access
- Testing UI flows with realistic notas
- Demonstrating the dashboard without cloud dependencies

The bundled payloads go through the same parsers as webhook responses.
"""

import asyncio
from typing import Any

from notas_ui.data.demo_invoices import (
    DEMO_CONFIG_DOCS_PAYLOAD,
    DEMO_COUNTERS_PAYLOAD,
    DEMO_HISTORY_PAYLOAD,
    DEMO_PENDING_PAYLOAD,
)
from notas_ui.lib import logs
from notas_ui.models.invoice import (
    ConfigDocument,
    InvoiceRecord,
    ReprocessRequest,
    StatusCounters,
    parse_config_documents,
    parse_counters,
    parse_invoices,
)
from notas_ui.services.errors import InvoiceSourceError
from notas_ui.services.invoice_service import InvoiceService

LOG = logs.logger(__file__)

_DEMO_PDF = (
    b"%PDF-1.4\n1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
    b"2 0 obj<</Type/Pages/Kids[]/Count 0>>endobj\ntrailer<</Root 1 0 R>>\n%%EOF\n"
)


class DemoInvoiceService(InvoiceService):
    """
    In-memory invoice source backed by static demo payloads.

    Attributes:
        latency: Simulated round-trip delay in seconds.
        reprocess_requests: Reprocessing requests received, newest last.
    """

    def __init__(
        self,
        pending: list[dict[str, Any]] | None = None,
        history: list[dict[str, Any]] | None = None,
        latency: float = 0.0,
    ) -> None:
        """
        Initialize with raw payloads.

        Args:
            pending: Custom pending payload, or None for the demo notas.
            history: Custom history payload, or None for the demo history.
            latency: Delay applied to every call.
        """
        self._pending = pending if pending is not None else DEMO_PENDING_PAYLOAD
        self._history = history if history is not None else DEMO_HISTORY_PAYLOAD
        self.latency = latency
        self.reprocess_requests: list[tuple[InvoiceRecord, ReprocessRequest]] = []

    async def fetch_pending(self, token: str | None = None) -> list[InvoiceRecord]:
        await self._sleep()
        return parse_invoices(self._pending)

    async def fetch_history(self, token: str | None = None) -> list[InvoiceRecord]:
        await self._sleep()
        return parse_invoices(self._history)

    async def fetch_counters(self, token: str | None = None) -> StatusCounters:
        await self._sleep()
        return parse_counters(DEMO_COUNTERS_PAYLOAD)

    async def download_pdf(
        self, invoice: InvoiceRecord, token: str | None = None
    ) -> bytes:
        if not invoice.has_pdf:
            raise InvoiceSourceError("PDF não disponível para esta nota fiscal.")
        return _DEMO_PDF

    async def download_xml(
        self, invoice: InvoiceRecord, token: str | None = None
    ) -> bytes:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<NFe><infNFe Id="{invoice.id}"><ide><nNF>{invoice.numero}</nNF></ide>'
            f"<total><vNF>{invoice.total or 0}</vNF></total></infNFe></NFe>\n"
        ).encode("utf-8")

    async def request_reprocess(
        self,
        invoice: InvoiceRecord,
        request: ReprocessRequest,
        token: str | None = None,
    ) -> None:
        await self._sleep()
        LOG.info("Demo reprocess - numero:%s motivo:%s", invoice.numero, request.reason)
        self.reprocess_requests.append((invoice, request))

    async def list_config_documents(
        self, numero: int | str, token: str | None = None
    ) -> list[ConfigDocument]:
        await self._sleep()
        return parse_config_documents(DEMO_CONFIG_DOCS_PAYLOAD)

    async def _sleep(self) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)
