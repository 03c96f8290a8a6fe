"""
Controllers for the pending-invoice and history views.

Both views share the same pipeline configuration and actions; they differ
in which collection they fetch, their page size, and whether status
counters are shown.
"""

from dataclasses import dataclass
from enum import Enum

from notas_ui.controllers.base import ListController
from notas_ui.lib import logs
from notas_ui.models.common import Feedback, PageResult
from notas_ui.models.invoice import (
    ConfigDocument,
    InvoiceRecord,
    InvoiceStatus,
    ReprocessRequest,
    StatusCounters,
)
from notas_ui.services.errors import ServiceError
from notas_ui.services.invoice_service import InvoiceService
from notas_ui.utils.list_processor import INVOICE_LIST_CONFIG

LOG = logs.logger(__file__)


class InvoiceView(str, Enum):
    PENDING = "pending"
    HISTORY = "history"


@dataclass(frozen=True)
class Download:
    """File contents ready to hand to the browser."""

    data: bytes
    filename: str


class InvoiceListController(ListController[InvoiceRecord]):
    """
    Pending or historical notas for one session.

    Attributes:
        view: Which collection this controller lists.
        counters: Per-status counts (pending view only).
        reprocessing: Ids of notas with a reprocess request in flight.
    """

    def __init__(
        self,
        service: InvoiceService,
        view: InvoiceView = InvoiceView.PENDING,
        page_size: int = 7,
        debounce_delay: float = 0.3,
    ) -> None:
        super().__init__(INVOICE_LIST_CONFIG, page_size, debounce_delay)
        self.service = service
        self.view = view
        self.counters = StatusCounters()
        self.reprocessing: set[str] = set()

    async def _fetch(self, token: str | None) -> list[InvoiceRecord]:
        if self.view is InvoiceView.HISTORY:
            return await self.service.fetch_history(token)
        return await self.service.fetch_pending(token)

    async def load_counters(self, token: str | None = None) -> StatusCounters:
        """Refresh counters; a failure leaves them empty without an error state."""
        try:
            self.counters = await self.service.fetch_counters(token)
        except ServiceError as exc:
            LOG.warning("Counters unavailable: %s", exc.message)
            self.counters = StatusCounters()
        return self.counters

    @property
    def empty_message(self) -> str:
        term = self.query.search_term.strip()
        if term:
            return f'Nenhuma nota encontrada para "{term}"'
        if self.query.has_filters:
            return "Nenhuma nota encontrada com os filtros selecionados"
        if self.view is InvoiceView.HISTORY:
            return "Nenhuma nota no histórico"
        return "Nenhuma nota fiscal pendente"

    def set_status(self, status: InvoiceStatus | None) -> PageResult:
        """Filter by status; selecting the active status again clears it."""
        if status is not None and status == self.query.status:
            status = None
        self.query = self.query.with_status(status)
        return self.refresh()

    def set_date_range(self, start_date: str | None, end_date: str | None) -> PageResult:
        self.query = self.query.with_date_range(start_date, end_date)
        return self.refresh()

    def find(self, invoice_id: str) -> InvoiceRecord | None:
        return next((r for r in self._records if r.id == invoice_id), None)

    async def download_pdf(
        self, invoice_id: str, token: str | None = None
    ) -> Download | Feedback:
        invoice = self.find(invoice_id)
        if invoice is None or not invoice.has_pdf:
            return Feedback.error("PDF não disponível para esta nota fiscal.")
        try:
            data = await self.service.download_pdf(invoice, token)
        except ServiceError as exc:
            return Feedback.error(exc.message)
        return Download(data=data, filename=self.service.pdf_filename(invoice))

    async def download_xml(
        self, invoice_id: str, token: str | None = None
    ) -> Download | Feedback:
        invoice = self.find(invoice_id)
        if invoice is None:
            return Feedback.error("Nota fiscal não encontrada.")
        try:
            data = await self.service.download_xml(invoice, token)
        except ServiceError as exc:
            return Feedback.error(exc.message)
        return Download(data=data, filename=self.service.xml_filename(invoice))

    async def config_documents(
        self, invoice_id: str, token: str | None = None
    ) -> list[ConfigDocument]:
        """Configurations for the reprocess dialog; failures show as none available."""
        invoice = self.find(invoice_id)
        if invoice is None or invoice.numero is None:
            return []
        try:
            return await self.service.list_config_documents(invoice.numero, token)
        except ServiceError as exc:
            LOG.error("Config documents unavailable: %s", exc.message)
            return []

    async def reprocess(
        self,
        invoice_id: str,
        request: ReprocessRequest,
        token: str | None = None,
    ) -> Feedback:
        """
        Forward a reprocess request and reload the list when it succeeds.

        The nota is flagged in `reprocessing` until the call settles.
        """
        invoice = self.find(invoice_id)
        if invoice is None:
            return Feedback.error("Nota fiscal não encontrada.")
        if not request.reason.strip():
            return Feedback.error("Informe o motivo do reprocessamento.")
        self.reprocessing.add(invoice.id)
        try:
            await self.service.request_reprocess(invoice, request, token)
        except ServiceError as exc:
            return Feedback.error(exc.message)
        finally:
            self.reprocessing.discard(invoice.id)
        await self.load(token)
        if self.view is InvoiceView.PENDING:
            await self.load_counters(token)
        return Feedback.success(
            f"Nota fiscal {invoice.numero} enviada para reprocessamento."
        )
