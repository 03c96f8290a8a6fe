"""
Abstract base class defining the invoice data access contract.

Sources return whole collections; filtering, sorting and pagination are
done client-side by the list processor. Implementations raise
`InvoiceSourceError` on transport or backend failure and return empty
collections for payloads they cannot interpret.

Implementations:
- DemoInvoiceService: Static in-memory notas for development/testing
- WebhookInvoiceService: httpx client for the ingestion webhooks
"""

from abc import ABC, abstractmethod

from notas_ui.models.invoice import (
    ConfigDocument,
    InvoiceRecord,
    ReprocessRequest,
    StatusCounters,
)


class InvoiceService(ABC):
    """
    Abstract base class for invoice data access.

    Every call accepts the signed-in user's access token, forwarded as a
    bearer token by sources that need it.
    """

    @abstractmethod
    async def fetch_pending(self, token: str | None = None) -> list[InvoiceRecord]:
        """Return every invoice still awaiting processing."""

    @abstractmethod
    async def fetch_history(self, token: str | None = None) -> list[InvoiceRecord]:
        """Return the full invoice history."""

    @abstractmethod
    async def fetch_counters(self, token: str | None = None) -> StatusCounters:
        """Return per-status counts for the pending dashboard."""

    @abstractmethod
    async def download_pdf(
        self, invoice: InvoiceRecord, token: str | None = None
    ) -> bytes:
        """Return the stored PDF of an invoice."""

    @abstractmethod
    async def download_xml(
        self, invoice: InvoiceRecord, token: str | None = None
    ) -> bytes:
        """Return the NF-e XML of an invoice."""

    @abstractmethod
    async def request_reprocess(
        self,
        invoice: InvoiceRecord,
        request: ReprocessRequest,
        token: str | None = None,
    ) -> None:
        """
        Ask the backend to reprocess an invoice.

        The record itself is not changed locally; callers refresh the list
        once the request settles.
        """

    @abstractmethod
    async def list_config_documents(
        self, numero: int | str, token: str | None = None
    ) -> list[ConfigDocument]:
        """Return the document configurations applicable to an invoice."""

    @staticmethod
    def pdf_filename(invoice: InvoiceRecord) -> str:
        return f"nota_{invoice.numero or invoice.id}.pdf"

    @staticmethod
    def xml_filename(invoice: InvoiceRecord) -> str:
        return f"nota_{invoice.numero or invoice.id}.xml"
