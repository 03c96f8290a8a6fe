"""
Webhook-backed implementation of InvoiceService.

This module provides the production invoice source that:
- Fetches pending and historical notas from the ingestion webhooks
- Reads per-status counters from `{invoices_url}/counters`
- Downloads PDFs from public storage and XML from the webhook
- Forwards reprocessing requests to `{reprocess_url}/{numero}/retry`
- Caches document-configuration lookups to disk for five minutes

Webhooks are called without paging or filtering parameters; the full
collection is returned and processed client-side. Payloads that are not a
list of notas (or an object wrapping one) are treated as empty.
"""

from typing import Any

import httpx

from notas_ui.config import Settings
from notas_ui.lib import caches, logs, objects, paths
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


class WebhookInvoiceService(InvoiceService):
    """
    Invoice source talking to the n8n webhooks over httpx.

    Attributes:
        settings: Endpoint URLs and timeouts.
    """

    # Disk cache for document-configuration lookups
    _DISK_CACHE: caches.DiskCache | None = None

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        cache: caches.DiskCache | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            settings: Application settings.
            transport: Optional httpx transport (tests use MockTransport).
            cache: Cache for configuration lookups; a shared cache in the
                temp dir when omitted.
        """
        self.settings = settings
        self._transport = transport
        self._cache = cache or self._shared_cache()

    @classmethod
    def _shared_cache(cls) -> caches.DiskCache:
        if cls._DISK_CACHE is None:
            cls._DISK_CACHE = caches.DiskCache(paths.cache_dir("notas_ui_config_docs"))
        return cls._DISK_CACHE

    async def fetch_pending(self, token: str | None = None) -> list[InvoiceRecord]:
        payload = await self._get_json(self.settings.invoices_url, token)
        invoices = parse_invoices(payload)
        LOG.info("fetch_pending - count:%s", len(invoices))
        return invoices

    async def fetch_history(self, token: str | None = None) -> list[InvoiceRecord]:
        payload = await self._get_json(self.settings.history_url, token)
        invoices = parse_invoices(payload)
        LOG.info("fetch_history - count:%s", len(invoices))
        return invoices

    async def fetch_counters(self, token: str | None = None) -> StatusCounters:
        payload = await self._get_json(f"{self.settings.invoices_url}/counters", token)
        return parse_counters(payload)

    async def download_pdf(
        self, invoice: InvoiceRecord, token: str | None = None
    ) -> bytes:
        if not invoice.has_pdf:
            raise InvoiceSourceError("PDF não disponível para esta nota fiscal.")
        url = f"{self.settings.pdf_base_url}/{invoice.qive_id}.pdf"
        response = await self._request(
            "GET",
            url,
            None,
            headers={"Content-Type": "application/pdf"},
            error_message="Erro ao baixar o PDF da nota fiscal",
        )
        return response.content

    async def download_xml(
        self, invoice: InvoiceRecord, token: str | None = None
    ) -> bytes:
        url = f"{self.settings.invoices_url}/{invoice.id}/xml"
        response = await self._request(
            "GET",
            url,
            token,
            error_message="Não foi possível exportar o XML. Tente novamente mais tarde.",
        )
        return response.content

    async def request_reprocess(
        self,
        invoice: InvoiceRecord,
        request: ReprocessRequest,
        token: str | None = None,
    ) -> None:
        url = f"{self.settings.reprocess_url}/{invoice.numero}/retry"
        LOG.info(
            "request_reprocess - numero:%s body:%s",
            invoice.numero,
            objects.to_json(request.to_payload()),
        )
        await self._request(
            "POST",
            url,
            None,
            json=request.to_payload(),
            error_message=f"Erro ao reprocessar a nota fiscal {invoice.numero}.",
        )

    async def list_config_documents(
        self, numero: int | str, token: str | None = None
    ) -> list[ConfigDocument]:
        url = self.settings.config_doc_url
        key = objects.cache_key("config_docs", url, str(numero))

        async def _load() -> Any:
            return await self._get_json(
                url,
                token,
                params={"numero": numero},
                error_message="Erro ao carregar configurações de documento.",
            )

        entry = await self._cache.get_or_load(
            key, _load, expire=self.settings.config_doc_ttl
        )
        documents = parse_config_documents(entry.value)
        LOG.info(
            "list_config_documents - numero:%s count:%s cache_hit:%s",
            numero,
            len(documents),
            entry.hit,
        )
        return documents

    async def _get_json(
        self,
        url: str,
        token: str | None,
        params: dict[str, Any] | None = None,
        error_message: str | None = None,
    ) -> Any:
        response = await self._request(
            "GET", url, token, params=params, error_message=error_message
        )
        try:
            return response.json()
        except ValueError:
            LOG.warning("Discarding non-JSON payload from %s", url)
            return None

    async def _request(
        self,
        method: str,
        url: str,
        token: str | None,
        error_message: str | None = None,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        request_headers = {"Content-Type": "application/json"}
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        request_headers.update(headers or {})
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.http_timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method, url, headers=request_headers, **kwargs
                )
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as exc:
            LOG.error(
                "%s %s failed - status:%s", method, url, exc.response.status_code
            )
            raise InvoiceSourceError(
                error_message, status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            LOG.error("%s %s failed - %s", method, url, exc)
            raise InvoiceSourceError(error_message) from exc
