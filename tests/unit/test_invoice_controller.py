"""
Tests for InvoiceListController: loading, supersession, debounced search,
filters and invoice actions.
"""

import asyncio

import pytest

from notas_ui.controllers import Download, InvoiceListController, InvoiceView
from notas_ui.models.common import Feedback
from notas_ui.models.invoice import InvoiceStatus, ReprocessRequest
from notas_ui.services.errors import InvoiceSourceError
from notas_ui.services.invoice_service_demo import DemoInvoiceService


class ScriptedInvoiceService(DemoInvoiceService):
    """Demo service whose fetches return whatever the test hands them."""

    def __init__(self, records=None):
        super().__init__()
        self.records = records or []
        self.gates: list[asyncio.Future] = []
        self.gated = False
        self.fail_with: Exception | None = None
        self.fetch_count = 0
        self.counters_fail = False
        self.config_fail = False
        self.reprocess_fail = False

    async def fetch_pending(self, token=None):
        self.fetch_count += 1
        if self.gated:
            gate = asyncio.get_running_loop().create_future()
            self.gates.append(gate)
            return await gate
        if self.fail_with:
            raise self.fail_with
        return list(self.records)

    async def fetch_counters(self, token=None):
        if self.counters_fail:
            raise InvoiceSourceError()
        return await super().fetch_counters(token)

    async def list_config_documents(self, numero, token=None):
        if self.config_fail:
            raise InvoiceSourceError("indisponível")
        return await super().list_config_documents(numero, token)

    async def request_reprocess(self, invoice, request, token=None):
        if self.reprocess_fail:
            raise InvoiceSourceError("Erro ao reprocessar a nota fiscal.")
        await super().request_reprocess(invoice, request, token)


@pytest.fixture
def service(fifteen_invoices):
    return ScriptedInvoiceService(fifteen_invoices)


@pytest.fixture
def controller(service):
    return InvoiceListController(service, page_size=7, debounce_delay=0.01)


# ============================================================================
# TESTS: loading and supersession
# ============================================================================

class TestLoading:
    @pytest.mark.asyncio
    async def test_load_runs_pipeline(self, controller):
        assert await controller.load() is True
        assert controller.loaded and not controller.loading
        assert controller.page.total_items == 15
        assert controller.page.total_pages == 3
        assert len(controller.records) == 15

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self, controller, service, invoice_factory):
        service.gated = True
        first = asyncio.ensure_future(controller.load())
        second = asyncio.ensure_future(controller.load())
        await asyncio.sleep(0)
        assert len(service.gates) == 2

        service.gates[1].set_result([invoice_factory(99)])
        assert await second is True
        service.gates[0].set_result([invoice_factory(1), invoice_factory(2)])
        assert await first is False

        assert [r.id for r in controller.records] == ["99"]
        assert not controller.loading

    @pytest.mark.asyncio
    async def test_failure_sets_error_and_keeps_records(self, controller, service):
        await controller.load()
        service.fail_with = InvoiceSourceError()
        assert await controller.load() is False
        assert controller.error == "Erro ao carregar notas fiscais. Tente novamente."
        assert len(controller.records) == 15
        assert not controller.is_empty

    @pytest.mark.asyncio
    async def test_stale_failure_is_ignored(self, controller, service, invoice_factory):
        service.gated = True
        first = asyncio.ensure_future(controller.load())
        second = asyncio.ensure_future(controller.load())
        await asyncio.sleep(0)
        service.gates[0].set_exception(InvoiceSourceError())
        assert await first is False
        assert controller.error is None
        service.gates[1].set_result([invoice_factory(1)])
        assert await second is True

    @pytest.mark.asyncio
    async def test_cancel_pending_drops_inflight_fetch(self, controller, service, invoice_factory):
        service.gated = True
        task = asyncio.ensure_future(controller.load())
        await asyncio.sleep(0)
        controller.cancel_pending()
        service.gates[0].set_result([invoice_factory(1)])
        assert await task is False
        assert controller.records == []

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        controller = InvoiceListController(ScriptedInvoiceService([]))
        await controller.load()
        assert controller.is_empty
        assert controller.empty_message == "Nenhuma nota fiscal pendente"


# ============================================================================
# TESTS: search and filters
# ============================================================================

class TestSearchAndFilters:
    @pytest.mark.asyncio
    async def test_debounced_search_applies_last_term(self, controller):
        await controller.load()
        results = await asyncio.gather(
            controller.search("Fornecedor 1"), controller.search("Fornecedor 15")
        )
        assert results[0] is None
        assert results[1].total_items == 1
        assert controller.query.search_term == "Fornecedor 15"

    @pytest.mark.asyncio
    async def test_empty_search_applies_immediately(self, controller):
        await controller.load()
        controller.apply_search("Fornecedor 15")
        page = await controller.search("   ")
        assert page.total_items == 15

    @pytest.mark.asyncio
    async def test_clear_cancels_pending_search(self, controller):
        await controller.load()
        pending = asyncio.ensure_future(controller.search("Fornecedor 3"))
        await asyncio.sleep(0)
        controller.clear_filters()
        assert await pending is None
        assert controller.query.search_term == ""

    @pytest.mark.asyncio
    async def test_filter_changes_reset_page(self, controller):
        await controller.load()
        controller.go_to_page(3)
        assert controller.page.effective_page == 3
        controller.set_status(InvoiceStatus.PENDING)
        assert controller.page.effective_page == 1

        controller.go_to_page(2)
        controller.apply_search("Fornecedor")
        assert controller.page.effective_page == 1

        controller.go_to_page(2)
        controller.set_date_range("2025-02-01", None)
        assert controller.page.effective_page == 1

    @pytest.mark.asyncio
    async def test_page_request_past_end_is_clamped_in_query(self, controller):
        await controller.load()
        controller.go_to_page(9)
        assert controller.page.effective_page == 3
        assert controller.query.page == 3
        controller.previous_page()
        assert controller.page.effective_page == 2
        controller.next_page()
        controller.next_page()
        assert controller.page.effective_page == 3

    @pytest.mark.asyncio
    async def test_status_toggle(self, controller, service, invoice_factory):
        service.records = [
            invoice_factory(1),
            invoice_factory(2, status=InvoiceStatus.PROCESSING),
        ]
        await controller.load()
        controller.set_status(InvoiceStatus.PROCESSING)
        assert [r.id for r in controller.page.items] == ["2"]
        controller.set_status(InvoiceStatus.PROCESSING)
        assert controller.query.status is None
        assert controller.page.total_items == 2

    @pytest.mark.asyncio
    async def test_empty_messages(self, controller):
        await controller.load()
        controller.apply_search("inexistente")
        assert controller.empty_message == 'Nenhuma nota encontrada para "inexistente"'
        controller.clear_filters()
        controller.set_date_range("2030-01-01", None)
        assert controller.empty_message == "Nenhuma nota encontrada com os filtros selecionados"

    @pytest.mark.asyncio
    async def test_sort_toggles_direction(self, controller):
        await controller.load()
        controller.sort_by("numero")
        assert controller.page.items[0].numero == 1001
        controller.sort_by("numero")
        assert controller.page.items[0].numero == 1015


# ============================================================================
# TESTS: downloads, counters and reprocessing
# ============================================================================

class TestActions:
    @pytest.mark.asyncio
    async def test_download_pdf(self, controller):
        await controller.load()
        result = await controller.download_pdf("3")
        assert isinstance(result, Download)
        assert result.filename == "nota_1003.pdf"
        assert result.data.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_pdf_unavailable_for_identified(self, controller, service, invoice_factory):
        service.records = [invoice_factory(1, status=InvoiceStatus.IDENTIFIED)]
        await controller.load()
        result = await controller.download_pdf("1")
        assert result == Feedback.error("PDF não disponível para esta nota fiscal.")

    @pytest.mark.asyncio
    async def test_download_xml_for_history(self, service):
        controller = InvoiceListController(service, view=InvoiceView.HISTORY, page_size=9)
        result = await controller.download_xml("404")
        assert isinstance(result, Feedback) and not result.ok

    @pytest.mark.asyncio
    async def test_counters_failure_is_silent(self, controller, service):
        counters = await controller.load_counters()
        assert counters.total > 0
        service.counters_fail = True
        counters = await controller.load_counters()
        assert counters.counts == {}
        assert controller.error is None

    @pytest.mark.asyncio
    async def test_config_documents_failure_gives_empty_list(self, controller, service):
        await controller.load()
        assert len(await controller.config_documents("1")) == 2
        service.config_fail = True
        assert await controller.config_documents("1") == []

    @pytest.mark.asyncio
    async def test_reprocess_requires_reason(self, controller, service):
        await controller.load()
        feedback = await controller.reprocess("1", ReprocessRequest(reason="  "))
        assert feedback.message == "Informe o motivo do reprocessamento."
        assert service.reprocess_requests == []

    @pytest.mark.asyncio
    async def test_reprocess_success_reloads(self, controller, service):
        await controller.load()
        fetches = service.fetch_count
        feedback = await controller.reprocess("1", ReprocessRequest(reason="Dados corrigidos"))
        assert feedback == Feedback.success("Nota fiscal 1001 enviada para reprocessamento.")
        assert service.reprocess_requests[0][1].reason == "Dados corrigidos"
        assert service.fetch_count == fetches + 1
        assert controller.reprocessing == set()

    @pytest.mark.asyncio
    async def test_reprocess_failure_clears_marker(self, controller, service):
        await controller.load()
        service.reprocess_fail = True
        feedback = await controller.reprocess("1", ReprocessRequest(reason="x"))
        assert not feedback.ok
        assert controller.reprocessing == set()
