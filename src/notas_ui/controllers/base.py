"""
Shared list-view controller.

A `ListController` owns one view's `QueryState`, its full fetched
collection and the last `PageResult`. Reflex states call its methods and
copy the results into their vars; the controller itself has no Reflex
dependency so it can be exercised directly in tests.

Fetches are guarded by a `LatestRequest`: when a newer load starts before
an older one finishes, the older response is dropped on arrival.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from notas_ui.lib import logs
from notas_ui.lib.debounce import Debouncer
from notas_ui.lib.supersede import LatestRequest
from notas_ui.models.common import PageResult, QueryState
from notas_ui.services.errors import ServiceError
from notas_ui.utils.list_processor import ListConfig, run_pipeline

LOG = logs.logger(__file__)

T = TypeVar("T")


class ListController(ABC, Generic[T]):
    """
    Query state, fetch supersession and debounced search for one list view.

    Attributes:
        config: Field accessors used by the list pipeline.
        query: Current query; its page is always the effective page.
        page: Result of the last pipeline run.
        loading: True while the latest fetch is in flight.
        error: User-facing message of the last failed fetch.
        loaded: True once a fetch has succeeded.
    """

    def __init__(
        self, config: ListConfig, page_size: int, debounce_delay: float = 0.3
    ) -> None:
        self.config = config
        self.query = QueryState(page_size=page_size)
        self.page = PageResult(page_size=page_size)
        self.loading = False
        self.error: str | None = None
        self.loaded = False
        self._records: list[T] = []
        self._requests = LatestRequest()
        self._debouncer = Debouncer(debounce_delay)

    @abstractmethod
    async def _fetch(self, token: str | None) -> list[T]:
        """Fetch the full collection from the backing service."""

    @property
    def records(self) -> list[T]:
        """A copy of the full, unfiltered collection."""
        return list(self._records)

    @property
    def is_empty(self) -> bool:
        return self.loaded and self.error is None and self.page.is_empty

    async def load(self, token: str | None = None) -> bool:
        """
        Fetch the collection and re-run the pipeline.

        Returns True when this fetch's result was applied. A failure sets
        `error` and keeps the previous records; a superseded fetch changes
        nothing.
        """
        request = self._requests.begin()
        self.loading = True
        self.error = None
        try:
            records = await self._fetch(token)
        except ServiceError as exc:
            if not self._requests.is_current(request):
                return False
            LOG.error("%s load failed: %s", type(self).__name__, exc.message, exc_info=True)
            self.error = exc.message
            self.loading = False
            return False
        if not self._requests.is_current(request):
            LOG.info("%s discarded a stale response", type(self).__name__)
            return False
        self._records = list(records)
        self.loaded = True
        self.loading = False
        self.refresh()
        return True

    def cancel_pending(self) -> None:
        """Drop any in-flight fetch and pending search (e.g. on page leave)."""
        self._requests.invalidate()
        self._debouncer.cancel()
        self.loading = False

    def refresh(self) -> PageResult:
        """Re-run the pipeline and store the clamped page in the query."""
        self.page = run_pipeline(self._records, self.query, self.config)
        if self.page.effective_page != self.query.page:
            self.query = self.query.with_page(self.page.effective_page)
        return self.page

    async def search(self, term: str) -> PageResult | None:
        """
        Apply a search term after the debounce window.

        An empty term applies at once and cancels any pending search.
        Returns the new page, or None when a newer call superseded this one.
        """
        if not (term or "").strip():
            self._debouncer.cancel()
            return self.apply_search("")
        return await self._debouncer.run(lambda: self.apply_search(term))

    def apply_search(self, term: str) -> PageResult:
        self.query = self.query.with_search(term)
        return self.refresh()

    def sort_by(self, field: str) -> PageResult:
        self.query = self.query.with_sort(field)
        return self.refresh()

    def go_to_page(self, page: int) -> PageResult:
        self.query = self.query.with_page(page)
        return self.refresh()

    def next_page(self) -> PageResult:
        return self.go_to_page(self.page.effective_page + 1)

    def previous_page(self) -> PageResult:
        return self.go_to_page(self.page.effective_page - 1)

    def clear_filters(self) -> PageResult:
        self._debouncer.cancel()
        self.query = self.query.cleared()
        return self.refresh()
