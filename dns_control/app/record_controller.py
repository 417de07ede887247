from __future__ import annotations

from collections.abc import Callable
from typing import Any

from dns_control.app.batch_mutation import BatchDeleteOutcome, BatchMutationCoordinator
from dns_control.app.config import AppConfig
from dns_control.app.error_presenter import build_error_payload
from dns_control.app.infrastructure.logging.logger import get_logger, log_action
from dns_control.app.listing_view import ListingViewState, sort_records, toggle_sort
from dns_control.app.recent_domains import RecentDomains
from dns_control.app.record_cache import RecordCacheStore
from dns_control.app.scheduler import AsyncioScheduler, Scheduler
from dns_control.app.search_debounce import SearchDebounceGate
from dns_control.app.selection import SelectionController
from dns_control.app.signal import Signal
from dns_control.app.state import RecordCacheKey, RecordListSnapshot
from dns_control.clients.dns_client_sdk.exceptions import ApiError
from dns_control.clients.dns_client_sdk.records_client import RecordsClient

logger = get_logger(__name__)


class RecordListController:
    """Intents and read projections for the DNS record list of one domain.

    Views call the intent methods and render ``RecordListSnapshot`` objects
    delivered through ``subscribe``; they never touch the caches directly.
    Failures are surfaced as ``last_error`` on the snapshot, never retried.
    """

    def __init__(
        self,
        client: RecordsClient,
        *,
        config: AppConfig | None = None,
        scheduler: Scheduler | None = None,
        store: RecordCacheStore | None = None,
        recent_domains: RecentDomains | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.client = client
        self.scheduler = scheduler or AsyncioScheduler()
        self.store = store or RecordCacheStore(client)
        self.selection = SelectionController(self.store)
        self.batch = BatchMutationCoordinator(client, self.store, self.selection)
        self.search = SearchDebounceGate(self.scheduler, self._on_debounced_keyword, self.config.search_debounce_seconds)
        self.recent_domains = recent_domains or RecentDomains(self.config.recent_domains_limit)
        self.view = ListingViewState()
        self.key: RecordCacheKey | None = None
        self.record_type = ""
        self.is_deleting = False
        self.last_error: dict[str, Any] | None = None
        self._observers = Signal()

        self.store.changed.connect(self._on_store_changed)
        self.store.invalidated.connect(self._on_store_invalidated)
        self.selection.changed.connect(self._notify)
        self.batch.changed.connect(self._notify)

    # projections

    def subscribe(self, callback: Callable[[RecordListSnapshot], None]) -> Callable[[], None]:
        return self._observers.connect(callback)

    def snapshot(self) -> RecordListSnapshot:
        cache = self.store.get(self.key) if self.key is not None else None
        if cache is None:
            return RecordListSnapshot(
                key=self.key,
                keyword=self.search.keyword,
                record_type=self.record_type,
                is_deleting=self.is_deleting,
                selected_ids=self.selection.selected_ids,
                is_select_mode=self.selection.is_select_mode,
                sort_by=self.view.sort_by,
                sort_dir=self.view.sort_dir,
                last_error=self.last_error,
            )
        return RecordListSnapshot(
            key=self.key,
            records=sort_records(cache.records, self.view),
            keyword=self.search.keyword,
            record_type=self.record_type,
            committed_keyword=cache.filter_keyword,
            committed_record_type=cache.filter_type,
            total_count=cache.total_count,
            has_more=cache.has_more,
            is_loading=cache.is_loading,
            is_loading_more=cache.is_loading_more,
            is_deleting=self.is_deleting,
            is_batch_deleting=self.batch.in_flight is not None and self.batch.in_flight == self.key,
            selected_ids=self.selection.selected_ids,
            is_select_mode=self.selection.is_select_mode,
            sort_by=self.view.sort_by,
            sort_dir=self.view.sort_dir,
            last_error=self.last_error,
        )

    # navigation

    async def open_domain(self, account_id: str, domain_id: str, domain_name: str | None = None) -> bool:
        key = RecordCacheKey(account_id=account_id, domain_id=domain_id)
        self.recent_domains.record(account_id, domain_id, domain_name)
        if key != self.key:
            self.store.activate(key)
            self._reset(key)
        return await self._load()

    def close_domain(self) -> None:
        if self.key is None:
            return
        self.store.activate(None)
        self._reset(None)
        self._notify()

    def close(self) -> None:
        self.search.cancel()
        self.close_domain()

    # filters

    def set_keyword(self, text: str) -> None:
        self.search.on_keyword_change(text)
        self._notify()

    async def submit_search(self, text: str | None = None) -> bool:
        self.search.submit(text)
        return await self._load()

    async def set_record_type(self, record_type: str) -> bool:
        self.record_type = "" if record_type == self.record_type else record_type
        self.search.submit()
        return await self._load()

    async def clear_filters(self) -> bool:
        self.search.reset("")
        self.record_type = ""
        return await self._load()

    async def refresh(self) -> bool:
        self.search.submit()
        return await self._load()

    async def load_more(self) -> bool:
        key = self.key
        if key is None:
            return False
        try:
            return await self.store.load_more(key)
        except ApiError as error:
            self._surface(error, key)
            return False

    def toggle_sort(self, field: str) -> None:
        toggle_sort(self.view, field)
        self._notify()

    # selection

    def toggle_select_mode(self) -> bool:
        return self.selection.toggle_select_mode()

    def toggle_selection(self, record_id: str) -> bool:
        return self.selection.toggle(record_id)

    def select_all(self) -> None:
        self.selection.select_all()

    def clear_selection(self) -> None:
        self.selection.clear()

    # mutations

    async def delete_record(self, record_id: str) -> bool:
        key = self.key
        if key is None or self.is_deleting:
            return False
        self.is_deleting = True
        self._notify()
        try:
            await self.client.delete_record(key.account_id, record_id, key.domain_id)
        except ApiError as error:
            log_action(
                logger,
                module="records",
                action="delete",
                account_id=key.account_id,
                domain_id=key.domain_id,
                trace_id=error.trace_id,
                outcome="error",
                record_id=record_id,
            )
            self._surface(error, key)
            return False
        finally:
            self.is_deleting = False
            self._notify()

        self.store.remove_locally(key, record_id)
        log_action(
            logger,
            module="records",
            action="delete",
            account_id=key.account_id,
            domain_id=key.domain_id,
            trace_id=None,
            outcome="success",
            record_id=record_id,
        )
        return True

    async def batch_delete(self) -> BatchDeleteOutcome | None:
        key = self.key
        if key is None:
            return None
        try:
            outcome = await self.batch.batch_delete(key)
        except ApiError as error:
            self._surface(error, key)
            return None
        if outcome is not None:
            error = outcome.as_error()
            if error is not None:
                self._surface(error, key)
        return outcome

    # internals

    async def _load(self) -> bool:
        key = self.key
        if key is None:
            return False
        self.last_error = None
        try:
            return await self.store.load_full(key, self.search.keyword, self.record_type)
        except ApiError as error:
            self._surface(error, key)
            return False

    def _on_debounced_keyword(self, _keyword: str) -> None:
        self.scheduler.spawn(self._load())

    def _reset(self, key: RecordCacheKey | None) -> None:
        self.key = key
        self.search.reset("")
        self.record_type = ""
        self.view = ListingViewState()
        self.last_error = None
        self.selection.bind(key)

    def _surface(self, error: ApiError, key: RecordCacheKey) -> None:
        if key != self.key:
            return
        self.last_error = build_error_payload(error)
        self._notify()

    def _on_store_changed(self, key: RecordCacheKey) -> None:
        if key == self.key:
            self._notify()

    def _on_store_invalidated(self, key: RecordCacheKey) -> None:
        if key != self.key:
            return
        self._reset(None)
        self._notify()

    def _notify(self, *_args: object) -> None:
        self._observers.emit(self.snapshot())
