from __future__ import annotations

from dataclasses import dataclass, field

from dns_control.app.fetch_sequencer import FetchSequencer, FetchToken
from dns_control.app.infrastructure.logging.logger import get_logger, log_action
from dns_control.app.signal import Signal
from dns_control.app.state import RecordCacheKey
from dns_control.clients.dns_client_sdk.exceptions import ApiError
from dns_control.clients.dns_client_sdk.models import DnsRecord, RecordPage
from dns_control.clients.dns_client_sdk.records_client import RecordsClient

logger = get_logger(__name__)


@dataclass
class DomainRecordCache:
    key: RecordCacheKey
    records: list[DnsRecord] = field(default_factory=list)
    filter_keyword: str = ""
    filter_type: str = ""
    page_cursor: int = 1
    total_count: int = 0
    has_more: bool = False
    load_generation: int = 0
    loaded: bool = False
    pending_full: FetchToken | None = None
    pending_append: FetchToken | None = None

    @property
    def is_loading(self) -> bool:
        return self.pending_full is not None

    @property
    def is_loading_more(self) -> bool:
        return self.pending_append is not None

    def record_ids(self) -> list[str]:
        return [record.id for record in self.records]

    def replace(self, page: RecordPage, *, keyword: str, record_type: str) -> None:
        self.records = list(page.items)
        self.filter_keyword = keyword
        self.filter_type = record_type
        self.total_count = page.total_count
        self.page_cursor = page.following_cursor()
        self.has_more = self._resolve_has_more(page)
        self.loaded = True

    def append(self, page: RecordPage) -> None:
        known = set(self.record_ids())
        self.records.extend(record for record in page.items if record.id not in known)
        self.total_count = page.total_count
        self.page_cursor = page.following_cursor()
        self.has_more = self._resolve_has_more(page)

    def remove(self, record_ids: list[str] | set[str]) -> list[str]:
        doomed = set(record_ids)
        removed = [record.id for record in self.records if record.id in doomed]
        if not removed:
            return []
        self.records = [record for record in self.records if record.id not in doomed]
        self.total_count = max(0, self.total_count - len(removed))
        return removed

    def _resolve_has_more(self, page: RecordPage) -> bool:
        if not page.items:
            return False
        if page.has_more is not None:
            return page.has_more
        return len(self.records) < self.total_count


class RecordCacheStore:
    """Owns every per-domain record cache; all mutation goes through here.

    ``changed`` fires with the key after any state change of that key's cache
    (including loading flags). ``invalidated`` fires when an entry is dropped.
    """

    def __init__(self, client: RecordsClient) -> None:
        self.client = client
        self._caches: dict[RecordCacheKey, DomainRecordCache] = {}
        self.sequencer = FetchSequencer(self._caches)
        self.changed = Signal()
        self.invalidated = Signal()

    @property
    def active_key(self) -> RecordCacheKey | None:
        return self.sequencer.active_key

    def get(self, key: RecordCacheKey) -> DomainRecordCache | None:
        return self._caches.get(key)

    def keys(self) -> list[RecordCacheKey]:
        return list(self._caches)

    def activate(self, key: RecordCacheKey | None) -> DomainRecordCache | None:
        """Make ``key`` the visible key, starting it from an empty cache."""
        self.sequencer.activate(key)
        if key is None:
            return None
        cache = DomainRecordCache(key=key)
        self._caches[key] = cache
        self.changed.emit(key)
        return cache

    async def load_full(self, key: RecordCacheKey, keyword: str = "", record_type: str = "") -> bool:
        if key not in self._caches:
            self._caches[key] = DomainRecordCache(key=key)
        token = self.sequencer.begin_fetch(key, keyword=keyword, record_type=record_type)
        self.changed.emit(key)
        try:
            page = await self.client.list_records(
                key.account_id,
                key.domain_id,
                keyword=keyword or None,
                record_type=record_type or None,
            )
        except ApiError as error:
            return self._fail(token, "load_full", error)
        except BaseException:
            self._release(token)
            raise
        return self._commit(token, "load_full", page)

    async def load_more(self, key: RecordCacheKey) -> bool:
        token = self.sequencer.begin_append(key)
        if token is None:
            return False
        self.changed.emit(key)
        try:
            page = await self.client.list_records(
                key.account_id,
                key.domain_id,
                keyword=token.keyword or None,
                record_type=token.record_type or None,
                cursor=token.cursor,
            )
        except ApiError as error:
            return self._fail(token, "load_more", error)
        except BaseException:
            self._release(token)
            raise
        return self._commit(token, "load_more", page)

    def remove_locally(self, key: RecordCacheKey, record_id: str) -> bool:
        return bool(self.remove_many_locally(key, [record_id]))

    def remove_many_locally(self, key: RecordCacheKey, record_ids: list[str]) -> list[str]:
        cache = self._caches.get(key)
        if cache is None:
            return []
        removed = cache.remove(record_ids)
        if removed:
            self.changed.emit(key)
        return removed

    def invalidate(self, key: RecordCacheKey) -> bool:
        if self._caches.pop(key, None) is None:
            return False
        if self.sequencer.active_key == key:
            self.sequencer.activate(None)
        self.invalidated.emit(key)
        return True

    def invalidate_account(self, account_id: str) -> list[RecordCacheKey]:
        doomed = [key for key in self._caches if key.account_id == account_id]
        for key in doomed:
            self.invalidate(key)
        return doomed

    def _commit(self, token: FetchToken, action: str, page: RecordPage) -> bool:
        accepted = self.sequencer.commit(token, token.key, page)
        log_action(
            logger,
            module="records",
            action=action,
            account_id=token.key.account_id,
            domain_id=token.key.domain_id,
            trace_id=None,
            outcome="success" if accepted else "stale",
            generation=token.generation,
        )
        self.changed.emit(token.key)
        return accepted

    def _release(self, token: FetchToken) -> None:
        """Clear the in-flight marker of a cancelled fetch or one that failed outside the API."""
        self.sequencer.discard(token)
        self.changed.emit(token.key)

    def _fail(self, token: FetchToken, action: str, error: ApiError) -> bool:
        current = self.sequencer.discard(token)
        log_action(
            logger,
            module="records",
            action=action,
            account_id=token.key.account_id,
            domain_id=token.key.domain_id,
            trace_id=error.trace_id,
            outcome="error" if current else "stale",
            code=error.code,
        )
        self.changed.emit(token.key)
        if current:
            raise error
        return False
