"""Latest-wins commit gate for record fetches.

Every full fetch draws a new generation from a counter shared by all keys, so
a token issued before an invalidation or a key switch can never match a cache
entry created afterwards. A result is committed only while its token still
matches the active key and that key's current generation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from dns_control.app.state import RecordCacheKey
from dns_control.clients.dns_client_sdk.models import RecordPage

if TYPE_CHECKING:
    from dns_control.app.record_cache import DomainRecordCache


class FetchKind(str, Enum):
    FULL = "full"
    APPEND = "append"


@dataclass(frozen=True)
class FetchToken:
    key: RecordCacheKey
    generation: int
    kind: FetchKind
    keyword: str = ""
    record_type: str = ""
    cursor: int = 1


class FetchSequencer:
    def __init__(self, caches: Mapping[RecordCacheKey, "DomainRecordCache"]) -> None:
        self._caches = caches
        self._generation = 0
        self.active_key: RecordCacheKey | None = None

    def activate(self, key: RecordCacheKey | None) -> None:
        self.active_key = key

    def begin_fetch(self, key: RecordCacheKey, *, keyword: str = "", record_type: str = "") -> FetchToken:
        cache = self._caches[key]
        self._generation += 1
        token = FetchToken(key=key, generation=self._generation, kind=FetchKind.FULL, keyword=keyword, record_type=record_type)
        cache.load_generation = token.generation
        cache.pending_full = token
        # A new full fetch supersedes any append still in flight.
        cache.pending_append = None
        return token

    def begin_append(self, key: RecordCacheKey) -> FetchToken | None:
        cache = self._caches.get(key)
        if cache is None or key != self.active_key:
            return None
        if not cache.has_more or cache.pending_full is not None or cache.pending_append is not None:
            return None
        token = FetchToken(
            key=key,
            generation=cache.load_generation,
            kind=FetchKind.APPEND,
            keyword=cache.filter_keyword,
            record_type=cache.filter_type,
            cursor=cache.page_cursor,
        )
        cache.pending_append = token
        return token

    def is_current(self, token: FetchToken) -> bool:
        cache = self._caches.get(token.key)
        return cache is not None and token.key == self.active_key and cache.load_generation == token.generation

    def commit(self, token: FetchToken, key: RecordCacheKey, result: RecordPage) -> bool:
        accepted = key == token.key and self.is_current(token)
        cache = self._settle(token)
        if not accepted or cache is None:
            return False
        if token.kind is FetchKind.FULL:
            cache.replace(result, keyword=token.keyword, record_type=token.record_type)
        else:
            cache.append(result)
        return True

    def discard(self, token: FetchToken) -> bool:
        """Release a failed fetch; returns whether its failure is still relevant."""
        current = self.is_current(token)
        self._settle(token)
        return current

    def _settle(self, token: FetchToken) -> "DomainRecordCache | None":
        cache = self._caches.get(token.key)
        if cache is None:
            return None
        if cache.pending_full is token:
            cache.pending_full = None
        if cache.pending_append is token:
            cache.pending_append = None
        return cache
