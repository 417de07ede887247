from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dns_control.clients.dns_client_sdk.models import DnsRecord


@dataclass(frozen=True)
class RecordCacheKey:
    account_id: str
    domain_id: str

    def __str__(self) -> str:
        return f"{self.account_id}/{self.domain_id}"


class RestoreState(str, Enum):
    UNKNOWN = "unknown"
    RESTORING = "restoring"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RecordListSnapshot:
    """Immutable read projection handed to views."""

    key: RecordCacheKey | None = None
    records: tuple[DnsRecord, ...] = ()
    keyword: str = ""
    record_type: str = ""
    committed_keyword: str = ""
    committed_record_type: str = ""
    total_count: int = 0
    has_more: bool = False
    is_loading: bool = False
    is_loading_more: bool = False
    is_deleting: bool = False
    is_batch_deleting: bool = False
    selected_ids: frozenset[str] = frozenset()
    is_select_mode: bool = False
    sort_by: str | None = None
    sort_dir: str = "asc"
    last_error: dict[str, Any] | None = field(default=None, hash=False, compare=False)

    @property
    def has_active_filters(self) -> bool:
        return bool(self.keyword or self.record_type)

    @property
    def selected_count(self) -> int:
        return len(self.selected_ids)
