from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from dns_control.clients.dns_client_sdk.models import DnsRecord

SORT_FIELDS: dict[str, Callable[[DnsRecord], Any]] = {
    "name": lambda record: record.name.lower(),
    "type": lambda record: record.record_type.upper(),
    "value": lambda record: record.content.lower(),
    "ttl": lambda record: record.ttl,
}


@dataclass
class ListingViewState:
    sort_by: str | None = None
    sort_dir: str = "asc"


def toggle_sort(view: ListingViewState, field: str) -> ListingViewState:
    """Cycle a column through ascending, descending and unsorted."""
    if field not in SORT_FIELDS:
        raise ValueError(f"Unsupported sort field: {field}")
    if view.sort_by != field:
        view.sort_by = field
        view.sort_dir = "asc"
    elif view.sort_dir == "asc":
        view.sort_dir = "desc"
    else:
        view.sort_by = None
        view.sort_dir = "asc"
    return view


def sort_records(records: list[DnsRecord], view: ListingViewState) -> tuple[DnsRecord, ...]:
    if not view.sort_by:
        return tuple(records)
    key = SORT_FIELDS[view.sort_by]
    return tuple(sorted(records, key=key, reverse=view.sort_dir == "desc"))
