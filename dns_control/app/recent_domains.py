from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecentDomain:
    account_id: str
    domain_id: str
    name: str | None = None


class RecentDomains:
    """Most-recently-viewed domains, newest first, capped at ``limit``."""

    def __init__(self, limit: int = 5) -> None:
        self.limit = max(1, limit)
        self._items: list[RecentDomain] = []

    def items(self) -> tuple[RecentDomain, ...]:
        return tuple(self._items)

    def record(self, account_id: str, domain_id: str, name: str | None = None) -> RecentDomain:
        entry = RecentDomain(account_id=account_id, domain_id=domain_id, name=name)
        self._items = [
            item for item in self._items if (item.account_id, item.domain_id) != (account_id, domain_id)
        ]
        self._items.insert(0, entry)
        del self._items[self.limit :]
        return entry

    def remove(self, account_id: str, domain_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if (item.account_id, item.domain_id) != (account_id, domain_id)]
        return len(self._items) != before

    def remove_by_account(self, account_id: str) -> int:
        before = len(self._items)
        self._items = [item for item in self._items if item.account_id != account_id]
        return before - len(self._items)
