from __future__ import annotations

from dns_control.app.account_events import AccountDeleted, AccountEvents
from dns_control.app.infrastructure.logging.logger import get_logger, log_action
from dns_control.app.record_cache import RecordCacheStore
from dns_control.app.recent_domains import RecentDomains
from dns_control.app.state import RecordCacheKey

logger = get_logger(__name__)


class AccountCacheInvalidator:
    """Purges everything derived from an account once its deletion is confirmed.

    Runs synchronously inside ``publish_account_deleted`` so the purge is done
    before the publisher drops the account from its own list.
    """

    def __init__(self, store: RecordCacheStore, recent_domains: RecentDomains, events: AccountEvents | None = None) -> None:
        self.store = store
        self.recent_domains = recent_domains
        if events is not None:
            events.account_deleted.connect(self.on_account_deleted)

    def on_account_deleted(self, event: AccountDeleted) -> list[RecordCacheKey]:
        return self.purge(event.account_id)

    def purge(self, account_id: str) -> list[RecordCacheKey]:
        purged = self.store.invalidate_account(account_id)
        recent_removed = self.recent_domains.remove_by_account(account_id)
        log_action(
            logger,
            module="accounts",
            action="purge_caches",
            account_id=account_id,
            domain_id=None,
            trace_id=None,
            outcome="success",
            caches=len(purged),
            recent_domains=recent_removed,
        )
        return purged
