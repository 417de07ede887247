from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from dns_control.app.account_events import AccountEvents
from dns_control.app.config import AppConfig
from dns_control.app.invalidation import AccountCacheInvalidator
from dns_control.app.recent_domains import RecentDomains
from dns_control.app.record_controller import RecordListController
from dns_control.app.restore_poller import RestorePoller
from dns_control.app.scheduler import AsyncioScheduler, Scheduler
from dns_control.app.state import RestoreState
from dns_control.clients.dns_client_sdk.config import ClientConfig, load_config
from dns_control.clients.dns_client_sdk.http_client import HttpTransport
from dns_control.clients.dns_client_sdk.records_client import RecordsClient
from dns_control.clients.dns_client_sdk.transport import Transport


@dataclass
class DnsControlApp:
    config: AppConfig
    transport: Transport
    client: RecordsClient
    scheduler: Scheduler
    events: AccountEvents
    recent_domains: RecentDomains
    records: RecordListController
    invalidator: AccountCacheInvalidator
    restore: RestorePoller

    async def start(self) -> RestoreState:
        return await self.restore.start()

    def confirm_account_deleted(self, account_id: str) -> None:
        """Called by the account side after the remote delete succeeded."""
        self.events.publish_account_deleted(account_id)

    async def aclose(self) -> None:
        self.restore.stop()
        self.records.close()
        # Background loads must not outlive the transport they call.
        self.scheduler.cancel_all()
        if isinstance(self.transport, HttpTransport):
            await self.transport.aclose()


def build_app(
    *,
    config: AppConfig | None = None,
    client_config: ClientConfig | None = None,
    transport: Transport | None = None,
    scheduler: Scheduler | None = None,
    on_initial_load: Callable[[], None] | None = None,
) -> DnsControlApp:
    config = config or AppConfig.from_env()
    if transport is None:
        transport = HttpTransport(client_config or load_config())
    scheduler = scheduler or AsyncioScheduler()
    client = RecordsClient(transport, page_size=config.page_size)
    events = AccountEvents()
    recent_domains = RecentDomains(config.recent_domains_limit)
    records = RecordListController(client, config=config, scheduler=scheduler, recent_domains=recent_domains)
    invalidator = AccountCacheInvalidator(records.store, recent_domains, events)
    restore = RestorePoller(
        client,
        scheduler,
        on_completed=on_initial_load or (lambda: None),
        interval_seconds=config.restore_poll_seconds,
    )
    return DnsControlApp(
        config=config,
        transport=transport,
        client=client,
        scheduler=scheduler,
        events=events,
        recent_domains=recent_domains,
        records=records,
        invalidator=invalidator,
        restore=restore,
    )
