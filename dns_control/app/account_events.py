from __future__ import annotations

from dataclasses import dataclass

from dns_control.app.signal import Signal


@dataclass(frozen=True)
class AccountDeleted:
    account_id: str


class AccountEvents:
    """Facts published by the account-management side once they are final."""

    def __init__(self) -> None:
        self.account_deleted = Signal()

    def publish_account_deleted(self, account_id: str) -> AccountDeleted:
        event = AccountDeleted(account_id=account_id)
        self.account_deleted.emit(event)
        return event
