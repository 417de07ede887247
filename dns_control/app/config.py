from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class AppConfig:
    page_size: int = 20
    search_debounce_ms: int = 300
    restore_poll_ms: int = 500
    recent_domains_limit: int = 5

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "AppConfig":
        load_dotenv(env_file)
        config = cls(
            page_size=int(os.getenv("DNSCTL_PAGE_SIZE", "20")),
            search_debounce_ms=int(os.getenv("DNSCTL_SEARCH_DEBOUNCE_MS", "300")),
            restore_poll_ms=int(os.getenv("DNSCTL_RESTORE_POLL_MS", "500")),
            recent_domains_limit=int(os.getenv("DNSCTL_RECENT_DOMAINS_LIMIT", "5")),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.page_size < 1:
            raise ValueError("DNSCTL_PAGE_SIZE must be >= 1")
        if self.search_debounce_ms < 0:
            raise ValueError("DNSCTL_SEARCH_DEBOUNCE_MS must be >= 0")
        if self.restore_poll_ms <= 0:
            raise ValueError("DNSCTL_RESTORE_POLL_MS must be greater than 0")
        if self.recent_domains_limit < 1:
            raise ValueError("DNSCTL_RECENT_DOMAINS_LIMIT must be >= 1")

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000

    @property
    def restore_poll_seconds(self) -> float:
        return self.restore_poll_ms / 1000
