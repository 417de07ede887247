from __future__ import annotations

from collections.abc import Callable

from dns_control.app.scheduler import Scheduler, TimerHandle


class SearchDebounceGate:
    """Coalesces keyword edits into one fetch after a quiet period.

    ``on_keyword_change`` echoes the text immediately and (re)arms the timer.
    ``submit`` disarms the timer and hands back the keyword so the caller can
    fetch right away without a duplicate debounced fetch following it.
    """

    def __init__(self, scheduler: Scheduler, on_fire: Callable[[str], None], quiet_period_seconds: float = 0.3) -> None:
        self.scheduler = scheduler
        self.on_fire = on_fire
        self.quiet_period_seconds = quiet_period_seconds
        self.keyword = ""
        self._timer: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def on_keyword_change(self, text: str) -> None:
        self.keyword = text
        self.cancel()
        self._timer = self.scheduler.call_later(self.quiet_period_seconds, self._fire)

    def submit(self, text: str | None = None) -> str:
        if text is not None:
            self.keyword = text
        self.cancel()
        return self.keyword

    def reset(self, keyword: str = "") -> None:
        self.cancel()
        self.keyword = keyword

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        self.on_fire(self.keyword)
