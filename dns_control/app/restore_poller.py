from __future__ import annotations

import asyncio
from collections.abc import Callable

from dns_control.app.infrastructure.logging.logger import get_logger, log_action
from dns_control.app.scheduler import Scheduler, TimerHandle
from dns_control.app.signal import Signal
from dns_control.app.state import RestoreState
from dns_control.clients.dns_client_sdk.records_client import RecordsClient

logger = get_logger(__name__)

_FORWARD = {
    RestoreState.UNKNOWN: {RestoreState.RESTORING, RestoreState.COMPLETED},
    RestoreState.RESTORING: {RestoreState.COMPLETED},
    RestoreState.COMPLETED: set(),
}


class RestorePoller:
    """Gates the initial data load on the backend finishing its restore.

    States only move forward (unknown -> restoring -> completed). A failed
    status check fails open: polling stops and the state completes anyway.
    ``on_completed`` runs exactly once.
    """

    def __init__(
        self,
        client: RecordsClient,
        scheduler: Scheduler,
        on_completed: Callable[[], None],
        interval_seconds: float = 0.5,
    ) -> None:
        self.client = client
        self.scheduler = scheduler
        self.on_completed = on_completed
        self.interval_seconds = interval_seconds
        self.state = RestoreState.UNKNOWN
        self.last_error: Exception | None = None
        self.state_changed = Signal()
        self._started = False
        self._timer: TimerHandle | None = None
        self._poll_task: asyncio.Task | None = None

    @property
    def is_restoring(self) -> bool:
        return self.state is RestoreState.RESTORING

    @property
    def is_polling(self) -> bool:
        return self._timer is not None or self._poll_task is not None

    async def start(self) -> RestoreState:
        if self._started:
            return self.state
        self._started = True
        await self._check()
        return self.state

    def stop(self) -> None:
        self._cancel_timer()
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _check(self) -> None:
        try:
            done = await self.client.is_restore_completed()
        except Exception as error:  # noqa: BLE001
            self._fail_open(error)
            return
        if self.state is RestoreState.COMPLETED:
            return
        if done:
            self._complete()
            return
        self._transition(RestoreState.RESTORING)
        self._timer = self.scheduler.call_later(self.interval_seconds, self._tick)

    def _tick(self) -> None:
        self._timer = None
        self._poll_task = self.scheduler.spawn(self._poll())

    async def _poll(self) -> None:
        try:
            await self._check()
        finally:
            if self._poll_task is asyncio.current_task():
                self._poll_task = None

    def _fail_open(self, error: Exception) -> None:
        self.last_error = error
        log_action(
            logger,
            module="restore",
            action="poll",
            account_id=None,
            domain_id=None,
            trace_id=getattr(error, "trace_id", None),
            outcome="error",
            error=str(error),
        )
        self._complete()

    def _complete(self) -> None:
        self._cancel_timer()
        if not self._transition(RestoreState.COMPLETED):
            return
        log_action(
            logger,
            module="restore",
            action="complete",
            account_id=None,
            domain_id=None,
            trace_id=None,
            outcome="success" if self.last_error is None else "error",
        )
        self.on_completed()

    def _transition(self, target: RestoreState) -> bool:
        if target is self.state:
            return False
        if target not in _FORWARD[self.state]:
            raise RuntimeError(f"Illegal restore transition {self.state.value} -> {target.value}")
        self.state = target
        self.state_changed.emit(target)
        return True
