from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from dns_control.app.scheduler import AsyncioScheduler


@dataclass
class PendingCall:
    command: str
    args: dict[str, Any]
    future: asyncio.Future | None = None

    def resolve(self, payload: Any) -> None:
        assert self.future is not None
        self.future.set_result(payload)

    def fail(self, error: Exception) -> None:
        assert self.future is not None
        self.future.set_exception(error)

    @property
    def done(self) -> bool:
        return self.future is None or self.future.done()


class ScriptedTransport:
    """Records every call; answers through ``responder`` or waits to be resolved by the test."""

    def __init__(self, responder: Callable[[str, dict[str, Any]], Any] | None = None) -> None:
        self.responder = responder
        self.calls: list[PendingCall] = []

    async def call(self, command: str, args: dict[str, Any] | None = None) -> Any:
        pending = PendingCall(command=command, args=dict(args or {}))
        self.calls.append(pending)
        if self.responder is not None:
            result = self.responder(command, pending.args)
            if isinstance(result, Exception):
                raise result
            return result
        pending.future = asyncio.get_running_loop().create_future()
        return await pending.future

    def calls_for(self, command: str) -> list[PendingCall]:
        return [call for call in self.calls if call.command == command]

    def waiting(self, command: str | None = None) -> list[PendingCall]:
        return [call for call in self.calls if not call.done and (command is None or call.command == command)]


@dataclass
class ManualTimer:
    when: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(AsyncioScheduler):
    """Timers fire only when the test advances the clock."""

    def __init__(self) -> None:
        super().__init__()
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(when=self.now + max(0.0, delay_seconds), callback=callback)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> int:
        return sum(1 for timer in self.timers if not timer.cancelled)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        while True:
            due = [timer for timer in self.timers if not timer.cancelled and timer.when <= self.now]
            if not due:
                return
            timer = min(due, key=lambda item: item.when)
            self.timers.remove(timer)
            timer.callback()


async def settle(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


def record(record_id: str, name: str | None = None, record_type: str = "A", content: str = "192.0.2.1", ttl: int = 600) -> dict:
    return {
        "id": record_id,
        "name": name or record_id,
        "recordType": record_type,
        "content": content,
        "ttl": ttl,
    }


def page(ids: list[str], total: int, page_number: int = 1, has_more: bool | None = None) -> dict:
    payload: dict[str, Any] = {
        "items": [record(record_id) for record_id in ids],
        "totalCount": total,
        "page": page_number,
        "pageSize": 20,
    }
    if has_more is not None:
        payload["hasMore"] = has_more
    return payload


@dataclass
class SnapshotRecorder:
    snapshots: list[Any] = field(default_factory=list)

    def __call__(self, snapshot: Any) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> Any:
        return self.snapshots[-1]
