"""Owned timer and task handles on top of the running asyncio loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any, Protocol

from dns_control.app.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle: ...

    def spawn(self, coroutine: Coroutine[Any, Any, Any]) -> asyncio.Task: ...

    def cancel_all(self) -> None: ...


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._tasks: set[asyncio.Task] = set()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        return self._resolve_loop().call_later(max(0.0, delay_seconds), callback)

    def spawn(self, coroutine: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = self._resolve_loop().create_task(coroutine)
        # The loop only keeps weak references to tasks.
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        return task

    def cancel_all(self) -> None:
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        for task in list(self._tasks):
            if task is not current:
                task.cancel()

    def _forget(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Background task failed: %r", error)

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()
