from __future__ import annotations

from typing import Any, Callable

from dns_control.app.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class Signal:
    """Observer list; a failing handler is logged and does not stop the others."""

    def __init__(self) -> None:
        self._handlers: list[Callable[..., Any]] = []

    def connect(self, handler: Callable[..., Any]) -> Callable[[], None]:
        if handler not in self._handlers:
            self._handlers.append(handler)
        return lambda: self.disconnect(handler)

    def disconnect(self, handler: Callable[..., Any]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in list(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                logger.error("Signal handler %r failed: %s", handler, exc)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)
