from __future__ import annotations

from typing import Any, Mapping, Protocol


class Transport(Protocol):
    """Single request/response primitive used by every remote operation.

    ``call`` returns the success payload or raises an ``ApiError`` subclass:
    ``TransportError`` when no response arrived, ``RemoteRejection`` when the
    remote side answered with a structured failure.
    """

    async def call(self, command: str, args: Mapping[str, Any] | None = None) -> Any: ...
