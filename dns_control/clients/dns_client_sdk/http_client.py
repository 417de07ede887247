from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tracing import TRACE_HEADER, new_trace_id, resolve_trace_id


@dataclass
class LastOperation:
    command: str
    duration_ms: int
    result: str
    trace_id: str | None


class HttpTransport:
    """RPC-style transport: every command is a POST of ``{"command", "args"}``."""

    def __init__(self, config: ClientConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self.client = client or httpx.AsyncClient(timeout=config.timeout_seconds, verify=config.verify_ssl)
        self.last_operation: LastOperation | None = None

    async def call(self, command: str, args: Mapping[str, Any] | None = None) -> Any:
        trace_id = new_trace_id()
        started = time.monotonic()
        try:
            response = await self.client.post(
                self.config.invoke_url,
                json={"command": command, "args": dict(args or {})},
                headers={"Accept": "application/json", TRACE_HEADER: trace_id},
            )
        except httpx.TimeoutException as exc:
            self._record(command, started, "error", trace_id)
            raise TransportError(
                code="TIMEOUT_ERROR",
                message="The request timed out before the server answered.",
                details={"type": type(exc).__name__},
                trace_id=trace_id,
            ) from exc
        except httpx.TransportError as exc:
            self._record(command, started, "error", trace_id)
            raise TransportError(
                code="NETWORK_ERROR",
                message=str(exc) or "Could not reach the DNS orchestrator API.",
                details={"type": type(exc).__name__},
                trace_id=trace_id,
            ) from exc

        trace_id = resolve_trace_id(response.headers, trace_id)
        payload = self._safe_json(response)
        if response.status_code >= 400:
            self._record(command, started, "error", trace_id)
            raise map_error(response.status_code, _as_mapping(payload), trace_id)

        if isinstance(payload, dict) and "success" in payload:
            if not payload.get("success"):
                self._record(command, started, "error", trace_id)
                raise map_error(response.status_code, payload, trace_id)
            self._record(command, started, "success", trace_id)
            return payload.get("data")

        self._record(command, started, "success", trace_id)
        return payload

    async def aclose(self) -> None:
        await self.client.aclose()

    def _record(self, command: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            command=command,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )

    @staticmethod
    def _safe_json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return {"message": response.text}


def _as_mapping(payload: Any) -> dict[str, Any]:
    return payload if isinstance(payload, dict) else {"message": str(payload)}
