from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    trace_id: str | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class TransportError(ApiError):
    """Network/transport failure before a response was returned."""


class RemoteRejection(ApiError):
    """The remote side answered with a structured failure payload."""


class NotFoundError(RemoteRejection):
    pass


class InvalidCredentialsError(RemoteRejection):
    pass


class QuotaExceededError(RemoteRejection):
    pass


class ConflictError(RemoteRejection):
    """Provider-side conflict, e.g. the record already exists."""


class ValidationError(RemoteRejection):
    pass


class ServerError(RemoteRejection):
    pass


@dataclass
class PartialBatchFailure(ApiError):
    succeeded_ids: tuple[str, ...] = ()
    failed_ids: tuple[str, ...] = ()
    reasons: dict[str, str] = field(default_factory=dict)

    @property
    def failure_count(self) -> int:
        return len(self.failed_ids)
