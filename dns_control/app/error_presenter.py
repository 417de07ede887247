from __future__ import annotations

from typing import Any

from dns_control.clients.dns_client_sdk.exceptions import (
    ApiError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    PartialBatchFailure,
    QuotaExceededError,
    TransportError,
    ValidationError,
)


def build_error_payload(error: Exception) -> dict[str, Any]:
    if isinstance(error, ApiError):
        category = _classify_api_error(error)
        payload: dict[str, Any] = {
            "category": category,
            "code": error.code,
            "message": error.message,
            "trace_id": error.trace_id,
            "status_code": error.status_code,
            "action": _suggest_action(category),
        }
        if isinstance(error, PartialBatchFailure):
            payload["failed_count"] = error.failure_count
            payload["failed_ids"] = list(error.failed_ids)
            payload["reasons"] = dict(error.reasons)
        return payload
    return {
        "category": "internal",
        "code": "INTERNAL_ERROR",
        "message": str(error),
        "trace_id": None,
        "status_code": None,
        "action": "contact_support",
    }


def format_error_banner(payload: dict[str, Any]) -> str:
    trace_id = payload.get("trace_id") or "n/a"
    return (
        "[ERROR] "
        f"code={payload.get('code')} "
        f"message={payload.get('message')} "
        f"trace_id={trace_id} "
        f"category={payload.get('category')} "
        f"action={payload.get('action')}"
    )


def _classify_api_error(error: ApiError) -> str:
    if isinstance(error, PartialBatchFailure):
        return "partial"
    if isinstance(error, TransportError):
        return "network"
    if isinstance(error, NotFoundError):
        return "not_found"
    if isinstance(error, InvalidCredentialsError):
        return "auth"
    if isinstance(error, (ConflictError, QuotaExceededError)):
        return "conflict"
    if isinstance(error, ValidationError):
        return "validation"
    return "internal"


def _suggest_action(category: str) -> str:
    if category in {"network", "partial", "internal"}:
        return "retry"
    if category == "auth":
        return "check_credentials"
    if category == "not_found":
        return "refresh"
    return "review_input"
