from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    QuotaExceededError,
    RemoteRejection,
    ServerError,
    ValidationError,
)

_CODE_TYPES: dict[str, type[ApiError]] = {
    "AccountNotFound": NotFoundError,
    "DomainNotFound": NotFoundError,
    "RecordNotFound": NotFoundError,
    "ProviderNotFound": NotFoundError,
    "InvalidCredentials": InvalidCredentialsError,
    "CredentialError": InvalidCredentialsError,
    "CredentialValidation": ValidationError,
    "QuotaExceeded": QuotaExceededError,
    "RecordExists": ConflictError,
    "ValidationError": ValidationError,
    "InvalidParameter": ValidationError,
    "BadRequest": ValidationError,
}


def _type_from_status(status_code: int) -> type[ApiError]:
    if status_code == 404:
        return NotFoundError
    if status_code in {401, 403}:
        return InvalidCredentialsError
    if status_code == 409:
        return ConflictError
    if status_code in {400, 422}:
        return ValidationError
    if status_code >= 500:
        return ServerError
    return RemoteRejection


def _unwrap(payload: Mapping[str, object]) -> tuple[str, str | None, object | None]:
    raw = payload.get("error", payload)
    if isinstance(raw, str):
        return str(payload.get("code") or "ApiError"), raw, None
    if not isinstance(raw, Mapping):
        return "HTTP_ERROR", None, None

    code = str(raw.get("code") or "HTTP_ERROR")
    details = raw.get("details")
    message = raw.get("message")
    # Provider failures nest their own code inside details.
    if isinstance(details, Mapping):
        if code == "Provider" and details.get("code"):
            code = str(details["code"])
        message = message or details.get("raw_message") or details.get("detail") or details.get("message")
    elif isinstance(details, str):
        message = message or details
    return code, str(message) if message else None, details


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code, message, details = _unwrap(payload)
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped = _CODE_TYPES.get(code) or _type_from_status(status_code)
    return mapped(
        code=code,
        message=message or code,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
