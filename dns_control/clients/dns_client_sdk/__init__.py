from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    PartialBatchFailure,
    QuotaExceededError,
    RemoteRejection,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpTransport
from .models import BatchDeleteFailure, BatchDeleteResult, DnsRecord, RecordPage
from .records_client import RecordsClient
from .transport import Transport

__all__ = [
    "ApiError",
    "BatchDeleteFailure",
    "BatchDeleteResult",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "DnsRecord",
    "HttpTransport",
    "InvalidCredentialsError",
    "NotFoundError",
    "PartialBatchFailure",
    "QuotaExceededError",
    "RecordPage",
    "RecordsClient",
    "RemoteRejection",
    "ServerError",
    "Transport",
    "TransportError",
    "ValidationError",
    "load_config",
]
