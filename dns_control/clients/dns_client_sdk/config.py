from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_INVOKE_PATH = "/api/invoke"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    api_base_url: str
    timeout_seconds: float = 10.0
    verify_ssl: bool = True
    invoke_path: str = DEFAULT_INVOKE_PATH

    @property
    def invoke_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.invoke_path.lstrip('/')}"


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load transport config from environment with optional .env override."""
    load_dotenv(env_file)

    api_base_url = (os.getenv("DNSCTL_API_BASE_URL") or "").strip()
    if not api_base_url:
        raise ConfigError("Missing required config values: DNSCTL_API_BASE_URL")

    timeout_seconds = _read_float("DNSCTL_TIMEOUT_SECONDS", "10")
    if timeout_seconds <= 0:
        raise ConfigError(f"Invalid DNSCTL_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}")

    invoke_path = (os.getenv("DNSCTL_INVOKE_PATH") or DEFAULT_INVOKE_PATH).strip()
    if not invoke_path.startswith("/"):
        raise ConfigError(f"Invalid DNSCTL_INVOKE_PATH: expected a leading '/', got {invoke_path!r}")

    return ClientConfig(
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        verify_ssl=_coerce_bool(os.getenv("DNSCTL_VERIFY_SSL"), True),
        invoke_path=invoke_path,
    )
