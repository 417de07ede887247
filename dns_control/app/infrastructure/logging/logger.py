import json
import logging
import os
from datetime import datetime, timezone

LOG_LEVEL_ENV = "DNSCTL_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(os.getenv(LOG_LEVEL_ENV, "INFO").upper())
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    account_id: str | None,
    domain_id: str | None,
    trace_id: str | None,
    outcome: str,
    **extra: object,
) -> None:
    """Emit one JSON line per controller operation; errors go out at WARNING."""
    level = logging.WARNING if outcome == "error" else logging.INFO
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "account_id": account_id,
        "domain_id": domain_id,
        "trace_id": trace_id,
        "outcome": outcome,
    }
    payload.update(extra)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))
