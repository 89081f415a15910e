# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging for the resource-management service.

Every record is one JSON line on stdout. The current request id is held
in a context variable set by ``RequestIDMiddleware``, so log lines written
deep inside services carry it without threading it through call sites.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.config import settings

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message"}


class JSONFormatter(logging.Formatter):
    """Render a record plus any ``extra={...}`` keys as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if "request_id" not in payload and request_id_var.get():
            payload["request_id"] = request_id_var.get()
        if record.exc_info and record.exc_info[1]:
            payload["error"] = str(record.exc_info[1])
            payload["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(payload, default=str)


def get_logger(name: str | None = None) -> logging.Logger:
    """Named logger with the JSON handler attached once."""
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if not logger.handlers:
        logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    return logger
