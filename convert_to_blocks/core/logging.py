"""JSON log lines tagged with the current request id."""

import json
import logging
import logging.config
import time
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from convert_to_blocks.core.config import Settings

APP_LOGGER_NAME = "convert_to_blocks"
REQUEST_ID_HEADER = "X-Request-ID"
REDACTED = "[REDACTED]"

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

# Matched as substrings of lower-cased keys, so "x-api-key" and "admin_api_key" are covered
REDACTED_KEYS = (
    "password",
    "secret",
    "token",
    "authorization",
    "cookie",
    "api_key",
    "api-key",
    "database_url",
)

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def get_request_id() -> str | None:
    return request_id_var.get()


def _is_secret(key: str) -> bool:
    key = key.lower()
    return any(marker in key for marker in REDACTED_KEYS)


def redact_sensitive_data(value: Any) -> Any:
    """Replace the values of credential-like keys, at any depth."""
    match value:
        case dict():
            return {
                key: REDACTED if _is_secret(str(key)) else redact_sensitive_data(item)
                for key, item in value.items()
            }
        case list() | tuple():
            return [redact_sensitive_data(item) for item in value]
        case _:
            return value


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields are nested and redacted."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if request_id := get_request_id():
            entry["request_id"] = request_id
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }
        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS
        }
        if extra:
            entry["extra"] = redact_sensitive_data(extra)
        return json.dumps(entry, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds a request id for the duration of a request and logs one line when it ends."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        logger = logging.getLogger(f"{APP_LOGGER_NAME}.request")
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            logger.info(
                "Request finished",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            request_id_var.reset(token)


def logging_config(settings: Settings) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": JSONFormatter}},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "json",
            }
        },
        "root": {"handlers": ["stdout"], "level": "WARNING"},
        "loggers": {
            APP_LOGGER_NAME: {"level": settings.app_log_level},
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "INFO" if settings.app_debug else "WARNING"},
        },
    }


def setup_logging(settings: Settings) -> None:
    logging.config.dictConfig(logging_config(settings))


def setup_request_logging(app: FastAPI) -> None:
    app.add_middleware(RequestLoggingMiddleware)
