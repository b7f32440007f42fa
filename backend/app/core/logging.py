"""
Structured logging setup.

All modules log through structlog so every line carries an event name plus
key/value context:

    logger = get_logger(__name__)
    logger.info("webpage_fetched", url=url, status_code=200)

The standard library ``logging`` module is routed through the same
processors, so third-party libraries (uvicorn, sqlalchemy, ...) end up in the
same stream and format.

request_logging_middleware tags every log line emitted while handling a
request with a request_id.
"""

import logging
import sys
import time
import uuid
from typing import Any

import structlog

from app.core.config import settings

_configured = False


def setup_logging() -> None:
    """
    Configure structlog and the stdlib root logger.

    Output format is controlled by settings.LOG_FORMAT:
    - json: one JSON object per line (production, log aggregation)
    - text: colourised key=value console output (local development)

    Safe to call more than once; only the first call has an effect.
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, settings.LOG_LEVEL)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.LOG_FORMAT == "json":
        renderer: Any = structlog.processors.JSONRenderer()
        shared_processors.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )

    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the given module name."""
    return structlog.get_logger(name)


async def request_logging_middleware(request, call_next):
    """
    HTTP middleware: bind a request id to the logging context and log every request.

    The id is taken from an incoming X-Request-ID header when present and
    echoed back on the response.
    """
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - started) * 1000, 2)

    structlog.get_logger("app.request").info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=duration_ms,
    )
    response.headers["X-Request-ID"] = request_id
    return response
