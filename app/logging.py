from __future__ import annotations

import logging
import os
from typing import Any

import structlog

# Libraries whose INFO output drowns the access log.
_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


def _get_log_level() -> int:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level, logging.INFO)


def _resolve_format() -> str:
    log_format = os.getenv("LOG_FORMAT")
    if log_format:
        return log_format.lower()
    return "console" if os.getenv("APP_ENV") == "dev" else "json"


def setup_logging(log_file: str | os.PathLike | None = None) -> None:
    """Route structlog and stdlib logging through one formatter.

    JSON lines by default, a console renderer for APP_ENV=dev. Context bound
    with ``structlog.contextvars`` (request_id, path, method) lands on every
    event emitted while handling a request.
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _resolve_format() == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        os.makedirs(os.path.dirname(str(log_file)) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=_get_log_level(), handlers=handlers, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(_get_log_level(), logging.WARNING))

