from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import InfrastructureError

logger = structlog.get_logger(__name__)


@contextmanager
def translate_db_errors(operation: str) -> Iterator[None]:
    """Log a failed query and re-raise it as InfrastructureError (HTTP 503)."""

    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("database_query_failed", operation=operation)
        raise InfrastructureError(f"{operation} failed") from exc
