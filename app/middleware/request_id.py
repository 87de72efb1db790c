from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _access_log(request: Request, rid: str, status_code: int, start_ns: int, **extra) -> dict:
    duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000.0
    return {
        "request_id": rid,
        "path": request.url.path,
        "method": request.method,
        "query": str(request.url.query) or None,
        "status": status_code,
        "duration_ms": round(duration_ms, 3),
        "client_ip": (request.client.host if request.client else None) or "-",
        **extra,
    }


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and emit one ``http_request`` access event.

    request_id, path and method are bound to structlog contextvars for the
    duration of the request so service events (schools_search, zones_contains,
    geocode_cache_hit, ...) carry them too.
    """
    logger = structlog.get_logger(__name__)

    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(
        request_id=rid, path=request.url.path, method=request.method
    )
    sentry_sdk.set_tag("request_id", rid)

    start_ns = time.perf_counter_ns()
    try:
        response = await call_next(request)
    except Exception:
        logger.error("http_request", **_access_log(request, rid, 500, start_ns), exc_info=True)
        structlog.contextvars.clear_contextvars()
        raise

    logger.info("http_request", **_access_log(request, rid, response.status_code, start_ns))
    response.headers[REQUEST_ID_HEADER] = rid

    # Clear per-request bindings to avoid leakage across tasks
    structlog.contextvars.clear_contextvars()
    return response
