import structlog
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core import exceptions as domain_exceptions

logger = structlog.get_logger(__name__)


def _http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    # Normalize to a consistent JSON body
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Unprocessable Entity"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("query", "path", "body")]
    name = loc[0] if loc else "request"
    return f"invalid value for {name}: {first.get('msg', 'invalid')}"


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # One line naming the offending parameter instead of FastAPI's error list
    return JSONResponse(status_code=422, content={"detail": _describe_validation_error(exc)})


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Hide internal details by default
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def _domain_error_handler(status_code: int, default_detail: str):
    def _handler(_: Request, exc: domain_exceptions.DomainError) -> JSONResponse:
        detail = str(exc) or default_detail
        return JSONResponse(status_code=status_code, content={"detail": detail})

    return _handler


def _infrastructure_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Already logged with a traceback where it was raised; never echo the cause
    logger.warning("service_unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": "Service Unavailable"})


def install(app) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(
        domain_exceptions.NotFoundError, _domain_error_handler(404, "Not Found")
    )
    app.add_exception_handler(
        domain_exceptions.ValidationError, _domain_error_handler(400, "Bad Request")
    )
    app.add_exception_handler(
        domain_exceptions.InfrastructureError, _infrastructure_error_handler
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)
