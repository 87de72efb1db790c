# app/api/routers/readyz.py
import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.core.config import get_settings
from app.schemas.common import ErrorResponse, OkResponse

router = APIRouter(prefix="/readyz", tags=["health"])

logger = structlog.get_logger(__name__)


@router.get(
    "",
    response_model=OkResponse,
    summary="Readiness probe",
    description="Runs SELECT 1 when schools are served from the database; 503 if unreachable.",
    responses={503: {"model": ErrorResponse, "description": "database unreachable"}},
)
async def readyz():
    if get_settings().backend_for("school") != "database":
        return {"ok": True}
    try:
        async with db.SessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.warning("readyz_database_unreachable", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Service Unavailable"},
        )
    return {"ok": True}
