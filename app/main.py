import os

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from app.api import errors
from app.api.routers.geocode import router as geocode_router
from app.api.routers.healthz import router as healthz_router
from app.api.routers.readyz import router as readyz_router
from app.api.routers.schools import router as schools_router
from app.api.routers.search import router as search_router
from app.api.routers.zones import router as zones_router
from app.core.config import get_settings
from app.logging import setup_logging
from app.middleware.request_id import request_id_middleware

openapi_tags = [
    {"name": "schools", "description": "School search, proximity and lookup"},
    {"name": "zones", "description": "Enrolment zone containment and geometry"},
    {"name": "geocode", "description": "Auckland address lookup"},
    {"name": "health", "description": "Liveness and readiness probes"},
]


def _init_sentry(env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


def create_app() -> FastAPI:
    # Initialize structured logging first
    setup_logging()

    settings = get_settings()
    env = settings.environment
    _init_sentry(env)

    app = FastAPI(
        title="Auckland School Finder API",
        version="0.1.0",
        description=(
            "Search Auckland schools, find the closest ones and check enrolment zones.\n"
            "- locations are {lat, lng}; geometry is GeoJSON with [lng, lat]\n"
            "- APP_ENV=mock serves a fixed in-memory dataset, dev/release use PostGIS\n"
        ),
        openapi_tags=openapi_tags,
    )
    # Request-ID middleware (JSON access log)
    app.middleware("http")(request_id_middleware)

    # CORS from ALLOW_ORIGINS env (comma-separated)
    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "").split(",") if o.strip()]
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=False,
            allow_methods=["GET", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)

    app.include_router(search_router)
    app.include_router(schools_router)
    app.include_router(zones_router)
    app.include_router(geocode_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)

    structlog.get_logger(__name__).info(
        "app_startup",
        env=env,
        school_backend=settings.backend_for("school"),
        zone_backend=settings.backend_for("zones"),
        geocoding_backend=settings.backend_for("geocoding"),
    )
    return app


app = create_app()
