# app/db.py
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import get_settings

DATABASE_URL: str

engine: AsyncEngine
SessionLocal: async_sessionmaker[AsyncSession]

_ASYNCPG_PREFIXES = (
    "postgresql+psycopg://",
    "postgresql+psycopg2://",
    "postgresql://",
    "postgres://",
)


def normalize_async_url(database_url: str) -> str:
    """Rewrite any Postgres DSN flavour to the asyncpg driver."""

    for prefix in _ASYNCPG_PREFIXES:
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix) :]
    return database_url


def _create_engine(database_url: str) -> AsyncEngine:
    url = make_url(database_url)
    connect_args = {}

    if url.get_backend_name() == "postgresql" and url.get_driver_name() == "asyncpg":
        query = dict(url.query)
        # asyncpg takes ssl=..., not libpq's sslmode, and rejects channel_binding
        if "sslmode" in query:
            connect_args["ssl"] = query.pop("sslmode")
        query.pop("channel_binding", None)
        url = url._replace(query=query)

    return create_async_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def configure_engine(database_url: str | None = None) -> None:
    """Configure the SQLAlchemy engine and session factory (no connection is opened)."""

    global engine, SessionLocal, DATABASE_URL

    DATABASE_URL = normalize_async_url(database_url or get_settings().database_url)
    engine = _create_engine(DATABASE_URL)
    SessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


configure_engine()
