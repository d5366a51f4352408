"""
Spa Booking API - Data Store Client
====================================

What:  The `Database` resource (async engine + session factory) and the
       FastAPI dependency that hands one session to each request.
Why:   The connection pool is process-lifetime state. It is constructed
       explicitly at startup, stored on `app.state.database`, and released
       at shutdown, so handlers receive it by injection instead of importing
       a module-level global.
How:   SQLAlchemy async engine with the asyncpg driver. Every statement is a
       SQLAlchemy construct, so values always travel as bound parameters and
       are never interpolated into SQL text.

Concurrency:
    Request handling is single-threaded and event driven. A handler awaiting
    the store yields the loop to other requests; the pool is the only
    boundary, serializing access to physical connections. No timeout is set
    on store calls: a hung query hangs only its own request.
"""

import logging
import ssl
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from spa_booking.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


def build_store_url(settings: Settings) -> URL:
    """Returns DATABASE_URL if set, else a URL assembled from the DB_* settings."""
    if settings.database_url:
        return make_url(settings.database_url)
    return URL.create(
        "postgresql+asyncpg",
        username=settings.db_user,
        password=settings.db_password or None,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_database,
    )


def insecure_tls_context() -> ssl.SSLContext:
    """
    TLS context that encrypts but does not verify the server certificate.

    Used only in production, where hosted Postgres presents certificates
    signed by a private CA.
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class Database:
    """
    Owns one async engine (the connection pool) and its session factory.

    Lifecycle:
        1. Constructed in the app lifespan (or by a test) - no connections yet
        2. ping() eagerly acquires and releases one connection
        3. Sessions are opened per request by get_db_session()
        4. dispose() closes every pooled connection at shutdown
    """

    def __init__(self, url: Any, **engine_kwargs: Any):
        self.url = make_url(url)
        self.uses_tls = "ssl" in engine_kwargs.get("connect_args", {})
        self.engine = create_async_engine(self.url, **engine_kwargs)
        # expire_on_commit=False: returned rows stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Builds the production/development store from application settings."""
        url = build_store_url(settings)
        engine_kwargs: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}

        if url.get_backend_name() == "postgresql":
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
            if settings.is_production:
                engine_kwargs["connect_args"] = {"ssl": insecure_tls_context()}

        return cls(url, **engine_kwargs)

    async def ping(self) -> bool:
        """
        Liveness check: acquire one connection, run SELECT 1, release it.

        Returns False (and logs) instead of raising, so the server stays
        reachable and answers with errors while the store is unavailable.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Error connecting to the database: %s", e)
            logger.error(
                "Check the DB_* settings and that the database server is running."
            )
            return False
        return True

    async def create_schema(self) -> None:
        """Creates any missing tables registered on Base.metadata."""
        # Models register themselves with Base on import
        from spa_booking.models import booking, testimonial  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides one database session per request.

    How it works:
        1. Opens a session on the Database stored in app.state
        2. Yields it to the route handler (services commit their own writes)
        3. On error: rolls back so the connection returns to the pool clean
        4. Always: closes the session
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
