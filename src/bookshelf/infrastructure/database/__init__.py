"""
Database Infrastructure
=======================

Builds the connection URL, creates the async engine and verifies
connectivity.

Uses SQLAlchemy 2.0 with asyncpg for async PostgreSQL operations. The
service never issues DDL; the books table is expected to exist.
"""

from sqlalchemy import URL, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from bookshelf.config import Settings
from bookshelf.core import DatabaseConnectionException
from bookshelf.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    SQLAlchemy 2.0 style using DeclarativeBase.
    """
    pass


def build_database_url(settings: Settings) -> URL:
    """
    Assemble the asyncpg connection URL from the DB_* settings.

    asyncpg takes ``ssl`` rather than libpq's ``sslmode``; credentials are
    escaped by ``URL.create``.
    """
    return URL.create(
        drivername="postgresql+asyncpg",
        username=settings.db_user,
        password=settings.db_password,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
        query={"ssl": settings.db_sslmode},
    )


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the shared database engine.

    Returns:
        AsyncEngine: Engine with a connection pool sized from settings
    """
    url = build_database_url(settings)
    logger.info(
        "Creating database engine",
        extra={"database_url": url.render_as_string(hide_password=True)}
    )
    return create_async_engine(
        url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,  # Verify connections before using
    )


async def verify_connection(engine: AsyncEngine) -> None:
    """
    Open a connection and run a trivial round trip.

    Raises:
        DatabaseConnectionException: If the database cannot be reached
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "Database connectivity check failed",
            extra={"error_type": type(e).__name__, "error": str(e)}
        )
        raise DatabaseConnectionException(
            "Could not connect to the database",
            {"error_type": type(e).__name__}
        ) from e


async def close_engine(engine: AsyncEngine) -> None:
    """Dispose of the engine's pooled connections."""
    await engine.dispose()
