"""
Bookshelf API - Main Application
================================

HTTP service for creating and listing books stored in PostgreSQL.

Endpoints:
- GET  /api        - Health check
- POST /api/books  - Create a book
- GET  /api/books  - List books

Layers:
- Interfaces: FastAPI controllers
- Application: DTOs and the gateway interface
- Domain: Book entity
- Infrastructure: SQLAlchemy gateway over asyncpg
"""

import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from bookshelf.books.application import HealthResponse, IBookGateway
from bookshelf.books.infrastructure import init_book_gateway
from bookshelf.books.interfaces import books_router
from bookshelf.config import Settings, load_settings
from bookshelf.core import ConfigurationException, RepositoryException
from bookshelf.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    global_exception_handler,
    repository_exception_handler,
    validation_exception_handler,
)
from bookshelf.shared.infrastructure.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Create the book gateway and verify the database connection,
       unless a gateway was injected. A DatabaseConnectionException
       aborts startup.

    SHUTDOWN:
    1. Dispose of the gateway's connection pool if this app created it
    """
    settings: Settings = app.state.settings
    owns_gateway = app.state.book_gateway is None

    if owns_gateway:
        logger.info("Initializing database")
        app.state.book_gateway = await init_book_gateway(settings)

    logger.info("Bookshelf API started", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    yield

    logger.info("Shutting down Bookshelf API")
    if owns_gateway:
        await app.state.book_gateway.close()
        app.state.book_gateway = None


def create_app(settings: Settings, gateway: Optional[IBookGateway] = None) -> FastAPI:
    """
    Build the application: routes, middleware and exception handlers.

    Args:
        settings: Loaded settings
        gateway: Gateway to use instead of connecting at startup; the
            caller keeps ownership of it
    """
    app = FastAPI(
        title="Bookshelf API",
        description="Create and list books stored in PostgreSQL.",
        version=settings.app_version,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.book_gateway = gateway

    # === Middleware (last added runs first) ===
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_methods,
        allow_headers=settings.cors_headers,
    )

    # === Exception handlers ===
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RepositoryException, repository_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # === Routes ===
    @app.get("/api", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint. Does not touch the database."""
        return HealthResponse(message="OK")

    app.include_router(books_router)

    return app


def main() -> None:
    """
    Process entrypoint.

    Exits with status 1 when configuration cannot be loaded. Database and
    listener failures are fatal inside uvicorn, which exits non-zero.
    """
    try:
        settings = load_settings()
    except ConfigurationException as e:
        setup_logging()
        logger.critical("Error loading configuration", extra={
            "error": e.message,
            **e.details
        })
        sys.exit(1)

    setup_logging(settings.log_level, settings.environment)

    app = create_app(settings)

    logger.info("Server running", extra={"host": settings.host, "port": settings.port})
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None
    )


if __name__ == "__main__":
    main()
