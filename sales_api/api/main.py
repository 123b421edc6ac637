"""
Sales Records API - Main Application

This module builds the FastAPI application: the database handle, CORS,
request logging, exception handlers and routers.

Version: 1.0.0
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from sales_api.api.routers import sales, health
from sales_api.api.middlewares.logging_middleware import RequestLoggingMiddleware
from sales_api.api.middlewares.error_handler import add_exception_handlers
from sales_api.config.settings import Settings, get_settings
from sales_api.db.session import Database

logger = logging.getLogger("api")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Verify the database at startup and release it at shutdown.

    A failed connection check aborts startup; the API cannot serve
    anything without its database.
    """
    database: Database = app.state.database

    if not database.check_connection():
        logger.critical("Database ------ unreachable, aborting startup")
        raise RuntimeError("Could not connect to the database")

    database.create_tables()
    logger.info(f"Database ------ Connected ({database.engine.url.get_backend_name()})")

    yield

    database.dispose()
    logger.info("Database connection closed")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings, defaults to the environment
        database: Database handle, defaults to one built from settings

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Search, filter and paginate sales records",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database or Database(settings.database_url, echo=settings.SQL_ECHO)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Add exception handlers
    add_exception_handlers(app)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(sales.router, prefix="/api/sales", tags=["Sales"])

    @app.get("/", tags=["Root"])
    async def root():
        """Service banner"""
        return {
            "message": settings.APP_NAME,
            "status": "running",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app
