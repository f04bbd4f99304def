"""
Call Review API - FastAPI Application

Main entry point for the API server.
Run with: uvicorn callreview.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from callreview.config.settings import settings
from callreview.config.database import Database
from callreview.endpoints import api_router
from callreview.middleware.error_handler import setup_exception_handlers
from callreview.middleware.logging import LoggingMiddleware, configure_logging

# Configure structured logging
configure_logging(settings.LOG_LEVEL)
logger = structlog.get_logger()


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application.

    Args:
        database: Pre-built database handle; one is created from
            settings on startup when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        logger.info(
            "Starting Call Review API",
            version=settings.APP_VERSION,
            debug=settings.DEBUG,
        )

        db = database or Database(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        app.state.database = db

        # Initialize database tables (in dev mode)
        if settings.DEBUG:
            logger.info("Initializing database tables (DEBUG mode)")
            db.create_all()

        yield

        logger.info("Shutting down Call Review API")
        if database is None:
            db.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Review dashboard for AI-handled clinic phone calls",
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router, prefix="/api/v1")

    # Root health endpoint (for load balancer)
    @app.get("/health")
    async def root_health():
        """Simple health check for load balancer."""
        return {"status": "ok", "version": settings.APP_VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "callreview.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
