"""
School Admin API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and Redis connections
- CORS middleware
- Error envelope handlers
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from school_admin.api import create_api_router
from school_admin.core.config import settings
from school_admin.core.database import check_db_connected, close_db, init_db
from school_admin.core.redis import close_redis, init_redis
from school_admin.core.responses import register_exception_handlers

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Connects Redis and the database on startup and releases them on
    shutdown. Outside production a failed connection is logged and the
    service starts anyway (rate limiting then uses in-memory counters).
    """
    logger.info(f"Starting {settings.service_name} in {settings.python_env} mode...")

    try:
        await init_redis()
        logger.info("Redis connected")
    except Exception as e:
        logger.error(f"Redis connection failed: {e}")
        if settings.is_production:
            raise

    try:
        await init_db()
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        if settings.is_production:
            raise

    yield

    logger.info(f"Shutting down {settings.service_name}...")
    await close_redis()
    await close_db()
    logger.info("Cleanup complete")


def create_app() -> FastAPI:
    """Build a fully wired application instance."""
    app = FastAPI(
        title="School Admin API",
        description="Multi-tenant school administration API",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.include_router(create_api_router(), prefix="/api/v1")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Root endpoint - API welcome message."""
        return {
            "message": "Welcome to the School Admin API",
            "status": "running",
            "environment": settings.python_env,
        }

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    @app.get("/ready", tags=["Health"])
    async def readiness_check() -> JSONResponse:
        """Readiness check endpoint. Fails while the database is unreachable."""
        if await check_db_connected():
            return JSONResponse({"status": "ready", "database": "connected"})
        return JSONResponse(
            {"status": "not ready", "database": "unavailable"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "school_admin.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
