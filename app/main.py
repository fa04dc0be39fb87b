"""
FastAPI application setup for the idiom editor backend.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from app.config import get_settings
from app.core.logging import configure_logging

settings = get_settings()

configure_logging(settings.log_level.value, settings.log_format, settings.log_file)

from app.core.db import create_tables, dispose_engine
from app.core.error_handlers import setup_error_handlers
from app.middleware import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables on startup when configured and release the
    connection pool on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    try:
        if settings.database.create_tables:
            await create_tables()
            logger.info("Database tables ensured")

        logger.info("Application startup complete")

        yield

    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    finally:
        logger.info("Shutting down application")
        await dispose_engine()
        logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from app.api.idiom_endpoints import router as idiom_router
    from app.api.type_endpoints import router as type_router
    from app.api.health_endpoints import router as health_router
    app.include_router(health_router)
    app.include_router(idiom_router)
    app.include_router(type_router)
    if settings.api_prefix:
        # Express-style deployments serve the same routes under /api
        app.include_router(idiom_router, prefix=settings.api_prefix)
        app.include_router(type_router, prefix=settings.api_prefix)

    return app


# Create application instance
app = create_app()
