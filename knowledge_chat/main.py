"""
FastAPI application entry point.

Initializes FastAPI app, registers routers and exception handlers, adds
middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, knowledge_chat.api, knowledge_chat.observability, knowledge_chat.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knowledge_chat import __version__
from knowledge_chat.api import api_router
from knowledge_chat.api.deps import get_service_cache
from knowledge_chat.api.errors import register_exception_handlers
from knowledge_chat.boundary.db import create_tables
from knowledge_chat.configs import get_settings
from knowledge_chat.observability.logger import configure_logging
from knowledge_chat.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and makes sure the knowledge table exists before
    serving requests. Providers are built lazily on first use.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Application startup: environment={settings.environment}")

    cache = get_service_cache()
    try:
        await create_tables(cache.engine)
        logger.info("Application startup complete: knowledge table ready")
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        raise

    yield

    # Shutdown
    await cache.dispose()
    cache.clear()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        description="Retrieval-augmented chat over an uploaded knowledge base",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("knowledge_chat.main:app", host="0.0.0.0", port=8000, reload=True)
