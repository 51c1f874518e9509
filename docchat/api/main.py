"""
FastAPI application with assembled routers.

Initializes FastAPI app with the chatbot routers mounted under the configured
prefix and configures uvicorn server.

Dependencies: fastapi, docchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat.api.deps.dependencies import get_service_cache
from docchat.api.errors import register_exception_handlers
from docchat.configs import get_settings
from docchat.observability import configure_logging
from docchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    chat_router,
    documents_router,
    health_router,
    sessions_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.fallback_store
    _ = cache.gemini_client
    init = await cache.vector_store.initialize()
    if init.success:
        logger.info("Vector store connected")
    else:
        logger.warning(f"Vector store unavailable, using fallback storage: {init.error}")
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="Document Chat API",
        description="Session-scoped document Q&A backed by Gemini and a vector index",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    prefix = settings.api.prefix
    app.include_router(health_router, prefix=prefix)
    app.include_router(sessions_router, prefix=prefix)
    app.include_router(chat_router, prefix=prefix)
    app.include_router(documents_router, prefix=prefix)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "docchat.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
    )
