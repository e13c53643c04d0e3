"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, envelope exception handlers
and observability middleware, and configures the uvicorn server.

Dependencies: fastapi, chat_backend.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_backend.api import api_router
from chat_backend.api.deps.dependencies import get_service_cache
from chat_backend.api.error_handlers import register_exception_handlers
from chat_backend.configs import Settings, get_settings
from chat_backend.observability.logger import configure_logging
from chat_backend.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Application startup (environment={settings.environment})")

    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.registry
    _ = cache.rate_limiter
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings to read CORS origins from (process settings by default)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Session Chat API",
        description="Conversational assistant backend with per-session durable history",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Add observability middleware (added last = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Correlation-ID"],
        max_age=86400,
    )

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "chat_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
