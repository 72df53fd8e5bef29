"""
FastAPI application entry point for the Pincast Expo API.
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pincast_expo import __version__
from pincast_expo.api.errors import setup_error_handlers
from pincast_expo.api.routers import v1_router
from pincast_expo.application.services.analytics_aggregator import SessionCountCache
from pincast_expo.infra.auth.app_tokens import AppTokenIssuer
from pincast_expo.infra.auth.identity import IdentityTokenVerifier
from pincast_expo.infra.config.database import (
    build_session_factory,
    engine_from_settings,
    init_models,
)
from pincast_expo.infra.config.logging_config import get_logger, setup_logging
from pincast_expo.infra.config.settings import Settings, get_settings
from pincast_expo.infra.middleware.request_context import RequestContextMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format, settings)
    logger = get_logger("app")
    logger.info(
        "app.startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )

    await init_models(app.state.engine)
    logger.info("database.initialized")

    yield

    # Shutdown
    await app.state.engine.dispose()
    logger.info("app.shutdown", app_name=settings.app_name)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Geofenced mini-game marketplace: discovery, review and analytics",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Per-app state; besides the connection pool the only mutable pieces are
    # the two caches.
    app.state.settings = settings
    app.state.engine = engine_from_settings(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.identity_verifier = IdentityTokenVerifier.from_settings(settings)
    app.state.app_token_issuer = AppTokenIssuer.from_settings(settings)
    app.state.session_count_cache = SessionCountCache(
        ttl=timedelta(seconds=settings.analytics_refresh_interval_seconds)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)
    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "pincast_expo.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
        log_level="debug" if _settings.debug else "info",
    )
