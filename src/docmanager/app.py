"""FastAPI application factory for docmanager."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .__version__ import __version__
from .config.logging_config import setup_logging
from .config.settings import DocManagerSettings, get_settings
from .container import ServiceContainer
from .core.exception_handlers import register_exception_handlers
from .features.activity.routers import activity_router
from .features.auth.middleware import RefreshUserMiddleware
from .features.auth.routers import auth_router
from .features.users.routers import admin_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[DocManagerSettings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create the application; pass ``container`` to supply prebuilt services."""
    settings = settings or get_settings()
    setup_logging()

    container = container or ServiceContainer.build(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} {__version__} ({settings.environment})")
        await container.startup()
        yield
        await container.shutdown()
        logger.info(f"{settings.app_name} stopped")

    app = FastAPI(
        title="DocManager API",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(RefreshUserMiddleware, cookie_name=settings.session_cookie_name)
    register_exception_handlers(app, is_production=settings.is_production)

    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])
    app.include_router(activity_router, prefix="/api/activity", tags=["Activity"])

    @app.get("/health", tags=["Health"])
    async def health():
        database_ok = await container.database.health_check()
        return {"status": "healthy" if database_ok else "degraded", "database": database_ok}

    return app
