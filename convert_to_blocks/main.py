"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from convert_to_blocks.admin import routes as admin_routes
from convert_to_blocks.admin.registry import AdminRegistry
from convert_to_blocks.admin.settings_page import SettingsPage
from convert_to_blocks.api.v1.dependencies import AppSettings, Registry
from convert_to_blocks.api.v1.router import router as v1_router
from convert_to_blocks.core.config import get_settings
from convert_to_blocks.core.database import DbSession, database
from convert_to_blocks.core.exceptions import setup_exception_handlers
from convert_to_blocks.core.health import HealthStatus, SettingsHealthCheck
from convert_to_blocks.core.logging import APP_LOGGER_NAME, setup_logging, setup_request_logging

logger = logging.getLogger(APP_LOGGER_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # noqa: ARG001
    """Application lifespan handler for startup and shutdown."""
    settings = get_settings()
    database.connect(settings)
    logger.info("Application started", extra={"env": settings.app_env})
    yield
    logger.info("Application shutting down")
    await database.disconnect()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    setup_logging(settings)

    app = FastAPI(
        title="Convert to Blocks Settings",
        description="Choose which content types are converted to blocks",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    setup_request_logging(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    # Settings API hooks are registered once, here, and kept on the app
    registry = AdminRegistry()
    settings_page = SettingsPage(settings)
    if settings_page.can_register():
        settings_page.register(registry)
        app.include_router(admin_routes.router, prefix="/admin", tags=["admin"])
    app.state.admin_registry = registry

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Basic liveness check."""
        return {"status": "healthy"}

    @app.get("/health/live", tags=["health"])
    async def liveness_check() -> dict[str, str]:
        """Liveness check for the orchestrator."""
        return {"status": "healthy"}

    @app.get("/health/ready", tags=["health"])
    async def readiness_check(
        session: DbSession, registry: Registry, app_settings: AppSettings
    ) -> Response:
        """Readiness check.

        Returns 200 if the options table is reachable and the settings page is
        registered, 503 otherwise.
        """
        report = await SettingsHealthCheck(session, registry, app_settings).check()
        status_code = 200 if report.status is HealthStatus.HEALTHY else 503
        return JSONResponse(content=report.to_dict(), status_code=status_code)

    app.include_router(v1_router)

    return app


app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "convert_to_blocks.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.app_log_level.lower(),
    )


if __name__ == "__main__":
    run()
