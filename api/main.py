"""
API Application Entry Point

Defines the main FastAPI application with middleware, route
configuration and lifecycle management for the triage service.

Design Considerations:
- One triage engine per application, held on app.state
- Engine errors translated by the global exception handlers
- Logging configured once from the settings
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import APISettings, EnvironmentType, get_settings
from api.routes import triage
from api.services.triage_service import TriageService
from api.utils.error_handlers import add_exception_handlers
from src.utils.logging_setup import configure_safe_logging, resolve_level

logger = logging.getLogger("api")


def create_application(settings: Optional[APISettings] = None) -> FastAPI:
    """
    Create and configure FastAPI application instance.

    Args:
        settings: Settings to use instead of the environment

    Returns:
        Configured FastAPI application

    Raises:
        DataError: If the scenario library cannot be loaded
    """
    settings = settings or get_settings()
    configure_safe_logging(
        level=resolve_level(settings.LOG_LEVEL),
        log_file=settings.LOG_FILE
    )

    docs_enabled = settings.ENVIRONMENT != EnvironmentType.PRODUCTION
    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        debug=settings.DEBUG
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    # Fail at startup rather than on the first request
    app.state.settings = settings
    app.state.triage_service = TriageService.from_settings(settings)

    app.include_router(triage.router)

    @app.get("/health", tags=["Monitoring"])
    async def health_check():
        """API health check endpoint."""
        service: TriageService = app.state.triage_service
        return {
            "status": "healthy",
            "mode": service.default_config.mode.value,
            "scenarios": len(service.engine.library)
        }

    logger.info(f"Application initialized in {settings.ENVIRONMENT.value} environment")
    return app


# Create application instance
app = create_application()
