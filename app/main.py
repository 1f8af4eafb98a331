"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health and the workshop records)
- Error handlers (centralized error normalization)
- Security headers middleware and an app-wide rate limit dependency
- Logging configuration
- Per-application repositories

No business logic belongs here.
"""

from fastapi import Depends, FastAPI

from app.core.config import Settings, settings
from app.interfaces.health import router as health_router
from app.interfaces.workshop.dependencies import build_repositories
from app.interfaces.workshop.router import router as workshop_router
from app.shared.errors.handlers import ErrorNormalizer, register_error_handlers
from app.shared.logging import configure_logging
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import DefaultRateLimit, build_limiter


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        app_settings: Settings to build the app with. Defaults to the
            settings loaded from the environment.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level)

    # --- Rate Limiting ---
    limiter = build_limiter(app_settings)
    rate_limit = DefaultRateLimit(limiter, app_settings.rate_limit_default)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        dependencies=[Depends(rate_limit)],
    )
    app.state.repositories = build_repositories()

    # --- Security Middleware ---
    app.add_middleware(
        SecurityHeadersMiddleware, production=app_settings.is_production
    )

    # --- Error Handlers ---
    register_error_handlers(
        app, ErrorNormalizer(environment=app_settings.environment)
    )

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(workshop_router, prefix="/api/v1")

    return app


app = create_app()
