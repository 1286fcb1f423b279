"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vibe.config import Settings
from vibe.interface.api.routes import (
    comments,
    engagement,
    health,
    moderation,
    reports,
    stories,
    tags,
)
from vibe.util.di.container import create_container, setup_di
from vibe.util.error import check_settings
from vibe.util.observability import instrument_fastapi


def create_app(
    settings: Settings | None = None, with_container: bool = True
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Settings to use (loaded from the environment if omitted)
        with_container: Attach the production DI container. Tests pass False
            and attach their own with ``setup_di``.
    """
    settings = settings or Settings()
    check_settings(settings)

    app_instance = FastAPI(
        title="Vibe Engage API",
        description=(
            "Votes, ratings, bookmarks, moderated comments, reports and tags "
            "for stories"
        ),
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup CORS middleware
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    if with_container:
        # Settings are loaded from environment automatically
        setup_di(app_instance, create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(stories.router)
    app_instance.include_router(engagement.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(reports.router)
    app_instance.include_router(tags.router)
    app_instance.include_router(moderation.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
