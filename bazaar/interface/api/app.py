"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bazaar.config import Settings
from bazaar.interface.api.errors import register_error_handlers
from bazaar.interface.api.routes import (
    answers,
    auth,
    chat,
    chat_ws,
    community,
    health,
    queries,
    questions,
)
from bazaar.util.di.container import create_container, setup_di
from bazaar.util.observability import instrument_fastapi


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.

    Args:
        settings: Settings to build the app with (loaded from env if omitted)
        container: DI container (production container if omitted)
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Bazaar API",
        description="Backend API for Bazaar - community Q&A, buyer/seller chat and the support desk",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    container = container or create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(questions.router)
    app_instance.include_router(answers.router)
    app_instance.include_router(community.router)
    app_instance.include_router(chat.router)
    app_instance.include_router(queries.router)
    if settings.realtime_enabled:
        app_instance.include_router(chat_ws.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
