from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from castnotes import __version__
from castnotes.api.routers import meta_router, summaries_router, transcripts_router
from castnotes.core.config import Settings, get_settings
from castnotes.core.errors import AppError
from castnotes.core.handlers import handle_app_error, handle_unexpected_error, handle_validation_error
from castnotes.core.logging import setup_logging
from castnotes.core.middleware import log_requests


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory for creating FastAPI instances.

    Args:
        settings: Optional settings override. If None, loads from environment.
                  Useful for testing with custom configuration.
    """
    if settings is None:
        settings = get_settings()

    middleware: list[Middleware] = []
    if settings.cors_allow_origins:
        middleware.append(
            Middleware(
                CORSMiddleware,
                allow_origins=settings.cors_allow_origins,
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            )
        )

    app = FastAPI(
        title="castnotes",
        description="Podcast transcription and content summaries",
        version=__version__,
        middleware=middleware,
    )
    app.include_router(meta_router)
    app.include_router(transcripts_router)
    app.include_router(summaries_router)
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
    app.add_exception_handler(AppError, handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app


# Initialize logging once at module load
setup_logging()

# Default app instance for uvicorn (uvicorn castnotes.api.app:app)
app = create_app()
