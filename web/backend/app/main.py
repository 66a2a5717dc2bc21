"""FastAPI application for the partgate registry gateway.

Provides REST API endpoints wrapping the partgate package for:
- Registry discovery and login
- Collection listing and part search
- Part download and submission as graph documents
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from partgate import __version__
from partgate.config import Settings, get_settings
from partgate.logger import setup_logging

from web.backend.app.exception_handlers import register_exception_handlers
from web.backend.app.models.api import HealthResponse, ServiceInfoResponse
from web.backend.app.routers import registry


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="partgate API",
        description=(
            "Gateway to SynBioHub part registries. Provides endpoints for "
            "registry discovery, login, part search, and design exchange."
        ),
        version=__version__,
    )

    # -----------------------------------------------------------------------
    # CORS middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(registry.router, prefix=settings.route_prefix)

    @app.get("/", tags=["meta"], response_model=ServiceInfoResponse)
    async def root():
        """Return basic API information."""
        return ServiceInfoResponse(
            name="partgate API",
            version=__version__,
            description="SynBioHub registry gateway",
        )

    @app.get("/health", tags=["meta"], response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse()

    return app


app = create_app()
