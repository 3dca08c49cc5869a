"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from triplemap.config import Settings, get_settings
from triplemap.errors import ConfigurationNotFoundError
from triplemap.mapping.registry import ConfigurationRegistry
from triplemap.routers import configurations, extraction
from triplemap.services.extraction import ExtractionService
from triplemap.store.rdf_loader import RdfSourceLoader

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    registry: ConfigurationRegistry | None = None,
    extraction_service: ExtractionService | None = None,
) -> FastAPI:
    """Build an application that owns its registry and extraction service."""

    settings = settings or get_settings()
    registry = registry or ConfigurationRegistry()
    try:
        registry.set_active(settings.active_configuration_id)
    except ConfigurationNotFoundError:
        logger.warning(
            "app.active_configuration_unknown id=%s fallback=%s",
            settings.active_configuration_id,
            registry.active_id,
        )
    extraction_service = extraction_service or ExtractionService(
        registry,
        RdfSourceLoader(format=settings.source_format),
        load_timeout_seconds=settings.load_timeout_seconds,
        max_cached_results=settings.max_cached_results,
    )

    app = FastAPI(title=settings.app_name, version="0.1.0")
    app.state.settings = settings
    app.state.registry = registry
    app.state.extraction_service = extraction_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(configurations.router, tags=["configurations"])
    app.include_router(configurations.active_router, tags=["configurations"])
    app.include_router(extraction.router, tags=["extraction"])

    @app.get("/health")
    def health() -> dict[str, str]:
        """Simple health check endpoint."""

        return {"status": "ok"}

    logger.info(
        "app.created active_configuration=%s configurations=%d",
        registry.active_id,
        len(registry),
    )
    return app


app = create_app()
