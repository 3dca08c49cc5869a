"""FastAPI dependencies resolving objects owned by the application instance."""

from fastapi import Request

from triplemap.config import Settings
from triplemap.mapping.registry import ConfigurationRegistry
from triplemap.services.extraction import ExtractionService


def get_registry(request: Request) -> ConfigurationRegistry:
    return request.app.state.registry


def get_extraction_service(request: Request) -> ExtractionService:
    return request.app.state.extraction_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
