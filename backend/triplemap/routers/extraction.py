"""Extraction execution routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from triplemap.config import Settings
from triplemap.dependencies import get_app_settings, get_extraction_service, get_registry
from triplemap.errors import (
    ConfigurationInvalidError,
    ConfigurationNotFoundError,
    LoadFailedError,
    LoadTimedOutError,
    NoDataLoadedError,
    ResultValidationFailedError,
    SourceNotAllowedError,
)
from triplemap.mapping.registry import ConfigurationRegistry
from triplemap.schemas.common import ApiResponse
from triplemap.schemas.extraction import ExtractRequest, QueryResultRead
from triplemap.services.extraction import ExtractionService
from triplemap.store.sources import resolve_source

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extract", response_model=ApiResponse[QueryResultRead])
async def extract_source(
    payload: ExtractRequest,
    registry: ConfigurationRegistry = Depends(get_registry),
    service: ExtractionService = Depends(get_extraction_service),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[QueryResultRead]:
    """Load a source and extract the visual model with the chosen configuration."""

    requested = payload.source or settings.default_source
    configuration_id = payload.configuration_id or registry.active_id
    try:
        source = resolve_source(requested, root=settings.source_root_path, allowed=settings.allowed_sources)
    except SourceNotAllowedError as exc:
        logger.warning("extract.source_rejected source=%s", requested)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        if payload.refresh:
            result = await service.refresh(source, configuration_id)
        else:
            result = await service.load_and_extract(source, configuration_id)
    except ConfigurationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ConfigurationInvalidError as exc:
        raise HTTPException(status_code=422, detail={"violations": exc.violations}) from exc
    except LoadTimedOutError as exc:
        raise HTTPException(status_code=504, detail=f'Loading "{requested}" timed out') from exc
    except (LoadFailedError, NoDataLoadedError) as exc:
        # The cause can quote the source's contents; it stays in the service log.
        raise HTTPException(status_code=502, detail=f'Failed to load source "{requested}"') from exc
    except ResultValidationFailedError as exc:
        raise HTTPException(status_code=500, detail={"reasons": exc.reasons}) from exc
    return ApiResponse(
        data=QueryResultRead.from_result(result, configuration_id=configuration_id, source=requested)
    )
