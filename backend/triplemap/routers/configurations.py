"""Mapping configuration management routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Path

from triplemap.dependencies import get_extraction_service, get_registry
from triplemap.errors import (
    CannotRemoveDefaultError,
    ConfigurationInvalidError,
    ConfigurationNotFoundError,
    SourceNotFoundError,
)
from triplemap.mapping.registry import ConfigurationRegistry
from triplemap.schemas.common import ApiResponse, DeleteResult
from triplemap.schemas.configuration import (
    ActiveConfigurationRequest,
    CloneConfigurationRequest,
    ConfigurationExportRead,
    ConfigurationInfoRead,
)
from triplemap.services.extraction import ExtractionService

router = APIRouter(prefix="/configurations")
active_router = APIRouter(prefix="/active-configuration")


def _info_or_404(registry: ConfigurationRegistry, configuration_id: str) -> ConfigurationInfoRead:
    info = registry.get_info(configuration_id)
    if info is None:
        raise HTTPException(status_code=404, detail=f'Configuration "{configuration_id}" not found')
    return ConfigurationInfoRead.model_validate(info)


@router.get("", response_model=ApiResponse[list[ConfigurationInfoRead]])
def list_configurations(
    registry: ConfigurationRegistry = Depends(get_registry),
) -> ApiResponse[list[ConfigurationInfoRead]]:
    """List registered configurations for configuration pickers."""

    return ApiResponse(data=[ConfigurationInfoRead.model_validate(info) for info in registry.list_info()])


@router.get("/{configuration_id}", response_model=ApiResponse[ConfigurationInfoRead])
def get_configuration(
    configuration_id: str = Path(..., min_length=1),
    registry: ConfigurationRegistry = Depends(get_registry),
) -> ApiResponse[ConfigurationInfoRead]:
    return ApiResponse(data=_info_or_404(registry, configuration_id))


@router.get("/{configuration_id}/export", response_model=ApiResponse[ConfigurationExportRead])
def export_configuration(
    configuration_id: str = Path(..., min_length=1),
    registry: ConfigurationRegistry = Depends(get_registry),
) -> ApiResponse[ConfigurationExportRead]:
    """Return the configuration as JSON text suitable for re-import."""

    try:
        text = registry.export_as_text(configuration_id)
    except ConfigurationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ApiResponse(data=ConfigurationExportRead(id=configuration_id, text=text))


@router.put("/{configuration_id}", response_model=ApiResponse[ConfigurationInfoRead])
def put_configuration(
    payload: dict[str, Any] = Body(...),
    configuration_id: str = Path(..., min_length=1),
    registry: ConfigurationRegistry = Depends(get_registry),
    service: ExtractionService = Depends(get_extraction_service),
) -> ApiResponse[ConfigurationInfoRead]:
    """Validate and register (or replace) a configuration."""

    try:
        registry.import_from_dict(configuration_id, payload)
    except ConfigurationInvalidError as exc:
        raise HTTPException(status_code=422, detail={"violations": exc.violations}) from exc
    service.invalidate(configuration_id)
    return ApiResponse(data=_info_or_404(registry, configuration_id))


@router.post("/{configuration_id}/clone", response_model=ApiResponse[ConfigurationInfoRead])
def clone_configuration(
    payload: CloneConfigurationRequest,
    configuration_id: str = Path(..., min_length=1),
    registry: ConfigurationRegistry = Depends(get_registry),
    service: ExtractionService = Depends(get_extraction_service),
) -> ApiResponse[ConfigurationInfoRead]:
    try:
        registry.clone(configuration_id, payload.new_id)
    except SourceNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ConfigurationInvalidError as exc:
        raise HTTPException(status_code=422, detail={"violations": exc.violations}) from exc
    service.invalidate(payload.new_id)
    return ApiResponse(data=_info_or_404(registry, payload.new_id))


@router.delete("/{configuration_id}", response_model=ApiResponse[DeleteResult])
def delete_configuration(
    configuration_id: str = Path(..., min_length=1),
    registry: ConfigurationRegistry = Depends(get_registry),
    service: ExtractionService = Depends(get_extraction_service),
) -> ApiResponse[DeleteResult]:
    try:
        removed = registry.remove(configuration_id)
    except CannotRemoveDefaultError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    service.invalidate(configuration_id)
    return ApiResponse(data=DeleteResult(id=configuration_id, deleted=removed))


@active_router.get("", response_model=ApiResponse[ConfigurationInfoRead])
def get_active_configuration(
    registry: ConfigurationRegistry = Depends(get_registry),
) -> ApiResponse[ConfigurationInfoRead]:
    return ApiResponse(data=_info_or_404(registry, registry.active_id))


@active_router.put("", response_model=ApiResponse[ConfigurationInfoRead])
def set_active_configuration(
    payload: ActiveConfigurationRequest,
    registry: ConfigurationRegistry = Depends(get_registry),
) -> ApiResponse[ConfigurationInfoRead]:
    """Switch the configuration used when a request does not name one."""

    try:
        registry.set_active(payload.id)
    except ConfigurationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ApiResponse(data=_info_or_404(registry, payload.id))
