"""Schemas for configuration picker and management endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ConfigurationInfoRead(BaseModel):
    """Serialized configuration summary."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    entity_types: list[str]
    properties: list[str]
    relationships: list[str]
    namespaces: list[str]
    is_active: bool


class ConfigurationExportRead(BaseModel):
    id: str
    text: str


class CloneConfigurationRequest(BaseModel):
    new_id: str = Field(..., min_length=1)


class ActiveConfigurationRequest(BaseModel):
    id: str = Field(..., min_length=1)
