"""Extraction endpoint schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from triplemap.extraction.types import QueryResult


class ExtractRequest(BaseModel):
    """Source to load and the configuration to read it with."""

    source: str | None = Field(default=None, min_length=1)
    configuration_id: str | None = Field(default=None, min_length=1)
    refresh: bool = False


class EntityRead(BaseModel):
    id: str
    type_id: str
    label: str
    x: float
    y: float
    z: float
    layer_key: str
    subtitle: str | None = None
    color: int | None = None
    extra: dict[str, Any] = Field(default_factory=dict)


class RelationshipRead(BaseModel):
    subject_id: str
    predicate_iri: str
    object_id: str
    layer_key: str


class LayerRead(BaseModel):
    key: str
    display_name: str
    color: int
    height: float


class CrossLayerLinkRead(BaseModel):
    source_id: str
    target_id: str


class QueryResultRead(BaseModel):
    """Serialized extraction result."""

    configuration_id: str
    source: str
    entities: list[EntityRead]
    relationships: list[RelationshipRead]
    layers: dict[str, LayerRead]
    cross_layer_links: list[CrossLayerLinkRead]

    @classmethod
    def from_result(cls, result: QueryResult, *, configuration_id: str, source: str) -> "QueryResultRead":
        return cls(
            configuration_id=configuration_id,
            source=source,
            entities=[
                EntityRead(
                    id=entity.id,
                    type_id=entity.type_id,
                    label=entity.label,
                    x=entity.position.x,
                    y=entity.position.y,
                    z=entity.position.z,
                    layer_key=entity.layer_key,
                    subtitle=entity.subtitle,
                    color=entity.color,
                    extra=dict(entity.extra),
                )
                for entity in result.entities
            ],
            relationships=[
                RelationshipRead(
                    subject_id=relationship.subject_id,
                    predicate_iri=relationship.predicate_iri,
                    object_id=relationship.object_id,
                    layer_key=relationship.layer_key,
                )
                for relationship in result.relationships
            ],
            layers={
                key: LayerRead(key=layer.key, display_name=layer.display_name, color=layer.color, height=layer.height)
                for key, layer in result.layers.items()
            },
            cross_layer_links=[
                CrossLayerLinkRead(source_id=link.source_id, target_id=link.target_id)
                for link in result.cross_layer_links
            ],
        )
