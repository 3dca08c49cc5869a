"""Declarative mapping configuration describing how to read a vocabulary."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TargetAttribute = Literal["label", "position", "layer", "color", "subtitle", "height", "custom"]
TARGET_ATTRIBUTE_VALUES: tuple[str, ...] = (
    "label",
    "position",
    "layer",
    "color",
    "subtitle",
    "height",
    "custom",
)
REQUIRED_TARGET_ATTRIBUTES: tuple[str, ...] = ("label", "position", "layer")


class _MappingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class EntityTypeRule(_MappingModel):
    """RDF class whose instances become visualized entities."""

    class_iri: str
    label: str
    type_id: str


class PropertyRule(_MappingModel):
    """Routes one RDF property onto a visual attribute."""

    property_iri: str
    target_attribute: TargetAttribute
    required: bool = False
    transform: str | None = None


class RelationshipRule(_MappingModel):
    """RDF predicate rendered as an edge between entities."""

    predicate_iri: str
    label: str
    style_id: str | None = None


class LayerGroupingRule(_MappingModel):
    """How entities are grouped into layers."""

    layer_property_iri: str
    extract_layer_id: str = "iri_local_name"
    layer_class_iri: str | None = None


class CrossLayerRule(_MappingModel):
    """RDF predicate linking entities across layers."""

    predicate_iri: str
    label: str


class MappingConfiguration(_MappingModel):
    """Complete, data-only mapping from one vocabulary to the visual model.

    ``transform`` and ``extract_layer_id`` hold names resolved against the
    transform catalogue at extraction time, so a configuration stays plain data
    and survives JSON export/import unchanged.
    """

    entity_types: list[EntityTypeRule] = Field(default_factory=list)
    properties: list[PropertyRule] = Field(default_factory=list)
    relationships: list[RelationshipRule] = Field(default_factory=list)
    layer_grouping: LayerGroupingRule
    cross_layer_connections: CrossLayerRule | None = None
    namespaces: dict[str, str] = Field(default_factory=dict)

    def rules_for(self, *targets: str) -> list[PropertyRule]:
        """Return property rules targeting any of the given attributes, in order."""

        wanted = set(targets)
        return [rule for rule in self.properties if rule.target_attribute in wanted]
