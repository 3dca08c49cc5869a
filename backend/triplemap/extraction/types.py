"""Typed extraction outputs consumed by renderers and UIs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple

from triplemap.mapping.types import MappingConfiguration

NEUTRAL_LAYER_COLOR = 0x808080
DEFAULT_LAYER_HEIGHT = 0.0


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


class Position(NamedTuple):
    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class ExtractedEntity:
    """One visualized node materialized from a typed subject."""

    id: str
    type_id: str
    label: str
    position: Position
    layer_key: str
    subtitle: str | None = None
    color: int | None = None
    extra: Mapping[str, Any] = field(default_factory=_empty_mapping, hash=False)


@dataclass(frozen=True, slots=True)
class ExtractedRelationship:
    """Edge emitted for a configured predicate; endpoints are not checked."""

    subject_id: str
    predicate_iri: str
    object_id: str
    layer_key: str


@dataclass(frozen=True, slots=True)
class ExtractedLayer:
    key: str
    display_name: str
    color: int = NEUTRAL_LAYER_COLOR
    height: float = DEFAULT_LAYER_HEIGHT


@dataclass(frozen=True, slots=True)
class CrossLayerLink:
    source_id: str
    target_id: str


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Container for one extraction call; never mutated after construction."""

    entities: tuple[ExtractedEntity, ...] = ()
    relationships: tuple[ExtractedRelationship, ...] = ()
    layers: Mapping[str, ExtractedLayer] = field(default_factory=_empty_mapping)
    cross_layer_links: tuple[CrossLayerLink, ...] = ()
    configuration_used: MappingConfiguration | None = None
