"""Read-only helpers over extraction results for renderers and UIs."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Mapping

from triplemap.extraction.types import ExtractedEntity, ExtractedLayer, ExtractedRelationship, QueryResult


def group_entities_by_layer(entities: Iterable[ExtractedEntity]) -> dict[str, list[ExtractedEntity]]:
    grouped: dict[str, list[ExtractedEntity]] = defaultdict(list)
    for entity in entities:
        grouped[entity.layer_key].append(entity)
    return dict(grouped)


def filter_entities_by_type(
    entities: Iterable[ExtractedEntity],
    type_id: str,
) -> list[ExtractedEntity]:
    return [entity for entity in entities if entity.type_id == type_id]


def find_entity(result: QueryResult, entity_id: str) -> ExtractedEntity | None:
    return next((entity for entity in result.entities if entity.id == entity_id), None)


def relationships_for_entity(result: QueryResult, entity_id: str) -> list[ExtractedRelationship]:
    """Relationships where the entity is either endpoint."""

    return [
        relationship
        for relationship in result.relationships
        if relationship.subject_id == entity_id or relationship.object_id == entity_id
    ]


def layer_keys_in_use(result: QueryResult) -> list[str]:
    """Distinct entity layer keys in first-seen order."""

    return list(dict.fromkeys(entity.layer_key for entity in result.entities))


def sort_layers_by_height(layers: Mapping[str, ExtractedLayer] | QueryResult) -> list[tuple[str, ExtractedLayer]]:
    """Layers ordered bottom to top for rendering."""

    mapping = layers.layers if isinstance(layers, QueryResult) else layers
    return sorted(mapping.items(), key=lambda item: (item[1].height, item[0]))


def layer_statistics(result: QueryResult) -> dict[str, dict[str, int]]:
    """Per-layer entity counts: ``total`` plus one count per type id."""

    stats: dict[str, dict[str, int]] = {}
    for entity in result.entities:
        layer_stats = stats.setdefault(entity.layer_key, {"total": 0})
        layer_stats["total"] += 1
        layer_stats[entity.type_id] = layer_stats.get(entity.type_id, 0) + 1
    return stats


def relationship_predicates(result: QueryResult) -> list[str]:
    return list(dict.fromkeys(relationship.predicate_iri for relationship in result.relationships))


def entity_distance(first: ExtractedEntity, second: ExtractedEntity) -> float:
    return math.dist(first.position, second.position)


def result_stats(result: QueryResult) -> dict[str, int]:
    return {
        "entities": len(result.entities),
        "relationships": len(result.relationships),
        "layers": len(result.layers),
        "cross_layer_links": len(result.cross_layer_links),
    }
