"""Post-hoc shape checks for extraction results."""

from __future__ import annotations

import math
from typing import Any

from triplemap.errors import ResultValidationFailedError
from triplemap.extraction.types import QueryResult


def validate_query_result(result: QueryResult) -> list[str]:
    """Return shape problems in ``result``; empty means the result is renderable.

    An empty entity list is a valid result, distinct from a failed call.
    """

    reasons: list[str] = []
    for entity in result.entities:
        if not entity.id:
            reasons.append("Entity with empty id")
            continue
        if not entity.label:
            reasons.append(f"Entity {entity.id} has an empty label")
        if not entity.layer_key:
            reasons.append(f"Entity {entity.id} has an empty layer key")
        if entity.position is None or not all(_is_finite_number(coord) for coord in entity.position):
            reasons.append(f"Entity {entity.id} has a non-finite position")

    for key, layer in result.layers.items():
        if not layer.display_name:
            reasons.append(f"Layer {key} has an empty display name")
        if not _is_number(layer.color):
            reasons.append(f"Layer {key} has a non-numeric color")
        if not _is_finite_number(layer.height):
            reasons.append(f"Layer {key} has a non-numeric height")
    return reasons


def ensure_valid_result(result: QueryResult) -> QueryResult:
    reasons = validate_query_result(result)
    if reasons:
        raise ResultValidationFailedError(reasons)
    return result


def find_layer_key_mismatches(result: QueryResult) -> list[str]:
    """Return layer keys used by entities or relationships but absent from ``result.layers``.

    Entity and relationship keys come from a layer property value while layer
    keys come from the layer subject's IRI. A non-empty answer means the two
    derivations disagree for this configuration. Results without any
    extracted layers are not checked.
    """

    if not result.layers:
        return []
    used = {entity.layer_key for entity in result.entities}
    used.update(relationship.layer_key for relationship in result.relationships if relationship.layer_key)
    return sorted(key for key in used if key not in result.layers)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value)
